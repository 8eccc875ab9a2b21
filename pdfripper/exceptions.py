"""
Исключения pdfripper.

Иерархия:
    PdfRipperError
        ├── ConfigError          — некорректные входные параметры
        ├── ExternalToolError    — pdfinfo/pdftotext не запустился или упал
        ├── ParseError           — в выводе pdfinfo нет числа страниц
        └── UnitExtractionError  — ошибка извлечения конкретной страницы

Сообщения исключений на английском — по ним вызывающий код
может отличать этап, на котором произошла ошибка.
"""

from typing import Optional, Sequence


class PdfRipperError(Exception):
    """Базовое исключение пакета."""


class ConfigError(PdfRipperError):
    """Некорректная или отсутствующая конфигурация — работа не начиналась."""


class ExternalToolError(PdfRipperError):
    """
    Внешняя утилита не запустилась или завершилась с ошибкой.

    Attributes:
        command: команда, которую пытались выполнить
        returncode: код возврата (None, если процесс не стартовал)
        stderr: захваченный stderr процесса
    """

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class ParseError(PdfRipperError):
    """Вывод pdfinfo не содержит корректной строки Pages:."""


class UnitExtractionError(PdfRipperError):
    """
    Ошибка извлечения одной страницы.

    Attributes:
        unit_id: номер страницы (начинается с 1)
        cause: исходное исключение
    """

    def __init__(self, unit_id: int, cause: BaseException):
        super().__init__(f"extracting page {unit_id}: {cause}")
        self.unit_id = unit_id
        self.cause = cause
        self.__cause__ = cause

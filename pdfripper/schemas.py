"""
Схемы данных pdfripper.

Включает:
    - Pydantic модели для HTTP API (запрос, ответ, файл страницы)
    - Внутренние dataclass'ы для пула воркеров и отчёта о прогоне
"""

from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, Field


# =============================================================================
# Pydantic модели для API
# =============================================================================


class ExtractionRequest(BaseModel):
    """
    Параметры извлечения от пользователя.

    Attributes:
        process_count: число параллельных воркеров (< 1 — по числу CPU)
    """

    process_count: int = Field(
        default=0,
        description="Число воркеров; 0 — по числу ядер CPU",
    )


class PageFile(BaseModel):
    """Извлечённая страница и путь к её текстовому файлу."""

    page_number: int
    path: str


class ExtractionResponse(BaseModel):
    """
    Ответ API с результатами извлечения.

    Attributes:
        success: все страницы извлечены без ошибок
        doc_id: идентификатор загрузки (имя каталога и PDF в output_root)
        filename: имя файла, переданное клиентом
        total_pages: число страниц в документе
        workers: сколько воркеров реально запущено
        output_dir: каталог с файлами page_<k>.txt
        processing_time_ms: общее время обработки в мс
        pages: успешно сохранённые страницы (по возрастанию номера)
        error: первая ошибка (если success=False)
    """

    success: bool
    doc_id: str
    filename: str
    total_pages: int
    workers: int
    output_dir: str
    processing_time_ms: int
    pages: list[PageFile] = []
    error: Optional[str] = None


# =============================================================================
# Внутренние dataclass'ы
# =============================================================================


@dataclass(frozen=True)
class WorkerPoolConfig:
    """
    Параметры одного прогона пула воркеров.

    Attributes:
        total_units: число единиц работы (страниц), >= 0
        worker_count: запрошенное число воркеров, >= 1
    """

    total_units: int
    worker_count: int

    def __post_init__(self):
        if self.total_units < 0:
            raise ValueError(f"total_units must be >= 0, got {self.total_units}")
        if self.worker_count < 1:
            raise ValueError(f"worker_count must be >= 1, got {self.worker_count}")

    @property
    def effective_workers(self) -> int:
        # Воркеров не больше, чем страниц
        return min(self.worker_count, self.total_units)


@dataclass
class ExtractionReport:
    """
    Итог одного прогона извлечения.

    Attributes:
        total_pages: число страниц в документе
        workers: сколько воркеров реально запущено
        saved: успешно сохранённые страницы {номер: путь}
        error: первая ошибка по странице (или None)
        elapsed_ms: время прогона в мс
    """

    total_pages: int
    workers: int
    saved: dict[int, str] = field(default_factory=dict)
    error: Optional[Exception] = None
    elapsed_ms: int = 0

    @property
    def success(self) -> bool:
        return self.error is None

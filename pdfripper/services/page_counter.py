"""
Определение числа страниц PDF через pdfinfo.

pdfinfo печатает метаданные документа построчно в формате
"Label: value". Нас интересует только строка "Pages:".
"""

import logging
import subprocess

from pdfripper.config import settings
from pdfripper.exceptions import ExternalToolError, ParseError

logger = logging.getLogger(__name__)

PAGES_LABEL = "Pages:"


def parse_page_count(output: str) -> int:
    """
    Извлекает число страниц из вывода pdfinfo.

    Берётся первая строка, начинающаяся с "Pages:" и содержащая
    второй токен. Строка "Pages:" без значения пропускается.

    Args:
        output: stdout pdfinfo

    Returns:
        int: число страниц (0 — допустимое значение)

    Raises:
        ParseError: строки нет, значение не целое число или отрицательное
    """
    for line in output.splitlines():
        if not line.startswith(PAGES_LABEL):
            continue

        parts = line.split()
        if len(parts) < 2:
            continue

        try:
            pages = int(parts[1])
        except ValueError as e:
            raise ParseError(f"parsing pages count: {parts[1]!r} is not an integer") from e

        if pages < 0:
            raise ParseError(f"parsing pages count: negative value {pages}")
        return pages

    raise ParseError("could not determine number of pages from pdfinfo output")


def count_pages(pdf_path: str) -> int:
    """
    Запускает pdfinfo и возвращает число страниц документа.

    Args:
        pdf_path: путь к PDF файлу

    Returns:
        int: число страниц

    Raises:
        ExternalToolError: pdfinfo не запустился или вернул ненулевой код
        ParseError: в выводе нет корректной строки Pages:
    """
    command = [settings.pdfinfo_bin, pdf_path]

    try:
        proc = subprocess.run(command, capture_output=True, text=True)
    except OSError as e:
        raise ExternalToolError(f"running pdfinfo: {e}", command=command) from e

    if proc.returncode != 0:
        raise ExternalToolError(
            f"running pdfinfo: exit status {proc.returncode}: {proc.stderr.strip()}",
            command=command,
            returncode=proc.returncode,
            stderr=proc.stderr,
        )

    pages = parse_page_count(proc.stdout)
    logger.debug(f"pdfinfo: {pdf_path} -> {pages} стр.")
    return pages

"""
Сервисы pdfripper.

Модули:
    - page_counter: число страниц через pdfinfo
    - page_extractor: текст одной страницы через pdftotext
    - fanout: ограниченный пул воркеров с "первая ошибка побеждает"
    - extractor: координация всего пайплайна
"""

from pdfripper.services.extractor import Extractor, new_extractor
from pdfripper.services.fanout import FirstErrorSlot, run_fanout
from pdfripper.services.page_counter import count_pages, parse_page_count
from pdfripper.services.page_extractor import extract_page, page_output_path

__all__ = [
    "Extractor",
    "new_extractor",
    "FirstErrorSlot",
    "run_fanout",
    "count_pages",
    "parse_page_count",
    "extract_page",
    "page_output_path",
]

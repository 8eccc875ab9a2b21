"""
pdfripper — параллельное постраничное извлечение текста из PDF.

Число страниц берётся из pdfinfo, каждая страница извлекается
отдельным вызовом pdftotext в файл page_<k>.txt. Страницы
обрабатываются пулом потоков ограниченного размера.

Точки входа:
    - CLI: pdfripper -input doc.pdf [-output dir] [-processes N]
    - HTTP: uvicorn pdfripper.main:app
"""

from pdfripper.config import settings
from pdfripper.exceptions import (
    ConfigError,
    ExternalToolError,
    ParseError,
    PdfRipperError,
    UnitExtractionError,
)
from pdfripper.services.extractor import Extractor, new_extractor

__version__ = "1.0.0"

__all__ = [
    "settings",
    "Extractor",
    "new_extractor",
    "PdfRipperError",
    "ConfigError",
    "ExternalToolError",
    "ParseError",
    "UnitExtractionError",
]

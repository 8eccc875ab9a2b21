"""
Извлечение текста одной страницы через pdftotext.

pdftotext -f <k> -l <k> выбирает ровно одну страницу k
и пишет её текст в отдельный файл page_<k>.txt.
"""

import logging
import os
import subprocess

from pdfripper.config import settings
from pdfripper.exceptions import ExternalToolError

logger = logging.getLogger(__name__)


def page_output_path(output_dir: str, page: int) -> str:
    """Путь к файлу страницы: <output_dir>/page_<k>.txt (без дополнения нулями)."""
    return os.path.join(output_dir, f"page_{page}.txt")


def extract_page(pdf_path: str, output_dir: str, page: int) -> str:
    """
    Извлекает текст страницы в файл.

    Args:
        pdf_path: путь к PDF файлу
        output_dir: каталог для текстовых файлов
        page: номер страницы (начинается с 1)

    Returns:
        str: путь к созданному файлу

    Raises:
        ExternalToolError: pdftotext не запустился или вернул ненулевой код
    """
    output_file = page_output_path(output_dir, page)
    command = [
        settings.pdftotext_bin,
        "-f", str(page),
        "-l", str(page),
        pdf_path,
        output_file,
    ]

    try:
        proc = subprocess.run(command, capture_output=True, text=True)
    except OSError as e:
        raise ExternalToolError(f"running pdftotext: {e}", command=command) from e

    if proc.returncode != 0:
        raise ExternalToolError(
            f"exit status {proc.returncode}: {proc.stderr.strip()}",
            command=command,
            returncode=proc.returncode,
            stderr=proc.stderr,
        )

    return output_file

"""
Постраничное извлечение текста из PDF — координация пайплайна.

Пайплайн:
    1. pdfinfo: число страниц N
    2. Пул воркеров: pdftotext для каждой страницы 1..N
    3. Итог: первая ошибка по странице или успех

Ошибки конфигурации и подсчёта страниц прерывают работу
до запуска воркеров. Ошибка отдельной страницы остальные
страницы не останавливает.
"""

import logging
import os
import threading
import time

from pdfripper.exceptions import ConfigError, ExternalToolError, ParseError
from pdfripper.schemas import ExtractionReport, WorkerPoolConfig
from pdfripper.services.fanout import run_fanout
from pdfripper.services.page_counter import count_pages
from pdfripper.services.page_extractor import extract_page, page_output_path

logger = logging.getLogger(__name__)


def default_output_dir(pdf_path: str) -> str:
    """Имя PDF файла без расширения: /docs/report.pdf -> report."""
    base = os.path.basename(pdf_path)
    return os.path.splitext(base)[0]


def default_process_count() -> int:
    return os.cpu_count() or 1


class Extractor:
    """
    Конфигурация извлечения одного PDF.

    Attributes:
        pdf_path: путь к исходному PDF
        output_dir: каталог для файлов page_<k>.txt
        process_count: число параллельных воркеров
    """

    def __init__(self, pdf_path: str, output_dir: str, process_count: int):
        self.pdf_path = pdf_path
        self.output_dir = output_dir
        self.process_count = process_count

    def __repr__(self) -> str:
        return (
            f"Extractor(pdf_path={self.pdf_path!r}, output_dir={self.output_dir!r}, "
            f"process_count={self.process_count})"
        )

    def _total_pages(self) -> int:
        try:
            return count_pages(self.pdf_path)
        except ExternalToolError as e:
            raise ExternalToolError(
                f"getting total pages: {e}",
                command=e.command,
                returncode=e.returncode,
                stderr=e.stderr,
            ) from e
        except ParseError as e:
            raise ParseError(f"getting total pages: {e}") from e

    def run(self) -> ExtractionReport:
        """
        Выполняет извлечение и возвращает отчёт.

        Ошибки страниц не выбрасываются, а попадают в report.error
        (только первая).

        Returns:
            ExtractionReport: итог прогона

        Raises:
            ExternalToolError, ParseError: не удалось получить число страниц
        """
        start = time.perf_counter()

        total_pages = self._total_pages()
        logger.info(f"Всего страниц: {total_pages}")

        pool = WorkerPoolConfig(total_units=total_pages, worker_count=self.process_count)
        report = ExtractionReport(total_pages=total_pages, workers=pool.effective_workers)
        saved_lock = threading.Lock()

        def extract_one(page: int) -> None:
            extract_page(self.pdf_path, self.output_dir, page)

        def on_saved(page: int) -> None:
            output_file = page_output_path(self.output_dir, page)
            with saved_lock:
                report.saved[page] = output_file
            logger.info(f"Сохранена стр.{page} -> {output_file}")

        report.error = run_fanout(pool.total_units, pool.worker_count, extract_one, on_success=on_saved)
        report.elapsed_ms = int((time.perf_counter() - start) * 1000)

        logger.info("=" * 60)
        logger.info("ИЗВЛЕЧЕНИЕ ЗАВЕРШЕНО")
        logger.info(f"   Файл: {self.pdf_path}")
        logger.info(f"   Каталог: {self.output_dir}")
        logger.info(f"   Страниц: {len(report.saved)}/{total_pages}")
        logger.info(f"   Воркеров: {report.workers}")
        logger.info(f"   Время: {report.elapsed_ms}ms")
        if report.error is not None:
            logger.info(f"   Первая ошибка: {report.error}")
        logger.info("=" * 60)

        return report

    def extract_pages(self) -> None:
        """
        Извлекает все страницы в output_dir.

        Raises:
            ExternalToolError, ParseError: не удалось получить число страниц
            UnitExtractionError: первая страница, завершившаяся ошибкой
                (все остальные страницы при этом обработаны)
        """
        report = self.run()
        if report.error is not None:
            raise report.error


def new_extractor(pdf_path: str, output_dir: str = "", process_count: int = 0) -> Extractor:
    """
    Создаёт Extractor и каталог для результатов.

    Args:
        pdf_path: путь к PDF (обязателен)
        output_dir: каталог результатов; пусто — имя PDF без расширения
        process_count: число воркеров; < 1 — по числу ядер CPU

    Returns:
        Extractor: готовый к запуску экстрактор

    Raises:
        ConfigError: не указан PDF или каталог не удалось создать
    """
    if not pdf_path:
        raise ConfigError("input PDF file must be specified")

    if not output_dir:
        output_dir = default_output_dir(pdf_path)
        if not output_dir:
            raise ConfigError(f"cannot derive output directory from {pdf_path!r}")

    try:
        os.makedirs(output_dir, mode=0o755, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"creating output directory: {e}") from e

    if process_count < 1:
        process_count = default_process_count()

    return Extractor(pdf_path=pdf_path, output_dir=output_dir, process_count=process_count)

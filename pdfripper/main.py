"""
pdfripper HTTP API — FastAPI приложение.

Принимает PDF, сохраняет его в output_root под новым doc_id и извлекает
текст каждой страницы в <output_root>/<doc_id>/page_<k>.txt.

Эндпоинты:
    POST /extract — загрузка PDF и постраничное извлечение текста
    GET  /health — проверка работоспособности (pdfinfo + pdftotext + конфиг)

Запуск:
    uvicorn pdfripper.main:app --host 0.0.0.0 --port 8000
"""

import logging
import os
import shutil
import time
import uuid
from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from pdfripper import __version__
from pdfripper.config import settings
from pdfripper.exceptions import ConfigError, ExternalToolError, ParseError
from pdfripper.schemas import ExtractionRequest, ExtractionResponse, PageFile
from pdfripper.services.extractor import new_extractor

# Настройка логгера
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [PdfRipper] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = ("application/pdf", "application/octet-stream")
PDF_SIGNATURE = b"%PDF"
UPLOAD_CHUNK_SIZE = 1024 * 1024

# FastAPI приложение
app = FastAPI(
    title="pdfripper",
    description="Параллельное постраничное извлечение текста из PDF (pdftotext)",
    version=__version__,
)


@app.get("/health")
async def health_check() -> dict:
    """
    Проверка работоспособности сервиса.

    Проверяет наличие pdfinfo и pdftotext в PATH, количество CPU,
    и возвращает текущую конфигурацию.

    Returns:
        dict: статус сервиса и информация о системе
    """
    tools = {
        "pdfinfo": shutil.which(settings.pdfinfo_bin),
        "pdftotext": shutil.which(settings.pdftotext_bin),
    }
    tools_ok = all(tools.values())

    return {
        "status": "ok" if tools_ok else "degraded",
        "service": "pdfripper",
        "version": __version__,
        "cpu_count": os.cpu_count(),
        "tools": {
            name: {"available": path is not None, "path": path}
            for name, path in tools.items()
        },
        "config": {
            "max_file_size_mb": settings.max_file_size_mb,
            "process_count": settings.process_count,
            "output_root": settings.output_root,
        },
    }


@app.post("/extract", response_model=ExtractionResponse)
async def extract(
    file: UploadFile = File(..., description="PDF файл для извлечения текста"),
    config: Optional[str] = Form(
        default=None,
        description='JSON конфигурация: {"process_count": 4}',
    ),
) -> ExtractionResponse:
    """
    Извлекает текст каждой страницы загруженного PDF.

    Каждая загрузка получает свой doc_id: PDF сохраняется в
    <output_root>/<doc_id>.pdf, страницы — в <output_root>/<doc_id>/.
    Имя файла от клиента в путях не участвует.

    Args:
        file: PDF файл (multipart/form-data)
        config: JSON строка с конфигурацией

    Returns:
        ExtractionResponse: итог извлечения; ошибка отдельной страницы
            возвращается как success=False, остальные страницы сохранены

    Raises:
        HTTPException: 400/413 при ошибках валидации,
            422 если не удалось определить число страниц
    """
    start_time = time.time()

    request = _parse_config(config)
    process_count = request.process_count or settings.process_count
    _check_content_type(file)

    doc_id = uuid.uuid4().hex
    pdf_path = os.path.join(settings.output_root, f"{doc_id}.pdf")
    output_dir = os.path.join(settings.output_root, doc_id)

    try:
        extractor = new_extractor(pdf_path, output_dir, process_count)
    except ConfigError as e:
        raise _api_error(400, "invalid_config", str(e))

    try:
        size = await _save_upload(file, pdf_path)
    except HTTPException:
        shutil.rmtree(output_dir, ignore_errors=True)
        raise

    logger.info(f"Получен файл: {file.filename} ({size} байт) -> doc_id={doc_id}")

    # Извлечение в threadpool — внутри свой пул потоков
    try:
        report = await run_in_threadpool(extractor.run)
    except (ExternalToolError, ParseError) as e:
        logger.warning(f"Не удалось определить число страниц: {e}")
        raise _api_error(422, "page_count_failed", str(e))

    processing_time_ms = int((time.time() - start_time) * 1000)

    pages = [
        PageFile(page_number=page, path=path)
        for page, path in sorted(report.saved.items())
    ]

    logger.info(
        f"Извлечение завершено: doc_id={doc_id}, "
        f"{len(pages)}/{report.total_pages} страниц за {processing_time_ms}ms"
    )

    return ExtractionResponse(
        success=report.success,
        doc_id=doc_id,
        filename=file.filename or "",
        total_pages=report.total_pages,
        workers=report.workers,
        output_dir=output_dir,
        processing_time_ms=processing_time_ms,
        pages=pages,
        error=str(report.error) if report.error is not None else None,
    )


def _api_error(status_code: int, error: str, message: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"error": error, "message": message})


def _parse_config(config_json: Optional[str]) -> ExtractionRequest:
    """Валидирует JSON из поля config; пустое поле — параметры по умолчанию."""
    if not config_json:
        return ExtractionRequest()

    try:
        return ExtractionRequest.model_validate_json(config_json)
    except ValidationError as e:
        first = e.errors()[0]
        raise _api_error(400, "invalid_config", f"Ошибка в config: {first['msg']}")


def _check_content_type(file: UploadFile) -> None:
    # octet-stream допускаем: многие клиенты не указывают тип
    if file.content_type and file.content_type not in ALLOWED_CONTENT_TYPES:
        raise _api_error(
            400,
            "invalid_file_type",
            f"Ожидается PDF файл, получен: {file.content_type}",
        )


async def _save_upload(file: UploadFile, destination: str) -> int:
    """
    Потоково сохраняет загрузку на диск.

    Файл читается кусками по UPLOAD_CHUNK_SIZE: размер проверяется
    по мере чтения (не больше max_file_size_mb), сигнатура %PDF —
    по первому куску. При отказе частично записанный файл удаляется.

    Returns:
        int: размер сохранённого файла в байтах

    Raises:
        HTTPException: 413 — файл слишком большой,
            400 — пустой файл или нет сигнатуры %PDF
    """
    max_size = settings.max_file_size_mb * 1024 * 1024
    written = 0

    try:
        with open(destination, "wb") as out:
            while True:
                chunk = await file.read(UPLOAD_CHUNK_SIZE)
                if not chunk:
                    break

                if written == 0 and not chunk.startswith(PDF_SIGNATURE):
                    raise _api_error(
                        400,
                        "invalid_pdf",
                        "Файл не является валидным PDF (отсутствует сигнатура %PDF)",
                    )

                written += len(chunk)
                if written > max_size:
                    raise _api_error(
                        413,
                        "file_too_large",
                        f"Файл больше {settings.max_file_size_mb} МБ",
                    )
                out.write(chunk)

        if written == 0:
            raise _api_error(400, "invalid_pdf", "Пустой файл")
    except HTTPException:
        os.remove(destination)
        raise

    return written


if __name__ == "__main__":
    import uvicorn

    port = settings.port
    logger.info(f"Запуск pdfripper на порту {port}")
    logger.info(f"CPU ядер: {os.cpu_count()}")

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        log_level="info",
    )

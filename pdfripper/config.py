"""
Конфигурация pdfripper.

Все значения читаются из .env файла (или переменных окружения)
с префиксом PDFRIPPER_. У всех параметров есть дефолты —
CLI работает и без .env.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Настройки pdfripper.

    Читает переменные с префиксом PDFRIPPER_ из .env файла.
    """

    model_config = SettingsConfigDict(
        env_prefix="PDFRIPPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Внешние утилиты (poppler-utils) ---
    pdfinfo_bin: str = "pdfinfo"
    pdftotext_bin: str = "pdftotext"

    # --- Параллелизм ---
    # < 1 означает "по числу ядер CPU"
    process_count: int = 0

    # --- HTTP API ---
    port: int = 8000
    max_file_size_mb: int = 100
    # Каталог, внутри которого создаются каталоги для загруженных PDF
    output_root: str = "output"


# Глобальный экземпляр настроек
settings = Settings()

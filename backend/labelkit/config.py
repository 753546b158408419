"""
Конфигурация приложения labelkit.

Все настройки в одном месте (SSOT — Single Source of Truth).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LabelSettings:
    """
    Настройки этикеток.

    Константы термопринтеров Zebra и стандартного стикера WB.
    """

    # Стандартное разрешение (203 DPI для большинства принтеров Zebra)
    DPI: int = 203

    # Миллиметров в дюйме
    MM_PER_INCH: float = 25.4

    # Размер этикетки по умолчанию
    LABEL_WIDTH_MM: float = 58.0
    LABEL_HEIGHT_MM: float = 40.0

    # DPI принтера -> точек на мм для растеризатора
    DPMM_BY_DPI: dict[str, str] = {
        "203": "8",
        "300": "12",
        "600": "24",
    }
    DEFAULT_DPMM: str = "8"

    # Предустановленные размеры этикеток (название, ширина мм, высота мм)
    PRESET_SIZES: list[tuple[str, float, float]] = [
        ("30×20 мм (Компактная)", 30.0, 20.0),
        ("58×40 мм (Стандартная)", 58.0, 40.0),
        ("70×40 мм (Увеличенная)", 70.0, 40.0),
        ("100×60 мм (Почтовая)", 100.0, 60.0),
    ]


class Settings(BaseSettings):
    """
    Настройки приложения из переменных окружения.

    Загружаются из .env файла или переменных окружения.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Приложение ===
    app_name: str = "labelkit API"
    app_version: str = "0.1.0"
    debug: bool = False

    # === CORS ===
    allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"]
    )

    # === Растеризатор ZPL (Labelary) ===
    rasterizer_base_url: str = Field(default="http://api.labelary.com/v1/printers")
    rasterizer_timeout: float = 15.0

    # === Backend API (для станции сканирования) ===
    api_base_url: str = Field(default="http://localhost:8000")
    api_timeout: float = 30.0

    # === Сетевой принтер этикеток ===
    # Пустой адрес — прямая печать отключена
    printer_host: str = Field(default="")
    printer_port: int = 9100
    printer_timeout: float = 5.0

    # === Станция сканирования ===
    # Команда печати PDF (путь к файлу добавляется последним аргументом)
    print_command: str = Field(default="lp")
    # Команда буфера обмена (текст передаётся через stdin)
    clipboard_command: str = Field(default="xclip -selection clipboard")

    # === Wildberries ===
    wb_api_key: str = Field(default="")

    # === Логирование ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> Settings:
    """
    Получить настройки приложения (singleton).

    Использует кэширование для избежания повторного чтения .env
    """
    return Settings()


# Экспорт констант этикеток для удобства
LABEL = LabelSettings()

"""
Точка входа FastAPI приложения labelkit.

Шаблоны этикеток, ZPL предпросмотр и печать дубликатов.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from labelkit.api.dependencies import get_product_repository
from labelkit.api.routes import documents, health, preview, printing, templates
from labelkit.config import get_settings
from labelkit.logging_config import setup_logging
from labelkit.services.marketplace_api.wildberries import (
    WildberriesAPI,
    WildberriesAPIError,
    sync_catalog,
)

settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifecycle приложения.

    При наличии ключа WB загружает каталог товаров для подписей.
    """
    logger.info(f"[START] {settings.app_name} v{settings.app_version}")

    if settings.wb_api_key:
        repository = await get_product_repository()
        try:
            count = await sync_catalog(WildberriesAPI(settings.wb_api_key), repository)
            logger.info(f"[WB] Каталог загружен: {count} карточек")
        except WildberriesAPIError as e:
            # Без каталога сервис работает, только без названий товаров
            logger.warning(f"[WB] Каталог не загружен: {e}")

    yield

    logger.info(f"[STOP] {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
## labelkit API

Редактор этикеток и печать дубликатов для склада.

### Возможности:

* **Шаблоны** — элементы этикетки в точках принтера, размеры 30x20 ... 100x60 мм
* **Предпросмотр** — ZPL → PNG через Labelary
* **Дубликаты** — PDF 58x40 мм с DataMatrix или EAN-13, прямая печать ZPL
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Подключение роутеров
app.include_router(health.router, tags=["Health"])
app.include_router(preview.router)
app.include_router(documents.router)
app.include_router(printing.router)
app.include_router(templates.router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Корневой эндпоинт."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }

"""
Health check эндпоинты.
"""

from fastapi import APIRouter

from labelkit.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """
    Базовая проверка состояния сервиса.

    Returns:
        Статус "ok" если сервис работает
    """
    return {"status": "ok"}


@router.get("/health/rasterizer")
async def health_rasterizer() -> dict[str, str]:
    """Адрес растеризатора, используемого для предпросмотра."""
    return {"status": "ok", "rasterizer": get_settings().rasterizer_base_url}

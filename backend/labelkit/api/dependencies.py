"""
Dependencies для FastAPI эндпоинтов.

Репозитории живут в памяти процесса; в тестах подменяются через
app.dependency_overrides.
"""

from typing import Annotated

from fastapi import Header, HTTPException, status

from labelkit.repositories import LabelTemplateRepository, ProductRepository, ScanHistoryRepository
from labelkit.services.document_generator import DocumentGenerator
from labelkit.services.preview import PreviewRenderer

_template_repo = LabelTemplateRepository()
_product_repo = ProductRepository()
_scan_history = ScanHistoryRepository()


async def get_current_owner_id(
    x_owner_id: Annotated[str | None, Header()] = None,
) -> str:
    """
    Владелец шаблонов (пользователь или клиент).

    Сессию разрешает внешний слой авторизации и передаёт результат
    в заголовке X-Owner-Id.

    Raises:
        HTTPException 401: Если заголовок не передан
    """
    if not x_owner_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Необходимо войти в систему",
        )
    return x_owner_id


async def get_optional_owner_id(
    x_owner_id: Annotated[str | None, Header()] = None,
) -> str | None:
    return x_owner_id or None


async def get_template_repository() -> LabelTemplateRepository:
    return _template_repo


async def get_product_repository() -> ProductRepository:
    return _product_repo


async def get_scan_history() -> ScanHistoryRepository:
    return _scan_history


async def get_preview_renderer() -> PreviewRenderer:
    return PreviewRenderer()


async def get_document_generator() -> DocumentGenerator:
    return DocumentGenerator()

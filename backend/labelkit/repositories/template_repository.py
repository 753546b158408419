"""
Репозиторий шаблонов этикеток.

Хранилище в памяти процесса: долговременное хранение шаблонов —
забота внешнего document store.
"""

import logging
import uuid
from dataclasses import replace
from datetime import UTC, datetime

from labelkit.models.label_types import LabelElement, LabelSize, LabelTemplate
from labelkit.services.label_size import create_default_elements, get_default_label_size

logger = logging.getLogger(__name__)


class LabelTemplateRepository:
    """Репозиторий для работы с шаблонами этикеток владельца."""

    def __init__(self) -> None:
        self._templates: dict[str, LabelTemplate] = {}

    async def create(
        self,
        owner_id: str,
        name: str,
        description: str | None = None,
        elements: list[LabelElement] | None = None,
        label_size: LabelSize | None = None,
    ) -> LabelTemplate:
        """
        Создать шаблон.

        Без элементов и размера используется набор по умолчанию и 58×40 мм.
        """
        now = datetime.now(UTC)
        template = LabelTemplate(
            id=uuid.uuid4().hex,
            owner_id=owner_id,
            name=name,
            description=description,
            elements=elements if elements is not None else create_default_elements(),
            label_size=label_size or get_default_label_size(),
            created_at=now,
            updated_at=now,
        )
        self._templates[template.id] = template
        logger.info(f"[TEMPLATES] Создан шаблон {template.id} для {owner_id}")
        return template

    async def get_by_id(self, template_id: str) -> LabelTemplate | None:
        """Получить шаблон по ID."""
        return self._templates.get(template_id)

    async def list_by_owner(self, owner_id: str) -> list[LabelTemplate]:
        """Все шаблоны владельца, свежие первыми."""
        templates = [t for t in self._templates.values() if t.owner_id == owner_id]
        return sorted(templates, key=lambda t: t.updated_at, reverse=True)

    async def get_custom(self, owner_id: str) -> LabelTemplate | None:
        """Пользовательский шаблон владельца (последний изменённый)."""
        templates = await self.list_by_owner(owner_id)
        return templates[0] if templates else None

    async def update(
        self,
        template_id: str,
        name: str | None = None,
        description: str | None = None,
        elements: list[LabelElement] | None = None,
        label_size: LabelSize | None = None,
    ) -> LabelTemplate | None:
        """Обновить переданные поля шаблона. None если шаблон не найден."""
        template = self._templates.get(template_id)
        if template is None:
            return None

        changes: dict = {"updated_at": datetime.now(UTC)}
        if name is not None:
            changes["name"] = name
        if description is not None:
            changes["description"] = description
        if elements is not None:
            changes["elements"] = elements
        if label_size is not None:
            changes["label_size"] = label_size

        updated = replace(template, **changes)
        self._templates[template_id] = updated
        return updated

    async def delete(self, template_id: str) -> bool:
        """Удалить шаблон. False если шаблона не было."""
        return self._templates.pop(template_id, None) is not None

"""Тесты in-memory репозиториев шаблонов, товаров и истории сканирований."""

import pytest

from labelkit.repositories import (
    LabelTemplateRepository,
    ProductCard,
    ProductRepository,
    ProductSize,
    ScanHistoryRepository,
)
from labelkit.services.label_size import create_label_size_from_mm


@pytest.fixture
def repo():
    return LabelTemplateRepository()


@pytest.mark.asyncio
async def test_create_uses_defaults(repo):
    template = await repo.create("owner-1", "Основной")

    assert template.owner_id == "owner-1"
    assert len(template.elements) == 5
    assert template.label_size.width == 464
    assert await repo.get_by_id(template.id) is template


@pytest.mark.asyncio
async def test_list_by_owner_isolated(repo):
    await repo.create("owner-1", "A")
    await repo.create("owner-2", "B")

    templates = await repo.list_by_owner("owner-1")

    assert [t.name for t in templates] == ["A"]


@pytest.mark.asyncio
async def test_custom_is_last_updated(repo):
    first = await repo.create("owner-1", "Первый")
    await repo.create("owner-1", "Второй")

    await repo.update(first.id, name="Первый (изм.)")

    custom = await repo.get_custom("owner-1")
    assert custom.id == first.id
    assert custom.name == "Первый (изм.)"


@pytest.mark.asyncio
async def test_update_only_given_fields(repo):
    template = await repo.create("owner-1", "Шаблон", description="desc")
    new_size = create_label_size_from_mm(100, 60)

    updated = await repo.update(template.id, label_size=new_size)

    assert updated.label_size == new_size
    assert updated.name == "Шаблон"
    assert updated.description == "desc"
    assert updated.updated_at >= template.updated_at


@pytest.mark.asyncio
async def test_update_missing(repo):
    assert await repo.update("nope", name="x") is None


@pytest.mark.asyncio
async def test_delete(repo):
    template = await repo.create("owner-1", "Шаблон")

    assert await repo.delete(template.id) is True
    assert await repo.delete(template.id) is False
    assert await repo.get_custom("owner-1") is None


@pytest.mark.asyncio
async def test_product_lookup_by_barcode():
    repo = ProductRepository()
    card = ProductCard(
        nm_id=1,
        vendor_code="ART-1",
        title="Футболка",
        sizes=[ProductSize(tech_size="M", wb_size="48", skus=["4600000000008"])],
    )

    await repo.upsert_many([card])

    found = await repo.find_by_barcode("4600000000008")
    assert found.to_product_info("4600000000008").size == "48"
    assert await repo.find_by_barcode("4670049774802") is None


@pytest.mark.asyncio
async def test_scan_history_counts():
    history = ScanHistoryRepository()

    assert await history.find("code") is None

    await history.record("code")
    record = await history.record("code")

    assert record.count == 2
    assert (await history.find("code")).count == 2

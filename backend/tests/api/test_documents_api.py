"""Тесты API /api/v1/generate-pdf."""

import asyncio
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from labelkit.api.dependencies import get_document_generator, get_product_repository
from labelkit.main import app
from labelkit.repositories import ProductCard, ProductRepository, ProductSize

EAN13 = "4670049774802"


@pytest.fixture
def products():
    return ProductRepository()


@pytest.fixture
def client(products):
    app.dependency_overrides[get_product_repository] = lambda: products
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestGeneratePdf:
    def test_ean13_pdf(self, client):
        response = client.post("/api/v1/generate-pdf", json={"scannedData": EAN13})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"].startswith('attachment; filename="barcode-')
        assert response.content[:4] == b"%PDF"

    def test_missing_data(self, client):
        response = client.post("/api/v1/generate-pdf", json={})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Отсутствуют данные для генерации"}

    def test_invalid_ean13_checksum(self, client):
        response = client.post("/api/v1/generate-pdf", json={"scannedData": "4670049774803"})

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_payload_passed_to_generator(self, client):
        generator = MagicMock()
        generator.generate.return_value = b"%PDF-1.4"
        app.dependency_overrides[get_document_generator] = lambda: generator

        response = client.post(
            "/api/v1/generate-pdf",
            json={
                "scannedData": "0104600000000008XYZ1",
                "productName": "Футболка",
                "productSize": "48",
                "options": {"scale": 4},
            },
        )

        assert response.status_code == 200
        args, kwargs = generator.generate.call_args
        assert args == ("0104600000000008XYZ1",)
        assert kwargs["product_name"] == "Футболка"
        assert kwargs["product_size"] == "48"
        assert kwargs["options"].scale == 4

    def test_generator_crash(self, client):
        generator = MagicMock()
        generator.generate.side_effect = RuntimeError("boom")
        app.dependency_overrides[get_document_generator] = lambda: generator

        response = client.post("/api/v1/generate-pdf", json={"scannedData": EAN13})

        assert response.status_code == 500
        assert response.json()["error"] == "Внутренняя ошибка сервера"


class TestProductLookup:
    def test_found(self, client, products):
        card = ProductCard(
            nm_id=1,
            vendor_code="ART-1",
            title="Футболка",
            sizes=[ProductSize(tech_size="M", wb_size="48", skus=[EAN13])],
        )
        asyncio.run(products.upsert_many([card]))

        response = client.get("/api/v1/generate-pdf", params={"barcode": EAN13})

        assert response.status_code == 200
        assert response.json() == {"success": True, "product": {"title": "Футболка", "size": "48"}}

    def test_not_found(self, client):
        response = client.get("/api/v1/generate-pdf", params={"barcode": "4600000000008"})

        assert response.status_code == 404
        assert response.json()["error"] == "Продукт не найден"

    def test_barcode_required(self, client):
        response = client.get("/api/v1/generate-pdf")

        assert response.status_code == 400

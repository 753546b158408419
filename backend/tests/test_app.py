"""Тесты точек входа: FastAPI приложение и станция сканирования."""

import asyncio
import io
import json
import logging
import sys
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from labelkit import scan_station
from labelkit.config import Settings
from labelkit.logging_config import JSONFormatter, setup_logging
from labelkit.main import app
from labelkit.services import print_sinks
from labelkit.services.api_client import DocumentResult
from labelkit.services.print_orchestrator import DuplicatePrintOrchestrator
from labelkit.services.print_sinks import MemoryPrintSink, SystemPrintSink

client = TestClient(app)


class TestApp:
    def test_health(self):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_root(self):
        data = client.get("/").json()

        assert data["docs"] == "/docs"
        assert data["service"]


class TestScanStation:
    def test_dry_run_uses_memory_sink(self):
        orchestrator = scan_station.build_orchestrator(dry_run=True)

        assert isinstance(orchestrator.sink, MemoryPrintSink)
        assert orchestrator.documents is orchestrator.products

    def test_system_sink_by_default(self):
        orchestrator = scan_station.build_orchestrator()

        assert isinstance(orchestrator.sink, SystemPrintSink)

    @pytest.mark.asyncio
    async def test_short_scans_do_not_print(self, monkeypatch):
        """Короткие строки пропускаются без обращения к API."""
        monkeypatch.setattr(sys, "stdin", io.StringIO("123\n\nabc\n"))

        await scan_station.run(dry_run=True)

    def test_eof_right_after_print_removes_temp_files(self, monkeypatch, tmp_path):
        """EOF сразу после печати: временные PDF удаляются до выхода из asyncio.run."""
        monkeypatch.setattr(print_sinks, "LOAD_DELAY_SECONDS", 0)
        monkeypatch.setattr(print_sinks, "RELEASE_DELAY_SECONDS", 0.2)
        monkeypatch.setattr(print_sinks.tempfile, "tempdir", str(tmp_path))

        documents = AsyncMock()
        documents.generate = AsyncMock(
            return_value=DocumentResult(success=True, content=b"%PDF-1.4")
        )
        products = AsyncMock()
        products.get_product = AsyncMock(return_value=None)
        clipboard = AsyncMock()
        orchestrator = DuplicatePrintOrchestrator(
            documents, products, clipboard, SystemPrintSink("true")
        )
        monkeypatch.setattr(scan_station, "build_orchestrator", lambda dry_run: orchestrator)
        monkeypatch.setattr(sys, "stdin", io.StringIO("0104600000000008XYZ1\n"))

        asyncio.run(scan_station.run())

        assert documents.generate.await_count == 2
        assert list(tmp_path.glob("label-*.pdf")) == []


class TestSettings:
    def test_printer_host_empty_by_default(self):
        """Без PRINTER_HOST прямая печать отключена."""
        assert Settings.model_fields["printer_host"].default == ""


class TestLogging:
    def test_json_record(self):
        formatter = JSONFormatter("scan-station")
        record = logging.makeLogRecord(
            {"name": "labelkit.test", "levelname": "INFO", "msg": "[SCAN] %s", "args": ("код",)}
        )
        record.barcode = "4600000000008"

        data = json.loads(formatter.format(record))

        assert data["component"] == "scan-station"
        assert data["logger"] == "labelkit.test"
        assert data["message"] == "[SCAN] код"
        assert data["extra"] == {"barcode": "4600000000008"}

    def test_scan_station_logs_to_stderr(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        try:
            setup_logging("scan-station")

            assert root.handlers[0].stream is sys.stderr
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            root.handlers[:] = handlers
            root.setLevel(level)

"""
Станция сканирования дубликатов.

Сканер работает как клавиатура: каждая строка stdin — одно сканирование
(Enter в конце). Адрес API и команды печати/буфера обмена берутся из
настроек (.env).
"""

import argparse
import asyncio
import logging
import sys

from labelkit.config import get_settings
from labelkit.logging_config import setup_logging
from labelkit.services.api_client import DocumentAPIClient
from labelkit.services.print_orchestrator import DuplicatePrintOrchestrator, PrintSink
from labelkit.services.print_sinks import CommandClipboard, MemoryPrintSink, SystemPrintSink

logger = logging.getLogger(__name__)


def build_orchestrator(dry_run: bool = False) -> DuplicatePrintOrchestrator:
    """Оркестратор с HTTP клиентом API и системными командами."""
    settings = get_settings()
    client = DocumentAPIClient()
    sink: PrintSink = MemoryPrintSink() if dry_run else SystemPrintSink(settings.print_command)

    return DuplicatePrintOrchestrator(
        documents=client,
        products=client,
        clipboard=CommandClipboard(settings.clipboard_command),
        sink=sink,
    )


async def run(dry_run: bool = False) -> None:
    """Читать сканирования из stdin до EOF."""
    settings = get_settings()
    orchestrator = build_orchestrator(dry_run)
    loop = asyncio.get_running_loop()

    logger.info(f"[START] Станция сканирования, API: {settings.api_base_url}")
    if dry_run:
        logger.info("[START] Режим без печати (--dry-run)")

    try:
        while True:
            # Чтение блокирующее; пока идёт печать, следующая строка ждёт в stdin
            line = await loop.run_in_executor(None, sys.stdin.readline)
            if not line:
                break

            outcome = await orchestrator.handle_scan(line.rstrip("\r\n"))
            if outcome.skipped:
                continue

            logger.info(
                f"[SCAN] {outcome.code[:20]}...: напечатано {len(outcome.printed)}, "
                f"ошибок {len(outcome.failed)}"
            )
    finally:
        # Временные PDF удаляются до остановки цикла событий
        await orchestrator.sink.aclose()

    logger.info("[STOP] Станция сканирования")


def main() -> None:
    parser = argparse.ArgumentParser(description="Печать дубликатов этикеток по сканированию")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="генерировать PDF без отправки на принтер",
    )
    args = parser.parse_args()

    setup_logging("scan-station")
    try:
        asyncio.run(run(dry_run=args.dry_run))
    except KeyboardInterrupt:
        logger.info("Станция остановлена пользователем")


if __name__ == "__main__":
    main()

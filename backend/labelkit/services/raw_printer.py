"""
Отправка ZPL на сетевой принтер этикеток (RAW, TCP 9100).
"""

import asyncio
import logging

logger = logging.getLogger(__name__)


class PrinterError(Exception):
    """Ошибка связи с принтером."""

    pass


async def send_zpl(host: str, zpl: str, port: int = 9100, timeout: float = 5.0) -> None:
    """
    Отправить ZPL задание одной TCP сессией.

    Args:
        host: IP или имя принтера
        zpl: Задание от ^XA до ^XZ (можно несколько этикеток подряд)
        port: TCP порт (у Zebra — 9100)
        timeout: Таймаут подключения и отправки в секундах

    Raises:
        ValueError: Пустой адрес или пустое задание
        PrinterError: Принтер недоступен или соединение оборвалось
    """
    if not host:
        raise ValueError("Не задан адрес принтера")
    if not zpl:
        raise ValueError("Пустое задание печати")

    data = zpl.encode("utf-8")

    try:
        _, writer = await asyncio.wait_for(asyncio.open_connection(host, port), timeout)
    except (OSError, TimeoutError) as e:
        raise PrinterError(f"Принтер {host}:{port} недоступен: {e}") from e

    try:
        writer.write(data)
        await asyncio.wait_for(writer.drain(), timeout)
    except (OSError, TimeoutError) as e:
        raise PrinterError(f"Ошибка отправки на {host}:{port}: {e}") from e
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass

    logger.info(f"[PRINTER] Отправлено {len(data)} байт на {host}:{port}")

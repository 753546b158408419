"""
Реализации вывода на печать и буфера обмена для станции сканирования.

SystemPrintSink: документ сохраняется во временный файл, через паузу
отправляется на печать, ещё через паузу файл удаляется. Обе паузы —
константы; удаление срабатывает даже если печать не завершилась.
aclose() дожидается всех отложенных удалений перед остановкой цикла.
"""

import asyncio
import logging
import os
import shlex
import tempfile

logger = logging.getLogger(__name__)

# Пауза перед печатью (документ должен «загрузиться»)
LOAD_DELAY_SECONDS = 0.5
# Пауза перед освобождением временного файла
RELEASE_DELAY_SECONDS = 1.0


class PrintCommandError(RuntimeError):
    """Команда печати завершилась с ошибкой."""

    pass


def _release(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


async def _release_later(path: str, delay: float) -> None:
    await asyncio.sleep(delay)
    _release(path)


class SystemPrintSink:
    """Печать PDF системной командой (lp, lpr, SumatraPDF -print-to-default ...)."""

    def __init__(self, command: str = "lp"):
        self.command = shlex.split(command)
        self._releases: set[asyncio.Task] = set()

    async def present(self, document: bytes) -> None:
        fd, path = tempfile.mkstemp(prefix="label-", suffix=".pdf")
        with os.fdopen(fd, "wb") as f:
            f.write(document)

        # Освобождение не отменяется и не ждёт окончания печати
        task = asyncio.create_task(
            _release_later(path, LOAD_DELAY_SECONDS + RELEASE_DELAY_SECONDS)
        )
        self._releases.add(task)
        task.add_done_callback(self._releases.discard)

        await asyncio.sleep(LOAD_DELAY_SECONDS)

        process = await asyncio.create_subprocess_exec(
            *self.command,
            path,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
        )
        _, stderr = await process.communicate()
        if process.returncode != 0:
            raise PrintCommandError(
                f"{self.command[0]} exit {process.returncode}: {stderr.decode(errors='replace').strip()}"
            )

        logger.info(f"[PRINT] Документ отправлен на печать ({len(document)} байт)")

    async def aclose(self) -> None:
        """Дождаться удаления всех временных файлов."""
        if self._releases:
            await asyncio.gather(*list(self._releases))


class MemoryPrintSink:
    """Складывает документы в список (тесты, сухой прогон)."""

    def __init__(self) -> None:
        self.documents: list[bytes] = []

    async def present(self, document: bytes) -> None:
        self.documents.append(document)
        logger.info(f"[PRINT] Документ #{len(self.documents)} принят ({len(document)} байт)")

    async def aclose(self) -> None:
        pass


class CommandClipboard:
    """Запись в буфер обмена через системную команду (xclip, pbcopy, clip)."""

    def __init__(self, command: str = "xclip -selection clipboard"):
        self.command = shlex.split(command)

    async def write_text(self, text: str) -> None:
        process = await asyncio.create_subprocess_exec(
            *self.command,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        await process.communicate(text.encode("utf-8"))
        if process.returncode != 0:
            raise OSError(f"{self.command[0]} exit {process.returncode}")

"""
Логирование API и станции сканирования.

Production: одна JSON строка на запись, с полем component (api / scan-station).
Debug: строка для терминала. Станция пишет логи в stderr, чтобы stdout
оставался свободным при запуске в конвейере.
"""

import json
import logging
import sys
from datetime import UTC, datetime

from labelkit.config import get_settings

# Атрибуты, которые есть у любой записи; всё остальное пришло через extra=
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

HUMAN_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

# Сторонние логгеры, которые пишут каждый запрос
NOISY_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    """{"timestamp", "level", "component", "logger", "message", "extra"?, "exception"?}"""

    def __init__(self, component: str):
        super().__init__()
        self.component = component

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "component": self.component,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extra = {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}
        if extra:
            data["extra"] = extra
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        return json.dumps(data, ensure_ascii=False, default=str)


def setup_logging(component: str = "api") -> None:
    """Заменить обработчики корневого логгера согласно настройкам."""
    settings = get_settings()

    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level)
    if settings.debug:
        formatter = logging.Formatter(HUMAN_FORMAT, datefmt="%H:%M:%S")
    else:
        formatter = JSONFormatter(component)

    handler = logging.StreamHandler(sys.stderr if component == "scan-station" else sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

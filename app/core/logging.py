from __future__ import annotations

import logging
from logging.config import dictConfig
from pathlib import Path
from typing import Any

from app.core.config import settings
from app.core.request_context import current_request_id

LOG_FORMAT = (
    "{\"time\":\"%(asctime)s\", \"level\":\"%(levelname)s\", "
    "\"logger\":\"%(name)s\", \"message\":\"%(message)s\", "
    "\"request_id\":\"%(request_id)s\"}"
)


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id()
        return True


def _file_handler() -> dict[str, Any]:
    common: dict[str, Any] = {
        "formatter": "json",
        "filters": ["request_id"],
        "filename": settings.LOG_FILE_PATH,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
    }
    if settings.LOG_ROTATION_POLICY == "time":
        return {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "when": settings.LOG_ROTATION_WHEN,
            "interval": settings.LOG_ROTATION_INTERVAL,
            **common,
        }
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "maxBytes": settings.LOG_MAX_BYTES,
        **common,
    }


def setup_logging(level: str = "info") -> None:
    """Configure root logging with request correlation and optional file rotation."""
    level_upper = level.upper()

    handlers: dict[str, dict[str, Any]] = {
        "default": {
            "class": "logging.StreamHandler",
            "formatter": "json",
            "filters": ["request_id"],
        }
    }
    if settings.LOG_TO_FILE:
        Path(settings.LOG_FILE_PATH).parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = _file_handler()

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {"request_id": {"()": RequestIdFilter}},
            "formatters": {"json": {"format": LOG_FORMAT}},
            "handlers": handlers,
            "root": {
                "level": level_upper,
                "handlers": list(handlers.keys()),
            },
        }
    )
    logging.getLogger(__name__).debug("logging configured", extra={"level": level_upper})

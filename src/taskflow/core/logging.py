"""JSON logging for the API process and the seeding script."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any

from .config import Settings
from .context import NO_REQUEST_ID, get_request_id

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_BUILTIN_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "request_id", "taskName"}


class JsonLogFormatter(logging.Formatter):
    """Serialise each record to a single JSON line."""

    def __init__(self, *, defaults: dict[str, Any] | None = None, datefmt: str | None = None) -> None:
        super().__init__(datefmt=datefmt)
        self._defaults = dict(defaults or {})

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", NO_REQUEST_ID),
        }
        for key, value in self._defaults.items():
            payload.setdefault(key, value)
        payload.update(self._extra_fields(record))

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack"] = self.formatStack(record.stack_info)
        return json.dumps(payload, ensure_ascii=False, default=str)

    @staticmethod
    def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
        extras: dict[str, Any] = {}
        for key, value in record.__dict__.items():
            if key in _BUILTIN_RECORD_ATTRS or key.startswith("_"):
                continue
            try:
                json.dumps(value)
            except (TypeError, ValueError):
                value = repr(value)
            extras[key] = value
        return extras


class RequestContextFilter(logging.Filter):
    """Stamp the bound request id onto every record passing through a handler."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.request_id = get_request_id()
        return True


def configure_logging(settings: Settings) -> None:
    """Route the root, uvicorn and SQLAlchemy loggers to one JSON stdout handler."""

    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.captureWarnings(True)

    def _owned(logger_level: int) -> dict[str, Any]:
        return {"handlers": ["stdout"], "level": logger_level, "propagate": False}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "()": JsonLogFormatter,
                    "defaults": {
                        "service": settings.project_name,
                        "environment": settings.environment,
                        "version": settings.version,
                    },
                }
            },
            "filters": {"request_context": {"()": RequestContextFilter}},
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "formatter": "json",
                    "filters": ["request_context"],
                    "level": level,
                }
            },
            "loggers": {
                "": {"handlers": ["stdout"], "level": level},
                "uvicorn": _owned(level),
                "uvicorn.error": _owned(level),
                "uvicorn.access": _owned(level),
                "sqlalchemy.engine": _owned(logging.INFO if settings.db_echo else logging.WARNING),
            },
        }
    )


__all__ = ["JsonLogFormatter", "RequestContextFilter", "configure_logging"]

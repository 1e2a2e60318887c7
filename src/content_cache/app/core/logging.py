from __future__ import annotations

import logging
import os
from logging.config import dictConfig

from .env import IS_DEV, IS_LOCAL, IS_PROD, IS_TEST


class JsonFormatter(logging.Formatter):
    """Structured JSON formatter for prod and CI logs."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        import json
        from traceback import format_exception

        payload: dict[str, object] = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "pid": record.process,
            "message": record.getMessage(),
        }

        # Cache context (only when present)
        cache_ctx = {
            k: v for k, v in {
                "key": getattr(record, "cache_key", None),
                "pattern": getattr(record, "cache_pattern", None),
                "ttl": getattr(record, "ttl", None),
                "deleted": getattr(record, "deleted", None),
            }.items() if v is not None
        }
        if cache_ctx:
            payload["cache"] = cache_ctx

        if record.exc_info:
            exc_type = record.exc_info[0].__name__ if record.exc_info[0] else None
            exc_message = str(record.exc_info[1]) if record.exc_info[1] else None
            stack = "".join(format_exception(*record.exc_info))

            err_obj: dict[str, object] = {}
            if exc_type:
                err_obj["type"] = exc_type
            if exc_message:
                err_obj["message"] = exc_message

            max_stack = int(os.getenv("LOG_STACK_LIMIT", "4000"))
            err_obj["stack"] = stack[:max_stack] + ("...(truncated)" if len(stack) > max_stack else "")

            payload["error"] = err_obj

        return json.dumps(payload, ensure_ascii=False)


def _read_level() -> str:
    explicit = os.getenv("LOG_LEVEL")
    if explicit:
        return explicit.upper()

    if IS_PROD:
        return "INFO"
    if IS_LOCAL or IS_DEV or IS_TEST:
        return "DEBUG"

    return "INFO"


def _read_format() -> str:
    fmt = os.getenv("LOG_FORMAT")
    if fmt:
        return fmt.lower()
    return "json" if IS_PROD else "plain"


def setup_logging() -> None:
    level = _read_level()
    fmt = _read_format()

    formatter_name = "json" if fmt == "json" else "plain"

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "plain": {
                    "format": "%(asctime)s %(levelname)-5s [pid:%(process)d] %(name)s: %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                },
                "json": {
                    "()": JsonFormatter,
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                },
            },
            "handlers": {
                "stream": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": formatter_name,
                }
            },
            "root": {
                "level": level,
                "handlers": ["stream"],
            },
            # SQL echo and redis internals stay quiet unless asked for.
            "loggers": {
                "sqlalchemy.engine": {"level": "WARNING", "handlers": [], "propagate": True},
                "redis": {"level": "WARNING", "handlers": [], "propagate": True},
                "uvicorn": {"level": "INFO", "handlers": [], "propagate": True},
            },
        }
    )

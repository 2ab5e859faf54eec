"""Logging setup shared by the API process and the test suite."""
from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Any, Dict

from sleepcoach.core.middleware import get_request_id

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(request_id)s] %(name)s: %(message)s"

# Client libraries that log every outbound request at INFO.
QUIET_LOGGERS = ("httpx", "httpcore", "openai")

_configured = False


class RequestIdFilter(logging.Filter):
    """Stamp each record with the id of the request that produced it."""

    def filter(self, record: logging.LogRecord) -> bool:  # pragma: no cover - minimal logic
        record.request_id = get_request_id() or "-"
        return True


def build_logging_config(log_level: str) -> Dict[str, Any]:
    level = log_level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"request_id": {"()": RequestIdFilter}},
        "formatters": {"plain": {"format": LOG_FORMAT}},
        "handlers": {
            "stderr": {
                "class": "logging.StreamHandler",
                "filters": ["request_id"],
                "formatter": "plain",
                "level": level,
            }
        },
        "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
        "root": {"handlers": ["stderr"], "level": level},
    }


def configure_logging(*, log_level: str = "INFO") -> None:
    """Install the console handler; repeated calls are ignored."""
    global _configured
    if _configured:
        return

    dictConfig(build_logging_config(log_level))
    _configured = True
    logging.getLogger(__name__).debug("Logging configured at %s", log_level)

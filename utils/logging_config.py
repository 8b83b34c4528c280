import logging.config
import uuid
from contextvars import ContextVar
from typing import Optional

# Per-request correlation id
_correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    correlation_id = correlation_id or uuid.uuid4().hex
    _correlation_id_var.set(correlation_id)
    return correlation_id


def get_correlation_id() -> Optional[str]:
    return _correlation_id_var.get()


class CorrelationIdFilter:
    def filter(self, record):
        record.correlation_id = get_correlation_id() or "-"
        return True


def build_logging_config(level="INFO", fmt="text"):
    formatters = {
        "text": {
            "format": "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
        },
        "json": {
            "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
            "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s %(correlation_id)s",
        },
    }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "correlation_id": {
                "()": "utils.logging_config.CorrelationIdFilter",
            }
        },
        "formatters": {fmt: formatters.get(fmt, formatters["text"])},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": fmt,
                "filters": ["correlation_id"],
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
        "loggers": {
            "werkzeug": {
                "handlers": ["console"],
                "level": "WARNING",
                "propagate": False,
            },
        },
    }


def configure_logging(app):
    fmt = app.config.get("LOG_FORMAT", "text")
    if fmt not in ("text", "json"):
        fmt = "text"
    logging.config.dictConfig(build_logging_config(app.config.get("LOG_LEVEL", "INFO"), fmt))

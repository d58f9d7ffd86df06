"""
Logging setup for DocVault.

Application code logs through structlog. Request scoped values (request id,
owner id, stored name) are bound with ``structlog.contextvars`` and merged
into every event emitted while they are bound. Standard library loggers
(uvicorn, SQLAlchemy, pdfminer) are routed through ``dictConfig`` with a
JSON formatter from python-json-logger when LOG_FORMAT is ``json``.
"""

import logging
import logging.config
from typing import Dict

import structlog

from docvault.core.config import settings

# Health endpoints, kept out of request and access logs
HEALTH_PATHS = frozenset({"/health", "/ready", "/live"})

# Third-party loggers that are noisy below WARNING during normal operation
QUIET_LOGGERS: Dict[str, str] = {
    "pdfminer": "WARNING",
    "pdfplumber": "WARNING",
    "multipart": "WARNING",
    "sqlalchemy.engine": "WARNING",
}


def is_health_path(path: str) -> bool:
    return path.rstrip("/") in HEALTH_PATHS


class HealthAccessFilter(logging.Filter):
    """Drop uvicorn access records for health endpoint requests."""

    def filter(self, record: logging.LogRecord) -> bool:
        # uvicorn.access args: (client_addr, method, full_path, http_version, status)
        args = record.args
        if isinstance(args, tuple) and len(args) >= 3 and isinstance(args[2], str):
            return not is_health_path(args[2].split("?", 1)[0])
        return True


def _renderer():
    if settings.LOG_FORMAT == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging() -> None:
    """Configure structlog and the standard library loggers from settings."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if settings.LOG_FORMAT == "json":
        formatter = {
            "class": "pythonjsonlogger.jsonlogger.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
        }
    else:
        formatter = {
            "class": "logging.Formatter",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        }

    loggers = {
        "": {"level": settings.LOG_LEVEL, "handlers": ["default"], "propagate": False},
        "uvicorn.error": {"level": "INFO", "handlers": ["default"], "propagate": False},
        "uvicorn.access": {"level": "INFO", "handlers": ["access"], "propagate": False},
    }
    for name, level in QUIET_LOGGERS.items():
        loggers[name] = {"level": level, "handlers": ["default"], "propagate": False}
    if settings.DB_ECHO:
        loggers["sqlalchemy.engine"]["level"] = "INFO"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {
                "health_access": {"()": "docvault.core.logging.HealthAccessFilter"},
            },
            "formatters": {"default": formatter},
            "handlers": {
                "default": {
                    "formatter": "default",
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                },
                "access": {
                    "formatter": "default",
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stdout",
                    "filters": ["health_access"],
                },
            },
            "loggers": loggers,
        }
    )

    if not settings.DEBUG:
        logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def get_api_logger() -> structlog.BoundLogger:
    return get_logger("api")


def get_service_logger(service_name: str) -> structlog.BoundLogger:
    """Get service-specific logger."""
    return get_logger(f"service.{service_name}")

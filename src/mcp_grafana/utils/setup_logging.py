import logging
import logging.config
from typing import Any

import structlog

from ..settings import settings

shared_processors: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]


def _renderer() -> structlog.types.Processor:
    if settings.app.ENV_MODE == "LOCAL":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def get_logging_config() -> dict[str, Any]:
    """dictConfig for stdlib logging, rendering through structlog."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": _renderer(),
                "foreign_pre_chain": shared_processors,
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "root": {
            "handlers": ["default"],
            "level": settings.app.LOG_LEVEL,
        },
    }


def setup_logging() -> None:
    logging.config.dictConfig(get_logging_config())
    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )

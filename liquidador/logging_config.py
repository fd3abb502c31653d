# -*- coding: utf-8 -*-
"""
Logging estructurado con structlog.

USO:
    from liquidador.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("liquidacion_completada", metodo="escolastica", anios=17)

En producción los eventos salen en JSON; en desarrollo, por consola legible.
"""
from __future__ import annotations

import logging
import sys
from functools import lru_cache

import structlog

from liquidador.config import IS_PRODUCTION


def add_service_info(logger, method_name: str, event_dict: dict) -> dict:
    event_dict["service"] = "liquidador"
    return event_dict


def configure_structlog() -> None:
    shared_processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_service_info,
    ]

    if IS_PRODUCTION:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_stdlib_logging() -> None:
    root_level = logging.INFO if IS_PRODUCTION else logging.DEBUG

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(root_level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)
    root_logger.handlers = [handler]

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


def setup_logging() -> None:
    """Configura logging; llamar una vez al iniciar la app."""
    configure_stdlib_logging()
    configure_structlog()


@lru_cache(maxsize=128)
def get_logger(name: str):
    return structlog.get_logger(name)

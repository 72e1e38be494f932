"""
Logging setup - Heliolus Scoring Engine
heliolus/logging_config.py

Routes structlog events through the stdlib root logger at LOG_LEVEL,
rendered as JSON or as coloured console lines depending on LOG_FORMAT.
"""
import logging
import sys

import structlog

from heliolus.config import Settings


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.LOG_LEVEL)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    if settings.LOG_FORMAT == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

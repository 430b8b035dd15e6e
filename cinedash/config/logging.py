"""
Logging Configuration

One stdout handler on the root logger renders both structlog events and
stdlib records (uvicorn, gunicorn, SQLAlchemy, httpx) through the same
processor chain. JSON by default; LOG_FORMAT=text switches to the console
renderer.
"""

import logging
import sys
from typing import List, Optional

import structlog
from structlog.stdlib import ProcessorFormatter
from structlog.types import Processor

from cinedash.config.settings import get_settings

SERVER_LOGGERS = ["uvicorn", "uvicorn.error", "uvicorn.access", "gunicorn.error"]

# Log every query or request at INFO
CHATTY_LOGGERS = ["sqlalchemy.engine", "httpx", "httpcore"]


def _shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Route structlog and stdlib logging through one handler.

    Args:
        log_level: Override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)
        log_format: Override LOG_FORMAT ("json" or "text")
    """
    monitoring = get_settings().monitoring
    level_name = (log_level or monitoring.log_level).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    fmt = (log_format or monitoring.log_format).lower()

    shared = _shared_processors()
    structlog.configure(
        processors=shared + [ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[ProcessorFormatter.remove_processors_meta, _renderer(fmt)],
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    # Server loggers hand their records to the root handler
    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers = []
        server_logger.propagate = True
        server_logger.setLevel(level)

    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.get_logger(__name__).info(
        "Logging configured",
        level=logging.getLevelName(level),
        format=fmt,
        environment=get_settings().app_env,
    )

# revisualise_bot/utils/logging.py
import logging
import sys
from typing import Any

import orjson
import structlog

from revisualise_bot.data.settings import settings

_NOISY_LOGGERS = {
    "aiohttp.access": logging.WARNING,
    "aiogram.event": logging.WARNING,
    "httpx": logging.WARNING,
    "google_genai": logging.WARNING,
}

_configured = False


def _orjson_dumps(obj: Any, *, default: Any) -> str:
    return orjson.dumps(obj, default=default).decode()


def configure_logging(level: int | None = None) -> None:
    """
    Route structlog and stdlib logging (aiogram, aiohttp, google-genai)
    through one formatter. Safe to call more than once.
    """
    global _configured
    if _configured:
        return

    shared_processors: list[structlog.typing.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Human-readable output on a terminal, JSON lines anywhere else
    renderer = (
        structlog.dev.ConsoleRenderer()
        if sys.stderr.isatty()
        else structlog.processors.JSONRenderer(serializer=_orjson_dumps)
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processor=renderer,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level if level is not None else settings.logging_level)

    for name, noisy_level in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)

    _configured = True


def setup_logger(name: str = "revisualise_bot.main") -> structlog.typing.FilteringBoundLogger:
    """
    Returns a structlog logger, configuring logging on first use.
    """
    configure_logging()
    log: structlog.typing.FilteringBoundLogger = structlog.get_logger(name)
    return log

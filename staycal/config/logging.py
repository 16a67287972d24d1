"""Structured logging configuration using structlog."""
import logging
import sys
from typing import Any, Optional

import structlog
from pythonjsonlogger import jsonlogger

from staycal.config.settings import settings

# Bound context keys naming whose reservations an event concerns, with the
# label used in the message prefix. A listing wins over a host or guest.
OWNER_PREFIXES = (
    ("listing_id", "listing"),
    ("host_id", "host"),
    ("guest_id", "guest"),
)

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def add_owner_prefix(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Prefix the event with the listing, host or guest it is scoped to.

    ``logger.bind(host_id="h1").info("Applied reservation snapshot")`` renders
    as ``[host:h1] Applied reservation snapshot``. Events with no owner bound
    are left alone.

    Args:
        logger: The logger instance
        method_name: The name of the method being called
        event_dict: The event dictionary containing log data

    Returns:
        Event dictionary with the owner prefix applied
    """
    for key, label in OWNER_PREFIXES:
        owner = event_dict.get(key)
        if owner:
            event_dict["event"] = f"[{label}:{owner}] {event_dict.get('event', '')}"
            break
    return event_dict


def build_processors(log_format: str) -> list[Any]:
    """Processor chain ending in the renderer for ``json`` or ``console``."""
    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        add_owner_prefix,
        renderer,
    ]


def _stdout_handler(log_format: str, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if log_format == "json":
        handler.setFormatter(jsonlogger.JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handler.setLevel(level)
    return handler


def configure_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Route structlog through the stdlib root logger on stdout.

    Args:
        level: Level name, defaults to ``LOG_LEVEL``
        log_format: ``json`` or ``console``, defaults to ``LOG_FORMAT``
    """
    level_name = (level or settings.logging.level).upper()
    log_format = log_format or settings.logging.format
    log_level = getattr(logging, level_name)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(_stdout_handler(log_format, log_level))

    structlog.configure(
        processors=build_processors(log_format),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger for a module, typically ``get_logger(__name__)``."""
    return structlog.get_logger(name)

"""
Structlog configuration and helpers.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional, TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from signage.infra.config.settings import Settings


def _renderer(fmt: str):
    if fmt == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer()


def setup_logging(
    settings: Optional["Settings"] = None,
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """Configure structlog for slide storage.

    Args:
        settings: Settings to read LOG_LEVEL/LOG_FORMAT from. Defaults to get_settings().
        log_level: Overrides the settings level name (e.g., "DEBUG").
        log_format: Overrides the settings format, "json" or "console".
    """
    if settings is None:
        from signage.infra.config.settings import get_settings

        settings = get_settings()

    level_name = (log_level or settings.log_level or "INFO").upper()
    fmt = (log_format or settings.log_format or "json").lower()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(level=level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(fmt),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:  # type: ignore[name-defined]
    """Get a structlog logger bound with a name."""
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()


def bind_context(**kwargs) -> None:
    """Bind contextvars for correlation (e.g., request_id, owner)."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear bound contextvars (call at end of request)."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def operation_context(operation: str, **kwargs) -> Iterator[None]:
    """Bind an operation name (and e.g. slide_id) for the duration of a block."""
    with structlog.contextvars.bound_contextvars(operation=operation, **kwargs):
        yield

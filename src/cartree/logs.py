"""Logging setup for the cartree command line."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from cartree.config.models import LoggingSettings

_HANDLER_NAME = "cartree-rich"


def configure_logging(
    settings: LoggingSettings, *, console: Console | None = None
) -> logging.Logger:
    """Attach a rich handler to the ``cartree`` logger at the configured level.

    Repeated calls only adjust the level; the handler is installed once.

    Raises:
        ValueError: If ``settings.level`` is not a known logging level name.
    """
    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {settings.level}")

    logger = logging.getLogger("cartree")
    logger.setLevel(level)
    if not any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=False,
        )
        handler.set_name(_HANDLER_NAME)
        logger.addHandler(handler)
    return logger


__all__ = ["configure_logging"]

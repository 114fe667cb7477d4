"""In-process host implementations used by the command line."""

from __future__ import annotations

import logging
from typing import Callable

from rich.console import Console

from cartree.events import EventEmitter, Subscription

from .abc import DocumentEvents, UserNotifier

LOGGER = logging.getLogger(__name__)


class LoggingNotifier(UserNotifier):
    """Route notifications to the ``cartree`` logger at info level."""

    def notify(self, message: str) -> None:
        LOGGER.info(message)


class ConsoleNotifier(UserNotifier):
    """Print notifications through a rich console."""

    def __init__(self, console: Console | None = None, *, quiet: bool = False) -> None:
        self.console = console or Console(stderr=True)
        self.quiet = quiet

    def notify(self, message: str) -> None:
        LOGGER.debug("Notification: %s", message)
        if not self.quiet:
            self.console.print(f"[yellow]{message}[/yellow]")


class DocumentOpenedEmitter(DocumentEvents):
    """Document event source driven by explicit ``open_document`` calls."""

    def __init__(self) -> None:
        self._emitter: EventEmitter[str] = EventEmitter()

    @property
    def listener_count(self) -> int:
        return self._emitter.listener_count

    def on_document_opened(self, callback: Callable[[str], None]) -> Subscription:
        return self._emitter.subscribe(callback)

    def open_document(self, path: str) -> None:
        """Announce that ``path`` was opened."""
        self._emitter.fire(path)


__all__ = ["LoggingNotifier", "ConsoleNotifier", "DocumentOpenedEmitter"]

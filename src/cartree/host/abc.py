"""Host integration abstractions.

The tree provider talks to its host through two narrow seams: a
fire-and-forget notification surface and a source of document-opened events.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from cartree.events import Subscription


class UserNotifier(ABC):
    """Informational messages shown to the user."""

    @abstractmethod
    def notify(self, message: str) -> None:
        """Show ``message``; must not raise and must not block."""
        ...


class DocumentEvents(ABC):
    """Source of "a document was opened" events."""

    @abstractmethod
    def on_document_opened(self, callback: Callable[[str], None]) -> Subscription:
        """Invoke ``callback`` with the absolute path of every opened document.

        Returns:
            Subscription whose dispose() stops further callbacks.
        """
        ...

"""Host-facing collaborators: notifications and document events."""

from .abc import DocumentEvents, UserNotifier
from .real import ConsoleNotifier, DocumentOpenedEmitter, LoggingNotifier

__all__ = [
    "DocumentEvents",
    "UserNotifier",
    "ConsoleNotifier",
    "DocumentOpenedEmitter",
    "LoggingNotifier",
]

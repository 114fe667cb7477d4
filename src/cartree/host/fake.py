"""Fake host implementations for testing."""

from __future__ import annotations

from .abc import UserNotifier


class RecordingNotifier(UserNotifier):
    """Notifier that keeps every message instead of showing it."""

    def __init__(self) -> None:
        self._messages: list[str] = []

    @property
    def messages(self) -> list[str]:
        return list(self._messages)

    def notify(self, message: str) -> None:
        self._messages.append(message)


__all__ = ["RecordingNotifier"]

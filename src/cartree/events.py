"""In-process event channels with explicit unsubscription."""

from __future__ import annotations

from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class Subscription:
    """Handle returned by ``subscribe``; ``dispose()`` detaches the listener."""

    def __init__(self, on_dispose: Optional[Callable[[], None]] = None) -> None:
        self._on_dispose = on_dispose

    @property
    def disposed(self) -> bool:
        return self._on_dispose is None

    def dispose(self) -> None:
        """Detach the listener. Calling this more than once has no effect."""
        callback, self._on_dispose = self._on_dispose, None
        if callback is not None:
            callback()


class EventEmitter(Generic[T]):
    """Broadcast channel without history.

    Listeners only see payloads fired after they subscribed, and firing with
    no listeners attached does nothing.
    """

    def __init__(self) -> None:
        self._listeners: list[tuple[int, Callable[[T], None]]] = []
        self._next_token = 0

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Callable[[T], None]) -> Subscription:
        token = self._next_token
        self._next_token += 1
        self._listeners.append((token, listener))
        return Subscription(lambda: self._remove(token))

    def fire(self, payload: T) -> None:
        # Copy so listeners may unsubscribe while being notified.
        for _, listener in list(self._listeners):
            listener(payload)

    def clear(self) -> None:
        self._listeners.clear()

    def _remove(self, token: int) -> None:
        self._listeners = [entry for entry in self._listeners if entry[0] != token]


__all__ = ["Subscription", "EventEmitter"]

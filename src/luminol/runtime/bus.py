"""Synchronous event bus used by the engine to publish state changes."""

from __future__ import annotations

from typing import Callable, Dict, List

Listener = Callable[[object], None]


class EventBus:
    """Minimal publish/subscribe hub; callbacks run inline, in subscription order."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Listener]] = {}

    def subscribe(self, event: str, callback: Listener) -> Callable[[], None]:
        bucket = self._subscribers.setdefault(event, [])
        bucket.append(callback)

        def unsubscribe() -> None:
            if callback in bucket:
                bucket.remove(callback)

        return unsubscribe

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)

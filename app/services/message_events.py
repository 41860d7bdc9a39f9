"""In-process event sources consumed by rendered messages.

``MessageUpdateFeed`` carries canonical message records to every view that
displays them; ``KeyboardEvents`` stands in for the window-level key listener
registry.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable
from uuid import UUID

from ..schemas import MessageResponse

logger = logging.getLogger(__name__)

ESCAPE_KEY = "Escape"
ESCAPE_KEY_CODE = 27

MessageCallback = Callable[[MessageResponse], None]


@dataclass(frozen=True, slots=True)
class KeyEvent:
    key: str
    key_code: int | None = None

    @property
    def is_escape(self) -> bool:
        return self.key == ESCAPE_KEY or self.key_code == ESCAPE_KEY_CODE


KeyListener = Callable[[KeyEvent], None]


class KeyboardEvents:
    """Registry of key listeners, dispatched in registration order."""

    def __init__(self) -> None:
        self._listeners: list[KeyListener] = []

    def add_listener(self, listener: KeyListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: KeyListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            return

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def dispatch(self, event: KeyEvent) -> None:
        for listener in list(self._listeners):
            listener(event)


class MessageUpdateFeed:
    """Track per-message subscribers and fan out canonical updates."""

    def __init__(self) -> None:
        self._subscribers: dict[UUID, list[MessageCallback]] = {}

    def subscribe(self, message_id: UUID, callback: MessageCallback) -> Callable[[], None]:
        group = self._subscribers.setdefault(message_id, [])
        group.append(callback)

        def _unsubscribe() -> None:
            self._discard(message_id, callback)

        return _unsubscribe

    def _discard(self, message_id: UUID, callback: MessageCallback) -> None:
        group = self._subscribers.get(message_id)
        if group is None:
            return
        if callback in group:
            group.remove(callback)
        if not group:
            self._subscribers.pop(message_id, None)

    def subscriber_count(self, message_id: UUID) -> int:
        return len(self._subscribers.get(message_id, ()))

    def publish(self, message: MessageResponse) -> int:
        """Deliver ``message`` to its subscribers and return how many received it."""

        targets = list(self._subscribers.get(message.id, ()))
        delivered = 0
        for callback in targets:
            try:
                callback(message)
            except Exception:
                logger.exception("Message update subscriber failed for %s; dropping it", message.id)
                self._discard(message.id, callback)
                continue
            delivered += 1
        return delivered


message_update_feed = MessageUpdateFeed()


__all__ = [
    "ESCAPE_KEY",
    "ESCAPE_KEY_CODE",
    "KeyEvent",
    "KeyListener",
    "KeyboardEvents",
    "MessageCallback",
    "MessageUpdateFeed",
    "message_update_feed",
]

"""A broadcast bus that hands every incoming message to all subscribers."""

from __future__ import annotations

import itertools
from typing import Callable

Handler = Callable[[str], object]


class EventBus:
    """Deliver each message sent on the bus to every connected handler."""

    def __init__(self) -> None:
        self._subscribers: dict[int, Handler] = {}
        self._ids = itertools.count(1)

    def connect(self, handler: Handler) -> int:
        """Subscribe ``handler`` and return the id that identifies it."""
        handler_id = next(self._ids)
        self._subscribers[handler_id] = handler
        return handler_id

    def disconnect(self, handler_id: int) -> None:
        """Unsubscribe the handler with ``handler_id``; unknown ids are ignored."""
        self._subscribers.pop(handler_id, None)

    def send(self, message: str) -> None:
        """Pass ``message`` to every current subscriber."""
        for handler in list(self._subscribers.values()):
            handler(message)

    def __len__(self) -> int:
        return len(self._subscribers)
"""
Change notification channels.

A Channel is a small typed callback registry. Publishing is synchronous:
handlers run on the caller's thread, in subscription order, before
``publish`` returns. That is what gives the store its ordering guarantee.
"""

import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by ``Channel.subscribe``; cancel it to stop receiving events."""

    def __init__(self, channel: "Channel", handler: Callable):
        self._channel = channel
        self._handler = handler
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self._channel._remove(self._handler)
            self.active = False

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()


class Channel(Generic[T]):
    """
    Typed event stream.

    Handler exceptions propagate to the publisher: a failing subscriber is
    a programmer error, not something to hide.
    """

    def __init__(self, name: str):
        self.name = name
        self._handlers: list[Callable[[T], None]] = []

    def subscribe(self, handler: Callable[[T], None]) -> Subscription:
        self._handlers.append(handler)
        return Subscription(self, handler)

    def publish(self, payload: T) -> None:
        # Snapshot so handlers may subscribe/cancel while being notified
        for handler in list(self._handlers):
            handler(payload)

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def _remove(self, handler: Callable[[T], None]) -> None:
        try:
            self._handlers.remove(handler)
        except ValueError:
            logger.debug("Handler already removed from channel '%s'", self.name)

    def __repr__(self) -> str:
        return f"Channel({self.name!r}, subscribers={self.subscriber_count})"

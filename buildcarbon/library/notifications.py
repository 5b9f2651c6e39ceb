"""Change notifications — let views observe build-up library mutations."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Subscriber = Callable[[dict[str, Any]], None]


class ChangeNotifier:
    """Fan out change events to subscribed callables.

    Events are dicts with keys ``type`` (``created``, ``saved``,
    ``duplicated``, ``removed``), ``buildup_id`` and ``name``.  A subscriber
    that raises is logged and skipped; the others still receive the event.
    """

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []
        self._log: list[dict[str, Any]] = []

    def subscribe(self, callback: Subscriber) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def publish(self, event: dict[str, Any]) -> int:
        """Deliver *event*; return the number of subscribers that accepted it."""
        self._log.append(event)
        logger.debug("[buildcarbon] %s: %s", event.get("type", "unknown"), event.get("buildup_id", ""))

        delivered = 0
        for callback in list(self._subscribers):
            try:
                callback(event)
                delivered += 1
            except Exception as exc:
                logger.warning("Change subscriber %r failed: %s", callback, exc)
        return delivered

    @property
    def log(self) -> list[dict[str, Any]]:
        """Access the in-memory event log for testing."""
        return list(self._log)

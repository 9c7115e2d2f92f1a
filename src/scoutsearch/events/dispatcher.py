"""Event dispatcher — Explicit observer registry for engine notifications.

Engines publish ``BulkErrorsEvent`` instances here instead of resolving
subscribers from global application state. Any callable accepting the event
can be registered as a listener.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from scoutsearch.models.events import BulkErrorsEvent

logger = logging.getLogger(__name__)

Listener = Callable[[Any], None]


class EventDispatcher:
    """Fan-out of events to registered listeners.

    Listeners are called synchronously in registration order. A listener
    that raises is logged and skipped; the remaining listeners still run
    and the publishing engine never sees the exception.

    Example:
        >>> dispatcher = EventDispatcher()
        >>> dispatcher.listen(log_bulk_failures)
        >>> engine = ElasticsearchEngine(client, dispatcher=dispatcher)
    """

    def __init__(self) -> None:
        self._listeners: list[tuple[type | None, Listener]] = []

    def listen(self, listener: Listener, event_type: type | None = None) -> None:
        """Register a listener.

        Args:
            listener: Callable invoked with each dispatched event.
            event_type: Only deliver events of this type. ``None`` delivers all.
        """
        self._listeners.append((event_type, listener))
        logger.debug("Registered listener %r for %s", listener, event_type.__name__ if event_type else "all events")

    def forget(self, listener: Listener) -> None:
        """Remove every registration of ``listener``."""
        self._listeners = [(t, fn) for t, fn in self._listeners if fn != listener]

    def dispatch(self, event: Any) -> None:
        """Deliver ``event`` to every matching listener."""
        for event_type, listener in list(self._listeners):
            if event_type is not None and not isinstance(event, event_type):
                continue
            try:
                listener(event)
            except Exception:
                logger.warning("Event listener %r failed for %s", listener, type(event).__name__, exc_info=True)

    @property
    def listeners(self) -> list[Listener]:
        """Registered listeners in call order."""
        return [fn for _, fn in self._listeners]


def log_bulk_failures(event: BulkErrorsEvent) -> None:
    """Listener that writes each failed bulk item to the log."""
    for failure in event.errors:
        logger.error(
            "Bulk %s failed for %s/%s: %s",
            event.operation,
            failure.index,
            failure.key,
            failure.message,
        )

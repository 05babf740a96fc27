"""Event bus infrastructure for the sequential study flow.

``EventBus`` is a synchronous pub-sub hub for ``DomainEvent`` instances.
A handler subscribed to an event class also receives its subclasses, so
subscribing to ``DomainEvent`` itself sees everything.  A failing handler is
logged and skipped; it never breaks the navigation or grading call that
published the event.

``EventStore`` keeps a bounded, in-memory trail of published events for
replay, debugging and tests.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable, Sequence

from sequential_study.domain.events import DomainEvent

logger = logging.getLogger(__name__)

Handler = Callable[[DomainEvent], None]


# ===================================================================== #
#  Event Bus                                                             #
# ===================================================================== #

class EventBus:
    """Synchronous pub-sub for domain events.

    Wildcard handlers run first, then handlers of each class in the
    event's MRO from most to least specific, each group in subscription
    order.

    Usage::

        bus = EventBus()
        bus.subscribe(SectionEntered, on_section)
        controller = StudyFlowController.create(document, event_bus=bus)
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._by_type: dict[type[DomainEvent], list[Handler]] = {}
        self._wildcard: list[Handler] = []

    def subscribe(self, event_type: type[DomainEvent], handler: Handler) -> None:
        with self._lock:
            self._by_type.setdefault(event_type, []).append(handler)

    def subscribe_all(self, handler: Handler) -> None:
        """Receive every published event."""
        with self._lock:
            self._wildcard.append(handler)

    def unsubscribe(self, event_type: type[DomainEvent], handler: Handler) -> bool:
        """Drop *handler* from *event_type*; ``False`` if it was not registered."""
        with self._lock:
            registered = self._by_type.get(event_type)
            if not registered or handler not in registered:
                return False
            registered.remove(handler)
            return True

    def _handlers_for(self, event: DomainEvent) -> list[Handler]:
        with self._lock:
            chain = list(self._wildcard)
            for cls in type(event).__mro__:
                chain.extend(self._by_type.get(cls, ()))
        return chain

    def publish(self, event: DomainEvent) -> None:
        """Deliver *event* to every matching handler."""
        for handler in self._handlers_for(event):
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Handler %r failed on %s", handler, type(event).__name__
                )

    def handler_count(self, event_type: type[DomainEvent] | None = None) -> int:
        """Handlers registered for *event_type*, or all handlers when ``None``."""
        with self._lock:
            if event_type is not None:
                return len(self._by_type.get(event_type, ()))
            return len(self._wildcard) + sum(len(h) for h in self._by_type.values())

    def clear(self) -> None:
        with self._lock:
            self._by_type.clear()
            self._wildcard.clear()


# ===================================================================== #
#  Event Store                                                           #
# ===================================================================== #

class EventStore:
    """Bounded in-memory trail of events.

    ``max_size`` of ``0`` keeps everything; otherwise the oldest events are
    dropped first.  Wire it to a bus to record a whole session::

        store = EventStore()
        bus.subscribe_all(store.append)
    """

    def __init__(self, max_size: int = 0) -> None:
        self._events: deque[DomainEvent] = deque(maxlen=max_size or None)
        self._lock = threading.Lock()

    def append(self, event: DomainEvent) -> None:
        with self._lock:
            self._events.append(event)

    def query(
        self,
        event_type: type[DomainEvent] | None = None,
        limit: int = 0,
    ) -> Sequence[DomainEvent]:
        """Stored events, oldest first, optionally filtered and tail-limited."""
        with self._lock:
            snapshot = list(self._events)
        if event_type is not None:
            snapshot = [e for e in snapshot if isinstance(e, event_type)]
        return snapshot[-limit:] if limit > 0 else snapshot

    @property
    def latest(self) -> DomainEvent | None:
        with self._lock:
            return self._events[-1] if self._events else None

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

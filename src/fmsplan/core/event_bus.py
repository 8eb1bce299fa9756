"""Synchronous event bus.

Flight plan collaborators (display, guidance, export) subscribe to event
types; the plan publishes events once a mutation has fully completed.

Typical usage example:
    from fmsplan.core.event_bus import EventBus
    from fmsplan.flightplan.events import ApproachViasChangedEvent

    bus = EventBus()
    bus.subscribe(ApproachViasChangedEvent, on_vias_changed)
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

Handler = Callable[[Any], None]


class EventPriority(Enum):
    """Priority levels for event handlers, lowest value runs first."""

    CRITICAL = 1
    HIGH = 2
    NORMAL = 3
    LOW = 4


@dataclass
class Event:
    """Base class for all events.

    Attributes:
        timestamp: Unix timestamp when the event was created.
    """

    timestamp: float = field(default_factory=time.time, kw_only=True)


class EventBus:
    """Dispatches events to subscribers in priority order.

    Handlers run synchronously on the publisher's call stack; an exception
    raised by a handler propagates to the publisher.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[Event], list[tuple[EventPriority, Handler]]] = {}

    def subscribe(
        self,
        event_type: type[Event],
        handler: Handler,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> None:
        """Subscribe a handler to an event type.

        Handlers with equal priority run in subscription order.

        Args:
            event_type: Event class to listen for. Subclasses are not matched.
            handler: Callable receiving the event.
            priority: Ordering relative to other handlers.
        """
        handlers = self._handlers.setdefault(event_type, [])
        handlers.append((priority, handler))
        handlers.sort(key=lambda entry: entry[0].value)

    def unsubscribe(self, event_type: type[Event], handler: Handler) -> None:
        """Remove a handler. Unknown handlers are ignored."""
        handlers = [entry for entry in self._handlers.get(event_type, []) if entry[1] != handler]
        if handlers:
            self._handlers[event_type] = handlers
        else:
            self._handlers.pop(event_type, None)

    def publish(self, event: Event) -> None:
        """Call every handler subscribed to the event's exact type."""
        for _, handler in list(self._handlers.get(type(event), [])):
            handler(event)

    def clear(self) -> None:
        """Remove all event handlers."""
        self._handlers.clear()

    def get_subscriber_count(self, event_type: type[Event]) -> int:
        """Get the number of handlers subscribed to ``event_type``."""
        return len(self._handlers.get(event_type, []))

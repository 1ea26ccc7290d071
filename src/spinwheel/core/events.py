"""
Event bus for wheel notifications.

Lets a rendering layer, sound engine or analytics hook observe spins
without the engine knowing about them.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
from collections import defaultdict
import logging
import time

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Notifications published by a wheel engine."""
    SPIN_STARTED = auto()
    SPIN_COMPLETED = auto()
    SPIN_REJECTED = auto()
    STATE_CHANGED = auto()
    WHEEL_RESET = auto()
    PRIZES_CHANGED = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: Monotonic time the event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "wheel"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]


class EventBus:
    """
    Publish/subscribe hub.

    Handlers run inline from ``emit``, on the thread or timer callback that
    published. Handler errors are logged and never reach the publisher.
    Recent events are kept in a bounded history so a renderer that attaches
    late can catch up.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._global_handlers: list[Handler] = []
        self._event_history: list[Event] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback taking the Event

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Subscribe to every event. Returns an unsubscribe function."""
        self._global_handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._global_handlers:
                self._global_handlers.remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Emit an event to its handlers."""
        self._add_to_history(event)
        for handler in self._handlers_for(event):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler: {e}")

    def _handlers_for(self, event: Event) -> list[Handler]:
        return self._handlers.get(event.type, []) + self._global_handlers

    def _add_to_history(self, event: Event) -> None:
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]

    def clear_history(self) -> None:
        """Clear event history."""
        self._event_history.clear()

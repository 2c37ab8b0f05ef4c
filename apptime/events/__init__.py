"""Global event system for apptime."""
from enum import Enum
from typing import Callable, Any, Dict, List, TypeVar


class Event(Enum):
    """Application-wide events."""
    TRACKER_STARTED = "tracker_started"
    TRACKER_STOPPED = "tracker_stopped"
    DAY_CHANGED = "day_changed"
    MONTH_ADDED = "month_added"


class EventContext:
    """Base context for event handlers."""
    pass


class DayChangedContext(EventContext):
    """Context passed to DAY_CHANGED handlers."""
    def __init__(self, previous: str, current: str) -> None:
        self.previous = previous
        self.current = current


class MonthAddedContext(EventContext):
    """Context passed to MONTH_ADDED handlers."""
    def __init__(self, month: str, months: List[str]) -> None:
        self.month = month
        self.months = months


ContextT = TypeVar('ContextT', bound=EventContext)


class EventBus:
    """Central event dispatcher."""

    def __init__(self) -> None:
        self._handlers: Dict[Event, List[Callable[[Any], None]]] = {}

    def subscribe(self, event: Event, handler: Callable[[ContextT], None]) -> None:
        """Subscribe to an event with a typed handler."""
        if event not in self._handlers:
            self._handlers[event] = []
        self._handlers[event].append(handler)  # type: ignore[arg-type]

    def unsubscribe(self, event: Event, handler: Callable[[ContextT], None]) -> None:
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)  # type: ignore[arg-type]

    def emit(self, event: Event, context: EventContext) -> None:
        """Emit an event to all subscribers."""
        for handler in list(self._handlers.get(event, [])):
            try:
                handler(context)
            except Exception as e:
                print(f"Event handler error ({event.value}): {e}")


# Global instance
event_bus = EventBus()

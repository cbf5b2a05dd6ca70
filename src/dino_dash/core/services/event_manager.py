"""
event_manager.py
----------------
Event bus and the events exchanged between simulation, score layer and UI.
Lets the simulation announce run results without knowing who persists them.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Type
from dino_dash.core.debug.debug_logger import DebugLogger


# ===========================================================
# Event Definitions
# ===========================================================

@dataclass(frozen=True)
class BaseEvent:
    """Base class for all events."""
    pass


@dataclass(frozen=True)
class RunEndedEvent(BaseEvent):
    """Dispatched once when a run hits an obstacle."""
    final_score: int


@dataclass(frozen=True)
class ObstacleSpawnedEvent(BaseEvent):
    """Dispatched when a new obstacle enters at the right edge."""
    obstacle: Any


@dataclass(frozen=True)
class ScoresChangedEvent(BaseEvent):
    """Dispatched after every score context state transition."""
    state: Any


# ===========================================================
# Event Manager
# ===========================================================
class EventManager:
    """
    Synchronous pub-sub bus keyed by event class.

    Callbacks run in subscription order inside dispatch(). One instance is
    shared by the game loop, the score context and the frame driver.
    """

    def __init__(self):
        self._subscribers: Dict[Type[BaseEvent], List[Callable]] = {}
        DebugLogger.init("EventManager initialized", category="event_manager")

    # ===========================================================
    # Subscription
    # ===========================================================

    def subscribe(self, event_type: Type[BaseEvent], callback: Callable) -> None:
        """
        Listen for one event class. Subscribing the same callback twice is a no-op.

        Args:
            event_type: e.g. RunEndedEvent
            callback: Called with the event instance
        """
        callbacks = self._subscribers.setdefault(event_type, [])
        if callback in callbacks:
            return

        callbacks.append(callback)
        DebugLogger.system(
            f"{_name_of(callback)} -> {event_type.__name__}",
            category="event_manager"
        )

    def unsubscribe(self, event_type: Type[BaseEvent], callback: Callable) -> None:
        callbacks = self._subscribers.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def unsubscribe_all(self, callback: Callable) -> None:
        for callbacks in self._subscribers.values():
            if callback in callbacks:
                callbacks.remove(callback)

    # ===========================================================
    # Dispatch
    # ===========================================================

    def dispatch(self, event: BaseEvent) -> None:
        """
        Deliver an event to every callback registered for its exact class.

        A callback that raises is logged and skipped; the frame keeps running.
        """
        for callback in list(self._subscribers.get(type(event), ())):
            try:
                callback(event)
            except Exception as e:
                DebugLogger.warn(
                    f"{_name_of(callback)} failed on {type(event).__name__}: {e}",
                    category="system"
                )

    # ===========================================================
    # Maintenance
    # ===========================================================

    def clear_event_type(self, event_type: Type[BaseEvent]) -> None:
        self._subscribers.pop(event_type, None)

    def clear_all(self) -> None:
        self._subscribers.clear()

    def get_subscriber_count(self, event_type: Type[BaseEvent] = None) -> int:
        """Callbacks for one event class, or across all classes when None."""
        if event_type is not None:
            return len(self._subscribers.get(event_type, ()))
        return sum(len(callbacks) for callbacks in self._subscribers.values())


def _name_of(callback: Callable) -> str:
    return getattr(callback, "__qualname__", repr(callback))

"""
Typed event bus for decoupled communication.

Uses Enums for event types to prevent magic strings.

Usage:
    # Define events
    class BattleEvent(Enum):
        DAMAGE_DEALT = auto()
        UNIT_DEFEATED = auto()

    # Subscribe
    event_bus.subscribe(BattleEvent.DAMAGE_DEALT, on_damage)

    # Publish
    event_bus.publish(BattleEvent.DAMAGE_DEALT, target=goblin, amount=11)

Events published while a handler is running are queued and delivered after
the current dispatch finishes, so handlers never re-enter each other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable
from weakref import WeakMethod, ref

logger = logging.getLogger(__name__)


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: The event type (Enum member)
        data: Dictionary of event-specific data
        consumed: Whether the event has been handled
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        """Mark event as consumed (stops propagation)."""
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        """Get event data by key."""
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Get event data by key (dict-style)."""
        return self.data[key]


# Type alias for event handlers
EventHandler = Callable[[Event], None]


@dataclass(eq=False)
class _Subscription:
    priority: int
    target: Any  # handler, or a weak reference to it
    one_shot: bool = False

    def resolve(self) -> EventHandler | None:
        """The live handler, or None once a weak target was collected."""
        if isinstance(self.target, (ref, WeakMethod)):
            return self.target()
        return self.target


class EventBus:
    """
    Publish/subscribe hub keyed by Enum event types.

    Handlers run highest priority first, in subscription order within a
    priority. By default handlers are held weakly, so a listener that goes
    away unsubscribes itself. A handler can consume an event to stop
    delivery to the rest.
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[_Subscription]] = {}
        self._pending: list[Event] = []
        self._dispatching = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to listen for
            handler: Callback function(event: Event)
            priority: Higher priority handlers are called first (default 0)
            one_shot: Drop the handler after its first call
            weak: Hold the handler through a weak reference
        """
        target: Any = handler
        if weak:
            target = WeakMethod(handler) if hasattr(handler, '__self__') else ref(handler)

        subscriptions = self._subscriptions.setdefault(event_type, [])
        position = next(
            (i for i, s in enumerate(subscriptions) if priority > s.priority),
            len(subscriptions),
        )
        subscriptions.insert(position, _Subscription(priority, target, one_shot))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        """Remove every subscription of ``handler`` to ``event_type``."""
        subscriptions = self._subscriptions.get(event_type)
        if subscriptions:
            subscriptions[:] = [s for s in subscriptions if s.resolve() != handler]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """
        Publish an event built from keyword data.

        Returns:
            The Event object (check .consumed to see if it was handled)
        """
        event = Event(type=event_type, data=data)
        self.publish_event(event)
        return event

    def publish_event(self, event: Event) -> None:
        """Publish a pre-created event. Queued if a dispatch is in progress."""
        self._pending.append(event)
        if self._dispatching:
            return

        self._dispatching = True
        try:
            while self._pending:
                self._dispatch(self._pending.pop(0))
        finally:
            self._dispatching = False

    def clear(self, event_type: Enum | None = None) -> None:
        """Drop the handlers of one event type, or of all types."""
        if event_type is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(event_type, None)

    def handler_count(self, event_type: Enum) -> int:
        """Number of live handlers subscribed to an event type."""
        return sum(
            1 for s in self._subscriptions.get(event_type, [])
            if s.resolve() is not None
        )

    def _dispatch(self, event: Event) -> None:
        subscriptions = self._subscriptions.get(event.type)
        if not subscriptions:
            return

        finished: list[_Subscription] = []
        for subscription in list(subscriptions):
            handler = subscription.resolve()
            if handler is None:
                finished.append(subscription)
                continue

            try:
                handler(event)
            except Exception:
                logger.exception("Error in event handler for %s", event.type)

            if subscription.one_shot:
                finished.append(subscription)
            if event.consumed:
                break

        for subscription in finished:
            if subscription in subscriptions:
                subscriptions.remove(subscription)

"""
Battle notifications.

Every notification is recorded as an ``Event`` in resolution order. Engine
calls return the slice they produced, the whole battle keeps the full log,
and when an ``EventBus`` is attached each event is also published on it.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Any, Optional

from higher_engine.core.events import Event, EventBus


class BattleEvent(Enum):
    """Battle notifications."""
    BATTLE_STARTED = auto()      # players, enemies
    PHASE_CHANGED = auto()       # is_player_phase
    UNIT_TURN_STARTED = auto()   # unit, is_player
    DAMAGE_DEALT = auto()        # target, amount, damage_type
    HEALING_DONE = auto()        # target, amount
    MP_RESTORED = auto()         # target, amount
    SKILL_USED = auto()          # caster, skill, targets
    STATUS_APPLIED = auto()      # target, effect, duration
    STATUS_TICKED = auto()       # target, result
    UNIT_DEFENDED = auto()       # unit
    UNIT_DEFEATED = auto()       # unit
    ACTION_FAILED = auto()       # reason, actor
    BATTLE_ENDED = auto()        # outcome


class BattleEventLog:
    """Ordered record of everything a battle emitted."""

    def __init__(self, event_bus: Optional[EventBus] = None):
        self._events: list[Event] = []
        self._bus = event_bus

    def emit(self, event_type: BattleEvent, **data: Any) -> Event:
        event = Event(type=event_type, data=data)
        self._events.append(event)
        if self._bus is not None:
            self._bus.publish_event(event)
        return event

    def mark(self) -> int:
        """Position to slice from with ``since``."""
        return len(self._events)

    def since(self, mark: int) -> list[Event]:
        return self._events[mark:]

    def of_type(self, event_type: BattleEvent) -> list[Event]:
        return [e for e in self._events if e.type == event_type]

    @property
    def events(self) -> list[Event]:
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self):
        return iter(list(self._events))

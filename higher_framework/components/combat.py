"""
Combat components - damage types, status effects and the per-unit ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DamageType(Enum):
    """How incoming damage is reduced."""
    PHYSICAL = "physical"
    MAGICAL = "magical"
    TRUE = "true"


class StatusType(Enum):
    """Status effect kinds."""
    # Damage over time
    POISON = "poison"
    BURN = "burn"
    FREEZE = "freeze"
    # Heal over time
    REGENERATION = "regeneration"
    # Stat modifiers
    ATTACK_UP = "attack_up"
    DEFENSE_UP = "defense_up"
    MAGIC_UP = "magic_up"
    SPEED_UP = "speed_up"
    ATTACK_DOWN = "attack_down"
    DEFENSE_DOWN = "defense_down"
    MAGIC_DOWN = "magic_down"
    SPEED_DOWN = "speed_down"
    # Markers
    BLESSED = "blessed"
    BLINDED = "blinded"
    SLOW = "slow"
    INTIMIDATED = "intimidated"
    DISPEL = "dispel"

    @property
    def is_damage_over_time(self) -> bool:
        return self in DAMAGE_OVER_TIME

    @property
    def is_positive(self) -> bool:
        """Whether a tick of this kind benefits its holder."""
        return self in POSITIVE_STATUSES

    @property
    def stat_delta(self) -> tuple[str, int] | None:
        """(stat name, sign) for stat modifiers, None otherwise."""
        return STAT_MODIFIERS.get(self)

    @classmethod
    def for_stat(cls, stat: str, buff: bool) -> StatusType:
        """Modifier kind for a stat name, e.g. ("attack", True) -> ATTACK_UP."""
        return cls(f"{stat}_{'up' if buff else 'down'}")


DAMAGE_OVER_TIME = frozenset({
    StatusType.POISON,
    StatusType.BURN,
    StatusType.FREEZE,
})

POSITIVE_STATUSES = frozenset({
    StatusType.REGENERATION,
    StatusType.ATTACK_UP,
    StatusType.DEFENSE_UP,
    StatusType.MAGIC_UP,
    StatusType.SPEED_UP,
    StatusType.BLESSED,
})

STAT_MODIFIERS: dict[StatusType, tuple[str, int]] = {
    StatusType.ATTACK_UP: ("attack", 1),
    StatusType.DEFENSE_UP: ("defense", 1),
    StatusType.MAGIC_UP: ("magic", 1),
    StatusType.SPEED_UP: ("speed", 1),
    StatusType.ATTACK_DOWN: ("attack", -1),
    StatusType.DEFENSE_DOWN: ("defense", -1),
    StatusType.MAGIC_DOWN: ("magic", -1),
    StatusType.SPEED_DOWN: ("speed", -1),
}

# Magnitude used when a skill does not specify one
DEFAULT_POTENCY: dict[StatusType, int] = {
    StatusType.POISON: 6,
    StatusType.BURN: 8,
    StatusType.FREEZE: 4,
    StatusType.REGENERATION: 10,
    **{kind: 5 for kind in STAT_MODIFIERS},
}


def default_potency(kind: StatusType) -> int:
    return DEFAULT_POTENCY.get(kind, 0)


@dataclass
class StatusEffect:
    """
    A single active status effect.

    Attributes:
        status_type: Kind of effect
        duration: Remaining duration in phases
        potency: Magnitude (damage/heal per tick, or stat delta)
    """
    status_type: StatusType
    duration: int
    potency: int = 0

    def tick(self) -> bool:
        """
        Decrement duration by one phase.

        Returns:
            True if effect expired
        """
        self.duration -= 1
        return self.duration <= 0


@dataclass(frozen=True)
class EffectResult:
    """Outcome of one status effect tick."""
    kind: StatusType
    magnitude: int
    is_positive: bool


@dataclass
class StatusLedger:
    """
    Ordered list of active status effects on one combatant.

    Insertion order is kept so ticks resolve deterministically.
    """
    effects: list[StatusEffect] = field(default_factory=list)

    def add(self, effect: StatusEffect) -> None:
        """
        Add a status effect.

        Dispel wipes every other effect first. An effect of a kind already
        present refreshes its duration and keeps the larger potency.
        """
        if effect.status_type is StatusType.DISPEL:
            self.effects.clear()

        for existing in self.effects:
            if existing.status_type == effect.status_type:
                existing.duration = effect.duration
                existing.potency = max(existing.potency, effect.potency)
                return

        self.effects.append(effect)

    def remove(self, status_type: StatusType) -> bool:
        """Remove a status effect by type."""
        for i, effect in enumerate(self.effects):
            if effect.status_type == status_type:
                self.effects.pop(i)
                return True
        return False

    def has(self, status_type: StatusType) -> bool:
        return any(e.status_type == status_type for e in self.effects)

    def get(self, status_type: StatusType) -> StatusEffect | None:
        for effect in self.effects:
            if effect.status_type == status_type:
                return effect
        return None

    def stat_modifier(self, stat: str) -> int:
        """Net modifier to a stat from active up/down effects."""
        total = 0
        for effect in self.effects:
            delta = effect.status_type.stat_delta
            if delta and delta[0] == stat:
                total += delta[1] * effect.potency
        return total

    def drop_expired(self) -> list[StatusEffect]:
        """Remove effects whose duration ran out. Returns the removed ones."""
        expired = [e for e in self.effects if e.duration <= 0]
        self.effects = [e for e in self.effects if e.duration > 0]
        return expired

    def clear(self) -> None:
        self.effects.clear()

    def __iter__(self):
        return iter(list(self.effects))

    def __len__(self) -> int:
        return len(self.effects)

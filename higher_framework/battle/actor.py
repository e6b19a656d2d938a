"""
Battle actors - participants in combat.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from higher_framework.components import (
    CharacterStats,
    Health,
    Mana,
    DamageType,
    StatusEffect,
    StatusLedger,
    StatusType,
    EffectResult,
    UnitClass,
)
from higher_framework.battle.skills import Skill, can_cast
from higher_framework.battle import status


class Side(Enum):
    """Which roster an actor belongs to."""
    PLAYER = "player"
    ENEMY = "enemy"

    @property
    def opposing(self) -> Side:
        return Side.ENEMY if self is Side.PLAYER else Side.PLAYER


@dataclass(eq=False)
class Combatant:
    """
    A participant in battle.

    Combatants are battle-scoped: the engine builds them from templates (or
    duplicates caller-owned ones) at battle start and throws them away at
    the end. HP and MP are held in validated components, so they can never
    leave ``[0, max]``.
    """
    name: str
    side: Side

    stats: CharacterStats
    health: Health
    mana: Mana

    skills: list[Skill] = field(default_factory=list)
    statuses: StatusLedger = field(default_factory=StatusLedger)

    # Battle state
    is_defending: bool = False
    position_index: int = 0

    unit_class: Optional[UnitClass] = None
    template_id: Optional[str] = None
    description: str = ""

    # Set when HP crosses to 0, cleared when the defeat is reported
    _defeat_pending: bool = field(default=False, init=False, repr=False)
    _defeat_reported: bool = field(default=False, init=False, repr=False)

    @property
    def is_alive(self) -> bool:
        """Check if actor is alive."""
        return self.health.current > 0

    @property
    def is_player(self) -> bool:
        return self.side is Side.PLAYER

    @property
    def current_hp(self) -> int:
        return self.health.current

    @property
    def max_hp(self) -> int:
        return self.health.max_hp

    @property
    def current_mp(self) -> int:
        return self.mana.current

    @property
    def max_mp(self) -> int:
        return self.mana.max_mp

    @property
    def hp_percent(self) -> float:
        return self.health.percent

    @property
    def mp_percent(self) -> float:
        return self.mana.percent

    # Effective stats include active up/down effects, floored at 0

    @property
    def attack(self) -> int:
        return max(0, self.stats.attack + self.statuses.stat_modifier("attack"))

    @property
    def defense(self) -> int:
        return max(0, self.stats.defense + self.statuses.stat_modifier("defense"))

    @property
    def magic(self) -> int:
        return max(0, self.stats.magic + self.statuses.stat_modifier("magic"))

    @property
    def speed(self) -> int:
        return max(0, self.stats.speed + self.statuses.stat_modifier("speed"))

    def reduced_damage(
        self,
        amount: int,
        damage_type: DamageType = DamageType.PHYSICAL,
        defend_multiplier: float = 0.5,
    ) -> int:
        """
        Damage this actor would take from a raw amount, before the HP cap.

        physical: ``amount - defense``, scaled while defending
        magical: ``amount - magic // 2``
        true: ``amount``
        Always at least 1.
        """
        final = amount
        if damage_type == DamageType.PHYSICAL:
            final -= self.defense
            if self.is_defending:
                final = int(final * defend_multiplier)
        elif damage_type == DamageType.MAGICAL:
            final -= int(self.magic * 0.5)
        return max(1, final)

    def apply_damage(
        self,
        amount: int,
        damage_type: DamageType = DamageType.PHYSICAL,
        defend_multiplier: float = 0.5,
    ) -> int:
        """
        Take damage.

        Returns:
            HP actually removed. 0 if the actor was already down.
        """
        if not self.is_alive:
            return 0
        actual = self.health.take_damage(
            self.reduced_damage(amount, damage_type, defend_multiplier)
        )
        self._note_defeat()
        return actual

    def apply_heal(self, amount: int) -> int:
        """Heal HP. Defeated actors cannot be healed. Returns HP restored."""
        if not self.is_alive:
            return 0
        return self.health.heal(amount)

    def spend_mp(self, amount: int) -> bool:
        """Spend MP. Returns True if successful; nothing is spent otherwise."""
        return self.mana.spend(amount)

    def restore_mp(self, amount: int) -> int:
        """Restore MP. Returns MP restored."""
        return self.mana.restore(amount)

    def add_status_effect(self, effect: StatusEffect) -> None:
        self.statuses.add(effect)

    def has_status(self, status_type: StatusType) -> bool:
        return self.statuses.has(status_type)

    def tick_status_effects(self) -> list[EffectResult]:
        """Resolve one phase of every active effect."""
        results = status.tick_combatant(self)
        self._note_defeat()
        return results

    def consume_defeat(self) -> bool:
        """
        Report the alive -> defeated transition.

        Returns True exactly once per actor, on the first call after HP
        reached 0; False on every other call.
        """
        if self._defeat_pending and not self._defeat_reported:
            self._defeat_pending = False
            self._defeat_reported = True
            return True
        return False

    def _note_defeat(self) -> None:
        if not self.is_alive and not self._defeat_reported:
            self._defeat_pending = True

    def usable_skills(self) -> list[Skill]:
        """Skills the actor can currently afford."""
        return [s for s in self.skills if can_cast(s, self)]

    def start_defend(self) -> None:
        self.is_defending = True

    def end_defend(self) -> None:
        self.is_defending = False

    def duplicate(self, side: Optional[Side] = None, position: Optional[int] = None) -> Combatant:
        """
        Battle copy carrying the current HP/MP, without statuses or guard.

        Stats and pools are copied; skills stay shared. A unit copied while
        already down is never reported as defeated again.
        """
        copy = Combatant(
            name=self.name,
            side=side or self.side,
            stats=self.stats.clone(),
            health=self.health.clone(),
            mana=self.mana.clone(),
            skills=list(self.skills),
            position_index=self.position_index if position is None else position,
            unit_class=self.unit_class,
            template_id=self.template_id,
            description=self.description,
        )
        copy._defeat_reported = not copy.is_alive
        return copy

    def status_line(self) -> str:
        """Formatted status string for logs."""
        return f"{self.name} - HP: {self.current_hp}/{self.max_hp} MP: {self.current_mp}/{self.max_mp}"

    def __repr__(self) -> str:
        return f"Combatant({self.name!r}, {self.side.value}, HP {self.current_hp}/{self.max_hp})"

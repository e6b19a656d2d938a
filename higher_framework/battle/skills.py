"""
Skill definitions and the pure functions that compute their outcome.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

from higher_framework.components import (
    DamageType,
    StatusType,
    StatusEffect,
    default_potency,
)

if TYPE_CHECKING:
    from higher_framework.battle.actor import Combatant


class TargetShape(Enum):
    """Declared legal target pool of a skill."""
    SELF = "self"
    SINGLE_ALLY = "single_ally"
    ALL_ALLIES = "all_allies"
    SINGLE_ENEMY = "single_enemy"
    ALL_ENEMIES = "all_enemies"
    RANDOM_ENEMY = "random_enemy"

    @property
    def is_single(self) -> bool:
        return self in (TargetShape.SINGLE_ALLY, TargetShape.SINGLE_ENEMY)


@dataclass(frozen=True, eq=False)
class Skill:
    """
    Static data for a skill.

    Skills are shared between every combatant that knows them and are
    never modified after creation.
    """
    id: str
    name: str
    description: str = ""
    mp_cost: int = 0
    power: int = 0
    damage_type: DamageType = DamageType.PHYSICAL
    heal_power: int = 0
    target_shape: TargetShape = TargetShape.SINGLE_ENEMY

    # Secondary effects
    status_effect: Optional[StatusType] = None
    status_duration: int = 0
    status_potency: Optional[int] = None
    buff_stats: dict[str, int] = field(default_factory=dict)
    debuff_stats: dict[str, int] = field(default_factory=dict)

    def __post_init__(self):
        if self.mp_cost < 0 or self.power < 0 or self.heal_power < 0:
            raise ValueError(f"Skill {self.id!r} has negative cost or power")

    def __repr__(self) -> str:
        return f"Skill({self.id!r}, mp_cost={self.mp_cost})"

    def describe(self) -> str:
        """One-line summary for menus and logs."""
        info = f"{self.name} (MP: {self.mp_cost})"
        if self.power > 0:
            info += f" - Damage: {self.power} {self.damage_type.value}"
        if self.heal_power > 0:
            info += f" - Heal: {self.heal_power}"
        if self.status_effect:
            info += f" - Status: {self.status_effect.value} ({self.status_duration} turns)"
        return info


def damage_against(skill: Skill, caster: Combatant) -> int:
    """Raw damage a skill deals before the target's reduction."""
    if skill.damage_type == DamageType.PHYSICAL:
        return skill.power + caster.attack
    if skill.damage_type == DamageType.MAGICAL:
        return skill.power + caster.magic * 2
    return skill.power


def heal_amount(skill: Skill, caster: Combatant) -> int:
    """Healing a skill provides before the target's HP cap."""
    if skill.heal_power > 0:
        return skill.heal_power + caster.magic
    return 0


def can_cast(skill: Skill, caster: Combatant) -> bool:
    return caster.current_mp >= skill.mp_cost


def status_effects_for(skill: Skill, buff_duration: int = 3) -> list[StatusEffect]:
    """Fresh status effect instances a skill applies to each target."""
    effects = []

    if skill.status_effect and skill.status_duration > 0:
        potency = skill.status_potency
        if potency is None:
            potency = default_potency(skill.status_effect)
        effects.append(StatusEffect(skill.status_effect, skill.status_duration, potency))

    for stat, value in skill.buff_stats.items():
        if value > 0:
            effects.append(StatusEffect(StatusType.for_stat(stat, True), buff_duration, value))

    for stat, value in skill.debuff_stats.items():
        if value > 0:
            effects.append(StatusEffect(StatusType.for_stat(stat, False), buff_duration, value))

    return effects


@dataclass
class TargetOutcome:
    """What a skill did to one target."""
    target: Combatant
    damage: int = 0
    healing: int = 0
    statuses: list[StatusEffect] = field(default_factory=list)
    defeated: bool = False


@dataclass
class SkillResolution:
    """Result of resolving a skill against its targets."""
    skill: Skill
    caster: Combatant
    success: bool = True
    mp_spent: int = 0
    outcomes: list[TargetOutcome] = field(default_factory=list)


def resolve_skill(
    skill: Skill,
    caster: Combatant,
    targets: list[Combatant],
    buff_duration: int = 3,
    defend_multiplier: float = 0.5,
) -> SkillResolution:
    """
    Spend MP and apply a skill to every target.

    The cast is all-or-nothing: when the caster cannot pay, no MP is spent
    and no target is touched. Damage, healing and status effects are
    applied independently per target, in target order. Targets already
    down when their turn in the fold comes are skipped.
    """
    resolution = SkillResolution(skill=skill, caster=caster)

    if not caster.spend_mp(skill.mp_cost):
        resolution.success = False
        return resolution
    resolution.mp_spent = skill.mp_cost

    for target in targets:
        if not target.is_alive:
            continue
        outcome = TargetOutcome(target=target)

        if skill.power > 0:
            outcome.damage = target.apply_damage(
                damage_against(skill, caster),
                skill.damage_type,
                defend_multiplier=defend_multiplier,
            )

        if skill.heal_power > 0:
            outcome.healing = target.apply_heal(heal_amount(skill, caster))

        if target.is_alive:
            for effect in status_effects_for(skill, buff_duration):
                target.add_status_effect(effect)
                outcome.statuses.append(effect)

        outcome.defeated = target.consume_defeat()
        resolution.outcomes.append(outcome)

    return resolution

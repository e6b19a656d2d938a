"""
Status effect processing.

Effects tick once per phase boundary, for every living combatant on both
sides. A tick resolves each effect's value, decrements its duration and
drops it once the duration reaches 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from higher_framework.components import (
    DamageType,
    EffectResult,
    StatusEffect,
    StatusType,
)

if TYPE_CHECKING:
    from higher_framework.battle.actor import Combatant


@dataclass
class CombatantTick:
    """Everything one combatant's effects did during a tick pass."""
    target: Combatant
    results: list[EffectResult] = field(default_factory=list)
    defeated: bool = False


def resolve_effect(holder: Combatant, effect: StatusEffect) -> EffectResult:
    """
    Apply one effect's per-phase value to its holder.

    Damage-over-time deals its potency as magical damage, so the holder's
    magic softens it (minimum 1) but guarding does not. Regeneration heals
    its potency unreduced. Stat modifiers and markers only report their potency.
    """
    kind = effect.status_type

    if kind.is_damage_over_time:
        dealt = holder.apply_damage(effect.potency, DamageType.MAGICAL)
        return EffectResult(kind=kind, magnitude=dealt, is_positive=False)

    if kind is StatusType.REGENERATION:
        healed = holder.apply_heal(effect.potency)
        return EffectResult(kind=kind, magnitude=healed, is_positive=True)

    return EffectResult(kind=kind, magnitude=effect.potency, is_positive=kind.is_positive)


def tick_combatant(holder: Combatant) -> list[EffectResult]:
    """
    Tick every active effect on a combatant, in the order applied.

    Stops resolving values once the holder is down, but still counts the
    remaining durations down.
    """
    results = []
    for effect in holder.statuses:
        if holder.is_alive:
            results.append(resolve_effect(holder, effect))
        effect.tick()
    holder.statuses.drop_expired()
    return results


def process_status_effects(combatants: Iterable[Combatant]) -> list[CombatantTick]:
    """
    Run one tick pass.

    Combatants are visited in the order given; dead ones are skipped
    entirely. Combatants without active effects are left out of the result.
    """
    ticks = []
    for combatant in combatants:
        if not combatant.is_alive or not len(combatant.statuses):
            continue
        results = combatant.tick_status_effects()
        ticks.append(CombatantTick(
            target=combatant,
            results=results,
            defeated=combatant.consume_defeat(),
        ))
    return ticks

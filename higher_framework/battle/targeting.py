"""
Target resolution - which combatants a skill may legally hit.
"""

from __future__ import annotations

import random
from typing import Optional, Sequence

from higher_framework.battle.actor import Combatant, Side
from higher_framework.battle.skills import TargetShape


def alive(roster: Sequence[Combatant]) -> list[Combatant]:
    return [c for c in roster if c.is_alive]


def candidate_pool(
    shape: TargetShape,
    caster: Combatant,
    players: Sequence[Combatant],
    enemies: Sequence[Combatant],
) -> list[Combatant]:
    """
    Everyone a target shape could land on, without drawing a random pick.

    Random-enemy yields every living opponent. Used for menus and for
    checking caller-chosen targets.
    """
    own, other = (players, enemies) if caster.side is Side.PLAYER else (enemies, players)

    if shape == TargetShape.SELF:
        return [caster]
    if shape in (TargetShape.SINGLE_ALLY, TargetShape.ALL_ALLIES):
        return alive(own)
    return alive(other)


def valid_targets(
    shape: TargetShape,
    caster: Combatant,
    players: Sequence[Combatant],
    enemies: Sequence[Combatant],
    rng: Optional[random.Random] = None,
) -> list[Combatant]:
    """
    Get the legal candidates for a target shape.

    Single-target shapes return every living candidate; picking one is the
    caller's job. Random-enemy returns one uniformly chosen living opponent.
    An empty list means the action has nothing to hit.
    """
    candidates = candidate_pool(shape, caster, players, enemies)

    if shape == TargetShape.RANDOM_ENEMY and candidates:
        return [(rng or random).choice(candidates)]

    return candidates

"""
Enemy AI - picks an action for each enemy during the enemy phase.
"""

from __future__ import annotations

import random
from typing import Optional, Sequence

from higher_framework.battle.actions import BattleAction
from higher_framework.battle.actor import Combatant, Side
from higher_framework.battle.skills import Skill, TargetShape
from higher_framework.battle.targeting import alive, candidate_pool


class EnemyAI:
    """
    Simple battle AI.

    With probability ``skill_chance`` an enemy casts a random affordable
    skill that has someone to hit; otherwise, or when no such skill
    exists, it attacks a random living opponent.
    """

    def __init__(self, rng: random.Random, skill_chance: float = 0.3):
        self._rng = rng
        self.skill_chance = skill_chance

    def choose_action(
        self,
        actor: Combatant,
        players: Sequence[Combatant],
        enemies: Sequence[Combatant],
    ) -> Optional[BattleAction]:
        """
        Decide what ``actor`` does.

        Returns:
            The action, or None when there is no living opponent
        """
        own, other = (players, enemies) if actor.side is Side.PLAYER else (enemies, players)
        opponents = alive(other)
        if not opponents:
            return None

        castable = [
            s for s in actor.usable_skills()
            if candidate_pool(s.target_shape, actor, players, enemies)
        ]
        if castable and self._rng.random() < self.skill_chance:
            skill = self._rng.choice(castable)
            return BattleAction.use_skill(actor, skill, self._pick_targets(skill, actor, own, other))

        return BattleAction.attack(actor, self._rng.choice(opponents))

    def _pick_targets(
        self,
        skill: Skill,
        actor: Combatant,
        own: Sequence[Combatant],
        other: Sequence[Combatant],
    ) -> list[Combatant]:
        # Only single-target shapes need a choice; the executor resolves the rest
        if skill.target_shape == TargetShape.SINGLE_ENEMY:
            return [self._rng.choice(alive(other))]
        if skill.target_shape == TargetShape.SINGLE_ALLY:
            return [self._rng.choice(alive(own))]
        return []

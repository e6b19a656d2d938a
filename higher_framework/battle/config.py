"""
Battle configuration.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


class BattleConfig:
    """Tunable battle rules."""

    def __init__(
        self,
        enemy_skill_chance: float = 0.3,
        exp_per_enemy: int = 50,
        gold_per_enemy: int = 25,
        defend_multiplier: float = 0.5,
        buff_duration: int = 3,
        can_flee: bool = True,
        seed: Optional[int] = None,
    ):
        if not 0.0 <= enemy_skill_chance <= 1.0:
            raise ValueError(f"enemy_skill_chance must be in [0, 1], got {enemy_skill_chance}")
        if buff_duration < 1:
            raise ValueError(f"buff_duration must be positive, got {buff_duration}")
        self.enemy_skill_chance = enemy_skill_chance
        self.exp_per_enemy = exp_per_enemy
        self.gold_per_enemy = gold_per_enemy
        self.defend_multiplier = defend_multiplier
        self.buff_duration = buff_duration
        self.can_flee = can_flee
        self.seed = seed

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BattleConfig:
        """Build a config from a mapping, e.g. a parsed JSON settings file."""
        known = {
            "enemy_skill_chance",
            "exp_per_enemy",
            "gold_per_enemy",
            "defend_multiplier",
            "buff_duration",
            "can_flee",
            "seed",
        }
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown battle config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})

    def __repr__(self) -> str:
        return (
            f"BattleConfig(enemy_skill_chance={self.enemy_skill_chance}, "
            f"exp_per_enemy={self.exp_per_enemy}, gold_per_enemy={self.gold_per_enemy}, "
            f"defend_multiplier={self.defend_multiplier}, buff_duration={self.buff_duration}, "
            f"can_flee={self.can_flee}, seed={self.seed})"
        )

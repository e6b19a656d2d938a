"""
Battle outcome and rewards.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


class OutcomeKind(Enum):
    VICTORY = "victory"
    DEFEAT = "defeat"
    ESCAPED = "escaped"


@dataclass(frozen=True)
class BattleRewards:
    """Rewards from winning a battle."""
    experience: int = 0
    gold: int = 0
    items: tuple[str, ...] = ()


@dataclass(frozen=True)
class BattleOutcome:
    """Terminal result of a battle. Only victories carry rewards."""
    kind: OutcomeKind
    rewards: Optional[BattleRewards] = None

    @classmethod
    def victory(cls, rewards: BattleRewards) -> BattleOutcome:
        return cls(kind=OutcomeKind.VICTORY, rewards=rewards)

    @classmethod
    def defeat(cls) -> BattleOutcome:
        return cls(kind=OutcomeKind.DEFEAT)

    @classmethod
    def escaped(cls) -> BattleOutcome:
        return cls(kind=OutcomeKind.ESCAPED)

    @property
    def is_victory(self) -> bool:
        return self.kind is OutcomeKind.VICTORY


def calculate_rewards(
    enemy_count: int,
    exp_per_enemy: int = 50,
    gold_per_enemy: int = 25,
    items: Sequence[str] = (),
) -> BattleRewards:
    """
    Rewards for defeating a roster of ``enemy_count`` enemies.

    Uses the size of the roster the battle started with. Item drops are
    supplied by the caller; the core never rolls them.
    """
    if enemy_count < 0:
        raise ValueError(f"enemy_count must be non-negative, got {enemy_count}")
    return BattleRewards(
        experience=enemy_count * exp_per_enemy,
        gold=enemy_count * gold_per_enemy,
        items=tuple(items),
    )

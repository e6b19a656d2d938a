"""
Character components - stats, health, mana.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, model_validator

from higher_engine.core.component import Component, register_component


class UnitClass(Enum):
    """Character class archetypes."""
    WARRIOR = "warrior"
    MAGE = "mage"
    ROGUE = "rogue"
    CLERIC = "cleric"
    ARCHER = "archer"


@register_component
class CharacterStats(Component):
    """
    Base character statistics.

    Attributes:
        attack: Physical power, added to physical skill damage
        defense: Subtracted from incoming physical damage
        magic: Magical power; half of it is subtracted from incoming magic
        speed: Informational; turn order is roster order, not speed
    """
    attack: int = Field(default=10, ge=0)
    defense: int = Field(default=10, ge=0)
    magic: int = Field(default=10, ge=0)
    speed: int = Field(default=10, ge=0)


@register_component
class Health(Component):
    """
    Health points tracking.

    ``0 <= current <= max_hp`` is enforced on construction and on every
    assignment.
    """
    current: int = Field(default=100, ge=0)
    max_hp: int = Field(default=100, ge=0)

    @model_validator(mode='after')
    def _check_bounds(self) -> Health:
        if self.current > self.max_hp:
            raise ValueError(f"current HP {self.current} exceeds max {self.max_hp}")
        return self

    @property
    def is_dead(self) -> bool:
        return self.current <= 0

    @property
    def percent(self) -> float:
        """Get health as percentage (0-1)."""
        if self.max_hp <= 0:
            return 0.0
        return self.current / self.max_hp

    def take_damage(self, amount: int) -> int:
        """
        Take damage.

        Returns:
            Actual HP removed (never more than what was left)
        """
        actual = min(max(0, amount), self.current)
        self.current -= actual
        return actual

    def heal(self, amount: int) -> int:
        """
        Heal health.

        Returns:
            Actual amount healed
        """
        actual = min(max(0, amount), self.max_hp - self.current)
        self.current += actual
        return actual


@register_component
class Mana(Component):
    """
    Mana/MP points tracking.
    """
    current: int = Field(default=50, ge=0)
    max_mp: int = Field(default=50, ge=0)

    @model_validator(mode='after')
    def _check_bounds(self) -> Mana:
        if self.current > self.max_mp:
            raise ValueError(f"current MP {self.current} exceeds max {self.max_mp}")
        return self

    @property
    def percent(self) -> float:
        """Get mana as percentage (0-1)."""
        if self.max_mp <= 0:
            return 0.0
        return self.current / self.max_mp

    def spend(self, amount: int) -> bool:
        """
        Spend mana.

        Returns:
            True if successful, False if insufficient mana (nothing spent)
        """
        if amount < 0 or self.current < amount:
            return False
        self.current -= amount
        return True

    def restore(self, amount: int) -> int:
        """
        Restore mana.

        Returns:
            Actual amount restored
        """
        actual = min(max(0, amount), self.max_mp - self.current)
        self.current += actual
        return actual

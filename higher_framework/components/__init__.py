"""
JRPG Components - stats, resource pools and status effects.

Stat and pool components are Pydantic models, so HP/MP bounds are
enforced wherever they are assigned.
"""

from higher_framework.components.character import (
    CharacterStats,
    Health,
    Mana,
    UnitClass,
)
from higher_framework.components.combat import (
    DamageType,
    StatusType,
    StatusEffect,
    StatusLedger,
    EffectResult,
    default_potency,
)

__all__ = [
    # Character
    "CharacterStats",
    "Health",
    "Mana",
    "UnitClass",
    # Combat
    "DamageType",
    "StatusType",
    "StatusEffect",
    "StatusLedger",
    "EffectResult",
    "default_potency",
]

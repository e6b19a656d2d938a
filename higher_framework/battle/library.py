"""
Unit, skill and item definitions.

Definitions are loaded from the game database (JSON validated against
schemas) and turned into the runtime types the battle system uses. The
package ships a built-in roster under ``higher_framework/data``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from higher_engine.errors import DataNotFoundError
from higher_engine.resources.database import Database
from higher_framework.components import (
    CharacterStats,
    DamageType,
    Health,
    Mana,
    StatusType,
    UnitClass,
)
from higher_framework.battle.actions import ItemData
from higher_framework.battle.actor import Combatant, Side
from higher_framework.battle.skills import Skill, TargetShape

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass
class UnitTemplate:
    """Static data for a unit type. Owned by the caller, never mutated by battles."""
    id: str
    name: str
    unit_class: Optional[UnitClass] = None
    description: str = ""

    # Base stats
    max_hp: int = 50
    max_mp: int = 0
    attack: int = 10
    defense: int = 10
    magic: int = 10
    speed: int = 10

    skills: list[str] = field(default_factory=list)  # Skill IDs


def skill_from_record(record: dict[str, Any]) -> Skill:
    """Build a Skill from a database record."""
    status = record.get("status_effect")
    return Skill(
        id=record["id"],
        name=record["name"],
        description=record.get("description", ""),
        mp_cost=record.get("mp_cost", 0),
        power=record.get("power", 0),
        damage_type=DamageType(record.get("damage_type", "physical")),
        heal_power=record.get("heal_power", 0),
        target_shape=TargetShape(record.get("target", "single_enemy")),
        status_effect=StatusType(status) if status else None,
        status_duration=record.get("status_duration", 0),
        status_potency=record.get("status_potency"),
        buff_stats=dict(record.get("buff_stats", {})),
        debuff_stats=dict(record.get("debuff_stats", {})),
    )


def unit_from_record(record: dict[str, Any]) -> UnitTemplate:
    """Build a UnitTemplate from a database record."""
    unit_class = record.get("class")
    return UnitTemplate(
        id=record["id"],
        name=record["name"],
        unit_class=UnitClass(unit_class) if unit_class else None,
        description=record.get("description", ""),
        max_hp=record["max_hp"],
        max_mp=record.get("max_mp", 0),
        attack=record.get("attack", 0),
        defense=record.get("defense", 0),
        magic=record.get("magic", 0),
        speed=record.get("speed", 0),
        skills=list(record.get("skills", [])),
    )


def item_from_record(record: dict[str, Any]) -> ItemData:
    """Build an ItemData from a database record."""
    return ItemData(
        id=record["id"],
        name=record["name"],
        description=record.get("description", ""),
        hp_restore=record.get("hp_restore", 0),
        mp_restore=record.get("mp_restore", 0),
        damage=record.get("damage", 0),
        damage_type=DamageType(record.get("damage_type", "true")),
        target_shape=TargetShape(record.get("target", "single_ally")),
    )


class Catalog:
    """
    Interned definitions.

    Every combatant created from the catalog references the same Skill
    objects, so skills are shared rather than copied.
    """

    def __init__(self):
        self.skills: dict[str, Skill] = {}
        self.units: dict[str, UnitTemplate] = {}
        self.items: dict[str, ItemData] = {}

    @classmethod
    def from_database(cls, database: Database) -> Catalog:
        catalog = cls()
        for record in database.skills.values():
            catalog.add_skill(skill_from_record(record))
        for record in database.units.values():
            catalog.add_unit(unit_from_record(record))
        for record in database.items.values():
            catalog.add_item(item_from_record(record))
        return catalog

    def add_skill(self, skill: Skill) -> None:
        self.skills[skill.id] = skill

    def add_unit(self, unit: UnitTemplate) -> None:
        missing = [s for s in unit.skills if s not in self.skills]
        if missing:
            logger.warning("Unit %s references unknown skills: %s", unit.id, ", ".join(missing))
        self.units[unit.id] = unit

    def add_item(self, item: ItemData) -> None:
        self.items[item.id] = item

    def skill(self, skill_id: str) -> Skill:
        try:
            return self.skills[skill_id]
        except KeyError:
            raise DataNotFoundError("skills", skill_id) from None

    def unit(self, unit_id: str) -> UnitTemplate:
        try:
            return self.units[unit_id]
        except KeyError:
            raise DataNotFoundError("units", unit_id) from None

    def item(self, item_id: str) -> ItemData:
        try:
            return self.items[item_id]
        except KeyError:
            raise DataNotFoundError("items", item_id) from None

    def create_combatant(
        self,
        unit_id: str,
        side: Side = Side.PLAYER,
        name: Optional[str] = None,
        position: int = 0,
    ) -> Combatant:
        """Fresh combatant at full HP/MP from a unit template."""
        template = self.unit(unit_id)
        return Combatant(
            name=name or template.name,
            side=side,
            stats=CharacterStats(
                attack=template.attack,
                defense=template.defense,
                magic=template.magic,
                speed=template.speed,
            ),
            health=Health(current=template.max_hp, max_hp=template.max_hp),
            mana=Mana(current=template.max_mp, max_mp=template.max_mp),
            skills=[self.skills[s] for s in template.skills if s in self.skills],
            position_index=position,
            unit_class=template.unit_class,
            template_id=template.id,
            description=template.description,
        )


def load_catalog(data_path: Path | str) -> Catalog:
    """Load and validate a data directory into a catalog."""
    database = Database(data_path)
    database.load_all()
    return Catalog.from_database(database)


@lru_cache(maxsize=1)
def builtin_catalog() -> Catalog:
    """The roster shipped with the package."""
    return load_catalog(DATA_DIR)

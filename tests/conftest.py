import random

import pytest

from higher_framework.battle import Side


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from higher_engine.core.events import EventBus
    return EventBus()


@pytest.fixture
def rng():
    """Seeded RNG so AI and random targeting are reproducible."""
    return random.Random(1234)


@pytest.fixture
def catalog():
    """The built-in unit/skill/item roster."""
    from higher_framework.battle import builtin_catalog
    return builtin_catalog()


@pytest.fixture
def make_unit():
    """Factory for combatants with explicit stats."""
    from higher_framework.battle import Combatant
    from higher_framework.components import CharacterStats, Health, Mana

    def _make(
        name="Unit",
        side=Side.PLAYER,
        hp=100,
        mp=50,
        attack=10,
        defense=5,
        magic=10,
        speed=10,
        skills=(),
        current_hp=None,
        current_mp=None,
    ):
        return Combatant(
            name=name,
            side=side,
            stats=CharacterStats(attack=attack, defense=defense, magic=magic, speed=speed),
            health=Health(current=hp if current_hp is None else current_hp, max_hp=hp),
            mana=Mana(current=mp if current_mp is None else current_mp, max_mp=mp),
            skills=list(skills),
        )

    return _make


@pytest.fixture
def warrior(catalog):
    return catalog.create_combatant("warrior", Side.PLAYER)


@pytest.fixture
def mage(catalog):
    return catalog.create_combatant("mage", Side.PLAYER)


@pytest.fixture
def cleric(catalog):
    return catalog.create_combatant("cleric", Side.PLAYER)


@pytest.fixture
def goblin(catalog):
    return catalog.create_combatant("goblin", Side.ENEMY)


@pytest.fixture
def orc(catalog):
    return catalog.create_combatant("orc", Side.ENEMY)

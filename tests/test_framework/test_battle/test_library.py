import json

import pytest

from higher_engine.errors import DataNotFoundError
from higher_framework.battle import BattleConfig, Side, load_catalog
from higher_framework.battle.library import DATA_DIR
from higher_framework.components import UnitClass


def test_builtin_roster(catalog):
    assert set(catalog.units) == {"warrior", "mage", "rogue", "cleric", "goblin", "orc"}
    assert len(catalog.skills) == 18
    assert set(catalog.items) == {"health_potion", "mana_potion"}


def test_unit_templates(catalog):
    mage = catalog.unit("mage")
    assert mage.unit_class is UnitClass.MAGE
    assert (mage.max_hp, mage.max_mp, mage.magic) == (80, 50, 18)
    assert mage.skills == ["firebolt", "heal"]


def test_skills_are_shared(catalog):
    mage = catalog.create_combatant("mage")
    cleric = catalog.create_combatant("cleric")
    assert mage.skills[1] is cleric.skills[0]


def test_create_combatant(catalog):
    goblin = catalog.create_combatant("goblin", Side.ENEMY, name="Goblin B", position=1)
    assert goblin.name == "Goblin B"
    assert goblin.side is Side.ENEMY
    assert goblin.position_index == 1
    assert goblin.template_id == "goblin"
    assert goblin.current_hp == 60


def test_missing_ids_raise(catalog):
    with pytest.raises(DataNotFoundError):
        catalog.unit("dragon")
    with pytest.raises(DataNotFoundError):
        catalog.skill("meteor")
    with pytest.raises(KeyError):
        catalog.item("elixir")


def test_load_custom_data(tmp_path, caplog):
    (tmp_path / "schemas").mkdir()
    for schema in (DATA_DIR / "schemas").glob("*.json"):
        (tmp_path / "schemas" / schema.name).write_text(schema.read_text())

    units = tmp_path / "database" / "units"
    units.mkdir(parents=True)
    (units / "slime.json").write_text(json.dumps({
        "id": "slime",
        "name": "Slime",
        "max_hp": 20,
        "attack": 3,
        "skills": ["ooze"],
    }))

    catalog = load_catalog(tmp_path)

    slime = catalog.create_combatant("slime", Side.ENEMY)
    assert slime.current_hp == 20
    assert slime.skills == []
    assert "unknown skills: ooze" in caplog.text


def test_config_from_dict(caplog):
    config = BattleConfig.from_dict({"exp_per_enemy": 10, "seed": 3, "music": "boss"})
    assert config.exp_per_enemy == 10
    assert config.seed == 3
    assert config.gold_per_enemy == 25
    assert "music" in caplog.text


def test_config_validation():
    with pytest.raises(ValueError):
        BattleConfig(enemy_skill_chance=1.5)
    with pytest.raises(ValueError):
        BattleConfig(buff_duration=0)

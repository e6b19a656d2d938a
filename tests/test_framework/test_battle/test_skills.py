import pytest

from higher_framework.battle import Side, Skill, TargetShape, resolve_skill
from higher_framework.battle.skills import (
    can_cast,
    damage_against,
    heal_amount,
    status_effects_for,
)
from higher_framework.components import DamageType, StatusType


def test_damage_against(make_unit):
    caster = make_unit(attack=15, magic=18)

    physical = Skill(id="p", name="P", power=25, damage_type=DamageType.PHYSICAL)
    magical = Skill(id="m", name="M", power=30, damage_type=DamageType.MAGICAL)
    true = Skill(id="t", name="T", power=12, damage_type=DamageType.TRUE)

    assert damage_against(physical, caster) == 40
    assert damage_against(magical, caster) == 66
    assert damage_against(true, caster) == 12


def test_heal_amount(make_unit):
    caster = make_unit(magic=14)
    assert heal_amount(Skill(id="h", name="H", heal_power=35), caster) == 49
    assert heal_amount(Skill(id="x", name="X", power=10), caster) == 0


def test_can_cast(make_unit):
    skill = Skill(id="s", name="S", mp_cost=8)
    assert not can_cast(skill, make_unit(current_mp=5))
    assert can_cast(skill, make_unit(current_mp=8))


def test_negative_values_rejected():
    with pytest.raises(ValueError):
        Skill(id="bad", name="Bad", mp_cost=-1)


def test_skills_are_immutable(catalog):
    skill = catalog.skill("heal")
    with pytest.raises(AttributeError):
        skill.mp_cost = 0


def test_status_effects_for(catalog):
    bless = status_effects_for(catalog.skill("bless"), buff_duration=3)
    kinds = [(e.status_type, e.duration, e.potency) for e in bless]

    assert kinds == [
        (StatusType.BLESSED, 4, 0),
        (StatusType.ATTACK_UP, 3, 5),
        (StatusType.DEFENSE_UP, 3, 5),
        (StatusType.MAGIC_UP, 3, 5),
    ]

    firebolt = status_effects_for(catalog.skill("firebolt"))
    assert [(e.status_type, e.potency) for e in firebolt] == [(StatusType.BURN, 8)]


def test_resolve_skill_failed_cast_touches_nothing(catalog, make_unit):
    caster = make_unit(current_mp=5, skills=[catalog.skill("power_strike")])
    target = make_unit(side=Side.ENEMY)

    resolution = resolve_skill(catalog.skill("power_strike"), caster, [target])

    assert not resolution.success
    assert resolution.mp_spent == 0
    assert caster.current_mp == 5
    assert target.current_hp == target.max_hp
    assert resolution.outcomes == []


def test_resolve_skill_folds_over_targets(catalog, make_unit):
    caster = make_unit(magic=18)
    targets = [
        make_unit(name="A", side=Side.ENEMY, magic=10),
        make_unit(name="B", side=Side.ENEMY, magic=2, hp=30),
    ]

    resolution = resolve_skill(catalog.skill("lightning"), caster, targets)

    # 18 + 18*2 = 54 raw
    assert resolution.success
    assert resolution.mp_spent == 20
    assert caster.current_mp == 30
    assert [o.damage for o in resolution.outcomes] == [49, 30]
    assert [o.defeated for o in resolution.outcomes] == [False, True]


def test_resolve_skill_applies_damage_and_status(catalog, make_unit):
    caster = make_unit(magic=18)
    target = make_unit(side=Side.ENEMY, hp=200, magic=10)

    resolution = resolve_skill(catalog.skill("firebolt"), caster, [target])

    outcome = resolution.outcomes[0]
    assert outcome.damage == 61
    assert target.has_status(StatusType.BURN)
    assert [e.status_type for e in outcome.statuses] == [StatusType.BURN]


def test_no_status_on_target_killed_by_the_hit(catalog, make_unit):
    caster = make_unit(magic=18)
    target = make_unit(side=Side.ENEMY, hp=10)

    resolution = resolve_skill(catalog.skill("firebolt"), caster, [target])

    assert resolution.outcomes[0].defeated
    assert not target.has_status(StatusType.BURN)


def test_resolve_heal(catalog, make_unit):
    cleric = make_unit(magic=14)
    ally = make_unit(hp=100, current_hp=40)

    resolution = resolve_skill(catalog.skill("heal"), cleric, [ally])

    assert resolution.outcomes[0].healing == 49
    assert ally.current_hp == 89


def test_describe(catalog):
    assert catalog.skill("firebolt").describe() == (
        "Firebolt (MP: 12) - Damage: 30 magical - Status: burn (2 turns)"
    )
    assert catalog.skill("aimed_shot").target_shape is TargetShape.RANDOM_ENEMY

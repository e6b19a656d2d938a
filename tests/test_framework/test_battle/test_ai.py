import random

from higher_framework.battle import ActionType, EnemyAI, Side


def test_attacks_living_player_when_not_rolling_skill(rng, catalog, make_unit):
    ai = EnemyAI(rng, skill_chance=0.0)
    enemy = make_unit(side=Side.ENEMY, skills=[catalog.skill("bite")])
    dead = make_unit(name="Dead", current_hp=0)
    alive = make_unit(name="Alive")

    for _ in range(10):
        action = ai.choose_action(enemy, [dead, alive], [enemy])
        assert action.action_type is ActionType.ATTACK
        assert action.target is alive


def test_casts_when_skill_roll_succeeds(rng, catalog, make_unit):
    ai = EnemyAI(rng, skill_chance=1.0)
    enemy = make_unit(side=Side.ENEMY, skills=[catalog.skill("bite")])
    player = make_unit()

    action = ai.choose_action(enemy, [player], [enemy])

    assert action.action_type is ActionType.SKILL
    assert action.skill is catalog.skill("bite")
    assert action.targets == [player]


def test_falls_back_to_attack_without_mp(rng, catalog, make_unit):
    ai = EnemyAI(rng, skill_chance=1.0)
    enemy = make_unit(side=Side.ENEMY, current_mp=0, skills=[catalog.skill("bite")])
    player = make_unit()

    action = ai.choose_action(enemy, [player], [enemy])

    assert action.action_type is ActionType.ATTACK


def test_group_skill_leaves_targets_to_executor(rng, catalog, make_unit):
    ai = EnemyAI(rng, skill_chance=1.0)
    enemy = make_unit(side=Side.ENEMY, skills=[catalog.skill("intimidating_roar")])

    action = ai.choose_action(enemy, [make_unit(), make_unit()], [enemy])

    assert action.action_type is ActionType.SKILL
    assert action.targets == []


def test_no_opponents(rng, make_unit):
    ai = EnemyAI(rng)
    enemy = make_unit(side=Side.ENEMY)
    assert ai.choose_action(enemy, [make_unit(current_hp=0)], [enemy]) is None


def test_same_seed_same_choices(catalog, make_unit):
    enemy = make_unit(side=Side.ENEMY, skills=[catalog.skill("bite"), catalog.skill("poison_spit")])
    players = [make_unit(name=f"P{i}") for i in range(3)]

    def run(seed):
        ai = EnemyAI(random.Random(seed))
        picks = []
        for _ in range(30):
            action = ai.choose_action(enemy, players, [enemy])
            picks.append((action.action_type, action.skill, action.targets[0].name if action.targets else None))
        return picks

    assert run(42) == run(42)

import random

import pytest

from higher_framework.battle import Side, TargetShape, candidate_pool, valid_targets


@pytest.fixture
def rosters(make_unit):
    players = [make_unit(name="P1"), make_unit(name="P2", current_hp=0)]
    enemies = [
        make_unit(name="E1", side=Side.ENEMY),
        make_unit(name="E2", side=Side.ENEMY),
        make_unit(name="E3", side=Side.ENEMY, current_hp=0),
    ]
    return players, enemies


def names(units):
    return [u.name for u in units]


def test_self(rosters):
    players, enemies = rosters
    assert valid_targets(TargetShape.SELF, players[0], players, enemies) == [players[0]]


@pytest.mark.parametrize("shape", [TargetShape.SINGLE_ALLY, TargetShape.ALL_ALLIES])
def test_ally_shapes(rosters, shape):
    players, enemies = rosters
    assert names(valid_targets(shape, players[0], players, enemies)) == ["P1"]
    assert names(valid_targets(shape, enemies[0], players, enemies)) == ["E1", "E2"]


@pytest.mark.parametrize("shape", [TargetShape.SINGLE_ENEMY, TargetShape.ALL_ENEMIES])
def test_enemy_shapes(rosters, shape):
    players, enemies = rosters
    assert names(valid_targets(shape, players[0], players, enemies)) == ["E1", "E2"]
    assert names(valid_targets(shape, enemies[0], players, enemies)) == ["P1"]


def test_random_enemy_picks_one_living(rosters):
    players, enemies = rosters
    rng = random.Random(5)

    for _ in range(20):
        picked = valid_targets(TargetShape.RANDOM_ENEMY, players[0], players, enemies, rng)
        assert len(picked) == 1
        assert picked[0].name in ("E1", "E2")


def test_random_enemy_empty_when_all_dead(make_unit):
    player = make_unit()
    enemies = [make_unit(side=Side.ENEMY, current_hp=0)]
    assert valid_targets(TargetShape.RANDOM_ENEMY, player, [player], enemies) == []


def test_candidate_pool_lists_every_random_enemy_choice(rosters):
    players, enemies = rosters
    pool = candidate_pool(TargetShape.RANDOM_ENEMY, players[0], players, enemies)
    assert names(pool) == ["E1", "E2"]


def test_candidate_pool_self(rosters):
    players, enemies = rosters
    assert candidate_pool(TargetShape.SELF, enemies[1], players, enemies) == [enemies[1]]

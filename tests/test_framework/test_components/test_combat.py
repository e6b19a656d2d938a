import pytest

from higher_framework.components import (
    StatusEffect,
    StatusLedger,
    StatusType,
    default_potency,
)


def test_status_type_classification():
    assert StatusType.POISON.is_damage_over_time
    assert not StatusType.POISON.is_positive
    assert StatusType.REGENERATION.is_positive
    assert StatusType.ATTACK_DOWN.stat_delta == ("attack", -1)
    assert StatusType.BLINDED.stat_delta is None


def test_for_stat():
    assert StatusType.for_stat("defense", True) is StatusType.DEFENSE_UP
    assert StatusType.for_stat("attack", False) is StatusType.ATTACK_DOWN
    with pytest.raises(ValueError):
        StatusType.for_stat("luck", True)


def test_default_potency():
    assert default_potency(StatusType.POISON) == 6
    assert default_potency(StatusType.BURN) == 8
    assert default_potency(StatusType.FREEZE) == 4
    assert default_potency(StatusType.REGENERATION) == 10
    assert default_potency(StatusType.DEFENSE_UP) == 5
    assert default_potency(StatusType.BLESSED) == 0


def test_effect_tick():
    effect = StatusEffect(StatusType.POISON, duration=2, potency=6)
    assert not effect.tick()
    assert effect.tick()
    assert effect.duration == 0


def test_ledger_keeps_insertion_order():
    ledger = StatusLedger()
    ledger.add(StatusEffect(StatusType.BURN, 2, 8))
    ledger.add(StatusEffect(StatusType.POISON, 4, 6))

    assert [e.status_type for e in ledger] == [StatusType.BURN, StatusType.POISON]
    assert len(ledger) == 2


def test_ledger_reapply_refreshes():
    ledger = StatusLedger()
    ledger.add(StatusEffect(StatusType.POISON, 4, 6))
    ledger.add(StatusEffect(StatusType.POISON, 2, 3))

    assert len(ledger) == 1
    effect = ledger.get(StatusType.POISON)
    assert effect.duration == 2
    assert effect.potency == 6


def test_ledger_dispel_clears():
    ledger = StatusLedger()
    ledger.add(StatusEffect(StatusType.POISON, 4, 6))
    ledger.add(StatusEffect(StatusType.ATTACK_DOWN, 3, 3))
    ledger.add(StatusEffect(StatusType.DISPEL, 1))

    assert [e.status_type for e in ledger] == [StatusType.DISPEL]


def test_stat_modifier():
    ledger = StatusLedger()
    ledger.add(StatusEffect(StatusType.ATTACK_UP, 3, 5))
    ledger.add(StatusEffect(StatusType.ATTACK_DOWN, 3, 3))
    ledger.add(StatusEffect(StatusType.DEFENSE_DOWN, 3, 4))

    assert ledger.stat_modifier("attack") == 2
    assert ledger.stat_modifier("defense") == -4
    assert ledger.stat_modifier("magic") == 0


def test_drop_expired_and_remove():
    ledger = StatusLedger()
    ledger.add(StatusEffect(StatusType.SLOW, 1))
    ledger.add(StatusEffect(StatusType.BLINDED, 3))

    for effect in ledger:
        effect.tick()
    expired = ledger.drop_expired()

    assert [e.status_type for e in expired] == [StatusType.SLOW]
    assert ledger.has(StatusType.BLINDED)
    assert ledger.remove(StatusType.BLINDED)
    assert not ledger.remove(StatusType.BLINDED)
    assert len(ledger) == 0

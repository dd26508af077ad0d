"""Tests for the Forma cost counter."""

from wf_planner.engine.forma import FormaCount, forma_cost
from wf_planner.models.constants import (
    AP_ANY,
    AP_ATTACK,
    AP_DEFENSE,
    AP_POWER,
    AP_UMBRA,
    AURA,
    EXILUS,
    GENERAL,
)
from wf_planner.models.mod import ModSlot, SlotPolarity


def _general(*polarities: str | None) -> list[SlotPolarity]:
    return [SlotPolarity(p, GENERAL) for p in polarities]


def test_identical_layouts_cost_nothing():
    layout = _general(AP_ATTACK, AP_DEFENSE, None)
    assert forma_cost(layout, list(layout)) == FormaCount()


def test_moving_a_polarity_is_free():
    assert forma_cost(_general(AP_ATTACK, None), _general(None, AP_ATTACK)).total == 0


def test_new_universal_on_general_slot():
    result = forma_cost(_general(None, None), _general(AP_ANY, None))
    assert result == FormaCount(universal=1, total=1)


def test_new_universal_on_aura_slot_is_stance_forma():
    default = [SlotPolarity(None, GENERAL), SlotPolarity(None, AURA)]
    desired = [SlotPolarity(None, GENERAL), SlotPolarity(AP_ANY, AURA)]
    assert forma_cost(default, desired) == FormaCount(stance=1, total=1)


def test_universal_on_exilus_is_omni_forma():
    default = [SlotPolarity(None, EXILUS)]
    desired = [SlotPolarity(AP_ANY, EXILUS)]
    assert forma_cost(default, desired) == FormaCount(universal=1, total=1)


def test_replacing_a_polarity_costs_one_regular():
    assert forma_cost(_general(AP_ATTACK), _general(AP_DEFENSE)) == FormaCount(
        regular=1, total=1,
    )


def test_clearing_a_polarity_costs_one_regular():
    assert forma_cost(_general(AP_ATTACK), _general(None)) == FormaCount(regular=1, total=1)


def test_umbra_forma():
    assert forma_cost(_general(None), _general(AP_UMBRA)) == FormaCount(umbra=1, total=1)
    # Replacing a default with umbra doesn't need a separate clear
    assert forma_cost(_general(AP_ATTACK), _general(AP_UMBRA)) == FormaCount(umbra=1, total=1)


def test_mixed_layout():
    default = _general(AP_ATTACK, AP_ATTACK, AP_DEFENSE, None)
    desired = _general(AP_ATTACK, AP_POWER, AP_POWER, AP_ANY)
    assert forma_cost(default, desired) == FormaCount(regular=2, universal=1, total=3)


def test_unmatched_defaults_beyond_additions_are_cleared():
    default = _general(AP_ATTACK, AP_DEFENSE, AP_POWER)
    desired = _general(AP_UMBRA, None, None)
    assert forma_cost(default, desired) == FormaCount(regular=2, umbra=1, total=3)


def test_accepts_mod_slots_and_leaves_them_alone():
    default = [ModSlot(index=0, polarity=AP_ATTACK), ModSlot(index=1)]
    desired = [ModSlot(index=0), ModSlot(index=1, polarity=AP_ATTACK)]
    assert forma_cost(default, desired).total == 0
    assert default[0].polarity == AP_ATTACK
    assert desired[1].polarity == AP_ATTACK

"""Tests for derived warframe and weapon stats."""

import pytest

from wf_planner.engine.stat_aggregator import aggregate_mods
from wf_planner.models.derived_stats import (
    StatPair,
    compute_warframe_stats,
    compute_weapon_stats,
)
from wf_planner.models.item import Warframe, Weapon
from wf_planner.models.mod import Mod, ModSlot


def _mod(name: str, text: str) -> Mod:
    return Mod(unique_name=f"/Mods/{name}", name=name, fusion_limit=0, description=[text])


@pytest.fixture
def excalibur() -> Warframe:
    return Warframe(
        unique_name="/Lotus/Powersuits/Excalibur/Excalibur",
        name="Excalibur",
        health=100,
        shield=100,
        armor=225,
        power=100,
        sprint_speed=1.1,
    )


@pytest.fixture
def rifle() -> Weapon:
    return Weapon(
        unique_name="/Lotus/Weapons/Test/Rifle",
        name="Test Rifle",
        product_category="LongGuns",
        total_damage=30.0,
        critical_chance=0.2,
        critical_multiplier=2.0,
        proc_chance=0.1,
        fire_rate=10.0,
        multishot=1.0,
        magazine_size=30,
        reload_time=2.0,
    )


# --- Warframe ---


def test_unmodded_warframe(excalibur):
    stats = compute_warframe_stats(excalibur, [])
    assert stats.health == StatPair(100, 100)
    assert stats.ability_strength == StatPair(100.0, 100.0)
    assert stats.sprint_speed.modded == pytest.approx(1.1)


def test_modded_warframe(excalibur):
    slots = [
        ModSlot(index=0, mod=_mod("Vitality", "+440% Health")),
        ModSlot(index=1, mod=_mod("Intensify", "+30% Ability Strength")),
        ModSlot(index=2, mod=_mod("Overextended", "+90% Ability Range\n-60% Ability Strength")),
        ModSlot(index=3, mod=_mod("Flow", "+150% Energy Max")),
    ]
    stats = compute_warframe_stats(excalibur, slots)
    assert stats.health.modded == pytest.approx(540.0)
    assert stats.energy.modded == pytest.approx(250.0)
    assert stats.ability_strength.modded == pytest.approx(70.0)
    assert stats.ability_range.modded == pytest.approx(190.0)
    assert stats.armor.modded == pytest.approx(225.0)


def test_missing_base_stats_default(excalibur):
    bare = Warframe(unique_name="/Lotus/Powersuits/Bare", name="Bare")
    stats = compute_warframe_stats(bare, [])
    assert stats.health == StatPair(0, 0)
    assert stats.sprint_speed == StatPair(1.0, 1.0)


def test_precomputed_effects_are_used(excalibur):
    slots = [ModSlot(index=0, mod=_mod("Vitality", "+440% Health"))]
    effects = aggregate_mods(slots)
    assert compute_warframe_stats(excalibur, [], effects=effects).health.modded == (
        pytest.approx(540.0)
    )


# --- Weapon ---


def test_unmodded_rifle_figures(rifle):
    stats = compute_weapon_stats(rifle, [])
    assert not stats.is_melee
    assert stats.average_hit == pytest.approx(36.0)
    assert stats.burst_dps == pytest.approx(360.0)
    # 30 rounds at 10/s = 3s firing, then 2s reloading
    assert stats.sustained_dps == pytest.approx(216.0)
    assert stats.status_per_sec == pytest.approx(1.0)


def test_modded_rifle(rifle):
    slots = [
        ModSlot(index=0, mod=_mod("Serration", "+165% Damage")),
        ModSlot(index=1, mod=_mod("SplitChamber", "+90% Multishot")),
        ModSlot(index=2, mod=_mod("Magazine", "+30% Magazine Capacity")),
        ModSlot(index=3, mod=_mod("Reload", "+50% Reload Speed")),
    ]
    stats = compute_weapon_stats(rifle, slots)
    assert stats.base.total_damage == pytest.approx(30.0)
    assert stats.modded.total_damage == pytest.approx(79.5)
    assert stats.modded.multishot == pytest.approx(1.9)
    assert stats.modded.magazine_size == 39
    assert stats.modded.reload_time == pytest.approx(2.0 / 1.5)
    assert stats.average_hit == pytest.approx(79.5 * 1.9 * 1.2)


def test_ammo_cost_reduces_shots_per_magazine(rifle):
    burst_rifle = Weapon(
        unique_name=rifle.unique_name,
        name=rifle.name,
        total_damage=30.0,
        critical_chance=0.2,
        critical_multiplier=2.0,
        fire_rate=10.0,
        magazine_size=30,
        reload_time=2.0,
        fire_behaviors='[{"ammoRequirement": 3}]',
    )
    stats = compute_weapon_stats(burst_rifle, [])
    assert stats.sustained_dps == pytest.approx(120.0)


def test_melee_has_no_reload_penalty():
    sword = Weapon(
        unique_name="/Lotus/Weapons/Test/Sword",
        name="Test Sword",
        total_damage=100.0,
        critical_chance=0.1,
        critical_multiplier=2.0,
        fire_rate=1.0,
        range=2.5,
    )
    stats = compute_weapon_stats(sword, [ModSlot(index=0, mod=_mod("Fury", "+30% Attack Speed"))])
    assert stats.is_melee
    assert stats.modded.fire_rate == pytest.approx(1.3)
    assert stats.sustained_dps == pytest.approx(stats.burst_dps)


def test_missing_weapon_stats_default():
    bare = Weapon(unique_name="/Lotus/Weapons/Bare", name="Bare", total_damage=10.0, fire_rate=2.0)
    stats = compute_weapon_stats(bare, [])
    assert stats.base.crit_multiplier == 1.0
    assert stats.base.multishot == 1.0
    assert stats.average_hit == pytest.approx(10.0)
    assert stats.sustained_dps == pytest.approx(20.0)

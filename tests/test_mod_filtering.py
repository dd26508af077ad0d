"""Tests for mod lockout and compatibility filtering."""

import pytest

from wf_planner.engine.mod_filtering import (
    filter_compatible_mods,
    is_mod_compatible,
    is_mod_locked_out,
    mod_base_name,
    mod_lockout_key,
)
from wf_planner.models.constants import (
    ARCHGUN,
    COMPANION,
    MELEE,
    NECRAMECH,
    PRIMARY,
    SECONDARY,
    WARFRAME,
)
from wf_planner.models.item import Warframe, Weapon
from wf_planner.models.mod import Mod


def _mod(name: str, mod_type: str | None, compat: str | None = None, **kwargs) -> Mod:
    return Mod(
        unique_name=f"/Mods/{name.replace(' ', '')}",
        name=name,
        type=mod_type,
        compat_name=compat,
        **kwargs,
    )


@pytest.fixture
def excalibur_prime() -> Warframe:
    return Warframe(unique_name="/Lotus/Powersuits/Excalibur/ExcaliburPrime", name="Excalibur Prime")


@pytest.fixture
def rifle() -> Weapon:
    return Weapon(unique_name="/Lotus/Weapons/Braton", name="Braton", product_category="LongGuns")


@pytest.fixture
def shotgun() -> Weapon:
    return Weapon(unique_name="/Lotus/Weapons/Hek", name="Hek", product_category="Shotgun")


# --- Lockout ---


@pytest.mark.parametrize("name, base", [
    ("Primed Continuity", "Continuity"),
    ("Umbral Vitality", "Vitality"),
    ("Archon Flow", "Flow"),
    ("Continuity", "Continuity"),
    ("Primedrive", "Primedrive"),
])
def test_mod_base_name(name, base):
    assert mod_base_name(name) == base


def test_variants_lock_each_other_out():
    continuity = _mod("Continuity", "WARFRAME")
    primed = _mod("Primed Continuity", "WARFRAME")
    assert mod_lockout_key(continuity) == mod_lockout_key(primed) == "continuity|warframe"
    assert is_mod_locked_out(primed, [continuity])
    assert is_mod_locked_out(continuity, [primed])


def test_same_name_on_other_equipment_is_not_locked_out():
    rifle_mod = Mod(unique_name="/Mods/Rifle/PointStrike", name="Point Strike", type="PRIMARY")
    pistol_mod = Mod(unique_name="/Mods/Pistol/PointStrike", name="Point Strike", type="SECONDARY")
    assert not is_mod_locked_out(rifle_mod, [pistol_mod])


def test_same_unique_name_is_locked_out():
    mod = _mod("Serration", "PRIMARY")
    assert is_mod_locked_out(mod, [mod])
    assert not is_mod_locked_out(mod, [])


# --- Compatibility ---


def test_warframe_mods(excalibur_prime):
    assert is_mod_compatible(_mod("Steel Charge", "AURA"), WARFRAME)
    assert is_mod_compatible(_mod("Vitality", "WARFRAME", "WARFRAME"), WARFRAME)
    assert not is_mod_compatible(_mod("Serration", "PRIMARY", "Rifle"), WARFRAME)


def test_augment_matches_prime_variant(excalibur_prime):
    augment = _mod("Surging Dash", "WARFRAME", "Excalibur")
    assert is_mod_compatible(augment, WARFRAME, excalibur_prime)
    assert not is_mod_compatible(augment, WARFRAME)
    other = Warframe(unique_name="/Lotus/Powersuits/Mag/Mag", name="Mag")
    assert not is_mod_compatible(augment, WARFRAME, other)


def test_primary_mods_follow_weapon_category(rifle, shotgun):
    rifle_mod = _mod("Serration", "PRIMARY", "Rifle")
    assert is_mod_compatible(rifle_mod, PRIMARY, rifle)
    assert not is_mod_compatible(rifle_mod, PRIMARY, shotgun)
    assert is_mod_compatible(_mod("Hell's Chamber", "PRIMARY", "Shotgun"), PRIMARY, shotgun)
    assert is_mod_compatible(_mod("Generic", "PRIMARY", "PRIMARY"), PRIMARY, shotgun)


def test_weapon_augment_matches_by_name(rifle):
    assert is_mod_compatible(_mod("Braton Augment", "PRIMARY", "Braton"), PRIMARY, rifle)


def test_secondary_and_melee():
    assert is_mod_compatible(_mod("Hornet Strike", "SECONDARY", "Pistol"), SECONDARY)
    assert is_mod_compatible(_mod("Crimson Dervish", "STANCE", "Dual Swords"), MELEE)
    assert is_mod_compatible(_mod("Pressure Point", "MELEE", "Melee"), MELEE)
    assert not is_mod_compatible(_mod("Serration", "PRIMARY", "Rifle"), MELEE)


def test_other_equipment_types():
    assert is_mod_compatible(_mod("Guardian", "SENTINEL"), COMPANION)
    assert is_mod_compatible(_mod("Charged Chamber", "ARCH-GUN", "Archgun"), ARCHGUN)
    assert is_mod_compatible(_mod("Necramech Vitality", "---", "Necramech"), NECRAMECH)
    assert not is_mod_compatible(_mod("Serration", "PRIMARY", "Rifle"), "unknown")


def test_any_compat_fits_everything():
    anything = _mod("Universal", "PRIMARY", "ANY")
    assert all(is_mod_compatible(anything, t) for t in (WARFRAME, MELEE, COMPANION))


def test_filter_compatible_mods(rifle):
    mods = [
        _mod("Serration", "PRIMARY", "Rifle"),
        _mod("Vitality", "WARFRAME", "WARFRAME"),
        _mod("Split Chamber", "PRIMARY", "Rifle"),
    ]
    assert [m.name for m in filter_compatible_mods(mods, PRIMARY, rifle)] == [
        "Serration", "Split Chamber",
    ]

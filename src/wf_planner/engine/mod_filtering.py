"""Mod lockout and equipment compatibility.

Variants of the same mod (Primed Continuity, Umbral Vitality, ...) lock
each other out: only one mod per base name and mod type may be equipped.
Compatibility is decided from the mod's type and compat_name fields.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Protocol

from wf_planner.models.constants import (
    ARCHGUN,
    ARCHMELEE,
    ARCHWING,
    COMPANION,
    KDRIVE,
    MELEE,
    NECRAMECH,
    PRIMARY,
    SECONDARY,
    WARFRAME,
)
from wf_planner.models.mod import Mod


VARIANT_PREFIXES: tuple[str, ...] = (
    "Primed",
    "Archon",
    "Umbral",
    "Amalgam",
    "Necramech",
    "Enhanced",
    "Link",
    "Galvanized",
    "Spectral",
)

# Weapon product_category -> compat_names that fit it
WEAPON_CATEGORY_COMPAT: dict[str, tuple[str, ...]] = {
    "LongGuns": ("Rifle", "PRIMARY", "Assault Rifle"),
    "Shotgun": ("Shotgun", "PRIMARY"),
    "Bow": ("Bow", "PRIMARY"),
    "Sniper": ("Sniper", "PRIMARY"),
    "Pistols": ("Pistol",),
    "Thrown": ("Thrown",),
    "Melee": ("Melee",),
    "SpaceGuns": ("Archgun",),
    "SpaceMelee": ("Archmelee",),
}

_COMPANION_MOD_TYPES = frozenset(("SENTINEL", "KAVAT", "KUBROW", "HELMINTH CHARGER"))
_SINGLE_TYPE_EQUIPMENT: dict[str, str] = {
    ARCHGUN: "ARCH-GUN",
    ARCHMELEE: "ARCH-MELEE",
    ARCHWING: "ARCHWING",
}
_GENERIC_TYPE_EQUIPMENT: dict[str, str] = {
    NECRAMECH: "necramech",
    KDRIVE: "k-drive",
}


class EquipmentRef(Protocol):
    unique_name: str
    name: str


def mod_base_name(name: str) -> str:
    """Strip one variant prefix: "Primed Continuity" -> "Continuity"."""
    for prefix in VARIANT_PREFIXES:
        if name.startswith(prefix + " "):
            return name[len(prefix) + 1:]
    return name


def mod_lockout_key(mod: Mod) -> str:
    return f"{mod_base_name(mod.name).lower()}|{(mod.type or '').lower()}"


def is_mod_locked_out(candidate: Mod, equipped: Iterable[Mod]) -> bool:
    """True if `candidate` (or a variant of it) is already equipped."""
    key = mod_lockout_key(candidate)
    for mod in equipped:
        if mod.unique_name == candidate.unique_name or mod_lockout_key(mod) == key:
            return True
    return False


def _normalized_name(equipment: EquipmentRef) -> str:
    return re.sub(r"\s+", " ", equipment.name).upper()


def _warframe_compatible(mod: Mod, mod_type: str, compat: str,
                         equipment: EquipmentRef | None) -> bool:
    if mod_type == "AURA":
        return True
    if mod_type != "WARFRAME":
        return False
    if compat.upper() == "WARFRAME":
        return True
    if equipment is None:
        return False

    # Augments name the frame they belong to; primes share the base augment.
    frame_name = re.sub(r"\s+PRIME$", "", equipment.name, flags=re.IGNORECASE).upper()
    if compat.upper() == frame_name:
        return True
    if mod.subtype and equipment.unique_name:
        return (
            mod.subtype in equipment.unique_name
            or equipment.unique_name.replace("Prime", "", 1) in mod.subtype
        )
    return False


def _primary_compatible(mod_type: str, compat: str, equipment: EquipmentRef | None) -> bool:
    if mod_type != "PRIMARY":
        return False
    compat_upper = compat.upper()
    if compat_upper == "PRIMARY":
        return True

    category = getattr(equipment, "product_category", None) or ""
    if any(c.upper() == compat_upper for c in WEAPON_CATEGORY_COMPAT.get(category, ())):
        return True
    if equipment is not None and compat_upper == _normalized_name(equipment):
        return True
    if compat_upper.startswith("RIFLE") and category == "LongGuns":
        return True
    return compat_upper.startswith("SHOTGUN") and category == "Shotgun"


def _secondary_compatible(mod_type: str, compat: str, equipment: EquipmentRef | None) -> bool:
    if mod_type != "SECONDARY":
        return False
    compat_upper = compat.upper()
    if compat_upper in ("PISTOL", "SECONDARY") or compat_upper.startswith("PISTOL"):
        return True
    return equipment is not None and compat_upper == _normalized_name(equipment)


def is_mod_compatible(
    mod: Mod,
    equipment_type: str,
    equipment: EquipmentRef | None = None,
) -> bool:
    """Whether `mod` can be equipped on this kind of equipment."""
    mod_type = (mod.type or "").upper()
    compat = (mod.compat_name or "").strip()

    if compat.upper() == "ANY":
        return True

    if equipment_type == WARFRAME:
        return _warframe_compatible(mod, mod_type, compat, equipment)
    if equipment_type == PRIMARY:
        return _primary_compatible(mod_type, compat, equipment)
    if equipment_type == SECONDARY:
        return _secondary_compatible(mod_type, compat, equipment)
    if equipment_type == MELEE:
        return mod_type in ("STANCE", "MELEE")
    if equipment_type == COMPANION:
        return mod_type in _COMPANION_MOD_TYPES
    if equipment_type in _SINGLE_TYPE_EQUIPMENT:
        return mod_type == _SINGLE_TYPE_EQUIPMENT[equipment_type]
    if equipment_type in _GENERIC_TYPE_EQUIPMENT:
        return mod_type == "---" and compat.lower() == _GENERIC_TYPE_EQUIPMENT[equipment_type]
    return False


def filter_compatible_mods(
    mods: Iterable[Mod],
    equipment_type: str,
    equipment: EquipmentRef | None = None,
) -> list[Mod]:
    return [mod for mod in mods if is_mod_compatible(mod, equipment_type, equipment)]

"""Modded stat summaries for warframes and weapons.

Thin composition over the stat aggregator: base values come from the
equipment record, deltas from the equipped mods. Formulas follow the
in-game arsenal display:

  - additive-percent stats:  modded = base * (1 + delta)
  - ability stats:           modded = 100 + delta * 100   (shown as %)
  - average hit:             damage * multishot * (1 + cc * (cm - 1))
  - sustained DPS:           burst * fire_time / (fire_time + reload)
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from wf_planner.engine.rounding import round_half_up_int
from wf_planner.engine.stat_aggregator import aggregate_mods
from wf_planner.models.effect import EffectBag
from wf_planner.models.item import Warframe, Weapon
from wf_planner.models.mod import ModSlot


@dataclass(frozen=True, slots=True)
class StatPair:
    base: float
    modded: float


def _apply(base: float, delta: float) -> StatPair:
    return StatPair(base=base, modded=base * (1 + delta))


def _apply_percent(delta: float, base_percent: float = 100.0) -> StatPair:
    return StatPair(base=base_percent, modded=base_percent + delta * 100)


@dataclass(frozen=True, slots=True)
class WarframeStats:
    health: StatPair
    shield: StatPair
    armor: StatPair
    energy: StatPair
    sprint_speed: StatPair
    ability_strength: StatPair
    ability_duration: StatPair
    ability_efficiency: StatPair
    ability_range: StatPair


def compute_warframe_stats(
    warframe: Warframe,
    slots: Iterable[ModSlot],
    effects: EffectBag | None = None,
) -> WarframeStats:
    """Base and modded warframe stats. Missing base stats count as 0."""
    mods = effects if effects is not None else aggregate_mods(slots)
    return WarframeStats(
        health=_apply(warframe.health or 0, mods.health),
        shield=_apply(warframe.shield or 0, mods.shield),
        armor=_apply(warframe.armor or 0, mods.armor),
        energy=_apply(warframe.power or 0, mods.energy),
        sprint_speed=_apply(
            warframe.sprint_speed if warframe.sprint_speed is not None else 1.0,
            mods.sprint_speed,
        ),
        ability_strength=_apply_percent(mods.ability_strength),
        ability_duration=_apply_percent(mods.ability_duration),
        ability_efficiency=_apply_percent(mods.ability_efficiency),
        ability_range=_apply_percent(mods.ability_range),
    )


@dataclass(frozen=True, slots=True)
class WeaponSnapshot:
    """One column (base or modded) of the weapon stat table."""
    total_damage: float
    crit_chance: float
    crit_multiplier: float
    status_chance: float
    fire_rate: float
    multishot: float
    magazine_size: int | None
    reload_time: float | None


@dataclass(frozen=True, slots=True)
class WeaponStats:
    base: WeaponSnapshot
    modded: WeaponSnapshot
    is_melee: bool
    average_hit: float
    burst_dps: float
    sustained_dps: float
    status_per_sec: float


def _base_snapshot(weapon: Weapon) -> WeaponSnapshot:
    return WeaponSnapshot(
        total_damage=weapon.total_damage or 0.0,
        crit_chance=weapon.critical_chance or 0.0,
        crit_multiplier=weapon.critical_multiplier if weapon.critical_multiplier is not None else 1.0,
        status_chance=weapon.proc_chance or 0.0,
        fire_rate=weapon.fire_rate or 0.0,
        multishot=weapon.multishot if weapon.multishot is not None else 1.0,
        magazine_size=weapon.magazine_size,
        reload_time=weapon.reload_time,
    )


def _modded_snapshot(base: WeaponSnapshot, mods: EffectBag) -> WeaponSnapshot:
    magazine = base.magazine_size
    if magazine is not None:
        magazine = round_half_up_int(magazine * (1 + mods.magazine_capacity))
    reload_time = base.reload_time
    if reload_time is not None and mods.reload_speed > -1:
        reload_time = reload_time / (1 + mods.reload_speed)
    return WeaponSnapshot(
        total_damage=base.total_damage * (1 + mods.base_damage),
        crit_chance=base.crit_chance * (1 + mods.crit_chance),
        crit_multiplier=base.crit_multiplier * (1 + mods.crit_damage),
        status_chance=base.status_chance * (1 + mods.status_chance),
        fire_rate=base.fire_rate * (1 + mods.fire_rate),
        multishot=base.multishot * (1 + mods.multishot),
        magazine_size=magazine,
        reload_time=reload_time,
    )


def compute_weapon_stats(
    weapon: Weapon,
    slots: Iterable[ModSlot],
    effects: EffectBag | None = None,
) -> WeaponStats:
    """Base/modded weapon stats plus hit and DPS figures."""
    mods = effects if effects is not None else aggregate_mods(slots)
    base = _base_snapshot(weapon)
    modded = _modded_snapshot(base, mods)

    average_crit_mult = 1 + modded.crit_chance * (modded.crit_multiplier - 1)
    average_hit = modded.total_damage * modded.multishot * average_crit_mult
    burst_dps = average_hit * modded.fire_rate

    sustained_dps = burst_dps
    if (
        not weapon.is_melee
        and modded.magazine_size
        and modded.reload_time
        and modded.fire_rate > 0
    ):
        shots_per_mag = math.floor(modded.magazine_size / weapon.ammo_cost())
        fire_time = shots_per_mag / modded.fire_rate
        if fire_time + modded.reload_time > 0:
            sustained_dps = burst_dps * (fire_time / (fire_time + modded.reload_time))

    return WeaponStats(
        base=base,
        modded=modded,
        is_melee=weapon.is_melee,
        average_hit=average_hit,
        burst_dps=burst_dps,
        sustained_dps=sustained_dps,
        status_per_sec=modded.status_chance * modded.multishot * modded.fire_rate,
    )

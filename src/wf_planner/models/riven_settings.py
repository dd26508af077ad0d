"""Riven roll table with typed accessors.

Holds the per-category stat caps and the buff/curse multipliers for each
positive/negative combination. The table is game-balance data that changes
between updates, so the verifier only reads it through this wrapper.
RivenSettings.defaults() gives the current live values; from_mapping()
builds a replacement from plain data.

A stat's roll range is:

  cap * multiplier * disposition * (1 - roll_spread)
  .. cap * multiplier * disposition * (1 + roll_spread)

both bounds truncated to one decimal, the precision the game displays.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


_ELEMENTS = ("Heat", "Cold", "Electricity", "Toxin")
_PHYSICAL = ("Impact", "Puncture", "Slash")
_FACTIONS = ("Damage to Grineer", "Damage to Corpus", "Damage to Infested")


def _with_damage_types(stats: dict[str, float], element: float, physical: float,
                       faction: float = 45.0) -> dict[str, float]:
    table = dict(stats)
    table.update({name: element for name in _ELEMENTS})
    table.update({name: physical for name in _PHYSICAL})
    table.update({name: faction for name in _FACTIONS})
    return table


# Cap per stat at disposition 1.0 before the combination multiplier.
_VANILLA_STAT_CAPS: dict[str, dict[str, float]] = {
    "primary": _with_damage_types({
        "Damage": 165.0,
        "Multishot": 99.0,
        "Critical Chance": 150.0,
        "Critical Damage": 120.0,
        "Fire Rate": 60.0,
        "Status Chance": 90.0,
        "Status Duration": 100.0,
        "Magazine Capacity": 50.0,
        "Reload Speed": 60.0,
        "Ammo Maximum": 50.0,
        "Projectile Speed": 90.0,
        "Recoil": 90.0,
        "Zoom": 60.0,
    }, element=90.0, physical=120.0),
    "shotgun": _with_damage_types({
        "Damage": 165.0,
        "Multishot": 120.0,
        "Critical Chance": 90.0,
        "Critical Damage": 90.0,
        "Fire Rate": 90.0,
        "Status Chance": 90.0,
        "Status Duration": 99.0,
        "Magazine Capacity": 50.0,
        "Reload Speed": 49.5,
        "Ammo Maximum": 90.0,
        "Projectile Speed": 90.0,
        "Recoil": 79.2,
    }, element=90.0, physical=120.0),
    "secondary": _with_damage_types({
        "Damage": 220.0,
        "Multishot": 120.0,
        "Critical Chance": 150.0,
        "Critical Damage": 90.0,
        "Fire Rate": 75.0,
        "Status Chance": 90.0,
        "Status Duration": 99.0,
        "Magazine Capacity": 50.0,
        "Reload Speed": 50.0,
        "Ammo Maximum": 90.0,
        "Projectile Speed": 90.0,
        "Recoil": 90.0,
        "Zoom": 80.0,
    }, element=90.0, physical=120.0),
    "melee": _with_damage_types({
        "Damage": 165.0,
        "Critical Chance": 180.0,
        "Critical Damage": 90.0,
        "Attack Speed": 55.0,
        "Status Chance": 90.0,
        "Status Duration": 99.0,
        "Heavy Attack Efficiency": 73.4,
        "Finisher Damage": 120.0,
        "Critical Chance on Slide Attack": 120.0,
    }, element=90.0, physical=120.0),
    "archgun": _with_damage_types({
        "Damage": 99.9,
        "Multishot": 60.3,
        "Critical Chance": 99.9,
        "Critical Damage": 80.1,
        "Fire Rate": 60.0,
        "Status Chance": 60.3,
        "Status Duration": 99.0,
        "Magazine Capacity": 60.3,
        "Reload Speed": 99.9,
        "Ammo Maximum": 99.9,
    }, element=119.7, physical=90.0),
}

# (positive count, has negative) -> (buff multiplier, curse multiplier)
_VANILLA_MULTIPLIERS: dict[tuple[int, bool], tuple[float, float]] = {
    (1, False): (0.99, 0.0),
    (1, True): (1.2375, -0.495),
    (2, False): (0.99, 0.0),
    (2, True): (1.2375, -0.495),
    (3, False): (0.75, 0.0),
    (3, True): (0.9375, -0.75),
}

_VANILLA_ROLL_SPREAD = 0.1


@dataclass
class RivenSettings:
    """Typed accessor over a riven roll table.

    Use defaults() for the live table or from_mapping() to load another.
    """

    _stat_caps: dict[str, dict[str, float]] = field(default_factory=dict)
    _multipliers: dict[tuple[int, bool], tuple[float, float]] = field(default_factory=dict)
    roll_spread: float = _VANILLA_ROLL_SPREAD

    def categories(self) -> list[str]:
        return list(self._stat_caps)

    def available_stats(self, category: str) -> list[str]:
        """Stats that can roll for a category, in table order."""
        return list(self._stat_caps.get(category, {}))

    def stat_cap(self, category: str, stat: str) -> float | None:
        return self._stat_caps.get(category, {}).get(stat)

    def multipliers(self, positive_count: int, has_negative: bool) -> tuple[float, float] | None:
        """(buff, curse) multipliers for a combination, or None if unsupported."""
        return self._multipliers.get((positive_count, has_negative))

    @classmethod
    def defaults(cls) -> RivenSettings:
        """Return the live roll table."""
        return cls(
            _stat_caps={cat: dict(stats) for cat, stats in _VANILLA_STAT_CAPS.items()},
            _multipliers=dict(_VANILLA_MULTIPLIERS),
            roll_spread=_VANILLA_ROLL_SPREAD,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RivenSettings:
        """Build a table from plain data.

        Expected shape:
          {"stat_caps": {"primary": {"Damage": 165.0, ...}, ...},
           "multipliers": {"2": [0.99, 0.0], "2+1": [1.2375, -0.495], ...},
           "roll_spread": 0.1}
        Missing sections fall back to the live values.
        """
        base = cls.defaults()
        stat_caps = base._stat_caps
        if "stat_caps" in data:
            stat_caps = {
                str(cat): {str(stat): float(cap) for stat, cap in stats.items()}
                for cat, stats in data["stat_caps"].items()
            }

        multipliers = base._multipliers
        if "multipliers" in data:
            multipliers = {}
            for key, (buff, curse) in data["multipliers"].items():
                count, _, negative = str(key).partition("+")
                multipliers[(int(count), bool(negative))] = (float(buff), float(curse))

        return cls(
            _stat_caps=stat_caps,
            _multipliers=multipliers,
            roll_spread=float(data.get("roll_spread", base.roll_spread)),
        )

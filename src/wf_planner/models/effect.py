"""Mod effect model.

The effect chain is: mod record -> rank text block -> effect lines ->
EffectBag. An EffectBag is the fixed-shape output of the parser and the
unit the aggregator sums. Every field is a fractional delta (0.9 = +90%).
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, fields


@dataclass(slots=True)
class EffectBag:
    """Summed stat deltas from one or more mods. Every field defaults to 0."""

    # Weapon
    base_damage: float = 0.0
    multishot: float = 0.0
    crit_chance: float = 0.0
    crit_damage: float = 0.0
    fire_rate: float = 0.0       # "Attack Speed" on melee
    status_chance: float = 0.0
    status_duration: float = 0.0
    magazine_capacity: float = 0.0
    reload_speed: float = 0.0

    # Physical damage
    impact: float = 0.0
    puncture: float = 0.0
    slash: float = 0.0

    # Primary elements
    heat: float = 0.0
    cold: float = 0.0
    electricity: float = 0.0
    toxin: float = 0.0

    # Secondary elements
    blast: float = 0.0
    radiation: float = 0.0
    gas: float = 0.0
    magnetic: float = 0.0
    viral: float = 0.0
    corrosive: float = 0.0

    # Warframe
    health: float = 0.0
    shield: float = 0.0
    armor: float = 0.0
    energy: float = 0.0
    sprint_speed: float = 0.0
    ability_strength: float = 0.0
    ability_duration: float = 0.0
    ability_efficiency: float = 0.0
    ability_range: float = 0.0

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def total(cls, bags: Iterable[EffectBag]) -> EffectBag:
        """Field-wise sum. fsum is exact, so the result ignores bag order."""
        bags = list(bags)
        return cls(**{
            name: math.fsum(getattr(bag, name) for bag in bags)
            for name in cls.field_names()
        })

    def add(self, field_name: str, delta: float) -> None:
        """Accumulate delta into one field in place."""
        setattr(self, field_name, getattr(self, field_name) + delta)

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in self.field_names()}

    def nonzero(self) -> dict[str, float]:
        """Only the fields a mod actually touched."""
        return {name: value for name, value in self.as_dict().items() if value}

    def damage_type_delta(self, damage_type: str) -> float:
        """Delta for a damage type name such as "Heat" or "Impact" (0 if none)."""
        name = damage_type.lower()
        if name in _DAMAGE_TYPE_FIELDS:
            return getattr(self, name)
        return 0.0


_DAMAGE_TYPE_FIELDS = frozenset((
    "impact", "puncture", "slash",
    "heat", "cold", "electricity", "toxin",
    "blast", "radiation", "gas", "magnetic", "viral", "corrosive",
))

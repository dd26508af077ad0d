"""Equipment data models: warframes, weapons, and companions.

Each record stores base stats as supplied by the data layer. A few fields
(damage_per_shot, fire_behaviors, polarities) may still be JSON-encoded
strings from the store; the accessor methods decode them and fall back to
empty values on bad data.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from wf_planner.models.constants import DAMAGE_TYPES


logger = logging.getLogger(__name__)


def _decode_json_list(raw: Any) -> list:
    """Return raw as a list, decoding a JSON string when needed."""
    if raw is None:
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.debug("Undecodable JSON list field: %.60r", raw)
            return []
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return []


def _decode_polarities(raw: Any) -> list[str]:
    return [p for p in _decode_json_list(raw) if isinstance(p, str) and p]


@dataclass(frozen=True, slots=True)
class Warframe:
    """Base stats for a warframe."""
    unique_name: str
    name: str
    health: float | None = None
    shield: float | None = None
    armor: float | None = None
    power: float | None = None
    sprint_speed: float | None = None
    aura_polarity: str | None = None
    exilus_polarity: str | None = None
    polarities: Any = None

    def slot_polarities(self) -> list[str]:
        return _decode_polarities(self.polarities)


@dataclass(frozen=True, slots=True)
class Weapon:
    """Base stats for a gun or melee weapon.

    `range` is only present on melee weapons and is what marks one as melee.
    """
    unique_name: str
    name: str
    product_category: str | None = None
    total_damage: float | None = None
    damage_per_shot: Any = None          # 20 floats, DAMAGE_TYPES order
    critical_chance: float | None = None
    critical_multiplier: float | None = None
    proc_chance: float | None = None
    fire_rate: float | None = None
    multishot: float | None = None
    magazine_size: int | None = None
    reload_time: float | None = None
    range: float | None = None
    fire_behaviors: Any = None
    polarities: Any = None
    exilus_polarity: str | None = None
    stance_polarity: str | None = None

    @property
    def is_melee(self) -> bool:
        return self.range is not None

    def base_damage(self) -> list[float]:
        """damage_per_shot padded or truncated to len(DAMAGE_TYPES)."""
        values: list[float] = []
        for value in _decode_json_list(self.damage_per_shot)[: len(DAMAGE_TYPES)]:
            try:
                values.append(float(value))
            except (TypeError, ValueError):
                values.append(0.0)
        values.extend([0.0] * (len(DAMAGE_TYPES) - len(values)))
        return values

    def ammo_cost(self) -> int:
        """Ammo consumed per shot, from the first fire behavior (default 1)."""
        behaviors = _decode_json_list(self.fire_behaviors)
        if behaviors and isinstance(behaviors[0], dict):
            cost = behaviors[0].get("ammoRequirement")
            if isinstance(cost, (int, float)) and cost > 0:
                return int(cost)
        return 1

    def slot_polarities(self) -> list[str]:
        return _decode_polarities(self.polarities)


@dataclass(frozen=True, slots=True)
class Companion:
    """Base stats for a sentinel, beast, or other companion."""
    unique_name: str
    name: str
    health: float | None = None
    shield: float | None = None
    armor: float | None = None
    power: float | None = None
    polarities: Any = None

    def slot_polarities(self) -> list[str]:
        return _decode_polarities(self.polarities)

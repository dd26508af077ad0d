"""Elemental damage combination.

Mod slots form a 4x2 grid read left to right, top to bottom:

  0 1 2 3
  4 5 6 7

Primary elements (Heat, Cold, Electricity, Toxin) from mods are queued in
slot order, followed by the weapon's innate primary elements in HCET order
(the "slot 9/10" positions). A mod element that repeats an innate element
absorbs it instead of the innate getting its own position. The queue is
then scanned once, left to right: two adjacent primaries that form a
combination become one secondary element; a combined element never
combines again. Without element mods there is no queue: innate elements
are reported uncombined.

Secondary elements already present in the weapon's base damage are kept
and simply add to any mod-created element of the same type.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from wf_planner.engine.rounding import round_half_up
from wf_planner.models.constants import (
    DAMAGE_TYPES,
    ELEMENT_COMBINATIONS,
    ELEMENT_PRIORITY,
    PRIMARY_ELEMENT_OFFSET,
    PRIMARY_ELEMENTS,
)
from wf_planner.models.mod import ModSlot
from wf_planner.parser.mod_text import parse_mod_effects


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DamageEntry:
    type: str
    value: float


@dataclass(frozen=True, slots=True)
class ElementMod:
    """A primary element contributed by the mod in grid position slot_index."""
    slot_index: int
    element: str
    value: float


@dataclass(slots=True)
class _QueuedElement:
    element: str
    value: float
    is_innate: bool


def find_combination(a: str, b: str) -> str | None:
    """Secondary element formed by two primaries (order-free), if any."""
    pair = frozenset((a, b))
    for secondary, members in ELEMENT_COMBINATIONS.items():
        if pair == members:
            return secondary
    return None


def innate_elements(base_damage: Sequence[float]) -> list[tuple[str, float]]:
    """Positive primary elements in the base damage array, HCET order."""
    found: list[tuple[str, float]] = []
    for offset, element in enumerate(PRIMARY_ELEMENTS):
        idx = PRIMARY_ELEMENT_OFFSET + offset
        value = base_damage[idx] if idx < len(base_damage) else 0.0
        if value > 0:
            found.append((element, value))
    found.sort(key=lambda item: ELEMENT_PRIORITY.index(item[0]))
    return found


def build_element_sequence(
    element_mods: Iterable[ElementMod],
    innate: Sequence[tuple[str, float]],
) -> list[_QueuedElement]:
    """Mod elements by slot, then any innate elements no mod absorbed."""
    sequence: list[_QueuedElement] = []
    consumed: set[str] = set()
    innate_values = dict(innate)

    for mod in sorted(element_mods, key=lambda m: m.slot_index):
        value = mod.value
        if mod.element in innate_values and mod.element not in consumed:
            value += innate_values[mod.element]
            consumed.add(mod.element)
        sequence.append(_QueuedElement(mod.element, value, is_innate=False))

    for element, value in innate:
        if element not in consumed:
            sequence.append(_QueuedElement(element, value, is_innate=True))
    return sequence


def combine_sequence(sequence: Sequence[_QueuedElement]) -> list[DamageEntry]:
    """Single left-to-right pass combining adjacent primary pairs."""
    result: list[DamageEntry] = []
    i = 0
    while i < len(sequence):
        current = sequence[i]
        if i + 1 < len(sequence):
            following = sequence[i + 1]
            combined = find_combination(current.element, following.element)
            if combined is not None:
                result.append(DamageEntry(combined, current.value + following.value))
                i += 2
                continue
        result.append(DamageEntry(current.element, current.value))
        i += 1
    return result


def combine_elements(
    base_damage: Sequence[float],
    element_mods: Iterable[ElementMod],
    multipliers: Mapping[str, float] | None = None,
    decimals: int = 1,
) -> list[DamageEntry]:
    """Final per-type damage for a weapon and its element mods.

    base_damage is the weapon's 20-float damage_per_shot array; multipliers
    scale base damage types (innate elements included) by (1 + multiplier).
    With no element mods nothing combines and innate elements are reported
    as they are.
    """
    element_mods = list(element_mods)
    multipliers = multipliers or {}
    scaled = [
        (base_damage[idx] if idx < len(base_damage) else 0.0)
        * (1 + multipliers.get(damage_type, 0.0))
        for idx, damage_type in enumerate(DAMAGE_TYPES)
    ]

    output: dict[str, float] = {}
    for damage_type, value in zip(DAMAGE_TYPES, scaled):
        if element_mods and damage_type in PRIMARY_ELEMENTS:
            continue    # innate primaries arrive through the element sequence
        if value > 0:
            output[damage_type] = value

    if element_mods:
        sequence = build_element_sequence(element_mods, innate_elements(scaled))
        logger.debug("Element sequence: %s", [q.element for q in sequence])
        for entry in combine_sequence(sequence):
            output[entry.type] = output.get(entry.type, 0.0) + entry.value

    return [
        DamageEntry(damage_type, round_half_up(value, decimals))
        for damage_type, value in output.items()
        if value > 0
    ]


def element_mods_from_slots(
    slots: Iterable[ModSlot],
    damage_scale: float,
) -> list[ElementMod]:
    """Element contributions of equipped mods, value = damage_scale * percent.

    A mod adding more than one primary element queues them in HCET order.
    """
    found: list[ElementMod] = []
    for slot in slots:
        if slot.mod is None:
            continue
        effects = parse_mod_effects(slot.mod, slot.effective_rank())
        for element in ELEMENT_PRIORITY:
            pct = effects.damage_type_delta(element)
            if pct > 0:
                found.append(ElementMod(slot.index, element, damage_scale * pct))
    return found


def total_damage(entries: Iterable[DamageEntry]) -> float:
    return sum(entry.value for entry in entries)


ELEMENT_COLORS: dict[str, str] = {
    "Impact": "#8899aa",
    "Puncture": "#aabbcc",
    "Slash": "#cc8866",
    "Heat": "#ff6633",
    "Cold": "#66ccff",
    "Electricity": "#cccc00",
    "Toxin": "#33cc33",
    "Blast": "#ff9933",
    "Radiation": "#cccc66",
    "Gas": "#66cc99",
    "Magnetic": "#6699cc",
    "Viral": "#66cccc",
    "Corrosive": "#cccc33",
    "Void": "#cc99ff",
    "True": "#ffffff",
}


def element_color(damage_type: str) -> str:
    return ELEMENT_COLORS.get(damage_type, "#999999")

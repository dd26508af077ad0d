"""Mod drain and loadout capacity.

A mod's drain is |base_drain| + rank, then adjusted by the polarity
relationship between slot and mod:

  relation   consuming slot (general/exilus)   capacity slot (aura/stance/posture)
  none       unchanged                         unchanged
  neutral    unchanged                         unchanged
  match      halved, rounded up                doubled
  mismatch   +25%, rounded half-up             -25%, rounded half-up

Capacity slots report their result as negative drain (a bonus).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

from wf_planner.engine.polarity import PolarityRelation, classify_polarity
from wf_planner.engine.rounding import round_half_up_int
from wf_planner.models.constants import CAPACITY_SLOT_TYPES
from wf_planner.models.mod import ModSlot


logger = logging.getLogger(__name__)

DEFAULT_BASE_CAPACITY = 30


def is_capacity_slot(slot_type: str) -> bool:
    """Aura, stance, and posture slots add capacity instead of consuming it."""
    return slot_type in CAPACITY_SLOT_TYPES


def effective_drain(
    base_drain: int,
    mod_rank: int,
    fusion_limit: int,
    slot_polarity: str | None,
    mod_polarity: str | None,
    slot_type: str,
) -> int:
    """Signed drain of a mod in a slot; negative means added capacity."""
    rank = min(mod_rank, fusion_limit)
    magnitude = abs(base_drain) + rank
    capacity = is_capacity_slot(slot_type)

    relation = classify_polarity(slot_polarity, mod_polarity)
    if relation is PolarityRelation.MATCH:
        result = magnitude * 2 if capacity else math.ceil(magnitude / 2)
    elif relation is PolarityRelation.MISMATCH:
        quarter = round_half_up_int(magnitude * 0.25)
        result = magnitude - quarter if capacity else magnitude + quarter
    else:
        result = magnitude

    return -result if capacity else result


def slot_drain(slot: ModSlot) -> int:
    """Signed drain of whatever is in `slot` (0 when empty)."""
    mod = slot.mod
    if mod is None:
        return 0
    fusion_limit = mod.fusion_limit or 0
    rank = slot.rank if slot.rank is not None else fusion_limit
    return effective_drain(
        mod.base_drain or 0,
        rank,
        fusion_limit,
        slot.polarity,
        mod.polarity,
        slot.type,
    )


@dataclass(frozen=True, slots=True)
class CapacitySummary:
    base_capacity: int
    capacity_bonus: int
    total_drain: int
    remaining: int

    @property
    def is_over_capacity(self) -> bool:
        # Over-capacity is a valid state to display, not an error.
        return self.remaining < 0


def total_capacity(
    slots: Iterable[ModSlot],
    base_capacity: int = DEFAULT_BASE_CAPACITY,
    reactor: bool = False,
    reactor_multiplier: int = 2,
) -> CapacitySummary:
    """Sum a loadout's drain against its capacity budget."""
    effective_base = base_capacity * reactor_multiplier if reactor else base_capacity
    capacity_bonus = 0
    total_drain = 0

    for slot in slots:
        if slot.mod is None:
            continue
        drain = slot_drain(slot)
        if drain < 0:
            capacity_bonus += -drain
        else:
            total_drain += drain

    remaining = effective_base + capacity_bonus - total_drain
    if remaining < 0:
        logger.debug("Loadout over capacity by %d", -remaining)
    return CapacitySummary(
        base_capacity=effective_base,
        capacity_bonus=capacity_bonus,
        total_drain=total_drain,
        remaining=remaining,
    )

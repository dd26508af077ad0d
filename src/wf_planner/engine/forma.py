"""Minimum Forma needed to turn a default polarity layout into a desired one.

Only the multiset of polarities matters: moving a polarity to another slot
is free. Adding a polarity costs one Forma of the matching kind, and a
default polarity that is dropped without being replaced costs one regular
Forma to clear.

  regular    any of the six regular polarities, and clears
  universal  AP_ANY on a general/exilus slot (Omni Forma)
  stance     AP_ANY on an aura/stance/posture slot (Stance Forma)
  umbra      AP_UMBRA
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

from wf_planner.engine.drain import is_capacity_slot
from wf_planner.models.constants import AP_ANY, AP_UMBRA, REGULAR_POLARITIES


class HasPolarity(Protocol):
    polarity: str | None
    type: str


@dataclass(frozen=True, slots=True)
class FormaCount:
    regular: int = 0
    universal: int = 0
    umbra: int = 0
    stance: int = 0
    total: int = 0


def _polarity_counts(slots: Iterable[HasPolarity]) -> Counter[str]:
    return Counter(slot.polarity for slot in slots if slot.polarity)


def _universal_capacity_count(slots: Iterable[HasPolarity]) -> int:
    return sum(
        1 for slot in slots
        if slot.polarity == AP_ANY and is_capacity_slot(slot.type)
    )


def forma_cost(
    default_slots: Sequence[HasPolarity],
    desired_slots: Sequence[HasPolarity],
) -> FormaCount:
    """Count Forma by type. Neither input is modified."""
    default_counts = _polarity_counts(default_slots)
    desired_counts = _polarity_counts(desired_slots)

    reused = sum(
        min(default_counts[key], desired_counts[key])
        for key in default_counts.keys() | desired_counts.keys()
    )
    unmatched_defaults = sum(default_counts.values()) - reused

    unmatched_regular = sum(
        max(0, desired_counts[p] - default_counts[p]) for p in REGULAR_POLARITIES
    )
    unmatched_umbra = max(0, desired_counts[AP_UMBRA] - default_counts[AP_UMBRA])
    total_new_universal = max(0, desired_counts[AP_ANY] - default_counts[AP_ANY])

    new_stance = max(
        0,
        _universal_capacity_count(desired_slots) - _universal_capacity_count(default_slots),
    )
    new_universal = max(0, total_new_universal - new_stance)

    # Defaults freed but not absorbed by any addition still cost a clear each.
    excess_clears = max(
        0,
        unmatched_defaults - unmatched_regular - total_new_universal - unmatched_umbra,
    )

    regular = unmatched_regular + excess_clears
    return FormaCount(
        regular=regular,
        universal=new_universal,
        umbra=unmatched_umbra,
        stance=new_stance,
        total=regular + new_universal + unmatched_umbra + new_stance,
    )

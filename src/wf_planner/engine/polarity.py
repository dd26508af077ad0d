"""Polarity relationship between a slot and a mod.

Shared by the drain calculation and anything else that needs to know
whether a mod "fits" a slot. Classification is symmetric in its arguments.
"""

from __future__ import annotations

from enum import Enum

from wf_planner.models.constants import AP_ANY, AP_UMBRA


class PolarityRelation(Enum):
    NONE = "none"            # slot or mod has no polarity
    MATCH = "match"
    NEUTRAL = "neutral"      # universal vs. umbra
    MISMATCH = "mismatch"


def classify_polarity(a: str | None, b: str | None) -> PolarityRelation:
    """Classify two polarities.

    Universal (AP_ANY) matches every polarity except umbra, against which
    it is neutral.
    """
    if not a or not b:
        return PolarityRelation.NONE
    if a == b:
        return PolarityRelation.MATCH
    if a == AP_ANY or b == AP_ANY:
        if a == AP_UMBRA or b == AP_UMBRA:
            return PolarityRelation.NEUTRAL
        return PolarityRelation.MATCH
    return PolarityRelation.MISMATCH

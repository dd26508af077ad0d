"""Mod and slot data models.

Mods arrive from the data store already parsed; the engine never mutates
them. `description` and `set_stats` keep whatever encoding the store used
(a JSON string, a list of text blocks, or a list of {"stats": [...]}
entries). Decoding happens in the parser, so a bad record only zeroes its
own contribution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from wf_planner.models.constants import CAPACITY_SLOT_TYPES, GENERAL


@dataclass(frozen=True, slots=True)
class Mod:
    """A mod record as supplied by the data layer."""
    unique_name: str
    name: str
    polarity: str | None = None
    rarity: str | None = None          # COMMON | UNCOMMON | RARE | LEGENDARY
    type: str | None = None            # e.g. "PRIMARY", "WARFRAME", "AURA"
    compat_name: str | None = None
    base_drain: int | None = None      # negative for aura/stance mods
    fusion_limit: int | None = None    # max rank, 0-indexed
    subtype: str | None = None
    description: Any = None            # rank-indexed text blocks
    mod_set: str | None = None         # unique_name of the mod set
    set_num_in_set: int | None = None
    set_stats: Any = None              # set bonus text per active piece count

    @property
    def max_rank(self) -> int:
        return max(0, self.fusion_limit or 0)


@dataclass(slots=True)
class ModSlot:
    """One slot in a loadout. A slot without a mod contributes nothing."""
    index: int
    type: str = GENERAL
    polarity: str | None = None
    mod: Mod | None = None
    rank: int | None = None       # None = max rank
    set_rank: int | None = None   # user-chosen number of active set pieces

    @property
    def is_empty(self) -> bool:
        return self.mod is None

    @property
    def is_capacity_slot(self) -> bool:
        return self.type in CAPACITY_SLOT_TYPES

    def effective_rank(self) -> int:
        """Rank clamped to [0, fusion_limit]; absent rank means max rank."""
        if self.mod is None:
            return 0
        max_rank = self.mod.max_rank
        if self.rank is None:
            return max_rank
        return min(max(self.rank, 0), max_rank)


@dataclass(frozen=True, slots=True)
class SlotPolarity:
    """Minimal slot view used when diffing polarity layouts."""
    polarity: str | None
    type: str = GENERAL

"""Sum parsed mod effects across a loadout.

Summation is per field and order-independent, so any permutation of the
same equipped slots yields the same EffectBag.
"""

from __future__ import annotations

from collections.abc import Iterable

from wf_planner.models.effect import EffectBag
from wf_planner.models.mod import Mod, ModSlot
from wf_planner.parser.mod_text import decode_rank_blocks, parse_effect_text, parse_mod_effects


def aggregate_mods(slots: Iterable[ModSlot]) -> EffectBag:
    """Sum the effects of every equipped mod at its slot rank."""
    return EffectBag.total(
        parse_mod_effects(slot.mod, slot.effective_rank())
        for slot in slots
        if slot.mod is not None
    )


def active_set_pieces(slots: Iterable[ModSlot]) -> dict[str, tuple[Mod, int]]:
    """Map mod_set -> (a member mod, active piece count).

    The count is the highest user-chosen set_rank on any of the set's slots,
    falling back to the number of equipped pieces, clamped to
    [1, set_num_in_set].
    """
    equipped: dict[str, int] = {}
    chosen: dict[str, int] = {}
    members: dict[str, Mod] = {}
    for slot in slots:
        mod = slot.mod
        if mod is None or not mod.mod_set:
            continue
        members.setdefault(mod.mod_set, mod)
        equipped[mod.mod_set] = equipped.get(mod.mod_set, 0) + 1
        if slot.set_rank is not None:
            chosen[mod.mod_set] = max(chosen.get(mod.mod_set, 0), slot.set_rank)

    result: dict[str, tuple[Mod, int]] = {}
    for set_name, mod in members.items():
        pieces = chosen.get(set_name, equipped[set_name])
        if mod.set_num_in_set:
            pieces = min(pieces, mod.set_num_in_set)
        result[set_name] = (mod, max(1, pieces))
    return result


def aggregate_set_bonuses(slots: Iterable[ModSlot]) -> EffectBag:
    """Sum set bonuses, parsing each set's bonus text once."""
    bonuses: list[EffectBag] = []
    for mod, pieces in active_set_pieces(slots).values():
        blocks = decode_rank_blocks(mod.set_stats)
        if blocks:
            bonuses.append(parse_effect_text(blocks[min(pieces, len(blocks)) - 1]))
    return EffectBag.total(bonuses)


def aggregate_build(slots: Iterable[ModSlot]) -> EffectBag:
    """Mod effects plus set bonuses."""
    slots = list(slots)
    return EffectBag.total((aggregate_mods(slots), aggregate_set_bonuses(slots)))

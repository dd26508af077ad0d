"""Parse mod description text into EffectBags.

Mod descriptions are stored per rank: block N is the text shown at rank N,
and each block is a newline-separated list of effect lines such as:

  +165% Damage
  +90% <DT_FIRE_COLOR>Heat
  +99% Ability Strength
  -55% Ability Efficiency

Only lines of the shape <sign><number>% <label> carry stats. The label is
looked up in STAT_RULES, an ordered table of (label pattern, EffectBag
field) pairs; the first full match wins. Anything else (flavor text,
conditional riders, unknown stats) is ignored, so new stat lines never
break parsing.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from wf_planner.models.effect import EffectBag
from wf_planner.models.mod import Mod


logger = logging.getLogger(__name__)

# Ranks shown for arcanes whose level_stats cannot be decoded.
DEFAULT_ARCANE_MAX_RANK = 5

_EFFECT_LINE_RE = re.compile(r"^\s*([+-])\s*(\d+(?:\.\d+)?)\s*%\s*(.+?)\s*$")
_MARKUP_TAG_RE = re.compile(r"<[^>]*>")
_TRAILING_NOTE_RE = re.compile(r"\s*\([^)]*\)\s*$")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class StatRule:
    """Maps a normalized label (full match, case-insensitive) to a field."""
    label: re.Pattern
    field: str


def _rule(pattern: str, field: str) -> StatRule:
    return StatRule(re.compile(pattern, re.IGNORECASE), field)


STAT_RULES: tuple[StatRule, ...] = (
    # Weapon
    _rule(r"(?:melee )?damage", "base_damage"),
    _rule(r"multishot", "multishot"),
    _rule(r"critical chance", "crit_chance"),
    _rule(r"critical damage", "crit_damage"),
    _rule(r"fire rate|attack speed", "fire_rate"),
    _rule(r"status chance", "status_chance"),
    _rule(r"status duration", "status_duration"),
    _rule(r"magazine capacity", "magazine_capacity"),
    _rule(r"reload speed", "reload_speed"),
    # Damage types, with or without a trailing "Damage"
    _rule(r"impact(?: damage)?", "impact"),
    _rule(r"puncture(?: damage)?", "puncture"),
    _rule(r"slash(?: damage)?", "slash"),
    _rule(r"heat(?: damage)?", "heat"),
    _rule(r"cold(?: damage)?", "cold"),
    _rule(r"electricity(?: damage)?", "electricity"),
    _rule(r"toxin(?: damage)?", "toxin"),
    _rule(r"blast(?: damage)?", "blast"),
    _rule(r"radiation(?: damage)?", "radiation"),
    _rule(r"gas(?: damage)?", "gas"),
    _rule(r"magnetic(?: damage)?", "magnetic"),
    _rule(r"viral(?: damage)?", "viral"),
    _rule(r"corrosive(?: damage)?", "corrosive"),
    # Warframe
    _rule(r"health", "health"),
    _rule(r"shield capacity|shields?", "shield"),
    _rule(r"armor", "armor"),
    _rule(r"energy max|energy", "energy"),
    _rule(r"sprint speed", "sprint_speed"),
    _rule(r"ability strength", "ability_strength"),
    _rule(r"ability duration", "ability_duration"),
    _rule(r"ability efficiency", "ability_efficiency"),
    _rule(r"ability range", "ability_range"),
)


def normalize_label(label: str) -> str:
    """Strip markup tags and a trailing parenthetical note, collapse spaces.

    "<DT_FIRE_COLOR>Heat" -> "Heat"
    "Critical Chance (x2 for Heavy Attacks)" -> "Critical Chance"
    """
    text = _MARKUP_TAG_RE.sub("", label)
    text = _TRAILING_NOTE_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def match_stat_rule(label: str) -> str | None:
    """Return the EffectBag field for a label, or None when no rule matches."""
    normalized = normalize_label(label)
    for rule in STAT_RULES:
        if rule.label.fullmatch(normalized):
            return rule.field
    return None


def parse_effect_line(line: str) -> tuple[str, float] | None:
    """Parse one description line into (field, delta), or None."""
    m = _EFFECT_LINE_RE.match(line)
    if m is None:
        return None
    sign, number, label = m.groups()
    field = match_stat_rule(label)
    if field is None:
        return None
    delta = float(number) / 100.0
    return field, -delta if sign == "-" else delta


def parse_effect_text(text: str) -> EffectBag:
    """Parse a text block (one rank of a description) into an EffectBag."""
    bag = EffectBag()
    for line in text.splitlines():
        parsed = parse_effect_line(line)
        if parsed is not None:
            bag.add(*parsed)
    return bag


def _block_text(entry: Any) -> str | None:
    if isinstance(entry, str):
        return entry
    if isinstance(entry, dict):
        stats = entry.get("stats")
        if isinstance(stats, list):
            return "\n".join(s for s in stats if isinstance(s, str))
        if isinstance(stats, str):
            return stats
    return None


def _decode_list(raw: Any) -> list | None:
    """raw as a list (decoding JSON text), or None when it isn't one."""
    if raw is None:
        return None
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.debug("Description is not valid JSON: %.60r", raw)
            return None
    if not isinstance(raw, list):
        logger.debug("Description is not a rank list: %r", type(raw).__name__)
        return None
    return raw


def decode_rank_blocks(raw: Any) -> list[str]:
    """Decode a rank-indexed description into one text block per rank.

    Accepts a JSON string, a list of strings, or a list of
    {"stats": [...]} entries. Anything else decodes to [].
    """
    entries = _decode_list(raw)
    if entries is None:
        return []

    blocks: list[str] = []
    for entry in entries:
        text = _block_text(entry)
        if text is None:
            logger.debug("Unrecognised description entry: %.60r", entry)
            return []
        blocks.append(text)
    return blocks


def _clamped_index(rank: int, max_rank: int, block_count: int) -> int:
    return max(0, min(rank, max_rank, block_count - 1))


def rank_block(mod: Mod, rank: int) -> str | None:
    """Text block for `rank`, clamped to the mod's fusion limit."""
    blocks = decode_rank_blocks(mod.description)
    if not blocks:
        return None
    return blocks[_clamped_index(rank, mod.max_rank, len(blocks))]


def parse_mod_effects(mod: Mod, rank: int) -> EffectBag:
    """Parse a mod's effects at `rank`.

    Uses the block at min(rank, fusion_limit). Mods whose description cannot
    be decoded contribute an all-zero bag.
    """
    text = rank_block(mod, rank)
    if text is None:
        return EffectBag()
    return parse_effect_text(text)


def sanitize_display_text(value: Any) -> str:
    """Remove markup tags and stray angle brackets for display."""
    if not isinstance(value, str):
        return ""
    text = _MARKUP_TAG_RE.sub(" ", value)
    return text.replace("<", "").replace(">", "").strip()


def mod_description(mod: Mod, rank: int | None = None) -> str:
    """Display text for a mod at `rank` (max rank when omitted)."""
    text = rank_block(mod, mod.max_rank if rank is None else rank)
    return sanitize_display_text(text) if text is not None else ""


# --- Arcanes -----------------------------------------------------------------

def arcane_max_rank(level_stats: Any) -> int:
    """Highest rank of an arcane: one less than its number of levels.

    Any decodable list counts, whatever its entries look like; an empty
    list has rank 0. Undecodable data falls back to the default.
    """
    levels = _decode_list(level_stats)
    if levels is None:
        return DEFAULT_ARCANE_MAX_RANK
    return max(len(levels) - 1, 0)


def arcane_description(level_stats: Any, rank: int | None = None) -> str:
    """Arcane text at `rank` (max rank when omitted); "" when undecodable."""
    blocks = decode_rank_blocks(level_stats)
    if not blocks:
        return ""
    last = len(blocks) - 1
    idx = last if rank is None else max(0, min(rank, last))
    return sanitize_display_text(blocks[idx].replace("\n", " "))

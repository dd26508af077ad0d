"""Riven validation and roll clamping.

verify_riven_config() checks the configuration's shape first; only a
well-formed configuration is clamped. Each stat's magnitude is clamped to
its roll range (see RivenSettings), whose bounds are truncated to one
decimal, and its sign forced: positive stats end
up >= 0, the negative stat <= 0. Bad user input comes back as a message,
never as an exception.
"""

from __future__ import annotations

import logging
import math

from wf_planner.models.constants import AP_ATTACK
from wf_planner.models.mod import Mod
from wf_planner.models.riven import RivenConfig, RivenStat, RivenVerification
from wf_planner.models.riven_settings import RivenSettings


logger = logging.getLogger(__name__)

MAX_POSITIVE_STATS = 3
RIVEN_MAX_RANK = 8
RIVEN_BASE_DRAIN = 10


def validate_riven_config(
    config: RivenConfig,
    settings: RivenSettings | None = None,
    category: str | None = None,
) -> str | None:
    """Return a message describing what is wrong, or None when valid."""
    settings = settings or RivenSettings.defaults()
    positive = list(config.positive)

    if not positive:
        return "A riven needs at least one positive stat."
    if len(positive) > MAX_POSITIVE_STATS:
        return f"A riven can have at most {MAX_POSITIVE_STATS} positive stats."

    seen: set[str] = set()
    for stat in positive:
        if not stat.stat:
            return "Every positive stat needs a name."
        if stat.stat in seen:
            return f"Duplicate positive stat: {stat.stat}."
        if stat.is_negative:
            return f"Positive stat {stat.stat} is marked negative."
        seen.add(stat.stat)

    negative = config.negative
    if negative is not None:
        if not negative.stat:
            return "The negative stat needs a name."
        if negative.stat in seen:
            return f"Negative stat {negative.stat} is also a positive stat."
        if not negative.is_negative:
            return f"Negative stat {negative.stat} is not marked negative."

    if settings.multipliers(len(positive), negative is not None) is None:
        return (
            f"Unsupported combination: {len(positive)} positive"
            f"{' + 1 negative' if negative is not None else ''}."
        )

    if category is not None:
        for stat in config.stats():
            if settings.stat_cap(category, stat.stat) is None:
                return f"{stat.stat} cannot roll on a {category} riven."
    return None


def _truncate(value: float) -> float:
    # one decimal, rounding toward zero; the epsilon absorbs float error
    return math.floor(value * 10 + 1e-9) / 10


def riven_stat_range(
    stat: str,
    category: str,
    positive_count: int,
    has_negative: bool,
    is_negative: bool = False,
    settings: RivenSettings | None = None,
    disposition: float = 1.0,
) -> tuple[float, float] | None:
    """(low, high) magnitude range for a stat, or None if it can't roll."""
    settings = settings or RivenSettings.defaults()
    cap = settings.stat_cap(category, stat)
    multipliers = settings.multipliers(positive_count, has_negative)
    if cap is None or multipliers is None:
        return None
    buff, curse = multipliers
    center = cap * abs(curse if is_negative else buff) * disposition
    return (
        _truncate(center * (1 - settings.roll_spread)),
        _truncate(center * (1 + settings.roll_spread)),
    )


def _clamp_stat(stat: RivenStat, low: float, high: float, is_negative: bool) -> RivenStat:
    magnitude = min(max(abs(stat.value), low), high)
    value = -magnitude if is_negative else magnitude
    return RivenStat(stat=stat.stat, value=value, is_negative=is_negative)


def verify_riven_config(
    config: RivenConfig,
    category: str,
    settings: RivenSettings | None = None,
    disposition: float = 1.0,
) -> RivenVerification:
    """Validate, then clamp every stat to its roll range for `category`."""
    settings = settings or RivenSettings.defaults()
    error = validate_riven_config(config, settings, category)
    if error is not None:
        logger.debug("Riven rejected: %s", error)
        return RivenVerification(adjusted=False, config=config, error=error)

    positive_count = len(config.positive)
    has_negative = config.negative is not None

    def clamp(stat: RivenStat, is_negative: bool) -> RivenStat:
        low, high = riven_stat_range(
            stat.stat, category, positive_count, has_negative,
            is_negative=is_negative, settings=settings, disposition=disposition,
        )
        return _clamp_stat(stat, low, high, is_negative)

    positive = tuple(clamp(stat, False) for stat in config.positive)
    negative = clamp(config.negative, True) if config.negative is not None else None

    adjusted = any(
        before.value != after.value
        for before, after in zip(config.positive, positive)
    )
    if negative is not None and config.negative.value != negative.value:
        adjusted = True
    if adjusted:
        logger.debug("Riven values clamped for %s", category)

    return RivenVerification(
        adjusted=adjusted,
        config=RivenConfig(polarity=config.polarity, positive=positive, negative=negative),
    )


def _format_percent(value: float) -> str:
    text = f"{value:+.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return text + "%"


def build_riven_description(config: RivenConfig, scale: float = 1.0) -> str:
    """Effect text for a riven, one stat per line ("+165% Damage")."""
    return "\n".join(
        f"{_format_percent(stat.value * scale)} {stat.stat}"
        for stat in config.stats()
    )


def riven_mod(
    config: RivenConfig,
    name: str = "Riven Mod",
    mod_type: str | None = None,
    compat_name: str | None = None,
) -> Mod:
    """A Mod record for a verified riven, so it drains and parses like any mod.

    Values scale linearly with rank: rank r shows (r + 1) / 9 of the max.
    """
    blocks = [
        build_riven_description(config, scale=(rank + 1) / (RIVEN_MAX_RANK + 1))
        for rank in range(RIVEN_MAX_RANK + 1)
    ]
    return Mod(
        unique_name=f"/riven/{name}",
        name=name,
        polarity=config.polarity or AP_ATTACK,
        rarity="LEGENDARY",
        type=mod_type,
        compat_name=compat_name,
        base_drain=RIVEN_BASE_DRAIN,
        fusion_limit=RIVEN_MAX_RANK,
        description=blocks,
    )

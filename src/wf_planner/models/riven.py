"""Riven mod configuration models.

A Riven has one to three positive stats and at most one negative stat.
Values are percentages as shown in game (165.0 = +165%), negative stats
carry a non-positive value once verified.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from wf_planner.models.constants import AP_ATTACK


@dataclass(frozen=True, slots=True)
class RivenStat:
    stat: str
    value: float
    is_negative: bool = False


@dataclass(frozen=True, slots=True)
class RivenConfig:
    polarity: str = AP_ATTACK
    positive: tuple[RivenStat, ...] = field(default_factory=tuple)
    negative: RivenStat | None = None

    @property
    def has_negative(self) -> bool:
        return self.negative is not None

    def stats(self) -> list[RivenStat]:
        """Positive stats followed by the negative stat, if any."""
        result = list(self.positive)
        if self.negative is not None:
            result.append(self.negative)
        return result


@dataclass(frozen=True, slots=True)
class RivenVerification:
    """Outcome of verify_riven_config.

    `error` is set (and `config` returned untouched) when the configuration
    is structurally invalid; it never raises for bad user input.
    """
    adjusted: bool
    config: RivenConfig
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

"""Configuration knobs for the build engine.

Defaults match the live game. Callers may override capacity budgets or
display rounding without touching the algorithms.
"""

from dataclasses import dataclass


@dataclass(slots=True)
class BuildConfig:
    """Tuneable parameters that aren't stored on equipment records."""

    base_capacity: int = 30        # Mod capacity at rank 30
    reactor_multiplier: int = 2    # Orokin Reactor / Catalyst doubles capacity
    damage_decimals: int = 1       # Rounding for per-type damage output

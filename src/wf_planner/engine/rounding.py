"""Half-up rounding, the way the game client rounds displayed numbers.

Python's round() uses banker's rounding (round(2.5) == 2), which would
under-charge drain on exact halves.
"""

import math


def round_half_up(value: float, decimals: int = 0) -> float:
    scale = 10 ** decimals
    return math.floor(value * scale + 0.5) / scale


def round_half_up_int(value: float) -> int:
    return int(math.floor(value + 0.5))

"""Integer helpers shared by the allocation modules."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2).

    Matches the front end's rounding; Python's round() rounds halves to even.
    """
    return int(math.floor(value + 0.5))

"""Integer rounding helpers for percentages and scores.

Rates in reports are whole percentages rounded half-up (2.5 -> 3), not
Python's round-half-to-even.
"""

import math
from collections.abc import Iterable


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards positive infinity."""
    return math.floor(value + 0.5)


def percentage(part: int, whole: int) -> int:
    """``part`` as a rounded percentage of ``whole`` (0 when ``whole`` is 0)."""
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def rounded_mean(values: Iterable[float]) -> int:
    """Rounded arithmetic mean (0 for no values)."""
    items = list(values)
    if not items:
        return 0
    return round_half_up(sum(items) / len(items))


def clamp_score(value: float) -> int:
    """Round and clamp a derived score into 0..100."""
    return max(0, min(100, round_half_up(value)))

"""Utility modules for the Training Admin API."""

from training_admin.utils.numbers import clamp_score, percentage, round_half_up, rounded_mean
from training_admin.utils.timestamps import (
    ensure_utc_aware,
    format_datetime,
    parse_datetime,
    utc_now,
)


__all__ = [
    "clamp_score",
    "ensure_utc_aware",
    "format_datetime",
    "parse_datetime",
    "percentage",
    "round_half_up",
    "rounded_mean",
    "utc_now",
]

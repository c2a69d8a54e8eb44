"""Utility functions for inkbook."""

from inkbook.utils.date_parser import parse_date, month_bounds
from inkbook.utils.amount_parser import parse_amount
from inkbook.utils.time_utils import (
    time_to_minutes,
    minutes_to_time,
    normalize_time,
    interval_end,
    intervals_overlap,
)

__all__ = [
    "parse_date",
    "month_bounds",
    "parse_amount",
    "time_to_minutes",
    "minutes_to_time",
    "normalize_time",
    "interval_end",
    "intervals_overlap",
]

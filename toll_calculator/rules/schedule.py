"""Time-of-day fee schedule.

Bands are inclusive on both ends and expressed in minutes since local
midnight. Anything outside every band (18:30-05:59) is free.
"""

from __future__ import annotations

from typing import Tuple

from toll_calculator.domain import FeeBand


def minute_of_day(hour: int, minute: int) -> int:
    """Convert a local hour/minute pair to minutes since midnight."""
    return hour * 60 + minute


def _band(start: str, end: str, fee: int) -> FeeBand:
    start_h, start_m = (int(part) for part in start.split(":"))
    end_h, end_m = (int(part) for part in end.split(":"))
    return FeeBand(
        start_minute=minute_of_day(start_h, start_m),
        end_minute=minute_of_day(end_h, end_m),
        fee=fee,
    )


FEE_SCHEDULE: Tuple[FeeBand, ...] = (
    _band("06:00", "06:29", 9),
    _band("06:30", "06:59", 16),
    _band("07:00", "07:59", 22),
    _band("08:00", "08:29", 16),
    _band("08:30", "14:59", 9),
    _band("15:00", "15:29", 16),
    _band("15:30", "16:59", 22),
    _band("17:00", "17:59", 16),
    _band("18:00", "18:29", 9),
)


def find_band(hour: int, minute: int, schedule: Tuple[FeeBand, ...] = FEE_SCHEDULE) -> FeeBand | None:
    """Return the band covering hour:minute, or None for free periods."""
    current = minute_of_day(hour, minute)
    for band in schedule:
        if band.contains(current):
            return band
    return None


def fee_for_time_of_day(hour: int, minute: int, schedule: Tuple[FeeBand, ...] = FEE_SCHEDULE) -> int:
    """Fee for a passage at hour:minute local time, ignoring exemptions."""
    band = find_band(hour, minute, schedule)
    return band.fee if band else 0

"""Toll-free date rules: weekends, July, and public holidays.

Only the fixed-date holidays are exempt by default. The Easter-based holidays
(Good Friday, Easter Monday, Ascension Day, Whit Sunday) are available through
``moving_holidays`` and are applied only when a caller opts in with
``include_moving_holidays=True``.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Tuple

from toll_calculator.domain import Holiday


JULY = 7
SATURDAY = 5  # date.weekday(): Monday == 0

FIXED_HOLIDAYS: Tuple[Holiday, ...] = (
    Holiday(month=1, day=1),    # New Year's Day
    Holiday(month=5, day=1),    # May Day
    Holiday(month=6, day=6),    # National Day
    Holiday(month=11, day=2),
    Holiday(month=12, day=24),  # Christmas Eve
    Holiday(month=12, day=25),
    Holiday(month=12, day=26),
    Holiday(month=12, day=31),  # New Year's Eve
)

# Offsets from Easter Sunday
_MOVING_HOLIDAY_OFFSETS: Tuple[int, ...] = (
    -2,  # Good Friday
    1,   # Easter Monday
    39,  # Ascension Day
    49,  # Whit Sunday
)


def easter_sunday(year: int) -> date:
    """Gregorian Easter Sunday for ``year`` (anonymous Gregorian algorithm)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


def moving_holidays(year: int) -> Tuple[date, ...]:
    """Easter-based holidays for ``year`` in calendar order."""
    easter = easter_sunday(year)
    return tuple(easter + timedelta(days=offset) for offset in _MOVING_HOLIDAY_OFFSETS)


def is_fixed_holiday(value: date | datetime) -> bool:
    """Return True if the date is one of the fixed-date holidays."""
    return any(holiday.matches(value) for holiday in FIXED_HOLIDAYS)


def toll_free_holidays(year: int, *, include_moving_holidays: bool = False) -> list[date]:
    """All holiday dates for ``year`` that are exempt, sorted."""
    days = [date(year, h.month, h.day) for h in FIXED_HOLIDAYS]
    if include_moving_holidays:
        days.extend(moving_holidays(year))
    return sorted(set(days))


def is_toll_free_date(timestamp: date | datetime, *, include_moving_holidays: bool = False) -> bool:
    """Return True if no fee applies on the timestamp's local calendar date."""
    if timestamp.weekday() >= SATURDAY:
        return True

    if timestamp.month == JULY:
        return True

    if is_fixed_holiday(timestamp):
        return True

    if include_moving_holidays:
        day = timestamp.date() if isinstance(timestamp, datetime) else timestamp
        return day in moving_holidays(day.year)

    return False

"""Split multi-day passage lists into calendar days and price each day."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, tzinfo
from typing import Dict, Iterable, List

from toll_calculator.domain import DailyFee, Vehicle, VehicleType
from toll_calculator.fee_engine import calculate_toll_fee
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="daily_fees")


def to_local(timestamp: datetime, tz: tzinfo | None = None) -> datetime:
    """Express a timestamp in ``tz``; naive values are taken to be local already."""
    if tz is None:
        return timestamp
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=tz)
    return timestamp.astimezone(tz)


def group_passages_by_day(
    timestamps: Iterable[datetime],
    tz: tzinfo | None = None,
) -> Dict[date, List[datetime]]:
    """Group passages by local calendar date, days in ascending order."""
    grouped: Dict[date, List[datetime]] = defaultdict(list)
    for timestamp in timestamps:
        local = to_local(timestamp, tz)
        grouped[local.date()].append(local)
    return {day: grouped[day] for day in sorted(grouped)}


def calculate_daily_fees(
    vehicle: Vehicle | VehicleType | None,
    timestamps: Iterable[datetime],
    *,
    tz: tzinfo | None = None,
    include_moving_holidays: bool = False,
) -> List[DailyFee]:
    """Price each calendar day separately; one engine call per day."""
    results: List[DailyFee] = []
    for day, passages in group_passages_by_day(timestamps, tz).items():
        fee = calculate_toll_fee(vehicle, passages, include_moving_holidays=include_moving_holidays)
        logger.info("Fee for %s: %d (%d passages)", day.isoformat(), fee, len(passages))
        results.append(DailyFee(day=day, fee=fee, passages=len(passages)))
    return results

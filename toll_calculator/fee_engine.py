"""Deterministic daily toll fee calculation.

This module turns one vehicle and one day's passages into the fee owed for
that day. Passages are partitioned greedily, left to right: an interval is
anchored at its first passage and absorbs every later passage at most 60
minutes after the anchor; the first passage beyond that opens the next
interval. Each interval is charged its highest single-passage fee and the day
total is capped at 60.

Callers are responsible for handing over local-time timestamps from a single
calendar day (see ``toll_calculator.daily_fees`` for the multi-day wrapper).
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable

from toll_calculator.domain import (
    MAX_DAILY_FEE,
    SINGLE_CHARGE_WINDOW_MINUTES,
    FeeBreakdown,
    FeeInterval,
    PassageCharge,
    Vehicle,
    VehicleType,
)
from toll_calculator.rules import (
    fee_for_time_of_day,
    is_toll_free_date,
    is_toll_free_vehicle,
    vehicle_type_of,
)
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="fee_engine")

_ONE_MINUTE = timedelta(minutes=1)


def _elapsed_minutes(start: datetime, current: datetime) -> int:
    """Whole minutes from start to current, floored."""
    return (current - start) // _ONE_MINUTE


def fee_for_passage(
    timestamp: datetime,
    vehicle: Vehicle | VehicleType | str | None,
    *,
    include_moving_holidays: bool = False,
) -> int:
    """Fee for a single passage, before the 60-minute rule and the daily cap."""
    if is_toll_free_date(timestamp, include_moving_holidays=include_moving_holidays):
        return 0
    if is_toll_free_vehicle(vehicle):
        return 0
    return fee_for_time_of_day(timestamp.hour, timestamp.minute)


def explain_toll_fee(
    vehicle: Vehicle | VehicleType | str | None,
    timestamps: Iterable[datetime],
    *,
    include_moving_holidays: bool = False,
) -> FeeBreakdown:
    """Run the fee calculation and return every interval it charged."""
    breakdown = FeeBreakdown(vehicle_type=vehicle_type_of(vehicle))

    # sorted() copies; the caller's collection is left untouched
    ordered = sorted(timestamps)
    if not ordered:
        return breakdown

    interval = FeeInterval(start=ordered[0])
    highest_fee_in_interval = 0
    total_fee = 0

    for passage in ordered:
        minutes = _elapsed_minutes(interval.start, passage)
        current_fee = fee_for_passage(passage, vehicle, include_moving_holidays=include_moving_holidays)
        logger.debug("Passage %s costs %d", passage.isoformat(), current_fee)

        if minutes <= SINGLE_CHARGE_WINDOW_MINUTES:
            highest_fee_in_interval = max(highest_fee_in_interval, current_fee)
            logger.debug("Within %d minutes, highest fee so far: %d", SINGLE_CHARGE_WINDOW_MINUTES,
                         highest_fee_in_interval)
        else:
            total_fee += highest_fee_in_interval
            interval.charged_fee = highest_fee_in_interval
            breakdown.intervals.append(interval)
            logger.debug("New interval, adding %d to total (now %d)", highest_fee_in_interval, total_fee)

            highest_fee_in_interval = current_fee
            interval = FeeInterval(start=passage)

        interval.passages.append(PassageCharge(time=passage, fee=current_fee))

    total_fee += highest_fee_in_interval
    interval.charged_fee = highest_fee_in_interval
    breakdown.intervals.append(interval)

    breakdown.uncapped_total = total_fee
    breakdown.total = min(total_fee, MAX_DAILY_FEE)
    logger.debug("Final total: %d (capped %d)", total_fee, breakdown.total)
    return breakdown


def calculate_toll_fee(
    vehicle: Vehicle | VehicleType | str | None,
    timestamps: Iterable[datetime],
    *,
    include_moving_holidays: bool = False,
) -> int:
    """Total fee for one day's passages, in the range 0-60.

    Timestamps must be all naive or all aware; Python cannot order a mix of the
    two and sorting raises TypeError. ``daily_fees.to_local`` normalizes mixed
    input before it reaches the engine. A tag string for ``vehicle`` that is not
    a VehicleType raises UnsupportedVehicleTypeError.
    """
    return explain_toll_fee(vehicle, timestamps, include_moving_holidays=include_moving_holidays).total

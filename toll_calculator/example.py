"""Small end-to-end example: price a car's passages over a weekend and a Monday.

Run with ``python -m toll_calculator.example``. Set ``TOLL_LOG_LEVEL=DEBUG`` to
see how each passage is priced.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

from toll_calculator.config import settings
from toll_calculator.daily_fees import calculate_daily_fees
from toll_calculator.domain import DailyFee, Vehicle, VehicleType
from utils.logging_utils import get_tagged_logger, setup_logging

logger = get_tagged_logger(__name__, tag="example")

_STOCKHOLM = ZoneInfo("Europe/Stockholm")

EXAMPLE_PASSAGES = [
    datetime(2024, 4, 28, 6, 15, tzinfo=_STOCKHOLM),   # Sunday, free
    datetime(2024, 4, 29, 7, 30, tzinfo=_STOCKHOLM),   # Monday morning, 22
    datetime(2024, 4, 29, 8, 15, tzinfo=_STOCKHOLM),   # 16, same interval as 07:30
    datetime(2024, 4, 29, 14, 45, tzinfo=_STOCKHOLM),  # 9
]


def run_example() -> list[DailyFee]:
    """Price the example passages and log one line per day."""
    vehicle = Vehicle(type=VehicleType.CAR, registration_number="ABC123")
    daily = calculate_daily_fees(
        vehicle,
        EXAMPLE_PASSAGES,
        tz=settings.tzinfo,
        include_moving_holidays=settings.include_moving_holidays,
    )
    for entry in daily:
        logger.info(f"{entry.day.isoformat()}: {entry.fee} {settings.currency}")
    logger.info(f"Total toll fee: {sum(d.fee for d in daily)} {settings.currency}")
    return daily


if __name__ == "__main__":
    setup_logging(level=settings.log_level, job_name="toll_example")
    run_example()

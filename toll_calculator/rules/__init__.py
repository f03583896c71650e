"""Static rule tables and lookups that decide what a single passage costs."""

from .calendar import (
    FIXED_HOLIDAYS,
    easter_sunday,
    is_fixed_holiday,
    is_toll_free_date,
    moving_holidays,
    toll_free_holidays,
)
from .schedule import FEE_SCHEDULE, fee_for_time_of_day, find_band, minute_of_day
from .vehicles import TOLL_FREE_VEHICLES, is_toll_free_vehicle, vehicle_type_of

__all__ = [
    "FIXED_HOLIDAYS",
    "easter_sunday",
    "is_fixed_holiday",
    "is_toll_free_date",
    "moving_holidays",
    "toll_free_holidays",
    "FEE_SCHEDULE",
    "fee_for_time_of_day",
    "find_band",
    "minute_of_day",
    "TOLL_FREE_VEHICLES",
    "is_toll_free_vehicle",
    "vehicle_type_of",
]

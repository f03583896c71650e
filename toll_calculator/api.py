"""HTTP API for the toll fee calculator."""

import hmac
from datetime import date, datetime
from typing import List

from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import BaseModel, Field

from .config import settings
from .daily_fees import calculate_daily_fees, group_passages_by_day
from .domain import (
    DailyFee,
    FeeBreakdown,
    UnsupportedVehicleTypeError,
    Vehicle,
    parse_vehicle_type,
)
from .fee_engine import explain_toll_fee
from .rules import FEE_SCHEDULE, TOLL_FREE_VEHICLES, toll_free_holidays
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="toll_calculator/api")


def require_api_key(x_api_key: str | None = Header(default=None)):
    """
    Validate the X-API-Key header against the static api_key setting.
    """
    # No key configured: open access (dev/default mode).
    if not settings.api_key:
        logger.debug("No API key configured; allowing all requests")
        return

    if not x_api_key:
        logger.debug("No API key provided")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")

    if hmac.compare_digest(str(x_api_key), str(settings.api_key)):
        return

    logger.debug("Invalid API key provided")
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


router = APIRouter(dependencies=[Depends(require_api_key)])


class FeeRequest(BaseModel):
    """Passages for one vehicle, possibly spanning several days."""
    vehicle_type: str
    registration_number: str = ""
    passages: List[datetime] = Field(default_factory=list)


class FeeResponse(BaseModel):
    """Per-day fees plus their sum."""
    vehicle_type: str
    registration_number: str
    currency: str
    toll_free_vehicle: bool
    daily_fees: List[DailyFee]
    total: int


class DayBreakdown(BaseModel):
    """Interval breakdown for one calendar day."""
    day: date
    breakdown: FeeBreakdown


class BreakdownResponse(BaseModel):
    """Diagnostic breakdown for every day in the request."""
    vehicle_type: str
    currency: str
    days: List[DayBreakdown]


class ScheduleBand(BaseModel):
    """Serialized fee band."""
    window: str
    start_minute: int
    end_minute: int
    fee: int


class ScheduleResponse(BaseModel):
    """Time-of-day schedule and exempt vehicle types."""
    currency: str
    bands: List[ScheduleBand]
    toll_free_vehicles: List[str]


class HolidaysResponse(BaseModel):
    """Toll-free holidays for a year."""
    year: int
    include_moving_holidays: bool
    holidays: List[date]


def _vehicle_from_request(req: FeeRequest) -> Vehicle:
    """Resolve the vehicle tag, failing fast on anything unknown."""
    try:
        vehicle_type = parse_vehicle_type(req.vehicle_type)
    except UnsupportedVehicleTypeError as exc:
        logger.info("Rejected vehicle type", extra={"vehicle_type": req.vehicle_type})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return Vehicle(type=vehicle_type, registration_number=req.registration_number)


def _ensure_passages_present(req: FeeRequest) -> None:
    """Raise a 400 if the request carries no passages."""
    if not req.passages:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                            detail="Please add at least one valid passage time.")


@router.post("/fees", response_model=FeeResponse)
def calculate_fees(req: FeeRequest):
    """Group passages by local day and return the fee owed for each day."""
    _ensure_passages_present(req)
    vehicle = _vehicle_from_request(req)

    daily = calculate_daily_fees(
        vehicle,
        req.passages,
        tz=settings.tzinfo,
        include_moving_holidays=settings.include_moving_holidays,
    )
    total = sum(d.fee for d in daily)
    logger.info(f"Priced {len(req.passages)} passages over {len(daily)} day(s): {total} {settings.currency}")

    return FeeResponse(
        vehicle_type=vehicle.type.value,
        registration_number=vehicle.registration_number,
        currency=settings.currency,
        toll_free_vehicle=vehicle.type in TOLL_FREE_VEHICLES,
        daily_fees=daily,
        total=total,
    )


@router.post("/fees/breakdown", response_model=BreakdownResponse)
def explain_fees(req: FeeRequest):
    """Return the 60-minute interval partition for each day."""
    _ensure_passages_present(req)
    vehicle = _vehicle_from_request(req)

    days = [
        DayBreakdown(
            day=day,
            breakdown=explain_toll_fee(
                vehicle, passages, include_moving_holidays=settings.include_moving_holidays
            ),
        )
        for day, passages in group_passages_by_day(req.passages, settings.tzinfo).items()
    ]
    return BreakdownResponse(vehicle_type=vehicle.type.value, currency=settings.currency, days=days)


@router.get("/schedule", response_model=ScheduleResponse)
def get_schedule():
    """Expose the fee schedule so clients can display it."""
    bands = [
        ScheduleBand(window=band.label(), start_minute=band.start_minute, end_minute=band.end_minute, fee=band.fee)
        for band in FEE_SCHEDULE
    ]
    return ScheduleResponse(
        currency=settings.currency,
        bands=bands,
        toll_free_vehicles=sorted(v.value for v in TOLL_FREE_VEHICLES),
    )


@router.get("/holidays/{year}", response_model=HolidaysResponse)
def get_holidays(year: int):
    """List the toll-free holidays of a year (weekends and July not included)."""
    if year < 1583 or year > 9999:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unsupported year: {year}")
    return HolidaysResponse(
        year=year,
        include_moving_holidays=settings.include_moving_holidays,
        holidays=toll_free_holidays(year, include_moving_holidays=settings.include_moving_holidays),
    )

"""Domain vocabulary and strict schemas for toll fee calculations.

This module defines the stable contract between the fee engine and its
callers: vehicle classifications, the immutable rule tables' row types, and
the Pydantic models that describe a calculation's outcome. No fee logic lives
here.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


MAX_DAILY_FEE = 60
SINGLE_CHARGE_WINDOW_MINUTES = 60


class _StrictBaseModel(BaseModel):
    """Base model with strict extra handling."""

    model_config = ConfigDict(extra="forbid")


class _FrozenModel(_StrictBaseModel):
    """Immutable base model for static rule tables."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class VehicleType(str, Enum):
    """Vehicle classification used to decide exemptions."""
    MOTORBIKE = "Motorbike"
    TRACTOR = "Tractor"
    EMERGENCY = "Emergency"
    DIPLOMAT = "Diplomat"
    LORRY = "Lorry"
    BUS = "Bus"
    CAR = "Car"


class UnsupportedVehicleTypeError(ValueError):
    """Raised when a caller hands over a vehicle tag outside VehicleType."""

    def __init__(self, raw: object) -> None:
        allowed = ", ".join(v.value for v in VehicleType)
        super().__init__(f"Unsupported vehicle type: {raw!r} (expected one of: {allowed})")
        self.raw = raw


def parse_vehicle_type(raw: str | VehicleType) -> VehicleType:
    """Resolve a user supplied tag to a VehicleType, case-insensitively."""
    if isinstance(raw, VehicleType):
        return raw
    if isinstance(raw, str):
        wanted = raw.strip().lower()
        for vehicle_type in VehicleType:
            if vehicle_type.value.lower() == wanted:
                return vehicle_type
    raise UnsupportedVehicleTypeError(raw)


class Vehicle(_FrozenModel):
    """A classified vehicle; the registration number is never used for pricing."""
    type: VehicleType
    registration_number: str = ""


class FeeBand(_FrozenModel):
    """Fee charged for passages between two minutes of the day (both inclusive)."""
    start_minute: int = Field(ge=0, le=24 * 60 - 1)
    end_minute: int = Field(ge=0, le=24 * 60 - 1)
    fee: int = Field(ge=0)

    def contains(self, minute_of_day: int) -> bool:
        """Return True if the minute falls inside this band."""
        return self.start_minute <= minute_of_day <= self.end_minute

    def label(self) -> str:
        """Render the band as HH:MM-HH:MM."""
        start_h, start_m = divmod(self.start_minute, 60)
        end_h, end_m = divmod(self.end_minute, 60)
        return f"{start_h:02d}:{start_m:02d}-{end_h:02d}:{end_m:02d}"


class Holiday(_FrozenModel):
    """Fixed calendar holiday, 1-indexed month."""
    month: int = Field(ge=1, le=12)
    day: int = Field(ge=1, le=31)

    def matches(self, value: date) -> bool:
        """Return True if the date falls on this holiday in any year."""
        return value.month == self.month and value.day == self.day


class PassageCharge(_StrictBaseModel):
    """Single passage with the fee it would cost on its own."""
    time: datetime
    fee: int


class FeeInterval(_StrictBaseModel):
    """One charge window of the greedy 60-minute partition."""
    start: datetime
    passages: List[PassageCharge] = Field(default_factory=list)
    charged_fee: int = 0


class FeeBreakdown(_StrictBaseModel):
    """Diagnostic view of a single-day calculation."""
    vehicle_type: VehicleType | None = None
    intervals: List[FeeInterval] = Field(default_factory=list)
    uncapped_total: int = 0
    total: int = Field(default=0, ge=0, le=MAX_DAILY_FEE)


class DailyFee(_StrictBaseModel):
    """Fee owed for one calendar day."""
    day: date
    fee: int = Field(ge=0, le=MAX_DAILY_FEE)
    passages: int = 0

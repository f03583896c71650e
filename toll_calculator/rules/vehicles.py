"""Vehicle exemptions."""

from __future__ import annotations

from typing import Any, FrozenSet

from toll_calculator.domain import Vehicle, VehicleType, parse_vehicle_type


TOLL_FREE_VEHICLES: FrozenSet[VehicleType] = frozenset(
    {
        VehicleType.MOTORBIKE,
        VehicleType.TRACTOR,
        VehicleType.EMERGENCY,
        VehicleType.DIPLOMAT,
    }
)


def vehicle_type_of(vehicle: Vehicle | VehicleType | Any | None) -> VehicleType | None:
    """Extract the classification from a Vehicle, a VehicleType or tag string, or None.

    Tag strings go through parse_vehicle_type, so unknown tags raise
    UnsupportedVehicleTypeError.
    """
    if vehicle is None:
        return None
    if isinstance(vehicle, (VehicleType, str)):
        return parse_vehicle_type(vehicle)
    value = getattr(vehicle, "type", None)
    if isinstance(value, (VehicleType, str)):
        return parse_vehicle_type(value)
    return None


def is_toll_free_vehicle(vehicle: Vehicle | VehicleType | str | None) -> bool:
    """Return True for permanently exempt classifications; unset means not exempt."""
    vehicle_type = vehicle_type_of(vehicle)
    if vehicle_type is None:
        return False
    return vehicle_type in TOLL_FREE_VEHICLES

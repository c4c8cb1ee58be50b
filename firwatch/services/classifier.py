"""Geographic pre-filter plus altitude and sector classification."""

from __future__ import annotations

from typing import Iterable, Optional

from firwatch.domain import (
    ALTITUDE_FLOOR_M,
    FIR_LAT_MAX,
    FIR_LAT_MIN,
    FIR_LON_MAX,
    FIR_LON_MIN,
    LOWER_BAND_M,
    UPPER_BAND_M,
    Sector,
)
from firwatch.models.air_traffic import AircraftState


def altitude_for_filter(state: AircraftState) -> Optional[float]:
    """Prefer barometric altitude, fall back to geometric; None when both are absent."""

    if state.baro_altitude is not None:
        return state.baro_altitude
    return state.geo_altitude


def classify_sector(latitude: float, reference_latitude: float) -> Sector:
    if latitude > reference_latitude:
        return Sector.NORTH
    return Sector.SOUTH


def is_counted(altitude_m: Optional[float]) -> bool:
    return altitude_m is not None and altitude_m >= ALTITUDE_FLOOR_M


def in_lower_band(altitude_m: float) -> bool:
    low, high = LOWER_BAND_M
    return low <= altitude_m <= high


def in_upper_band(altitude_m: float) -> bool:
    low, high = UPPER_BAND_M
    return low <= altitude_m <= high


def in_fir(state: AircraftState) -> bool:
    """Return True when the record has a position inside the FIR bounding box."""

    if state.latitude is None or state.longitude is None:
        return False
    return (
        FIR_LAT_MIN <= state.latitude <= FIR_LAT_MAX
        and FIR_LON_MIN <= state.longitude <= FIR_LON_MAX
    )


def filter_to_fir(states: Iterable[AircraftState]) -> list[AircraftState]:
    """Re-filter a snapshot to the FIR box regardless of how the poller queried it."""

    return [state for state in states if in_fir(state)]


__all__ = [
    "altitude_for_filter",
    "classify_sector",
    "filter_to_fir",
    "in_fir",
    "in_lower_band",
    "in_upper_band",
    "is_counted",
]

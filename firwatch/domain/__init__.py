"""Domain constants and enumerations for FIR Watch."""

from .airspace import (
    ALTITUDE_FLOOR_M,
    BAGHDAD_LATITUDE,
    FIR_LAT_MAX,
    FIR_LAT_MIN,
    FIR_LON_MAX,
    FIR_LON_MIN,
    FL240_M,
    FL350_M,
    FL360_M,
    FL460_M,
    LEGACY_BAND_TAGS,
    LOWER_BAND_M,
    UPPER_BAND_M,
    Band,
    Sector,
    flight_level_to_meters,
)
from .timeofday import minute_of_day, parse_hhmm

__all__ = [
    "ALTITUDE_FLOOR_M",
    "BAGHDAD_LATITUDE",
    "Band",
    "FIR_LAT_MAX",
    "FIR_LAT_MIN",
    "FIR_LON_MAX",
    "FIR_LON_MIN",
    "FL240_M",
    "FL350_M",
    "FL360_M",
    "FL460_M",
    "LEGACY_BAND_TAGS",
    "LOWER_BAND_M",
    "Sector",
    "UPPER_BAND_M",
    "flight_level_to_meters",
    "minute_of_day",
    "parse_hhmm",
]

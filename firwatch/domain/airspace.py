"""Airspace definitions for the Baghdad FIR."""

from __future__ import annotations

from enum import Enum

FEET_TO_METERS = 0.3048


def flight_level_to_meters(level: float) -> float:
    """Convert a flight level (hundreds of feet) to meters."""

    return level * 100 * FEET_TO_METERS


FL240_M = flight_level_to_meters(240)  # ~7315 m
FL350_M = flight_level_to_meters(350)
FL360_M = flight_level_to_meters(360)
FL460_M = flight_level_to_meters(460)

# Nothing below the floor is counted at all
ALTITUDE_FLOOR_M = FL240_M
LOWER_BAND_M = (FL240_M, FL350_M)
UPPER_BAND_M = (FL360_M, FL460_M)

# Approximation of the FIR; the poller queries OpenSky with the same box
FIR_LAT_MIN = 28.0
FIR_LAT_MAX = 37.0
FIR_LON_MIN = 38.0
FIR_LON_MAX = 49.0

BAGHDAD_LATITUDE = 33.3128


class Sector(str, Enum):
    """Half of the FIR split at the reference latitude."""

    NORTH = "North"
    SOUTH = "South"


class Band(str, Enum):
    """Altitude band a schedule window refers to."""

    LOWER = "lower-band"
    UPPER = "upper-band"
    BOTH = "both-bands"
    ALL = "all-altitudes"


# Tags written by the first browser-only version of the schedule editor
LEGACY_BAND_TAGS: dict[str, Band] = {
    "240-350": Band.LOWER,
    "360-460": Band.UPPER,
    "both": Band.BOTH,
    "all": Band.ALL,
}

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
]

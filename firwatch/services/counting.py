"""Sector and altitude-band traffic counts for one snapshot."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable

from firwatch.domain import Sector
from firwatch.models.air_traffic import AircraftState
from firwatch.models.dashboard import CountsResponse
from firwatch.services.classifier import (
    altitude_for_filter,
    classify_sector,
    in_lower_band,
    in_upper_band,
    is_counted,
)

logger = logging.getLogger("firwatch.counting")


@dataclass
class SectorCounts:
    """Counts per sector for the lower band, upper band and everything above the floor.

    The two named bands are independent: a record between FL350 and FL360,
    or above FL460, is only counted in the ``all`` category.
    """

    north_lower: int = 0
    south_lower: int = 0
    north_upper: int = 0
    south_upper: int = 0
    north_all: int = 0
    south_all: int = 0

    @property
    def total_lower(self) -> int:
        return self.north_lower + self.south_lower

    @property
    def total_upper(self) -> int:
        return self.north_upper + self.south_upper

    @property
    def total_all(self) -> int:
        return self.north_all + self.south_all

    def to_response(self) -> CountsResponse:
        return CountsResponse(
            north_lower=self.north_lower,
            south_lower=self.south_lower,
            total_lower=self.total_lower,
            north_upper=self.north_upper,
            south_upper=self.south_upper,
            total_upper=self.total_upper,
            north_all=self.north_all,
            south_all=self.south_all,
            total_all=self.total_all,
        )


def count_states(
    states: Iterable[AircraftState], reference_latitude: float
) -> SectorCounts:
    """Aggregate the six counters in a single pass over the snapshot."""

    counts = SectorCounts()
    for state in states:
        altitude = altitude_for_filter(state)
        if not is_counted(altitude) or state.latitude is None:
            continue

        north = classify_sector(state.latitude, reference_latitude) is Sector.NORTH
        if in_lower_band(altitude):
            if north:
                counts.north_lower += 1
            else:
                counts.south_lower += 1
        if in_upper_band(altitude):
            if north:
                counts.north_upper += 1
            else:
                counts.south_upper += 1
        if north:
            counts.north_all += 1
        else:
            counts.south_all += 1

    logger.debug("Counts computed: %s", counts)
    return counts


__all__ = ["SectorCounts", "count_states"]

"""Map markers reconciled against each snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterable, Optional

from firwatch.domain import Sector
from firwatch.models.air_traffic import AircraftState
from firwatch.models.dashboard import MarkerResponse
from firwatch.services.classifier import altitude_for_filter, classify_sector

logger = logging.getLogger("firwatch.markers")


@dataclass
class Marker:
    """Display marker owned by the registry for one aircraft."""

    icao24: str
    latitude: float
    longitude: float
    sector: Sector
    altitude_m: Optional[float] = None
    velocity: Optional[float] = None
    callsign: Optional[str] = None

    @property
    def popup(self) -> str:
        label = self.callsign or self.icao24
        altitude = round(self.altitude_m or 0)
        velocity = f"{self.velocity} m/s" if self.velocity else "N/A"
        return f"{label} | Alt: {altitude} m | Vel: {velocity} | {self.sector.value}"

    def to_response(self) -> MarkerResponse:
        return MarkerResponse(
            icao24=self.icao24,
            latitude=self.latitude,
            longitude=self.longitude,
            altitude_m=self.altitude_m,
            velocity=self.velocity,
            sector=self.sector,
            popup=self.popup,
        )


@dataclass
class ReconcileResult:
    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)


class MarkerRegistry:
    """Mapping from aircraft identifier to its marker.

    ``reconcile`` diffs the latest snapshot against the current markers so
    that retained aircraft keep their marker object and only new or vanished
    aircraft cause markers to be created or dropped.
    """

    def __init__(self) -> None:
        self._markers: dict[str, Marker] = {}

    def __len__(self) -> int:
        return len(self._markers)

    def __contains__(self, icao24: object) -> bool:
        return icao24 in self._markers

    def get(self, icao24: str) -> Optional[Marker]:
        return self._markers.get(icao24)

    def markers(self) -> list[Marker]:
        return list(self._markers.values())

    def clear(self) -> None:
        self._markers.clear()

    def reconcile(
        self, states: Iterable[AircraftState], reference_latitude: float
    ) -> ReconcileResult:
        result = ReconcileResult()
        placeable = [
            state
            for state in states
            if state.icao24 and state.latitude is not None and state.longitude is not None
        ]
        seen = {state.icao24 for state in placeable}

        for icao24 in list(self._markers):
            if icao24 not in seen:
                del self._markers[icao24]
                result.removed.append(icao24)

        for state in placeable:
            sector = classify_sector(state.latitude, reference_latitude)
            altitude = altitude_for_filter(state)
            marker = self._markers.get(state.icao24)
            if marker is None:
                self._markers[state.icao24] = Marker(
                    icao24=state.icao24,
                    latitude=state.latitude,
                    longitude=state.longitude,
                    sector=sector,
                    altitude_m=altitude,
                    velocity=state.velocity,
                    callsign=state.callsign,
                )
                result.added.append(state.icao24)
            else:
                marker.latitude = state.latitude
                marker.longitude = state.longitude
                marker.sector = sector
                marker.altitude_m = altitude
                marker.velocity = state.velocity
                marker.callsign = state.callsign
                result.updated.append(state.icao24)

        logger.debug(
            "Markers reconciled: added=%s updated=%s removed=%s",
            len(result.added),
            len(result.updated),
            len(result.removed),
        )
        return result


__all__ = ["Marker", "MarkerRegistry", "ReconcileResult"]

"""Models for aircraft state vectors carried in a flight snapshot."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AircraftState(BaseModel):
    """One aircraft as written to the snapshot file by the poller."""

    icao24: Optional[str] = Field(default=None, description="ICAO 24-bit hex identifier")
    callsign: Optional[str] = Field(default=None, description="Callsign, display only")
    origin_country: Optional[str] = Field(
        default=None, description="Country of registration"
    )
    latitude: Optional[float] = Field(default=None, description="Latitude in decimal degrees")
    longitude: Optional[float] = Field(
        default=None, description="Longitude in decimal degrees"
    )
    baro_altitude: Optional[float] = Field(
        default=None, description="Barometric altitude in meters"
    )
    geo_altitude: Optional[float] = Field(
        default=None, description="Geometric altitude in meters, used when barometric is absent"
    )
    velocity: Optional[float] = Field(default=None, description="Ground speed in m/s")

    model_config = ConfigDict(extra="ignore")


class FlightSnapshot(BaseModel):
    """Document written by the poller and read by the viewer on every refresh."""

    time: Optional[int] = Field(
        default=None, description="Upstream capture time in seconds since epoch"
    )
    fetched_at: Optional[datetime] = Field(
        default=None, description="When the poller wrote the snapshot (UTC)"
    )
    states: list[AircraftState] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


__all__ = ["AircraftState", "FlightSnapshot"]

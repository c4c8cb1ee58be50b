"""Response models for the dashboard display surface."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from firwatch.domain import Sector


class CountsResponse(BaseModel):
    """Six sector/band counters plus derived totals."""

    north_lower: int = Field(..., description="North sector, FL240-FL350")
    south_lower: int = Field(..., description="South sector, FL240-FL350")
    total_lower: int = Field(..., description="Both sectors, FL240-FL350")
    north_upper: int = Field(..., description="North sector, FL360-FL460")
    south_upper: int = Field(..., description="South sector, FL360-FL460")
    total_upper: int = Field(..., description="Both sectors, FL360-FL460")
    north_all: int = Field(..., description="North sector, at or above FL240")
    south_all: int = Field(..., description="South sector, at or above FL240")
    total_all: int = Field(..., description="Both sectors, at or above FL240")


class AlarmResponse(BaseModel):
    """Binary peak alarm indicator."""

    active: bool
    color: Literal["red", "green"]
    label: str
    evaluated_at: Optional[datetime] = Field(
        default=None, description="When the alarm was last evaluated (UTC)"
    )


class ClockResponse(BaseModel):
    """Live UTC clock."""

    utc_time: str = Field(..., examples=["Sun, 18 Oct 2026 13:00:00 UTC"])
    now: datetime


class MarkerResponse(BaseModel):
    """Map marker for one aircraft."""

    icao24: str
    latitude: float
    longitude: float
    altitude_m: Optional[float] = None
    velocity: Optional[float] = None
    sector: Sector
    popup: str


class MapCenter(BaseModel):
    latitude: float
    longitude: float
    zoom: int


class DashboardResponse(BaseModel):
    """Everything a viewer page needs for one render."""

    counts: CountsResponse
    alarm: AlarmResponse
    clock: ClockResponse
    markers: list[MarkerResponse] = Field(default_factory=list)
    flight_count: int = Field(..., description="Records inside the FIR on the last refresh")
    last_refresh_at: Optional[datetime] = None
    reference_latitude: float
    map_center: MapCenter


class ReferenceLatitude(BaseModel):
    """North/South split latitude."""

    latitude: float = Field(..., ge=-90.0, le=90.0)


__all__ = [
    "AlarmResponse",
    "ClockResponse",
    "CountsResponse",
    "DashboardResponse",
    "MapCenter",
    "MarkerResponse",
    "ReferenceLatitude",
]

"""Pydantic models for FIR Watch."""

from .air_traffic import AircraftState, FlightSnapshot
from .dashboard import (
    AlarmResponse,
    ClockResponse,
    CountsResponse,
    DashboardResponse,
    MapCenter,
    MarkerResponse,
    ReferenceLatitude,
)
from .schedule import ScheduleResponse, ScheduleWindow

__all__ = [
    "AircraftState",
    "AlarmResponse",
    "ClockResponse",
    "CountsResponse",
    "DashboardResponse",
    "FlightSnapshot",
    "MapCenter",
    "MarkerResponse",
    "ReferenceLatitude",
    "ScheduleResponse",
    "ScheduleWindow",
]

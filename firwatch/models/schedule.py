"""Peak-window schedule models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from firwatch.domain import LEGACY_BAND_TAGS, Band, Sector, parse_hhmm


class ScheduleWindow(BaseModel):
    """A daily UTC window; ``end`` earlier than ``start`` wraps past midnight."""

    start: str = Field(..., description="Window start, HH:MM UTC", examples=["05:30"])
    end: str = Field(..., description="Window end, HH:MM UTC", examples=["07:30"])
    sector: Sector = Field(..., description="Sector the window applies to")
    band: Band = Field(..., description="Altitude band the window applies to")

    @field_validator("start", "end")
    @classmethod
    def _check_time(cls, value: str) -> str:
        parse_hhmm(value)
        return value

    @field_validator("band", mode="before")
    @classmethod
    def _map_legacy_band(cls, value: Any) -> Any:
        if isinstance(value, str) and value in LEGACY_BAND_TAGS:
            return LEGACY_BAND_TAGS[value]
        return value

    @property
    def start_minute(self) -> int:
        return parse_hhmm(self.start)

    @property
    def end_minute(self) -> int:
        return parse_hhmm(self.end)


class ScheduleResponse(BaseModel):
    """Current schedule as returned by the schedule endpoints."""

    windows: list[ScheduleWindow] = Field(default_factory=list)
    alarm_active: bool = Field(
        ..., description="Whether any window contains the current UTC minute"
    )


__all__ = ["ScheduleResponse", "ScheduleWindow"]

"""Read-only display endpoints: counters, alarm, clock and map markers."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from firwatch.api.deps import get_dashboard_state
from firwatch.config import settings
from firwatch.db import get_db
from firwatch.models.dashboard import (
    AlarmResponse,
    ClockResponse,
    CountsResponse,
    DashboardResponse,
    MapCenter,
    MarkerResponse,
    ReferenceLatitude,
)
from firwatch.services.dashboard import DashboardState, format_utc_clock, utc_now
from firwatch.services.schedule_store import (
    get_reference_latitude,
    set_reference_latitude,
)

router = APIRouter(prefix="/api/v1", tags=["dashboard"])

logger = logging.getLogger("firwatch.api.dashboard")


def _clock() -> ClockResponse:
    now = utc_now()
    return ClockResponse(utc_time=format_utc_clock(now), now=now)


@router.get("/counts", response_model=CountsResponse, summary="Sector and band counts")
def get_counts(state: DashboardState = Depends(get_dashboard_state)) -> CountsResponse:
    return state.counts_response()


@router.get("/alarm", response_model=AlarmResponse, summary="Peak alarm indicator")
def get_alarm(state: DashboardState = Depends(get_dashboard_state)) -> AlarmResponse:
    return state.alarm_response()


@router.get("/clock", response_model=ClockResponse, summary="Current UTC time")
def get_clock() -> ClockResponse:
    return _clock()


@router.get(
    "/markers", response_model=list[MarkerResponse], summary="Aircraft positions"
)
def get_markers(
    state: DashboardState = Depends(get_dashboard_state),
) -> list[MarkerResponse]:
    return state.markers_response()


@router.get(
    "/dashboard", response_model=DashboardResponse, summary="Everything for one render"
)
def get_dashboard(
    state: DashboardState = Depends(get_dashboard_state),
    db: Session = Depends(get_db),
) -> DashboardResponse:
    reference_latitude = get_reference_latitude(db)
    return DashboardResponse(
        counts=state.counts_response(),
        alarm=state.alarm_response(),
        clock=_clock(),
        markers=state.markers_response(),
        flight_count=state.flight_count,
        last_refresh_at=state.last_refresh_at,
        reference_latitude=reference_latitude,
        map_center=MapCenter(
            latitude=reference_latitude,
            longitude=settings.map_center_lon,
            zoom=settings.map_zoom,
        ),
    )


@router.get(
    "/reference-latitude",
    response_model=ReferenceLatitude,
    summary="North/South split latitude",
)
def read_reference_latitude(db: Session = Depends(get_db)) -> ReferenceLatitude:
    return ReferenceLatitude(latitude=get_reference_latitude(db))


@router.put(
    "/reference-latitude",
    response_model=ReferenceLatitude,
    summary="Override the North/South split latitude",
)
def update_reference_latitude(
    payload: ReferenceLatitude, db: Session = Depends(get_db)
) -> ReferenceLatitude:
    """Takes effect from the next refresh tick."""

    latitude = set_reference_latitude(db, payload.latitude)
    logger.info("Reference latitude updated via API: %.4f", latitude)
    return ReferenceLatitude(latitude=latitude)

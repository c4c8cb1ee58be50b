"""Peak-window schedule editing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from firwatch.api.deps import get_dashboard_state, get_schedule_store
from firwatch.models.schedule import ScheduleResponse, ScheduleWindow
from firwatch.services.dashboard import DashboardState
from firwatch.services.schedule_store import ScheduleStore

router = APIRouter(prefix="/api/v1/schedule", tags=["schedule"])

logger = logging.getLogger("firwatch.api.schedule")


def _response(windows: list[ScheduleWindow], state: DashboardState) -> ScheduleResponse:
    return ScheduleResponse(windows=windows, alarm_active=state.alarm_active)


@router.get("", response_model=ScheduleResponse, summary="Load the schedule")
def load_schedule(
    store: ScheduleStore = Depends(get_schedule_store),
    state: DashboardState = Depends(get_dashboard_state),
) -> ScheduleResponse:
    """Return the schedule, seeding the example windows on first use."""

    windows = store.load()
    state.apply_schedule(windows)
    return _response(windows, state)


@router.put("", response_model=ScheduleResponse, summary="Replace the schedule")
def save_schedule(
    windows: list[ScheduleWindow],
    store: ScheduleStore = Depends(get_schedule_store),
    state: DashboardState = Depends(get_dashboard_state),
) -> ScheduleResponse:
    """Overwrite the stored schedule with the submitted list."""

    return _response(store.save(windows), state)


@router.post(
    "",
    response_model=ScheduleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Append a window",
)
def append_window(
    window: ScheduleWindow,
    store: ScheduleStore = Depends(get_schedule_store),
    state: DashboardState = Depends(get_dashboard_state),
) -> ScheduleResponse:
    return _response(store.append(window), state)


@router.delete("/{index}", response_model=ScheduleResponse, summary="Delete a window")
def remove_window(
    index: int,
    store: ScheduleStore = Depends(get_schedule_store),
    state: DashboardState = Depends(get_dashboard_state),
) -> ScheduleResponse:
    """Delete the window at its displayed position; later windows shift up."""

    try:
        windows = store.remove(index)
    except IndexError as exc:
        logger.info("Schedule delete rejected: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    return _response(windows, state)


@router.post("/reset", response_model=ScheduleResponse, summary="Reset the schedule")
def reset_schedule(
    store: ScheduleStore = Depends(get_schedule_store),
    state: DashboardState = Depends(get_dashboard_state),
) -> ScheduleResponse:
    """Drop the stored schedule and fall back to the example windows."""

    return _response(store.reset(), state)

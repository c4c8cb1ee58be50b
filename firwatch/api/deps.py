"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from firwatch.db import get_db
from firwatch.services.dashboard import DashboardState
from firwatch.services.schedule_store import ScheduleStore


def get_dashboard_state(request: Request) -> DashboardState:
    return request.app.state.dashboard


def get_schedule_store(
    state: DashboardState = Depends(get_dashboard_state),
    db: Session = Depends(get_db),
) -> ScheduleStore:
    """Schedule store whose edits immediately re-evaluate the dashboard alarm."""

    return ScheduleStore(db, listeners=[state.apply_schedule])

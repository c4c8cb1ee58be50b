"""Dashboard state and the periodic refresh and alarm tasks that update it."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
import logging
from typing import Awaitable, Callable, Iterable, Optional

import anyio.to_thread

from firwatch.config import settings
from firwatch.db import SessionLocal
from firwatch.models.air_traffic import AircraftState
from firwatch.models.dashboard import AlarmResponse, CountsResponse, MarkerResponse
from firwatch.models.schedule import ScheduleWindow
from firwatch.services.classifier import filter_to_fir
from firwatch.services.counting import SectorCounts, count_states
from firwatch.services.markers import MarkerRegistry
from firwatch.services.schedule_store import ScheduleStore, get_reference_latitude
from firwatch.services.snapshot_loader import SnapshotLoader
from firwatch.services.windows import is_alarm_active

logger = logging.getLogger("firwatch.dashboard")

ALARM_ON_LABEL = "PEAK - sectorisation active (red)"
ALARM_OFF_LABEL = "No peak (green)"

Clock = Callable[[], datetime]
ScheduleProvider = Callable[[], list[ScheduleWindow]]
LatitudeProvider = Callable[[], float]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_utc_clock(moment: datetime) -> str:
    """Format like a browser's ``toUTCString`` with a ``UTC`` suffix."""

    return moment.astimezone(timezone.utc).strftime("%a, %d %b %Y %H:%M:%S UTC")


def load_schedule_from_db() -> list[ScheduleWindow]:
    db = SessionLocal()
    try:
        return ScheduleStore(db).load()
    finally:
        db.close()


def load_reference_latitude_from_db() -> float:
    db = SessionLocal()
    try:
        return get_reference_latitude(db)
    finally:
        db.close()


class DashboardState:
    """Latest counts, markers and alarm shown to every viewer.

    Each refresh replaces counts wholesale; nothing carries over between
    snapshots except marker objects for aircraft that are still present.
    """

    def __init__(self) -> None:
        self.counts = SectorCounts()
        self.markers = MarkerRegistry()
        self.flight_count = 0
        self.last_refresh_at: Optional[datetime] = None
        self.alarm_active = False
        self.alarm_evaluated_at: Optional[datetime] = None

    def apply_snapshot(
        self,
        states: Iterable[AircraftState],
        reference_latitude: float,
        now: Optional[datetime] = None,
    ) -> None:
        in_fir = filter_to_fir(states)
        self.counts = count_states(in_fir, reference_latitude)
        self.markers.reconcile(in_fir, reference_latitude)
        self.flight_count = len(in_fir)
        self.last_refresh_at = now or utc_now()

    def apply_schedule(
        self, windows: Iterable[ScheduleWindow], now: Optional[datetime] = None
    ) -> bool:
        now = now or utc_now()
        active = is_alarm_active(windows, now)
        if active != self.alarm_active:
            logger.info("Peak alarm %s", "activated" if active else "cleared")
        self.alarm_active = active
        self.alarm_evaluated_at = now
        return active

    def counts_response(self) -> CountsResponse:
        return self.counts.to_response()

    def alarm_response(self) -> AlarmResponse:
        return AlarmResponse(
            active=self.alarm_active,
            color="red" if self.alarm_active else "green",
            label=ALARM_ON_LABEL if self.alarm_active else ALARM_OFF_LABEL,
            evaluated_at=self.alarm_evaluated_at,
        )

    def markers_response(self) -> list[MarkerResponse]:
        return [marker.to_response() for marker in self.markers.markers()]


async def run_periodic(
    callback: Callable[[], Awaitable[None]], interval: float, *, name: str
) -> None:
    """Run ``callback`` now and then every ``interval`` seconds until cancelled."""

    while True:
        try:
            await callback()
        except asyncio.CancelledError:
            logger.info("%s task cancelled", name)
            raise
        except Exception as exc:
            logger.warning("%s tick failed: %s", name, exc)
        await asyncio.sleep(interval)


class RefreshLoop:
    """Fetch, filter, count, reconcile markers and re-evaluate the alarm."""

    def __init__(
        self,
        *,
        state: DashboardState,
        loader: SnapshotLoader | None = None,
        schedule_provider: ScheduleProvider = load_schedule_from_db,
        reference_latitude_provider: LatitudeProvider = load_reference_latitude_from_db,
        interval: float | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.state = state
        self.loader = loader or SnapshotLoader()
        self.schedule_provider = schedule_provider
        self.reference_latitude_provider = reference_latitude_provider
        self.interval = interval or settings.refresh_seconds
        self.clock = clock

    async def tick(self) -> None:
        # A failed fetch comes back as an empty list and zeroes the counts
        states = await self.loader.load()
        now = self.clock()
        # Providers hit the database; keep them off the event loop
        reference_latitude = await anyio.to_thread.run_sync(self.reference_latitude_provider)
        windows = await anyio.to_thread.run_sync(self.schedule_provider)
        self.state.apply_snapshot(states, reference_latitude, now)
        self.state.apply_schedule(windows, now)
        logger.info(
            "Refresh: %s flights in FIR, %s at or above FL240",
            self.state.flight_count,
            self.state.counts.total_all,
        )

    async def run(self) -> None:
        await run_periodic(self.tick, self.interval, name="refresh")


class AlarmMonitor:
    """Re-evaluate the peak alarm on its own timer, independent of refreshes."""

    def __init__(
        self,
        *,
        state: DashboardState,
        schedule_provider: ScheduleProvider = load_schedule_from_db,
        interval: float | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.state = state
        self.schedule_provider = schedule_provider
        self.interval = interval or settings.alarm_seconds
        self.clock = clock

    async def tick(self) -> None:
        windows = await anyio.to_thread.run_sync(self.schedule_provider)
        self.state.apply_schedule(windows, self.clock())

    async def run(self) -> None:
        await run_periodic(self.tick, self.interval, name="alarm")


__all__ = [
    "ALARM_OFF_LABEL",
    "ALARM_ON_LABEL",
    "AlarmMonitor",
    "DashboardState",
    "RefreshLoop",
    "format_utc_clock",
    "load_reference_latitude_from_db",
    "load_schedule_from_db",
    "run_periodic",
    "utc_now",
]

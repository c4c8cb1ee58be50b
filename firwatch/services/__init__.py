"""Service-layer helpers for FIR Watch."""

from .classifier import (
    altitude_for_filter,
    classify_sector,
    filter_to_fir,
    in_fir,
)
from .counting import SectorCounts, count_states
from .dashboard import (
    AlarmMonitor,
    DashboardState,
    RefreshLoop,
    format_utc_clock,
    utc_now,
)
from .markers import Marker, MarkerRegistry, ReconcileResult
from .schedule_store import (
    SEED_SCHEDULE,
    ScheduleStore,
    get_reference_latitude,
    set_reference_latitude,
)
from .snapshot_loader import SnapshotLoader
from .windows import WindowKind, contains_minute, is_alarm_active, window_contains

__all__ = [
    "AlarmMonitor",
    "DashboardState",
    "Marker",
    "MarkerRegistry",
    "ReconcileResult",
    "RefreshLoop",
    "SEED_SCHEDULE",
    "ScheduleStore",
    "SectorCounts",
    "SnapshotLoader",
    "WindowKind",
    "altitude_for_filter",
    "classify_sector",
    "contains_minute",
    "count_states",
    "filter_to_fir",
    "format_utc_clock",
    "get_reference_latitude",
    "in_fir",
    "is_alarm_active",
    "set_reference_latitude",
    "utc_now",
    "window_contains",
]

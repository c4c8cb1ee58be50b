"""Peak-window containment and alarm evaluation."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Optional

from firwatch.domain import minute_of_day, parse_hhmm
from firwatch.models.schedule import ScheduleWindow


class WindowKind(str, Enum):
    """A window either stays within one UTC day or wraps past midnight."""

    NON_WRAPPING = "non-wrapping"
    WRAPPING = "wrapping"


def window_kind(start_minute: int, end_minute: int) -> WindowKind:
    # start == end is a single-minute window, not a full day
    if start_minute <= end_minute:
        return WindowKind.NON_WRAPPING
    return WindowKind.WRAPPING


def contains_minute(start_minute: int, end_minute: int, now_minute: int) -> bool:
    """Return True when ``now_minute`` lies in the window, both ends inclusive."""

    kind = window_kind(start_minute, end_minute)
    if kind is WindowKind.NON_WRAPPING:
        return start_minute <= now_minute <= end_minute
    return now_minute >= start_minute or now_minute <= end_minute


def window_contains(window: ScheduleWindow, now_minute: int) -> bool:
    return contains_minute(window.start_minute, window.end_minute, now_minute)


def is_alarm_active(
    windows: Iterable[ScheduleWindow], now: Optional[datetime] = None
) -> bool:
    """Return True when any window contains the current UTC minute.

    Sector and band tags do not take part in the decision.
    """

    now = now or datetime.now(timezone.utc)
    now_minute = minute_of_day(now)
    return any(window_contains(window, now_minute) for window in windows)


__all__ = [
    "WindowKind",
    "contains_minute",
    "is_alarm_active",
    "parse_hhmm",
    "window_contains",
    "window_kind",
]

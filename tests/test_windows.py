from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from firwatch.domain import Band, Sector, parse_hhmm
from firwatch.models.schedule import ScheduleWindow
from firwatch.services.schedule_store import SEED_SCHEDULE
from firwatch.services.windows import (
    WindowKind,
    is_alarm_active,
    window_contains,
    window_kind,
)


def _window(start: str, end: str) -> ScheduleWindow:
    return ScheduleWindow(start=start, end=end, sector=Sector.NORTH, band=Band.BOTH)


def _at(hhmm: str) -> datetime:
    hour, minute = hhmm.split(":")
    return datetime(2026, 10, 18, int(hour), int(minute), tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("value", "expected"),
    [("00:00", 0), ("05:30", 330), ("23:59", 1439), ("12:07", 727)],
)
def test_parse_hhmm_valid(value, expected):
    assert parse_hhmm(value) == expected


@pytest.mark.parametrize("value", ["7:30", "24:00", "12:60", "12-30", "", "12:30:00", " 12:30", None])
def test_parse_hhmm_rejects_malformed(value):
    with pytest.raises(ValueError):
        parse_hhmm(value)


def test_schedule_window_rejects_malformed_times():
    with pytest.raises(ValidationError):
        ScheduleWindow(start="25:00", end="07:30", sector="North", band="both-bands")
    with pytest.raises(ValidationError):
        ScheduleWindow(start="05:30", end="7:3", sector="North", band="both-bands")


def test_schedule_window_accepts_legacy_band_tags():
    window = ScheduleWindow(start="05:30", end="07:30", sector="South", band="240-350")

    assert window.band is Band.LOWER
    assert ScheduleWindow.model_validate(
        {"start": "00:00", "end": "01:00", "sector": "North", "band": "all"}
    ).band is Band.ALL


def test_non_wrapping_window_is_inclusive_at_both_ends():
    window = _window("05:30", "07:30")

    assert window_kind(window.start_minute, window.end_minute) is WindowKind.NON_WRAPPING
    assert window_contains(window, parse_hhmm("05:30"))
    assert window_contains(window, parse_hhmm("07:30"))
    assert not window_contains(window, parse_hhmm("05:29"))
    assert not window_contains(window, parse_hhmm("07:31"))


def test_wrapping_window_crosses_midnight():
    window = _window("23:30", "01:30")

    assert window_kind(window.start_minute, window.end_minute) is WindowKind.WRAPPING
    for inside in ("23:45", "00:15", "01:30", "23:30"):
        assert window_contains(window, parse_hhmm(inside))
    for outside in ("02:00", "23:00"):
        assert not window_contains(window, parse_hhmm(outside))


def test_equal_start_and_end_matches_only_that_minute():
    window = _window("10:00", "10:00")

    assert window_kind(window.start_minute, window.end_minute) is WindowKind.NON_WRAPPING
    assert window_contains(window, parse_hhmm("10:00"))
    assert not window_contains(window, parse_hhmm("09:59"))
    assert not window_contains(window, parse_hhmm("10:01"))


def test_seed_schedule_alarm_active_at_13_and_inactive_at_09():
    assert is_alarm_active(SEED_SCHEDULE, _at("13:00"))
    assert not is_alarm_active(SEED_SCHEDULE, _at("09:00"))


def test_alarm_ignores_sector_and_band_tags():
    windows = [
        ScheduleWindow(start="09:00", end="09:30", sector="South", band="upper-band")
    ]

    assert is_alarm_active(windows, _at("09:15"))


def test_alarm_inactive_for_empty_schedule():
    assert not is_alarm_active([], _at("13:00"))


def test_alarm_uses_utc_for_aware_datetimes():
    baghdad = timezone(timedelta(hours=3))
    # 16:00 in Baghdad is 13:00 UTC
    moment = datetime(2026, 10, 18, 16, 0, tzinfo=baghdad)

    assert is_alarm_active(SEED_SCHEDULE, moment)

import json
import threading
import time

import pytest

from firwatch.config import settings
from firwatch.db import SessionLocal
from firwatch.db_models import StoredValue
from firwatch.models.schedule import ScheduleWindow
from firwatch.services.schedule_store import (
    REFERENCE_LAT_KEY,
    SCHEDULE_KEY,
    SEED_SCHEDULE,
    ScheduleStore,
    get_reference_latitude,
    set_reference_latitude,
)


def _window(start: str, end: str, sector: str = "North") -> ScheduleWindow:
    return ScheduleWindow(start=start, end=end, sector=sector, band="both-bands")


def test_first_load_seeds_and_persists_example_schedule(db_session):
    store = ScheduleStore(db_session)

    windows = store.load()

    assert windows == list(SEED_SCHEDULE)
    stored = db_session.get(StoredValue, SCHEDULE_KEY)
    assert stored is not None
    assert json.loads(stored.value)[0] == {
        "start": "05:30",
        "end": "07:30",
        "sector": "South",
        "band": "both-bands",
    }


def test_save_overwrites_previous_list_wholesale(db_session):
    store = ScheduleStore(db_session)
    store.load()

    store.save([_window("09:00", "10:00")])

    assert store.load() == [_window("09:00", "10:00")]


def test_append_adds_to_end(db_session):
    store = ScheduleStore(db_session)
    store.save([_window("09:00", "10:00")])

    store.append(_window("22:00", "02:00", sector="South"))

    assert [(w.start, w.end) for w in store.load()] == [("09:00", "10:00"), ("22:00", "02:00")]


def test_remove_by_position_reindexes_remaining(db_session):
    store = ScheduleStore(db_session)
    store.save([_window("01:00", "02:00"), _window("03:00", "04:00"), _window("05:00", "06:00")])

    remaining = store.remove(1)

    assert [w.start for w in remaining] == ["01:00", "05:00"]
    assert [w.start for w in store.load()] == ["01:00", "05:00"]
    store.remove(1)
    assert [w.start for w in store.load()] == ["01:00"]


def test_remove_out_of_range_raises_and_keeps_list(db_session):
    store = ScheduleStore(db_session)
    store.save([_window("01:00", "02:00")])

    with pytest.raises(IndexError):
        store.remove(5)
    with pytest.raises(IndexError):
        store.remove(-1)

    assert len(store.load()) == 1


def test_reset_returns_to_seed(db_session):
    store = ScheduleStore(db_session)
    store.save([])
    assert store.load() == []

    windows = store.reset()

    assert windows == list(SEED_SCHEDULE)
    assert store.load() == list(SEED_SCHEDULE)


def test_corrupted_stored_json_is_treated_as_empty(db_session):
    db_session.add(StoredValue(key=SCHEDULE_KEY, value="{not json"))
    db_session.commit()

    assert ScheduleStore(db_session).load() == []


def test_invalid_stored_entries_are_skipped(db_session):
    entries = [
        {"start": "05:30", "end": "07:30", "sector": "South", "band": "both"},
        {"start": "5:30", "end": "07:30", "sector": "South", "band": "both"},
    ]
    db_session.add(StoredValue(key=SCHEDULE_KEY, value=json.dumps(entries)))
    db_session.commit()

    windows = ScheduleStore(db_session).load()

    assert len(windows) == 1
    assert windows[0].band.value == "both-bands"


def test_mutations_notify_listeners_with_new_list(db_session):
    seen: list[list[ScheduleWindow]] = []
    store = ScheduleStore(db_session, listeners=[seen.append])

    store.save([_window("01:00", "02:00")])
    store.append(_window("03:00", "04:00"))
    store.remove(0)
    store.reset()

    assert [len(windows) for windows in seen] == [1, 2, 1, len(SEED_SCHEDULE)]


def test_reference_latitude_defaults_to_settings_and_can_be_overridden(db_session):
    assert get_reference_latitude(db_session) == settings.reference_latitude

    set_reference_latitude(db_session, 34.5)

    assert get_reference_latitude(db_session) == 34.5


def test_invalid_stored_reference_latitude_falls_back_to_default(db_session):
    db_session.add(StoredValue(key=REFERENCE_LAT_KEY, value="north-ish"))
    db_session.commit()

    assert get_reference_latitude(db_session) == settings.reference_latitude


def _run_concurrently(monkeypatch, action_a, action_b):
    original_load = ScheduleStore.load

    def slow_load(self):
        windows = original_load(self)
        # widen the gap between reading and writing the shared row
        time.sleep(0.05)
        return windows

    monkeypatch.setattr(ScheduleStore, "load", slow_load)

    sessions = [SessionLocal(), SessionLocal()]
    errors: list[Exception] = []

    def worker(session, action):
        try:
            action(ScheduleStore(session))
        except Exception as exc:
            errors.append(exc)

    threads = [
        threading.Thread(target=worker, args=(sessions[0], action_a)),
        threading.Thread(target=worker, args=(sessions[1], action_b)),
    ]
    try:
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10)
    finally:
        for session in sessions:
            session.close()
    monkeypatch.setattr(ScheduleStore, "load", original_load)
    assert errors == []


def test_concurrent_appends_keep_both_windows(db_session, monkeypatch):
    ScheduleStore(db_session).save([])

    _run_concurrently(
        monkeypatch,
        lambda store: store.append(_window("01:00", "02:00")),
        lambda store: store.append(_window("02:00", "03:00")),
    )

    final = ScheduleStore(db_session).load()
    assert sorted(window.start for window in final) == ["01:00", "02:00"]


def test_concurrent_removes_of_first_window_drop_two_entries(db_session, monkeypatch):
    ScheduleStore(db_session).save(
        [_window("01:00", "02:00"), _window("03:00", "04:00"), _window("05:00", "06:00")]
    )

    _run_concurrently(
        monkeypatch,
        lambda store: store.remove(0),
        lambda store: store.remove(0),
    )

    final = ScheduleStore(db_session).load()
    assert [window.start for window in final] == ["05:00"]

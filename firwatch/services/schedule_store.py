"""Shared peak-window schedule and viewer preferences kept in the database."""

from __future__ import annotations

from datetime import datetime
import json
import logging
import threading
from typing import Callable, Iterable, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from firwatch import db_models
from firwatch.config import settings
from firwatch.domain import Band, Sector
from firwatch.models.schedule import ScheduleWindow

logger = logging.getLogger("firwatch.schedule")

SCHEDULE_KEY = "baghdad_schedule"
REFERENCE_LAT_KEY = "bag_lat"

# Placeholder peaks pending confirmation from the FIR; edit through the API.
SEED_SCHEDULE: tuple[ScheduleWindow, ...] = (
    ScheduleWindow(start="05:30", end="07:30", sector=Sector.SOUTH, band=Band.BOTH),
    ScheduleWindow(start="06:00", end="08:00", sector=Sector.NORTH, band=Band.BOTH),
    ScheduleWindow(start="12:00", end="14:00", sector=Sector.NORTH, band=Band.BOTH),
    ScheduleWindow(start="12:00", end="14:00", sector=Sector.SOUTH, band=Band.BOTH),
    ScheduleWindow(start="23:30", end="01:30", sector=Sector.NORTH, band=Band.BOTH),
    ScheduleWindow(start="00:00", end="02:00", sector=Sector.SOUTH, band=Band.BOTH),
)

ScheduleListener = Callable[[list[ScheduleWindow]], None]

# Serializes read-modify-write of the shared schedule row across request threads
_SCHEDULE_LOCK = threading.RLock()


def _read_value(db: Session, key: str) -> Optional[str]:
    record = db.get(db_models.StoredValue, key, populate_existing=True)
    return record.value if record else None


def _write_value(db: Session, key: str, value: str) -> None:
    record = db.get(db_models.StoredValue, key)
    if record is None:
        record = db_models.StoredValue(key=key, value=value)
    else:
        record.value = value
        record.updated_at = datetime.utcnow()
    db.add(record)
    db.commit()


def _delete_value(db: Session, key: str) -> None:
    record = db.get(db_models.StoredValue, key)
    if record is not None:
        db.delete(record)
        db.commit()


def _serialize(windows: Iterable[ScheduleWindow]) -> str:
    return json.dumps([window.model_dump(mode="json") for window in windows])


class ScheduleStore:
    """Load, save, append, remove and reset the schedule as a whole list.

    Every mutation writes the full list back and then notifies listeners with
    the new list.
    """

    def __init__(
        self, db: Session, *, listeners: Iterable[ScheduleListener] = ()
    ) -> None:
        self.db = db
        self.listeners = list(listeners)

    def load(self) -> list[ScheduleWindow]:
        with _SCHEDULE_LOCK:
            raw = _read_value(self.db, SCHEDULE_KEY)
            if raw is None:
                seeded = list(SEED_SCHEDULE)
                _write_value(self.db, SCHEDULE_KEY, _serialize(seeded))
                logger.info("Seeded example schedule with %s windows", len(seeded))
                return seeded

        try:
            entries = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Stored schedule is not valid JSON, treating as empty: %s", exc)
            return []
        if not isinstance(entries, list):
            logger.warning("Stored schedule is not a list, treating as empty")
            return []

        windows: list[ScheduleWindow] = []
        for position, entry in enumerate(entries):
            try:
                windows.append(ScheduleWindow.model_validate(entry))
            except ValidationError as exc:
                logger.warning("Skipping invalid stored window #%s: %s", position, exc)
        return windows

    def save(self, windows: Iterable[ScheduleWindow]) -> list[ScheduleWindow]:
        saved = list(windows)
        with _SCHEDULE_LOCK:
            _write_value(self.db, SCHEDULE_KEY, _serialize(saved))
        logger.info("Schedule saved with %s windows", len(saved))
        self._notify(saved)
        return saved

    def append(self, window: ScheduleWindow) -> list[ScheduleWindow]:
        with _SCHEDULE_LOCK:
            windows = self.load()
            windows.append(window)
            return self.save(windows)

    def remove(self, index: int) -> list[ScheduleWindow]:
        with _SCHEDULE_LOCK:
            windows = self.load()
            if index < 0 or index >= len(windows):
                raise IndexError(f"No schedule window at position {index}")
            removed = windows.pop(index)
            logger.info(
                "Removing schedule window #%s (%s-%s)", index, removed.start, removed.end
            )
            return self.save(windows)

    def reset(self) -> list[ScheduleWindow]:
        with _SCHEDULE_LOCK:
            _delete_value(self.db, SCHEDULE_KEY)
            logger.info("Schedule reset")
            windows = self.load()
        self._notify(windows)
        return windows

    def _notify(self, windows: list[ScheduleWindow]) -> None:
        for listener in self.listeners:
            listener(list(windows))


def get_reference_latitude(db: Session) -> float:
    """Return the stored North/South split latitude, or the configured default."""

    raw = _read_value(db, REFERENCE_LAT_KEY)
    if raw is None:
        return settings.reference_latitude
    try:
        return float(raw)
    except ValueError:
        logger.warning("Stored reference latitude %r is invalid; using default", raw)
        return settings.reference_latitude


def set_reference_latitude(db: Session, latitude: float) -> float:
    _write_value(db, REFERENCE_LAT_KEY, repr(float(latitude)))
    logger.info("Reference latitude set to %.4f", latitude)
    return float(latitude)


__all__ = [
    "REFERENCE_LAT_KEY",
    "SCHEDULE_KEY",
    "SEED_SCHEDULE",
    "ScheduleStore",
    "get_reference_latitude",
    "set_reference_latitude",
]

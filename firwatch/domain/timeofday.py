"""UTC time-of-day helpers used by schedule windows."""

from __future__ import annotations

from datetime import datetime, timezone
import re

_HHMM_RE = re.compile(r"(?P<hour>[01][0-9]|2[0-3]):(?P<minute>[0-5][0-9])")


def parse_hhmm(value: str) -> int:
    """Parse a strict ``HH:MM`` string into minutes after midnight.

    Raises ``ValueError`` for anything that is not a zero-padded 24-hour time,
    e.g. ``"7:30"``, ``"24:00"`` or ``"12:60"``.
    """

    if not isinstance(value, str):
        raise ValueError(f"Time must be a string in HH:MM format, got {value!r}")
    match = _HHMM_RE.fullmatch(value)
    if not match:
        raise ValueError(f"Time must be in HH:MM format (00:00-23:59), got {value!r}")
    return int(match.group("hour")) * 60 + int(match.group("minute"))


def minute_of_day(moment: datetime) -> int:
    """Return the UTC minute-of-day for an aware or naive-UTC datetime."""

    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.hour * 60 + moment.minute


__all__ = ["minute_of_day", "parse_hhmm"]

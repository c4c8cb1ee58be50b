"""OpenSky poller that writes the FIR flight snapshot consumed by the viewer."""

from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
import os
from pathlib import Path
import tempfile
from typing import Any, Optional

import httpx

from firwatch.config import get_opensky_credentials, settings
from firwatch.domain import FIR_LAT_MAX, FIR_LAT_MIN, FIR_LON_MAX, FIR_LON_MIN
from firwatch.models.air_traffic import AircraftState, FlightSnapshot

logger = logging.getLogger("firwatch.ingestors.opensky")

FIR_QUERY = {
    "lamin": FIR_LAT_MIN,
    "lomin": FIR_LON_MIN,
    "lamax": FIR_LAT_MAX,
    "lomax": FIR_LON_MAX,
}


def _float_or_none(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):  # pragma: no cover - defensive conversion
        return None


def _str_or_none(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def normalize_state(entry: Any) -> Optional[AircraftState]:
    """Convert one OpenSky state vector (a positional array) into an AircraftState."""

    if not isinstance(entry, (list, tuple)) or len(entry) < 8:
        return None

    icao24 = _str_or_none(entry[0])
    return AircraftState(
        icao24=icao24.lower() if icao24 else None,
        callsign=_str_or_none(entry[1]),
        origin_country=_str_or_none(entry[2]),
        longitude=_float_or_none(entry[5]),
        latitude=_float_or_none(entry[6]),
        baro_altitude=_float_or_none(entry[7]),
        velocity=_float_or_none(entry[9]) if len(entry) > 9 else None,
        geo_altitude=_float_or_none(entry[13]) if len(entry) > 13 else None,
    )


def write_snapshot(snapshot: FlightSnapshot, path: Path) -> None:
    """Atomically replace the snapshot file so readers never see a partial write."""

    path.parent.mkdir(parents=True, exist_ok=True)
    payload = snapshot.model_dump(mode="json")
    fd, tmp_name = tempfile.mkstemp(prefix=".flights-", suffix=".json", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle)
        os.replace(tmp_name, path)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class OpenSkyPoller:
    """Fetch FIR state vectors from OpenSky and write them as a snapshot."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        auth: tuple[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.opensky_base_url
        self.timeout = timeout or settings.opensky_timeout
        self.auth = auth
        self.transport = transport

    def _resolve_auth(self) -> tuple[str, str] | None:
        if self.auth is not None:
            return self.auth
        try:
            return get_opensky_credentials()
        except RuntimeError as exc:
            logger.info("Polling OpenSky anonymously: %s", exc)
            return None

    async def fetch_snapshot(self) -> FlightSnapshot:
        """Return the current FIR snapshot; raises RuntimeError when OpenSky fails."""

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport, auth=self._resolve_auth()
            ) as client:
                response = await client.get(self.base_url, params=FIR_QUERY)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.error("OpenSky request timed out: %s", exc)
            raise RuntimeError("OpenSky request timed out") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "OpenSky returned error: status=%s body=%s",
                exc.response.status_code,
                exc.response.text,
            )
            raise RuntimeError("OpenSky returned an error") from exc
        except httpx.RequestError as exc:
            logger.error("OpenSky request failed: %s", exc)
            raise RuntimeError("OpenSky request failed") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            logger.error("Failed to parse OpenSky JSON response: %s", exc)
            raise RuntimeError("OpenSky returned invalid JSON") from exc

        raw_states = []
        capture_time = None
        if isinstance(payload, dict):
            raw_states = payload.get("states", []) or []
            capture_time = payload.get("time")

        states: list[AircraftState] = []
        for entry in raw_states:
            state = normalize_state(entry)
            if state:
                states.append(state)

        logger.debug("Fetched %s state vectors from OpenSky", len(states))
        return FlightSnapshot(
            time=capture_time,
            fetched_at=datetime.now(timezone.utc),
            states=states,
        )

    async def poll_once(self, output_path: Path) -> FlightSnapshot:
        """Fetch and write one snapshot; on failure the previous file is left untouched."""

        snapshot = await self.fetch_snapshot()
        write_snapshot(snapshot, output_path)
        logger.info("Wrote %s aircraft to %s", len(snapshot.states), output_path)
        return snapshot


__all__ = ["FIR_QUERY", "OpenSkyPoller", "normalize_state", "write_snapshot"]

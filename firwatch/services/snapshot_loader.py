"""Read the poller's flight snapshot from disk or over HTTP."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import anyio
import httpx
from pydantic import ValidationError

from firwatch.config import settings
from firwatch.models.air_traffic import AircraftState

logger = logging.getLogger("firwatch.snapshot")

NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def parse_states(payload: Any) -> list[AircraftState]:
    """Extract aircraft states from a decoded snapshot document.

    Entries that are not objects or fail validation are skipped.
    """

    if not isinstance(payload, dict):
        logger.warning("Snapshot is not a JSON object; ignoring")
        return []

    states: list[AircraftState] = []
    for entry in payload.get("states") or []:
        if not isinstance(entry, dict):
            continue
        try:
            states.append(AircraftState.model_validate(entry))
        except ValidationError as exc:
            logger.debug("Skipping invalid aircraft state %s: %s", entry.get("icao24"), exc)
    return states


class SnapshotLoader:
    """Fetch the latest snapshot; any failure yields an empty list."""

    def __init__(
        self,
        *,
        source: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.source = source or settings.snapshot_source
        self.timeout = timeout or settings.snapshot_timeout
        self.transport = transport

    async def load(self) -> list[AircraftState]:
        if _is_url(self.source):
            payload = await self._fetch_url()
        else:
            payload = await self._read_file()
        if payload is None:
            return []

        states = parse_states(payload)
        logger.debug("Loaded %s aircraft states from %s", len(states), self.source)
        return states

    async def _fetch_url(self) -> Any:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(self.source, headers=NO_CACHE_HEADERS)
        except httpx.TimeoutException as exc:
            logger.warning("Snapshot request timed out: %s", exc)
            return None
        except httpx.RequestError as exc:
            logger.warning("Snapshot request failed: %s", exc)
            return None

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Snapshot fetch returned HTTP %s: %s", exc.response.status_code, exc
            )
            return None

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("Failed to parse snapshot JSON: %s", exc)
            return None

    async def _read_file(self) -> Any:
        path = anyio.Path(Path(self.source))
        try:
            text = await path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not read snapshot %s: %s", self.source, exc)
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Failed to parse snapshot JSON from %s: %s", self.source, exc)
            return None


__all__ = ["NO_CACHE_HEADERS", "SnapshotLoader", "parse_states"]

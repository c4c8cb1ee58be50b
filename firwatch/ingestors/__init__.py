"""Data ingestors for FIR Watch."""

from .opensky import FIR_QUERY, OpenSkyPoller, normalize_state, write_snapshot

__all__ = ["FIR_QUERY", "OpenSkyPoller", "normalize_state", "write_snapshot"]

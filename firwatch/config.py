"""Configuration settings for the FIR Watch service and poller."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger("firwatch.config")


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    firwatch_env: str = os.getenv("FIRWATCH_ENV", "local")
    log_level: str = os.getenv("FIRWATCH_LOG_LEVEL", "INFO")

    # Snapshot produced by the poller and consumed by the viewer
    data_dir: str = os.getenv("FIRWATCH_DATA_DIR", "docs/data")
    snapshot_source: str = os.getenv(
        "FIRWATCH_SNAPSHOT_SOURCE", "docs/data/flights.json"
    )
    snapshot_timeout: float = float(os.getenv("FIRWATCH_SNAPSHOT_TIMEOUT", "10.0"))

    # Viewer timers
    refresh_enabled: bool = _get_bool("FIRWATCH_REFRESH_ENABLED", default=True)
    refresh_seconds: float = float(os.getenv("FIRWATCH_REFRESH_SECONDS", "30"))
    alarm_seconds: float = float(os.getenv("FIRWATCH_ALARM_SECONDS", "30"))

    # Baghdad latitude splits the FIR into North and South sectors
    reference_latitude: float = float(os.getenv("FIRWATCH_REFERENCE_LAT", "33.3128"))
    map_center_lon: float = float(os.getenv("FIRWATCH_MAP_CENTER_LON", "44.3615"))
    map_zoom: int = int(os.getenv("FIRWATCH_MAP_ZOOM", "6"))

    # OpenSky polling
    opensky_base_url: str = os.getenv(
        "OPENSKY_BASE_URL",
        "https://opensky-network.org/api/states/all",
    )
    opensky_timeout: float = float(os.getenv("OPENSKY_TIMEOUT", "20.0"))
    opensky_username: str | None = os.getenv("OPENSKY_USERNAME")
    opensky_password: str | None = os.getenv("OPENSKY_PASSWORD")
    opensky_ssm_prefix: str = os.getenv("OPENSKY_SSM_PREFIX", "")


settings = Settings()


def _ssm_client():
    return boto3.client(
        "ssm",
        region_name=os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or "us-east-1",
    )


@lru_cache(maxsize=1)
def get_opensky_credentials() -> tuple[str, str]:
    """Return OpenSky basic-auth credentials.

    Environment variables win; otherwise the pair is read from AWS SSM
    Parameter Store under ``settings.opensky_ssm_prefix``. The value is cached
    in-memory once found. A missing or unreadable pair raises ``RuntimeError``
    so callers can fall back to anonymous access.
    """

    if settings.opensky_username and settings.opensky_password:
        return settings.opensky_username, settings.opensky_password

    prefix = settings.opensky_ssm_prefix.rstrip("/")
    if not prefix:
        raise RuntimeError("OpenSky credentials not configured")

    try:
        response = _ssm_client().get_parameters(
            Names=[f"{prefix}/username", f"{prefix}/password"],
            WithDecryption=True,
        )
    except (ClientError, BotoCoreError) as exc:  # pragma: no cover - AWS error passthrough
        logger.error("Failed to load OpenSky credentials from SSM: %s", exc)
        raise RuntimeError("Unable to load OpenSky credentials from SSM") from exc

    values = {
        param["Name"].rsplit("/", 1)[-1]: param.get("Value")
        for param in response.get("Parameters", [])
    }
    username = values.get("username")
    password = values.get("password")
    if not username or not password:
        logger.error("OpenSky credentials missing from SSM under %s", prefix)
        raise RuntimeError("OpenSky credentials not configured in SSM")

    return username, password


__all__ = ["settings", "Settings", "get_opensky_credentials"]

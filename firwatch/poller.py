"""Command-line poller that refreshes the FIR flight snapshot.

Meant to be run by a scheduler (cron, CI schedule, systemd timer):
    firwatch-poll
    firwatch-poll --output docs/data/flights.json --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path

from firwatch.config import settings
from firwatch.ingestors.opensky import OpenSkyPoller

logger = logging.getLogger("firwatch.poller")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Write a Baghdad FIR flight snapshot")
    parser.add_argument(
        "--output",
        default=str(Path(settings.data_dir) / "flights.json"),
        help="Snapshot path (default: %(default)s)",
    )
    parser.add_argument("--base-url", default=None, help="OpenSky states endpoint")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds")
    parser.add_argument("--json", action="store_true", help="Print a JSON summary")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    poller = OpenSkyPoller(base_url=args.base_url, timeout=args.timeout)
    output = Path(args.output)
    try:
        snapshot = asyncio.run(poller.poll_once(output))
    except RuntimeError as exc:
        logger.error("Poll failed, keeping previous snapshot: %s", exc)
        return 1
    except OSError as exc:
        logger.error("Could not write snapshot to %s: %s", output, exc)
        return 1

    if args.json:
        print(
            json.dumps(
                {
                    "output": str(output),
                    "aircraft": len(snapshot.states),
                    "time": snapshot.time,
                    "fetched_at": snapshot.fetched_at.isoformat() if snapshot.fetched_at else None,
                },
                indent=2,
            )
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import asyncio
import contextlib
import logging
import time

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles

from firwatch.api import api_router
from firwatch.config import settings
from firwatch.db import init_db
from firwatch.services.dashboard import AlarmMonitor, DashboardState, RefreshLoop

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("firwatch")


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown lifecycle."""

    init_db()
    logger.info("Database initialized")

    tasks: list[asyncio.Task] = []
    if settings.refresh_enabled:
        state: DashboardState = app.state.dashboard
        tasks.append(asyncio.create_task(RefreshLoop(state=state).run()))
        tasks.append(asyncio.create_task(AlarmMonitor(state=state).run()))
        logger.info(
            "Refresh loop started (every %ss) reading %s",
            settings.refresh_seconds,
            settings.snapshot_source,
        )

    try:
        yield
    finally:
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task


app = FastAPI(title="FIR Watch", lifespan=lifespan)
app.state.dashboard = DashboardState()


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log basic request information for observability."""

    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "HTTP %s %s -> %s (%.2f ms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


app.include_router(api_router)

# Same snapshot file the refresh loop reads, for browser pages
app.mount(
    "/data",
    StaticFiles(directory=settings.data_dir, check_dir=False),
    name="data",
)


@app.get("/", summary="Root")
def read_root() -> dict[str, str]:
    """Basic root endpoint for quick verification."""

    return {"message": "FIR Watch is running"}

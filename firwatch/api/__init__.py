"""API routers for FIR Watch."""

from fastapi import APIRouter

from .dashboard import router as dashboard_router
from .health import router as health_router
from .schedule import router as schedule_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(dashboard_router)
api_router.include_router(schedule_router)

__all__ = ["api_router"]

from __future__ import annotations

from fastapi import APIRouter

from rostersync.core.config import settings
from rostersync.services.roster_service import roster_service

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    services: dict[str, str] = {
        "bamboohr": "configured" if roster_service.initialized else "not_configured",
    }

    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "services": services,
        "roster_cached": roster_service.snapshot is not None,
    }


@router.get("/ready")
async def readiness_probe():
    return {"ready": True}

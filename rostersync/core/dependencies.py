from __future__ import annotations

import logging

from fastapi import HTTPException, status

from rostersync.core.errors import ReconciliationError
from rostersync.models.hierarchy import RosterSnapshot
from rostersync.services.roster_service import roster_service

logger = logging.getLogger(__name__)


def _require_configured() -> None:
    if not roster_service.initialized:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="BambooHR credentials are not configured",
        )


async def get_snapshot() -> RosterSnapshot:
    if roster_service.snapshot is not None:
        return roster_service.snapshot
    return await refresh_snapshot()


async def refresh_snapshot() -> RosterSnapshot:
    _require_configured()
    try:
        return await roster_service.refresh()
    except ReconciliationError as e:
        logger.error("Roster refresh failed at stage %r: %s", e.stage, e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        ) from e

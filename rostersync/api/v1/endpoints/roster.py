from __future__ import annotations

from fastapi import APIRouter, Depends

from rostersync.core.dependencies import refresh_snapshot
from rostersync.models.hierarchy import RefreshSummary, RosterSnapshot
from rostersync.services.hierarchy import count_nodes

router = APIRouter(prefix="/roster", tags=["roster"])


@router.post("/refresh", response_model=RefreshSummary)
async def refresh_roster(snapshot: RosterSnapshot = Depends(refresh_snapshot)):  # noqa: B008
    return RefreshSummary(
        employee_count=len(snapshot.employees),
        root_count=len(snapshot.hierarchy),
        placed_count=count_nodes(snapshot.hierarchy),
        generated_at=snapshot.generated_at,
    )

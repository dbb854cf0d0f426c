from __future__ import annotations

from fastapi import APIRouter, Depends

from rostersync.core.dependencies import get_snapshot
from rostersync.models.hierarchy import HierarchyNode, RosterSnapshot

router = APIRouter(prefix="/hierarchy", tags=["hierarchy"])


@router.get("", response_model=list[HierarchyNode], response_model_exclude_none=True)
async def get_hierarchy(snapshot: RosterSnapshot = Depends(get_snapshot)):  # noqa: B008
    return snapshot.hierarchy

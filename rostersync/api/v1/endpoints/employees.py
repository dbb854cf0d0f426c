from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from rostersync.core.dependencies import get_snapshot
from rostersync.models.employee import Employee
from rostersync.models.hierarchy import RosterSnapshot

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("", response_model=list[Employee], response_model_exclude_none=True)
async def list_employees(snapshot: RosterSnapshot = Depends(get_snapshot)):  # noqa: B008
    return snapshot.employees


@router.get("/{employee_id}", response_model=Employee, response_model_exclude_none=True)
async def get_employee(
    employee_id: str,
    snapshot: RosterSnapshot = Depends(get_snapshot),  # noqa: B008
):
    for employee in snapshot.employees:
        if employee.id == employee_id:
            return employee

    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Employee with id '{employee_id}' not found",
    )

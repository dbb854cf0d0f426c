"""Management hierarchy models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from rostersync.models.employee import Employee


class HierarchyNode(BaseModel):
    """An employee and, when they have any, their direct reports."""

    id: str
    employees: list[HierarchyNode] | None = None


class RosterSnapshot(BaseModel):
    """Result of one complete reconciliation run."""

    employees: list[Employee]
    hierarchy: list[HierarchyNode]
    generated_at: datetime


class RefreshSummary(BaseModel):
    employee_count: int
    root_count: int
    placed_count: int
    generated_at: datetime

"""Canonical employee model produced by a reconciliation run."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel


class Employee(BaseModel):
    """One reconciled employee.

    Manager attributes are only filled in once the manager reference has been
    resolved against the display names of the same run.
    """

    id: str
    first_name: str | None = None
    last_name: str | None = None
    name: str
    display_name: str
    date_of_birth: date | None = None
    avatar_url: str | None = None
    personal_phone_number: str | None = None
    work_email: str | None = None
    job_title: str | None = None
    department: str | None = None
    manager_id: str | None = None
    manager_name: str | None = None
    manager_title: str | None = None
    start_date: datetime | None = None
    tenure: int | None = None
    work_anniversary: datetime | None = None
    gpa: str | None = None
    location: str | None = None

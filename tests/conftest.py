from __future__ import annotations

from datetime import datetime, timezone

import pytest
from starlette.testclient import TestClient

from rostersync.main import app
from rostersync.models.bamboo import CustomReport, DirectoryRecord, FieldDescriptor
from rostersync.models.hierarchy import RosterSnapshot
from rostersync.services.hierarchy import build_hierarchy
from rostersync.services.reconciler import (
    index_by_id,
    merge_records,
    normalize_employees,
    resolve_managers,
)
from rostersync.services.roster_service import roster_service

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)

SAMPLE_FIELDS: list[dict] = [
    {"id": "id", "name": "Employee #", "alias": "id", "type": "int"},
    {"id": 1, "name": "First Name", "alias": "firstName", "type": "text"},
    {"id": 2, "name": "Last Name", "alias": "lastName", "type": "text"},
    {"id": 3, "name": "Middle Name", "alias": "middleName", "type": "text"},
    {"id": 4, "name": "Hire Date", "alias": "hireDate", "type": "date"},
    {"id": 5, "name": "Job Title", "alias": "jobTitle", "type": "list"},
    {"id": 91, "name": "Reporting To", "type": "employee"},
    {"id": 4020, "name": "GPA", "type": "text"},
    {"id": 17, "name": "SSN", "alias": "ssn", "type": "ssn"},
    {"id": 18, "name": "Pay Rate", "alias": "payRate", "type": "currency"},
]

SAMPLE_DIRECTORY: list[dict] = [
    {
        "id": "1",
        "displayName": "Alice Smith",
        "firstName": "Alice",
        "lastName": "Smith",
        "jobTitle": "Chief Executive Officer",
        "photoUrl": "https://images.example.com/1.jpg",
        "workEmail": "alice@example.com",
        "mobilePhone": "555-0101",
    },
    {
        "id": "2",
        "displayName": "Bob Jones",
        "firstName": "Bob",
        "lastName": "Jones",
        "jobTitle": "VP Engineering",
        "supervisor": "Alice Smith",
    },
    {
        "id": "3",
        "displayName": "Carol White",
        "firstName": "Carol",
        "lastName": "White",
        "jobTitle": "Engineer",
        "supervisor": "Bob Jones",
    },
    {
        "id": "99",
        "displayName": "Former Employee",
        "firstName": "Former",
        "lastName": "Employee",
    },
]

SAMPLE_REPORT: dict = {
    "fields": [{"id": "firstName", "type": "text", "name": "First Name"}],
    "employees": [
        {"id": "1", "firstName": "Alice", "lastName": "Smith", "hireDate": "2015-03-01", "GPA": "3.9"},
        {
            "id": "2",
            "firstName": "Bob",
            "lastName": "Jones",
            "hireDate": "2018-09-10",
            "jobTitle": "VP of Engineering",
            "homePhone": "555-0202",
        },
        {"id": "3", "firstName": "Carol", "lastName": "White", "hireDate": "0000-00-00"},
        {"id": "4", "firstName": "Dan", "lastName": "Green", "Reporting To": "Somebody Unknown"},
    ],
}


def sample_fields() -> list[FieldDescriptor]:
    return [FieldDescriptor.model_validate(item) for item in SAMPLE_FIELDS]


def sample_directory() -> list[DirectoryRecord]:
    return [DirectoryRecord.model_validate(item) for item in SAMPLE_DIRECTORY]


def sample_report() -> CustomReport:
    return CustomReport.model_validate(SAMPLE_REPORT)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def sample_snapshot() -> RosterSnapshot:
    composites = merge_records(index_by_id(sample_directory()), index_by_id(sample_report().employees))
    employees = resolve_managers(normalize_employees(composites, NOW))
    return RosterSnapshot(employees=employees, hierarchy=build_hierarchy(employees), generated_at=NOW)


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    roster_service.snapshot = None


@pytest.fixture
def seeded_client(sample_snapshot):
    roster_service.snapshot = sample_snapshot
    with TestClient(app) as c:
        roster_service.snapshot = sample_snapshot
        yield c
    roster_service.snapshot = None

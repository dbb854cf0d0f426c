"""Reconciles BambooHR directory and custom report data into employees."""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta, timezone
from typing import NamedTuple, TypeVar

import aiohttp

from rostersync.core.errors import (
    STAGE_DIRECTORY,
    STAGE_FIELDS,
    STAGE_REPORT,
    ReconciliationError,
    TransportError,
)
from rostersync.models.bamboo import (
    BambooRecord,
    CompositeRecord,
    CustomReport,
    DirectoryRecord,
    ReportRecord,
)
from rostersync.models.employee import Employee
from rostersync.services.bamboo_client import BambooClient

logger = logging.getLogger(__name__)

RELEVANT_FIELDS: frozenset[str] = frozenset(
    {
        "id",
        "firstName",
        "middleName",
        "lastName",
        "preferredName",
        "nickname",
        "dateOfBirth",
        "mobilePhone",
        "homePhone",
        "workEmail",
        "jobTitle",
        "department",
        "Reporting To",
        "hireDate",
        "GPA",
        "location",
    }
)

# BambooHR sends the text "null" for an empty middle name. The full name
# includes the middle name only when it equals this value, which is backwards;
# kept as-is until the intended behaviour is confirmed.
NO_MIDDLE_NAME = "null"

YEAR = timedelta(days=365.25)

_DATE_FORMATS = ("%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M:%S%z")

_FETCH_ERRORS = (TransportError, aiohttp.ClientError, asyncio.TimeoutError)

RecordT = TypeVar("RecordT", bound=BambooRecord)


class NormalizedRoster(NamedTuple):
    employees: list[Employee]
    by_display_name: dict[str, Employee]
    manager_reference_by_id: dict[str, str]


def project_fields(names: Iterable[str]) -> list[str]:
    """Keep the field names the reconciler understands, in their original order."""
    return [name for name in names if name in RELEVANT_FIELDS]


def index_by_id(records: Iterable[RecordT]) -> dict[str, RecordT]:
    return {record.id: record for record in records if record.id}


def merge_records(
    directory_by_id: Mapping[str, DirectoryRecord],
    report_by_id: Mapping[str, ReportRecord],
) -> list[CompositeRecord]:
    """Union each report record with its directory record; report values win.

    Only ids known to the report are emitted.
    """
    composites: list[CompositeRecord] = []
    for employee_id, report in report_by_id.items():
        directory = directory_by_id.get(employee_id)
        combined = directory.present_fields() if directory else {}
        combined.update(report.present_fields())
        combined["id"] = employee_id
        composites.append(CompositeRecord(**combined))
    return composites


def _parse_moment(value: str | None) -> datetime | None:
    if not value:
        return None
    for fmt in _DATE_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    logger.debug("Ignoring unparseable date %r", value)
    return None


def _parse_date(value: str | None) -> date | None:
    moment = _parse_moment(value)
    return moment.date() if moment else None


def _with_year(moment: datetime, year: int) -> datetime:
    try:
        return moment.replace(year=year)
    except ValueError:
        # 29 February outside a leap year rolls over to 1 March.
        return moment.replace(year=year, month=3, day=1)


def work_anniversary(start_date: datetime | None, now: datetime) -> datetime | None:
    if start_date is None:
        return None
    anniversary = _with_year(start_date, now.year)
    if anniversary < now:
        anniversary = _with_year(start_date, now.year + 1)
    return anniversary


def tenure(start_date: datetime | None, now: datetime) -> int | None:
    if start_date is None:
        return None
    return math.floor((now - start_date) / YEAR)


def full_name(first_name: str | None, middle_name: str | None, last_name: str | None) -> str:
    middle = f"{middle_name} " if middle_name == NO_MIDDLE_NAME else ""
    return f"{first_name or ''} {middle}{last_name or ''}"


def normalize_employee(record: CompositeRecord, now: datetime) -> Employee:
    start_date = _parse_moment(record.hire_date)
    display_name = record.display_name
    if display_name is None:
        display_name = f"{record.first_name or ''} {record.last_name or ''}"
    phone = record.mobile_phone if record.mobile_phone is not None else record.home_phone

    return Employee(
        id=record.id,
        first_name=record.first_name,
        last_name=record.last_name,
        name=full_name(record.first_name, record.middle_name, record.last_name),
        display_name=display_name,
        date_of_birth=_parse_date(record.date_of_birth),
        avatar_url=record.photo_url,
        personal_phone_number=phone,
        work_email=record.work_email,
        job_title=record.job_title,
        department=record.department,
        start_date=start_date,
        tenure=tenure(start_date, now),
        work_anniversary=work_anniversary(start_date, now),
        gpa=record.gpa,
        location=record.location,
    )


def normalize_employees(composites: Iterable[CompositeRecord], now: datetime) -> NormalizedRoster:
    """First pass: build employees plus the lookups the manager pass needs.

    A repeated display name keeps the employee inserted last.
    """
    roster = NormalizedRoster([], {}, {})
    for record in composites:
        employee = normalize_employee(record, now)
        roster.employees.append(employee)
        roster.by_display_name[employee.display_name] = employee
        if record.supervisor:
            roster.manager_reference_by_id[employee.id] = record.supervisor
    return roster


def resolve_managers(roster: NormalizedRoster) -> list[Employee]:
    """Second pass: attach manager details by display name lookup.

    Returns new Employee objects; the first-pass objects are left untouched.
    """
    resolved: list[Employee] = []
    unresolved = 0
    for employee in roster.employees:
        reference = roster.manager_reference_by_id.get(employee.id)
        manager = roster.by_display_name.get(reference) if reference else None
        if manager is None:
            if reference:
                unresolved += 1
                logger.debug("No employee named %r (manager of %s)", reference, employee.id)
            resolved.append(employee)
            continue

        resolved.append(
            employee.model_copy(
                update={
                    "manager_id": manager.id,
                    "manager_name": manager.name,
                    "manager_title": manager.job_title,
                }
            )
        )

    if unresolved:
        logger.info("%d manager references did not match a display name", unresolved)
    return resolved


async def generate_custom_report(client: BambooClient) -> CustomReport:
    """Fetch the available fields, then request a report restricted to them."""
    try:
        descriptors = await client.fetch_field_list()
    except _FETCH_ERRORS as err:
        raise ReconciliationError(STAGE_FIELDS) from err

    fields = project_fields(descriptor.label for descriptor in descriptors)
    logger.debug("Requesting custom report with fields: %s", ", ".join(fields))

    try:
        return await client.fetch_report(fields)
    except _FETCH_ERRORS as err:
        raise ReconciliationError(STAGE_REPORT) from err


async def fetch_directory(client: BambooClient) -> list[DirectoryRecord]:
    try:
        return await client.fetch_directory()
    except _FETCH_ERRORS as err:
        raise ReconciliationError(STAGE_DIRECTORY) from err


async def generate_employees(client: BambooClient, now: datetime | None = None) -> list[Employee]:
    """Run one full reconciliation and return the roster in report order."""
    report_task = asyncio.ensure_future(generate_custom_report(client))
    directory_task = asyncio.ensure_future(fetch_directory(client))
    try:
        report, directory = await asyncio.gather(report_task, directory_task)
    except BaseException:
        # Either stage failing aborts the run; stop the sibling fetch chain.
        report_task.cancel()
        directory_task.cancel()
        raise
    now = now or datetime.now(timezone.utc)

    report_by_id = index_by_id(report.employees)
    directory_by_id = index_by_id(directory)
    logger.info(
        "Reconciling %d report records with %d directory records",
        len(report_by_id),
        len(directory_by_id),
    )

    roster = normalize_employees(merge_records(directory_by_id, report_by_id), now)
    return resolve_managers(roster)

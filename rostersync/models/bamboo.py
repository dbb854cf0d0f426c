"""Pydantic models for BambooHR directory, field metadata and custom report payloads."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BambooRecord(BaseModel):
    """Base for raw employee records keyed by the BambooHR employee id."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    id: str | None = None

    def present_fields(self) -> dict[str, Any]:
        """Attributes that were present in the upstream payload, nulls included."""
        return self.model_dump(exclude_unset=True)


class DirectoryRecord(BambooRecord):
    """One entry of ``v1/employees/directory``."""

    display_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    preferred_name: str | None = None
    job_title: str | None = None
    work_phone: str | None = None
    work_phone_extension: str | None = None
    mobile_phone: str | None = None
    work_email: str | None = None
    department: str | None = None
    division: str | None = None
    location: str | None = None
    linked_in: str | None = None
    instagram: str | None = None
    pronouns: str | None = None
    supervisor: str | None = None
    photo_uploaded: bool | None = None
    photo_url: str | None = None
    can_upload_photo: int | None = None


class ReportRecord(BambooRecord):
    """One employee row of ``v1/reports/custom``; only requested fields are present."""

    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    preferred_name: str | None = None
    nickname: str | None = None
    date_of_birth: str | None = None
    mobile_phone: str | None = None
    home_phone: str | None = None
    work_email: str | None = None
    job_title: str | None = None
    department: str | None = None
    supervisor: str | None = Field(
        default=None,
        validation_alias=AliasChoices("supervisor", "Reporting To", "reportingTo"),
    )
    hire_date: str | None = None
    gpa: str | None = Field(default=None, validation_alias=AliasChoices("GPA", "gpa"))
    location: str | None = None


class CompositeRecord(DirectoryRecord, ReportRecord):
    """Directory and report data for one id, report values winning on collision."""


class FieldDescriptor(BaseModel):
    """One entry of ``v1/meta/fields``."""

    model_config = ConfigDict(extra="ignore")

    id: int | str | None = None
    name: str
    alias: str | None = None
    type: str | None = None

    @property
    def label(self) -> str:
        return self.alias if self.alias is not None else self.name


class CustomReport(BaseModel):
    model_config = ConfigDict(extra="ignore")

    fields: list[Any] = []
    employees: list[ReportRecord] = []

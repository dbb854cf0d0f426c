"""Error taxonomy for upstream fetches and reconciliation runs."""

from __future__ import annotations

from enum import Enum


class TransportErrorKind(str, Enum):
    CLIENT = "client"
    SERVER = "server"
    PARSE = "parse"


class TransportError(Exception):
    """A BambooHR request that failed or returned an unusable body."""

    def __init__(
        self,
        kind: TransportErrorKind,
        message: str,
        *,
        url: str = "",
        status: int | None = None,
        api_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.url = url
        self.status = status
        self.api_message = api_message

    @classmethod
    def from_status(cls, status: int, url: str, api_message: str | None = None) -> TransportError:
        kind = TransportErrorKind.CLIENT if 400 <= status <= 499 else TransportErrorKind.SERVER
        label = "Client" if kind is TransportErrorKind.CLIENT else "Server"
        return cls(
            kind,
            f"{label} Error in API Request: Code {status}",
            url=url,
            status=status,
            api_message=api_message,
        )


STAGE_DIRECTORY = "employee directory"
STAGE_FIELDS = "available fields"
STAGE_REPORT = "custom report"

_STAGE_MESSAGES = {
    STAGE_DIRECTORY: "Failed to fetch employee directory",
    STAGE_FIELDS: "Failed to fetch available fields",
    STAGE_REPORT: "Failed to create custom report from API response",
}


class ReconciliationError(Exception):
    """A reconciliation run aborted because one of its fetch stages failed."""

    def __init__(self, stage: str, message: str | None = None) -> None:
        super().__init__(message or _STAGE_MESSAGES.get(stage, f"Failed to fetch {stage}"))
        self.stage = stage

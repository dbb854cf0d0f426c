from __future__ import annotations

import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from rostersync.core.config import Settings
from rostersync.core.errors import TransportError, TransportErrorKind
from rostersync.models.bamboo import CustomReport, DirectoryRecord, FieldDescriptor

logger = logging.getLogger(__name__)

ERROR_MESSAGE_HEADER = "X-BambooHR-Error-Message"


class BambooClient:
    def __init__(self) -> None:
        self.initialized = False
        self.base_url = ""
        self.api_key = ""
        self.timeout = 30

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        if settings.missing_credentials():
            logger.warning("BambooHR credentials missing — BambooClient not initialized")
            return

        self.base_url = f"{settings.BAMBOO_API_BASE_URL.rstrip('/')}/{settings.BAMBOO_COMPANY_DOMAIN}/"
        self.api_key = settings.BAMBOO_API_KEY
        self.timeout = settings.BAMBOO_REQUEST_TIMEOUT
        self.initialized = True
        logger.info("BambooClient initialized (company=%s)", settings.BAMBOO_COMPANY_DOMAIN)

    async def close(self) -> None:
        self.initialized = False
        self.base_url = ""
        self.api_key = ""

    async def fetch_directory(self) -> list[DirectoryRecord]:
        """All employees of the company directory.

        Companies can disable this endpoint, in which case BambooHR answers 403.
        """
        data = await self._request("GET", "v1/employees/directory")
        try:
            return [DirectoryRecord.model_validate(item) for item in data["employees"]]
        except (KeyError, TypeError, ValidationError) as err:
            raise self._parse_error("v1/employees/directory", err) from err

    async def fetch_field_list(self) -> list[FieldDescriptor]:
        data = await self._request("GET", "v1/meta/fields")
        try:
            return [FieldDescriptor.model_validate(item) for item in data]
        except (TypeError, ValidationError) as err:
            raise self._parse_error("v1/meta/fields", err) from err

    async def fetch_report(self, fields: list[str]) -> CustomReport:
        data = await self._request(
            "POST",
            "v1/reports/custom",
            params={"format": "JSON"},
            payload={"fields": fields},
        )
        try:
            return CustomReport.model_validate(data)
        except ValidationError as err:
            raise self._parse_error("v1/reports/custom", err) from err

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> Any:
        if not self.initialized:
            raise RuntimeError("BambooClient not initialized")

        url = f"{self.base_url}{path}"
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        auth = aiohttp.BasicAuth(self.api_key, "x")

        timeout = aiohttp.ClientTimeout(total=self.timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.request(
                method, url, headers=headers, auth=auth, params=params, json=payload
            ) as response:
                if response.status >= 400:
                    error = TransportError.from_status(
                        response.status, url, response.headers.get(ERROR_MESSAGE_HEADER)
                    )
                    self._log_error(error)
                    raise error

                try:
                    return await response.json(content_type=None)
                except ValueError as err:
                    raise self._parse_error(path, err) from err

    def _parse_error(self, path: str, err: Exception) -> TransportError:
        error = TransportError(
            TransportErrorKind.PARSE,
            f"Error parsing API Response from {self.base_url}{path}: {err}",
            url=f"{self.base_url}{path}",
        )
        self._log_error(error)
        return error

    @staticmethod
    def _log_error(error: TransportError) -> None:
        logger.error("%s", error)
        if error.kind is TransportErrorKind.PARSE:
            return

        logger.error("To %s", error.url)
        if error.api_message:
            logger.error("%s Header: %s", ERROR_MESSAGE_HEADER, error.api_message)


bamboo_client = BambooClient()

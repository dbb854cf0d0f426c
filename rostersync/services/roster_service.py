"""Runs reconciliations and keeps the latest complete result."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from rostersync.core.config import Settings
from rostersync.models.hierarchy import RosterSnapshot
from rostersync.services.bamboo_client import BambooClient, bamboo_client
from rostersync.services.hierarchy import build_hierarchy, count_nodes
from rostersync.services.reconciler import generate_employees

logger = logging.getLogger(__name__)


class RosterService:
    def __init__(self, client: BambooClient | None = None) -> None:
        self.client = client or bamboo_client
        self.snapshot: RosterSnapshot | None = None
        self._lock = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return self.client.initialized

    async def initialize(self, settings: Settings) -> None:
        await self.client.initialize(settings)

    async def close(self) -> None:
        await self.client.close()
        self.snapshot = None

    async def refresh(self, now: datetime | None = None) -> RosterSnapshot:
        """Reconcile from scratch. A failed run leaves the previous snapshot in place."""
        async with self._lock:
            now = now or datetime.now(timezone.utc)
            employees = await generate_employees(self.client, now)
            hierarchy = build_hierarchy(employees)
            self.snapshot = RosterSnapshot(employees=employees, hierarchy=hierarchy, generated_at=now)
            logger.info(
                "Roster refreshed: %d employees, %d roots, %d placed in hierarchy",
                len(employees),
                len(hierarchy),
                count_nodes(hierarchy),
            )
            return self.snapshot


roster_service = RosterService()

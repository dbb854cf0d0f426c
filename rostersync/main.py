from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from rostersync.api.v1.router import api_router
from rostersync.core.config import settings
from rostersync.services.roster_service import roster_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    try:
        await roster_service.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize RosterService — continuing without BambooHR")
    yield
    await roster_service.close()


app = FastAPI(
    title="rostersync API",
    description="BambooHR employee roster and management hierarchy",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "rostersync API"}

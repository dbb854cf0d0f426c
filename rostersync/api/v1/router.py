from fastapi import APIRouter

from rostersync.api.v1.endpoints import employees, health, hierarchy, roster

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router)
api_router.include_router(employees.router)
api_router.include_router(hierarchy.router)
api_router.include_router(roster.router)

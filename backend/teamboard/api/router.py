from fastapi import APIRouter

from teamboard.api.endpoints import employees, health, teams

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router)
api_router.include_router(employees.router)
api_router.include_router(teams.router)

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, status

from teamboard.api.errors import service_errors
from teamboard.models.envelope import Envelope
from teamboard.services.team_service import team_service

router = APIRouter(prefix="/teams", tags=["teams"])

NOT_FOUND = "Team not found"


@router.get("", response_model=Envelope, response_model_exclude_none=True)
async def list_teams():
    with service_errors("Error fetching teams"):
        teams = await team_service.list_teams()
    return Envelope(success=True, count=len(teams), data=teams)


@router.get("/{team_id}", response_model=Envelope, response_model_exclude_none=True)
async def get_team(team_id: str):
    with service_errors("Error fetching team", NOT_FOUND):
        team = await team_service.get_team(team_id)
    return Envelope(success=True, data=team)


@router.post(
    "",
    response_model=Envelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_team(payload: dict[str, Any] = Body(...)):  # noqa: B008
    with service_errors("Error creating team"):
        team = await team_service.create_team(payload)
    return Envelope(success=True, message="Team created successfully", data=team)


@router.put("/{team_id}", response_model=Envelope, response_model_exclude_none=True)
async def update_team(team_id: str, payload: dict[str, Any] = Body(...)):  # noqa: B008
    with service_errors("Error updating team", NOT_FOUND):
        team = await team_service.update_team(team_id, payload)
    return Envelope(success=True, message="Team updated successfully", data=team)


@router.put("/{team_id}/performance", response_model=Envelope, response_model_exclude_none=True)
async def update_team_performance(team_id: str, payload: dict[str, Any] = Body(...)):  # noqa: B008
    with service_errors("Error updating team performance", NOT_FOUND):
        team = await team_service.update_performance(team_id, payload)
    return Envelope(success=True, message="Team performance updated successfully", data=team)


@router.delete("/{team_id}", response_model=Envelope, response_model_exclude_none=True)
async def delete_team(team_id: str):
    with service_errors("Error deleting team", NOT_FOUND):
        await team_service.delete_team(team_id)
    return Envelope(success=True, message="Team deleted successfully", data={})

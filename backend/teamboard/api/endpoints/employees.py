from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, status

from teamboard.api.errors import service_errors
from teamboard.models.envelope import Envelope
from teamboard.services.employee_service import employee_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["employees"])

NOT_FOUND = "Employee not found"


@router.get("", response_model=Envelope, response_model_exclude_none=True)
async def list_employees():
    with service_errors("Error fetching employees"):
        employees = await employee_service.list_employees()
    return Envelope(success=True, count=len(employees), data=employees)


@router.get("/team/{team_id}", response_model=Envelope, response_model_exclude_none=True)
async def list_employees_by_team(team_id: str):
    with service_errors("Error fetching employees by team"):
        employees = await employee_service.list_employees_by_team(team_id)
    return Envelope(success=True, count=len(employees), data=employees)


@router.get("/team/name/{team_name}", response_model=Envelope, response_model_exclude_none=True)
async def list_employees_by_team_name(team_name: str):
    with service_errors("Error fetching employees by team name"):
        employees = await employee_service.list_employees_by_team(team_name)
    return Envelope(success=True, count=len(employees), data=employees)


@router.get("/{employee_id}", response_model=Envelope, response_model_exclude_none=True)
async def get_employee(employee_id: str):
    with service_errors("Error fetching employee", NOT_FOUND):
        employee = await employee_service.get_employee(employee_id)
    return Envelope(success=True, data=employee)


@router.post(
    "",
    response_model=Envelope,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_employee(payload: dict[str, Any] = Body(...)):  # noqa: B008
    with service_errors("Error creating employee"):
        employee = await employee_service.create_employee(payload)
    logger.info("Employee %s created (team=%s)", employee.id, employee.team)
    return Envelope(success=True, message="Employee created successfully", data=employee)


@router.put("/{employee_id}", response_model=Envelope, response_model_exclude_none=True)
async def update_employee(employee_id: str, payload: dict[str, Any] = Body(...)):  # noqa: B008
    with service_errors("Error updating employee", NOT_FOUND):
        employee = await employee_service.update_employee(employee_id, payload)
    return Envelope(success=True, message="Employee updated successfully", data=employee)


@router.delete("/{employee_id}", response_model=Envelope, response_model_exclude_none=True)
async def delete_employee(employee_id: str):
    with service_errors("Error deleting employee", NOT_FOUND):
        await employee_service.delete_employee(employee_id)
    return Envelope(success=True, message="Employee deleted successfully", data={})

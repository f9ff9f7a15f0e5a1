"""Employee records: CRUD, team lookup and default performance data."""

from __future__ import annotations

import logging
import random
from typing import Any

from pydantic import ValidationError

from teamboard.core.clock import Clock, timestamp, utc_now
from teamboard.core.errors import RecordNotFoundError, RecordValidationError, validation_messages
from teamboard.models.common import strip_store_properties
from teamboard.models.employee import Employee, EmployeeFields
from teamboard.services.performance import default_employee_performance
from teamboard.services.record_store import EMPLOYEES, RecordStore, record_store

logger = logging.getLogger(__name__)


class EmployeeService:
    def __init__(
        self,
        store: RecordStore,
        clock: Clock = utc_now,
        rng: random.Random | None = None,
    ) -> None:
        self.store = store
        self.clock = clock
        self.rng = rng or random.Random()

    async def list_employees(self) -> list[Employee]:
        items = await self.store.query(EMPLOYEES, "SELECT * FROM c ORDER BY c.name ASC")
        return [Employee.model_validate(item) for item in items]

    async def list_employees_by_team(self, team: str) -> list[Employee]:
        items = await self.store.query(
            EMPLOYEES,
            "SELECT * FROM c WHERE c.team = @team ORDER BY c.name ASC",
            [{"name": "@team", "value": team}],
        )
        return [Employee.model_validate(item) for item in items]

    async def get_employee(self, employee_id: str) -> Employee:
        return Employee.model_validate(await self._get_document(employee_id))

    async def create_employee(self, payload: dict[str, Any]) -> Employee:
        payload = strip_store_properties(payload)
        if payload.get("performance") is None:
            payload["performance"] = default_employee_performance(self.clock(), self.rng)

        fields = self._validate(payload)
        await self._ensure_unique_email(fields.email)

        document = fields.model_dump()
        document["createdAt"] = timestamp(self.clock())
        created = await self.store.create(EMPLOYEES, document)
        return Employee.model_validate(created)

    async def update_employee(self, employee_id: str, payload: dict[str, Any]) -> Employee:
        existing = await self._get_document(employee_id)

        merged = {**existing, **strip_store_properties(payload)}
        merged.pop("createdAt", None)
        fields = self._validate(strip_store_properties(merged))
        if fields.email != existing.get("email"):
            await self._ensure_unique_email(fields.email, exclude_id=employee_id)

        document = {
            **fields.model_dump(),
            "id": employee_id,
            "createdAt": existing.get("createdAt"),
        }
        updated = await self.store.replace(EMPLOYEES, document)
        return Employee.model_validate(updated)

    async def delete_employee(self, employee_id: str) -> None:
        await self._get_document(employee_id)
        await self.store.delete(EMPLOYEES, employee_id)

    async def _get_document(self, employee_id: str) -> dict[str, Any]:
        document = await self.store.get(EMPLOYEES, employee_id)
        if document is None:
            raise RecordNotFoundError(employee_id)
        return document

    def _validate(self, payload: dict[str, Any]) -> EmployeeFields:
        try:
            return EmployeeFields.model_validate(payload)
        except ValidationError as err:
            raise RecordValidationError(validation_messages(err.errors())) from err

    async def _ensure_unique_email(self, email: str, exclude_id: str | None = None) -> None:
        # Read-then-write: two concurrent creates with the same email can both pass.
        matches = await self.store.query(
            EMPLOYEES,
            "SELECT VALUE COUNT(1) FROM c WHERE c.email = @email AND c.id != @id",
            [{"name": "@email", "value": email}, {"name": "@id", "value": exclude_id or ""}],
        )
        if matches and matches[0]:
            logger.info("Rejected duplicate employee email %s", email)
            raise RecordValidationError([f"Email {email} is already in use"])


employee_service = EmployeeService(record_store)

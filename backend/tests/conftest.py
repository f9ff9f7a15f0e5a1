from __future__ import annotations

import copy
import random
import re
import uuid
from datetime import datetime, timezone
from typing import Any, AsyncIterator
from unittest.mock import AsyncMock

import pytest
from azure.core import MatchConditions
from azure.cosmos.exceptions import (
    CosmosAccessConditionFailedError,
    CosmosResourceExistsError,
    CosmosResourceNotFoundError,
)
from starlette.testclient import TestClient

from teamboard.main import app
from teamboard.services.employee_service import EmployeeService, employee_service
from teamboard.services.record_store import EMPLOYEES, TEAMS, RecordStore, record_store
from teamboard.services.team_service import TeamService, team_service

FIXED_NOW = datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)

_CONDITION = re.compile(r"c\.(\w+)\s*(!=|=)\s*(@\w+)")
_ORDER_BY = re.compile(r"ORDER BY c\.(\w+) (ASC|DESC)")


class InMemoryContainer:
    """Stands in for an async Cosmos container; understands the queries the services issue."""

    def __init__(self) -> None:
        self.items: dict[str, dict[str, Any]] = {}
        self._ts = 0

    def _stamp(self, body: dict[str, Any]) -> dict[str, Any]:
        self._ts += 1
        return {**copy.deepcopy(body), "_etag": uuid.uuid4().hex, "_rid": f"rid-{body['id']}", "_ts": self._ts}

    async def create_item(self, body: dict[str, Any], **kwargs: Any) -> dict[str, Any]:
        if body["id"] in self.items:
            raise CosmosResourceExistsError(status_code=409, message="Entity with the specified id already exists")
        self.items[body["id"]] = self._stamp(body)
        return copy.deepcopy(self.items[body["id"]])

    async def read_item(self, item: str, partition_key: str, **kwargs: Any) -> dict[str, Any]:
        if item not in self.items:
            raise CosmosResourceNotFoundError(status_code=404, message="Entity with the specified id does not exist")
        return copy.deepcopy(self.items[item])

    async def replace_item(
        self,
        item: str,
        body: dict[str, Any],
        etag: str | None = None,
        match_condition: MatchConditions | None = None,
        **kwargs: Any,
    ) -> dict[str, Any]:
        if item not in self.items:
            raise CosmosResourceNotFoundError(status_code=404, message="Entity with the specified id does not exist")
        if match_condition == MatchConditions.IfNotModified and etag != self.items[item]["_etag"]:
            raise CosmosAccessConditionFailedError(status_code=412, message="Precondition failed")
        self.items[item] = self._stamp(body)
        return copy.deepcopy(self.items[item])

    async def delete_item(self, item: str, partition_key: str, **kwargs: Any) -> None:
        if item not in self.items:
            raise CosmosResourceNotFoundError(status_code=404, message="Entity with the specified id does not exist")
        del self.items[item]

    def query_items(
        self,
        query: str,
        parameters: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> AsyncIterator[Any]:
        return self._run_query(query, {p["name"]: p["value"] for p in parameters or []})

    async def _run_query(self, query: str, values: dict[str, Any]) -> AsyncIterator[Any]:
        rows = list(self.items.values())
        for field, op, param in _CONDITION.findall(query):
            if op == "=":
                rows = [r for r in rows if r.get(field) == values[param]]
            else:
                rows = [r for r in rows if r.get(field) != values[param]]

        order = _ORDER_BY.search(query)
        if order:
            field, direction = order.groups()
            rows.sort(key=lambda r: r.get(field) or "", reverse=direction == "DESC")

        if "SELECT VALUE COUNT(1)" in query:
            yield len(rows)
            return
        for row in rows:
            yield copy.deepcopy(row)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def store() -> RecordStore:
    s = RecordStore()
    s.containers = {EMPLOYEES: InMemoryContainer(), TEAMS: InMemoryContainer()}
    s.initialized = True
    return s


@pytest.fixture
def employees_svc(store: RecordStore) -> EmployeeService:
    return EmployeeService(store, clock=lambda: FIXED_NOW, rng=random.Random(7))


@pytest.fixture
def teams_svc(store: RecordStore) -> TeamService:
    return TeamService(store, clock=lambda: FIXED_NOW, rng=random.Random(7))


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(employee_service, "clock", lambda: FIXED_NOW)
    monkeypatch.setattr(employee_service, "rng", random.Random(7))
    monkeypatch.setattr(team_service, "clock", lambda: FIXED_NOW)
    monkeypatch.setattr(team_service, "rng", random.Random(7))
    # an initialized store makes the lifespan skip the Cosmos connection
    monkeypatch.setattr(record_store, "containers", {EMPLOYEES: InMemoryContainer(), TEAMS: InMemoryContainer()})
    monkeypatch.setattr(record_store, "initialized", True)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def offline_client(monkeypatch):
    monkeypatch.setattr(record_store, "initialize", AsyncMock())
    with TestClient(app) as c:
        yield c

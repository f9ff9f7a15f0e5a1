"""Team records: CRUD and the monthly performance history."""

from __future__ import annotations

import logging
import random
from typing import Any

from pydantic import ValidationError

from teamboard.core.clock import Clock, timestamp, utc_now
from teamboard.core.errors import RecordNotFoundError, RecordValidationError, validation_messages
from teamboard.models.common import strip_store_properties
from teamboard.models.team import REQUIRED_MESSAGES, PerformanceUpdate, Team, TeamFields
from teamboard.services.performance import default_team_history, month_label, record_month_score
from teamboard.services.record_store import TEAMS, RecordStore, record_store

logger = logging.getLogger(__name__)


class TeamService:
    def __init__(
        self,
        store: RecordStore,
        clock: Clock = utc_now,
        rng: random.Random | None = None,
    ) -> None:
        self.store = store
        self.clock = clock
        self.rng = rng or random.Random()

    async def list_teams(self) -> list[Team]:
        items = await self.store.query(TEAMS, "SELECT * FROM c ORDER BY c.createdAt DESC")
        return [Team.model_validate(item) for item in items]

    async def get_team(self, team_id: str) -> Team:
        return Team.model_validate(await self._get_document(team_id))

    async def create_team(self, payload: dict[str, Any]) -> Team:
        payload = strip_store_properties(payload)
        now = self.clock()
        synthesize_history = not payload.get("teamPerformance")
        if synthesize_history:
            payload.pop("teamPerformance", None)

        fields = self._validate(TeamFields, payload)
        document = fields.model_dump()
        if synthesize_history:
            # built from the validated score so a bad value is reported once, on its own field
            document["teamPerformance"] = default_team_history(now, self.rng, document["performance"])
        document["createdAt"] = document["updatedAt"] = timestamp(now)
        created = await self.store.create(TEAMS, document)
        return Team.model_validate(created)

    async def update_team(self, team_id: str, payload: dict[str, Any]) -> Team:
        existing = await self._get_document(team_id)

        merged = strip_store_properties({**existing, **strip_store_properties(payload)})
        merged.pop("createdAt", None)
        merged.pop("updatedAt", None)
        fields = self._validate(TeamFields, merged)

        document = {
            **fields.model_dump(),
            "id": team_id,
            "createdAt": existing.get("createdAt"),
            "updatedAt": timestamp(self.clock()),
        }
        updated = await self.store.replace(TEAMS, document)
        return Team.model_validate(updated)

    async def update_performance(self, team_id: str, payload: dict[str, Any]) -> Team:
        """Set the overall score and upsert it as the current month's history entry.

        The write is conditional on the ETag read here, so a concurrent update
        of the same team raises ``RecordConflictError`` instead of being lost.
        """
        existing = await self._get_document(team_id)
        update = self._validate(PerformanceUpdate, payload)
        now = self.clock()

        document = dict(existing)
        document["performance"] = update.performance
        document["teamPerformance"] = record_month_score(
            existing.get("teamPerformance") or [],
            month_label(now),
            update.performance,
        )
        document["updatedAt"] = timestamp(now)
        updated = await self.store.replace(TEAMS, document, if_match=existing.get("_etag"))
        logger.info("Team %s performance set to %s for %s", team_id, update.performance, month_label(now))
        return Team.model_validate(updated)

    async def delete_team(self, team_id: str) -> None:
        await self._get_document(team_id)
        await self.store.delete(TEAMS, team_id)

    async def _get_document(self, team_id: str) -> dict[str, Any]:
        document = await self.store.get(TEAMS, team_id)
        if document is None:
            raise RecordNotFoundError(team_id)
        return document

    def _validate(self, model: type[Any], payload: dict[str, Any]) -> Any:
        try:
            return model.model_validate(payload)
        except ValidationError as err:
            raise RecordValidationError(validation_messages(err.errors(), REQUIRED_MESSAGES)) from err


team_service = TeamService(record_store)

"""Cosmos DB record store shared by the employee and team services."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from azure.core import MatchConditions
from azure.core.exceptions import AzureError
from azure.cosmos import PartitionKey
from azure.cosmos.aio import CosmosClient
from azure.cosmos.exceptions import CosmosAccessConditionFailedError, CosmosResourceNotFoundError

from teamboard.core.config import Settings
from teamboard.core.errors import PersistenceError, RecordConflictError, RecordNotFoundError

logger = logging.getLogger(__name__)

EMPLOYEES = "employees"
TEAMS = "teams"


def new_record_id() -> str:
    return uuid.uuid4().hex


class RecordStore:
    def __init__(self) -> None:
        self.client: CosmosClient | None = None
        self.containers: dict[str, Any] = {}
        self.initialized: bool = False

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        if settings.COSMOS_DB_CONNECTION_STRING:
            self.client = CosmosClient.from_connection_string(settings.COSMOS_DB_CONNECTION_STRING)
        elif settings.COSMOS_DB_ENDPOINT and settings.COSMOS_DB_KEY:
            self.client = CosmosClient(settings.COSMOS_DB_ENDPOINT, settings.COSMOS_DB_KEY)
        else:
            raise PersistenceError(
                "Cosmos DB credentials missing: set COSMOS_DB_CONNECTION_STRING or COSMOS_DB_ENDPOINT and COSMOS_DB_KEY"
            )

        container_names = {
            EMPLOYEES: settings.COSMOS_DB_EMPLOYEES_CONTAINER,
            TEAMS: settings.COSMOS_DB_TEAMS_CONTAINER,
        }
        try:
            db = await self.client.create_database_if_not_exists(id=settings.COSMOS_DB_DATABASE)
            for collection, name in container_names.items():
                self.containers[collection] = await db.create_container_if_not_exists(
                    id=name,
                    partition_key=PartitionKey(path="/id"),
                )
        except AzureError as err:
            await self.client.close()
            self.client = None
            self.containers = {}
            raise PersistenceError(f"Cosmos DB connection failed: {err}") from err

        self.initialized = True
        logger.info("RecordStore initialized (database=%s)", settings.COSMOS_DB_DATABASE)

    async def close(self) -> None:
        if self.client:
            await self.client.close()
            self.client = None
            self.containers = {}
            self.initialized = False

    def _container(self, collection: str) -> Any:
        container = self.containers.get(collection)
        if container is None:
            raise PersistenceError("Record store not initialized")
        return container

    async def get(self, collection: str, record_id: str) -> dict[str, Any] | None:
        container = self._container(collection)
        try:
            return await container.read_item(item=record_id, partition_key=record_id)
        except CosmosResourceNotFoundError:
            return None
        except AzureError as err:
            raise PersistenceError(str(err)) from err

    async def query(
        self,
        collection: str,
        query: str,
        parameters: list[dict[str, Any]] | None = None,
    ) -> list[Any]:
        container = self._container(collection)
        items: list[Any] = []
        try:
            async for item in container.query_items(
                query=query,
                parameters=parameters or [],
                enable_cross_partition_query=True,
            ):
                items.append(item)
        except AzureError as err:
            raise PersistenceError(str(err)) from err
        return items

    async def create(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        container = self._container(collection)
        body = {"id": new_record_id(), **document}
        try:
            created = await container.create_item(body=body)
        except AzureError as err:
            raise PersistenceError(str(err)) from err
        logger.info("Created %s record %s", collection, created["id"])
        return created

    async def replace(
        self,
        collection: str,
        document: dict[str, Any],
        *,
        if_match: str | None = None,
    ) -> dict[str, Any]:
        """Overwrite a whole document; with ``if_match`` the write only succeeds on an unchanged ETag."""
        container = self._container(collection)
        record_id = document["id"]
        options: dict[str, Any] = {}
        if if_match:
            options = {"etag": if_match, "match_condition": MatchConditions.IfNotModified}
        try:
            replaced = await container.replace_item(item=record_id, body=document, **options)
        except CosmosAccessConditionFailedError as err:
            raise RecordConflictError(f"{collection} record {record_id} was modified concurrently") from err
        except CosmosResourceNotFoundError as err:
            raise RecordNotFoundError(record_id) from err
        except AzureError as err:
            raise PersistenceError(str(err)) from err
        logger.info("Updated %s record %s", collection, record_id)
        return replaced

    async def delete(self, collection: str, record_id: str) -> None:
        container = self._container(collection)
        try:
            await container.delete_item(item=record_id, partition_key=record_id)
        except CosmosResourceNotFoundError as err:
            raise RecordNotFoundError(record_id) from err
        except AzureError as err:
            raise PersistenceError(str(err)) from err
        logger.info("Deleted %s record %s", collection, record_id)

    async def check_connection(self) -> bool:
        if not self.initialized:
            return False
        try:
            await self.query(EMPLOYEES, "SELECT VALUE COUNT(1) FROM c")
            return True
        except PersistenceError:
            logger.exception("Cosmos DB connection check failed")
            return False


record_store = RecordStore()

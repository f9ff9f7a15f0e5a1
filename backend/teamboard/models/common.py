"""Shared field types for Employee and Team documents."""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, Field, PlainSerializer, StringConstraints


def _json_number(value: float) -> int | float:
    # JSON has a single number type; keep 85 as 85 rather than 85.0
    return int(value) if float(value).is_integer() else value


Number = Annotated[float, Field(allow_inf_nan=False), PlainSerializer(_json_number)]
Score = Annotated[float, Field(ge=0, le=100, allow_inf_nan=False), PlainSerializer(_json_number)]

RequiredText = Annotated[str, StringConstraints(min_length=1)]
TrimmedText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Store-managed properties that never leave the service
STORE_PROPERTIES = frozenset({"id", "_id", "_rid", "_self", "_etag", "_attachments", "_ts"})


class NameValue(BaseModel):
    name: str | None = None
    value: Number | None = None


class MonthScore(BaseModel):
    month: str | None = None
    score: Number | None = None


class Document(BaseModel):
    """Base for persisted records: ``id`` is rendered as ``_id`` on the wire."""

    id: str = Field(serialization_alias="_id")
    createdAt: str | None = None


def strip_store_properties(payload: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in payload.items() if k not in STORE_PROPERTIES}

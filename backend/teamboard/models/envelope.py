"""Uniform response wrapper used by every endpoint."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class Envelope(BaseModel):
    success: bool
    data: Any = None
    count: int | None = None
    message: str | None = None
    error: str | None = None
    errors: list[str] | None = None

"""Error types shared by the services and the HTTP layer."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class RecordNotFoundError(Exception):
    """No document matches the requested id."""


class RecordValidationError(Exception):
    """A document failed field validation; ``errors`` lists one message per violation."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


class RecordConflictError(Exception):
    """The document changed between read and conditional write."""


class PersistenceError(Exception):
    """The record store is unreachable or failed for a reason unrelated to the data."""


class ApiError(Exception):
    """Rendered by the application as a ``success: false`` envelope."""

    def __init__(
        self,
        status_code: int,
        message: str,
        *,
        error: str | None = None,
        errors: list[str] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error = error
        self.errors = errors


def validation_messages(
    errors: Sequence[Any],
    required_messages: dict[str, str] | None = None,
) -> list[str]:
    required_messages = required_messages or {}
    messages: list[str] = []
    for err in errors:
        loc: tuple[Any, ...] = tuple(part for part in err["loc"] if part != "body")
        path = ".".join(str(part) for part in loc)
        # null, empty and whitespace-only values count as absent for top-level fields
        absent = err["type"] in ("missing", "string_too_short") or err.get("input", "") is None
        if absent and len(loc) == 1:
            messages.append(required_messages.get(path, f"Path `{path}` is required."))
        elif path:
            messages.append(f"{path}: {err['msg']}")
        else:
            messages.append(err["msg"])
    return messages

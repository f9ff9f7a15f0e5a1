"""Translation of service errors into API errors."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import status

from teamboard.core.errors import (
    ApiError,
    PersistenceError,
    RecordConflictError,
    RecordNotFoundError,
    RecordValidationError,
)

logger = logging.getLogger(__name__)


@contextmanager
def service_errors(failure_message: str, not_found_message: str | None = None) -> Iterator[None]:
    """Raise ``ApiError`` for the domain errors raised inside the block.

    ``failure_message`` describes the operation for 500 responses;
    ``not_found_message`` is used when the target record does not exist.
    """
    try:
        yield
    except RecordNotFoundError as err:
        raise ApiError(status.HTTP_404_NOT_FOUND, not_found_message or "Record not found") from err
    except RecordValidationError as err:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "Validation error", errors=err.errors) from err
    except RecordConflictError as err:
        logger.warning("%s: %s", failure_message, err)
        raise ApiError(status.HTTP_409_CONFLICT, failure_message, error=str(err)) from err
    except PersistenceError as err:
        logger.exception(failure_message)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, failure_message, error=str(err)) from err

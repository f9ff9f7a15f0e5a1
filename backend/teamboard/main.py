from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from teamboard.api.router import api_router
from teamboard.core.config import settings
from teamboard.core.errors import ApiError, validation_messages
from teamboard.models.envelope import Envelope
from teamboard.services.record_store import record_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    try:
        await record_store.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize RecordStore, aborting startup")
        raise
    yield
    await record_store.close()


app = FastAPI(
    title="Teamboard API",
    description="Employee and team records",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


def _envelope_response(status_code: int, envelope: Envelope) -> JSONResponse:
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR and settings.is_production:
        envelope.error = None
    return JSONResponse(status_code=status_code, content=envelope.model_dump(exclude_none=True))


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return _envelope_response(
        exc.status_code,
        Envelope(success=False, message=exc.message, error=exc.error, errors=exc.errors),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _envelope_response(
        status.HTTP_400_BAD_REQUEST,
        Envelope(success=False, message="Validation error", errors=validation_messages(exc.errors())),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _envelope_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        Envelope(success=False, message="Server error", error=repr(exc)),
    )


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "API is running"

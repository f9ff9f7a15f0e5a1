from __future__ import annotations

from fastapi import APIRouter

from teamboard.core.config import settings
from teamboard.services.record_store import record_store

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    services: dict[str, str] = {}

    if record_store.initialized:
        ok = await record_store.check_connection()
        services["cosmos_db"] = "ok" if ok else "error"
    else:
        services["cosmos_db"] = "not_configured"

    all_ok = all(v in ("ok", "not_configured") for v in services.values())

    return {
        "status": "healthy" if all_ok else "degraded",
        "version": settings.APP_VERSION,
        "services": services,
    }


@router.get("/ready")
async def readiness_probe():
    return {"ready": True}

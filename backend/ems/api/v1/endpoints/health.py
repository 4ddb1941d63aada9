from __future__ import annotations

from fastapi import APIRouter, Depends

from ems.core.config import settings
from ems.core.database import database
from ems.core.dependencies import get_current_user
from ems.models.auth import UserInfo

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health_check():
    services: dict[str, str] = {}

    if database.initialized:
        services["database"] = "ok" if database.check_connection() else "error"
    else:
        services["database"] = "not_configured"

    all_ok = all(v in ("ok", "not_configured") for v in services.values())

    return {
        "status": "healthy" if all_ok else "degraded",
        "version": settings.APP_VERSION,
        "services": services,
    }


@router.get("/protected")
async def health_protected(user: UserInfo = Depends(get_current_user)):
    return {"status": "ok", "user": user.model_dump(mode="json")}


@router.get("/ready")
async def readiness_probe():
    return {"ready": database.initialized}

"""Health and readiness check routes."""

import logging

from fastapi import APIRouter, Depends

from routes.deps import get_service
from services.display import DisplayService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/ready")
async def ready(service: DisplayService = Depends(get_service)) -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": "matrix-display-api", "commit": service.settings.git_sha}


@router.get("/health")
async def health(service: DisplayService = Depends(get_service)) -> dict:
    """Report which feeds are configured and the current display state."""
    settings = service.settings
    state = service.gate.state
    missing = settings.validate()
    return {
        "status": "ok" if not missing else "degraded",
        "service": "matrix-display-api",
        "commit": settings.git_sha,
        "feeds": {
            "commits": "configured" if not settings.missing_github() else "missing_config",
            "contributions": "configured" if not settings.missing_github() else "missing_config",
            "weather": "configured" if not settings.missing_weather() else "missing_config",
        },
        "missing_config": missing,
        "display": {"enabled": state.enabled, "auto_mode": state.auto_mode_enabled},
    }

"""Upstream-backed feeds rendered for the display.

Each response carries a single ``content`` string, empty while the display
is switched off.
"""

from fastapi import APIRouter, Depends, Query

from routes.deps import get_service
from services.display import DisplayService

router = APIRouter()


@router.get("/commits")
async def commits(service: DisplayService = Depends(get_service)) -> dict:
    """Today's commit count with a per-repository breakdown."""
    return {"content": await service.commits_summary()}


@router.get("/weather")
async def weather(service: DisplayService = Depends(get_service)) -> dict:
    return {"content": await service.weather_summary()}


@router.get("/contributions")
async def contributions(
    mode: str = Query("bitmap"),
    service: DisplayService = Depends(get_service),
) -> dict:
    """Past year of contributions as a 32×7 bitmap or per-day intensity levels."""
    return {"content": await service.contribution_graph(mode), "mode": mode}

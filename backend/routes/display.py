"""Display text and availability state routes.

GET /display             → current text ("" while the display is off)
GET /display/set?text=   → store new text (the matrix firmware can only GET)
POST /display            → same, with a JSON body
GET /state[?enabled=]    → read or manually override the enabled flag
GET /state/auto[?enabled=] → read or toggle auto mode
"""

import logging

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from routes.deps import get_service
from services.availability import AvailabilityState
from services.display import DisplayService

logger = logging.getLogger(__name__)

router = APIRouter()


MAX_TEXT_LENGTH = 256


class DisplayTextBody(BaseModel):
    text: str = Field(..., max_length=MAX_TEXT_LENGTH)


def _state_response(state: AvailabilityState) -> dict:
    return {"enabled": state.enabled, "auto_mode": state.auto_mode_enabled}


@router.get("/display")
async def get_display(service: DisplayService = Depends(get_service)) -> dict:
    return {"content": service.get_display()}


@router.get("/display/set")
async def set_display_query(
    text: str = Query(..., max_length=MAX_TEXT_LENGTH),
    service: DisplayService = Depends(get_service),
) -> dict:
    logger.info("Display text set via query (%d chars)", len(text))
    return {"content": service.set_display(text)}


@router.post("/display")
async def set_display(body: DisplayTextBody, service: DisplayService = Depends(get_service)) -> dict:
    logger.info("Display text set via body (%d chars)", len(body.text))
    return {"content": service.set_display(body.text)}


@router.get("/state")
async def state(
    enabled: bool | None = Query(None),
    service: DisplayService = Depends(get_service),
) -> dict:
    """Current availability; ``?enabled=`` applies a manual override first."""
    if enabled is None:
        return _state_response(service.gate.state)
    logger.info("Manual display override: enabled=%s", enabled)
    return _state_response(service.set_enabled(enabled))


@router.get("/state/auto")
async def auto_mode(
    enabled: bool | None = Query(None),
    service: DisplayService = Depends(get_service),
) -> dict:
    if enabled is None:
        return _state_response(service.gate.state)
    return _state_response(service.set_auto_mode(enabled))

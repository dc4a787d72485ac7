"""
Game state, spin and device API routes.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from src.core.exceptions import NotFoundError
from src.data.models import Fragment, GameState

from ..config import settings
from ..dependencies import get_game_service, get_session_id
from ..schemas.game import DeviceResponse, FluxGainedResponse, SellRequest, SpinResponse
from ..services.game_service import GameService

router = APIRouter()


@router.get("/gamestate", response_model=GameState)
async def get_game_state(
    request: Request,
    response: Response,
    service: GameService = Depends(get_game_service),
):
    """Get or create the game state for this session."""
    session_id: Optional[str] = request.cookies.get(settings.SESSION_COOKIE)
    session_id, game_state = service.get_or_create_session(session_id)
    response.set_cookie(settings.SESSION_COOKIE, session_id, httponly=True)
    return game_state


@router.post("/spin", response_model=SpinResponse)
async def spin(
    session_id: str = Depends(get_session_id),
    service: GameService = Depends(get_game_service),
):
    """Spend flux to roll one fragment."""
    try:
        fragment, flux_spent = service.spin(session_id)
        return SpinResponse(fragment=fragment, flux_spent=flux_spent)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/fragments", response_model=List[Fragment])
async def get_fragments(
    session_id: str = Depends(get_session_id),
    service: GameService = Depends(get_game_service),
):
    """List owned fragments."""
    try:
        return service.list_fragments(session_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/fragments/{fragment_id}/shatter", response_model=FluxGainedResponse)
async def shatter_fragment(
    fragment_id: str,
    session_id: str = Depends(get_session_id),
    service: GameService = Depends(get_game_service),
):
    """Destroy a fragment for flux."""
    try:
        return FluxGainedResponse(flux_gained=service.shatter(session_id, fragment_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/sell", response_model=FluxGainedResponse)
async def sell_fragment(
    request: SellRequest,
    session_id: str = Depends(get_session_id),
    service: GameService = Depends(get_game_service),
):
    """Sell a fragment at its marketplace price."""
    try:
        return FluxGainedResponse(flux_gained=service.sell(session_id, request.fragment_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/upgrade/{upgrade_type}", response_model=GameState)
async def upgrade_device(
    upgrade_type: str,
    session_id: str = Depends(get_session_id),
    service: GameService = Depends(get_game_service),
):
    """Buy one level of a device upgrade track."""
    try:
        return service.upgrade_device(session_id, upgrade_type)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/device", response_model=DeviceResponse)
async def get_device(
    session_id: str = Depends(get_session_id),
    service: GameService = Depends(get_game_service),
):
    """Device stats, levels and next upgrade costs."""
    try:
        return service.get_device(session_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

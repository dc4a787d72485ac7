"""
Mutation (crafting) API routes.
"""

from fastapi import APIRouter, Depends, HTTPException

from src.core.exceptions import NotFoundError

from ..dependencies import get_game_service, get_session_id
from ..schemas.game import MutationPreviewResponse, MutationRequest, MutationResponse
from ..services.game_service import GameService

router = APIRouter()


@router.post("", response_model=MutationResponse)
async def mutate(
    request: MutationRequest,
    session_id: str = Depends(get_session_id),
    service: GameService = Depends(get_game_service),
):
    """Attempt a mutation. Inputs and flux are spent even on failure."""
    try:
        return service.mutate(
            session_id, request.base_fragment_id, request.component_fragment_ids
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/preview", response_model=MutationPreviewResponse)
async def preview_mutation(
    request: MutationRequest,
    session_id: str = Depends(get_session_id),
    service: GameService = Depends(get_game_service),
):
    """Cost and success rate of a mutation, without side effects."""
    try:
        return service.preview_mutation(
            session_id, request.base_fragment_id, request.component_fragment_ids
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

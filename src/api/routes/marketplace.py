"""
Marketplace API routes.
"""

from typing import List

from fastapi import APIRouter, Depends

from src.data.models import MarketplaceListing

from ..dependencies import get_game_service
from ..services.game_service import GameService

router = APIRouter()


@router.get("", response_model=List[MarketplaceListing])
async def get_marketplace(service: GameService = Depends(get_game_service)):
    """Get all marketplace listings."""
    return service.get_marketplace()

"""
Dependency injection for API services.
"""

from functools import lru_cache

from fastapi import HTTPException, Request

from .config import settings
from .services.game_service import GameService


@lru_cache()
def get_game_service() -> GameService:
    """Get GameService singleton."""
    return GameService()


def get_session_id(request: Request) -> str:
    """Session id from the session cookie; 401 when absent."""
    session_id = request.cookies.get(settings.SESSION_COOKIE)
    if not session_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return session_id

"""Voidspinner API server launcher."""

import uvicorn

from src.api.config import settings
from src.utils.logger import get_logger

logger = get_logger("voidspinner")

if __name__ == "__main__":
    seed_note = f"seed {settings.RNG_SEED}" if settings.RNG_SEED is not None else "time-seeded"
    logger.info(f"Starting Voidspinner API on {settings.HOST}:{settings.PORT} ({seed_note} spins)")
    uvicorn.run(
        "src.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )

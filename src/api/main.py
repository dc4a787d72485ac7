"""
FastAPI main application.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .routes import game, marketplace, mutation

app = FastAPI(
    title="Voidspinner API",
    description="Fragment spinning, crafting and marketplace API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(game.router, prefix="/api", tags=["Game"])
app.include_router(marketplace.router, prefix="/api/marketplace", tags=["Marketplace"])
app.include_router(mutation.router, prefix="/api/mutate", tags=["Mutation"])


@app.get("/")
async def root():
    """API status check."""
    return {
        "status": "ok",
        "name": "Voidspinner API",
        "version": "1.0.0",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}

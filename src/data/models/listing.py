"""Marketplace listing model for Voidspinner."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class PricePoint(BaseModel):
    """One entry of a listing's price history."""
    price: int
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class MarketplaceListing(BaseModel):
    """Aggregate pricing state for one (fragment type, rarity) pair."""
    id: str = Field(..., description="<fragment_type>-<rarity>")
    fragment_type: str
    rarity: str
    base_price: int = Field(..., ge=1)
    current_price: int = Field(..., ge=1)
    demand: float = Field(default=1.0, description="Demand multiplier, capped at 3")
    supply: int = Field(default=100, ge=0)
    price_history: list[PricePoint] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

"""Marketplace pricing for Voidspinner.

Listings are keyed by (fragment type, rarity). Selling a fragment pays the
listing's current price per unit, then nudges the listing:

    supply        = max(0, supply - 1)
    demand        = min(3, demand + 0.01)
    current_price = max(1, round(current_price * (1 + 0.01 * (1 - demand))))

Note the last line: once demand passes 1.0 the factor drops below 1, so
prices fall as demand rises. This is the established pricing behaviour and
is kept as is.
"""

import math
from datetime import datetime, timezone
from typing import Optional

from src.core.constants import (
    DEFAULT_SALE_PRICE,
    DEFAULT_SUPPLY,
    DEMAND_STEP,
    MARKETPLACE_SEED,
    MAX_DEMAND,
    PRICE_DRIFT,
)
from src.data.models import FragmentDraft, MarketplaceListing, PricePoint


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return math.floor(value + 0.5)


def listing_id(fragment_type: str, rarity: str) -> str:
    return f"{fragment_type}-{rarity}"


def seed_listings() -> list[MarketplaceListing]:
    """Build the initial listing table."""
    return [
        MarketplaceListing(
            id=listing_id(fragment_type, rarity),
            fragment_type=fragment_type,
            rarity=rarity,
            base_price=base_price,
            current_price=base_price,
            demand=demand,
            supply=DEFAULT_SUPPLY,
        )
        for fragment_type, rarity, base_price, demand in MARKETPLACE_SEED
    ]


def calculate_sale_price(
    fragment: FragmentDraft, listing: Optional[MarketplaceListing]
) -> int:
    """
    Flux paid for selling a fragment.

    Args:
        fragment: The fragment being sold.
        listing: Its marketplace listing, or None to use the default price of 10.

    Returns:
        round(unit price * quantity), at least 1.
    """
    unit_price = listing.current_price if listing else DEFAULT_SALE_PRICE
    return max(1, round_half_up(unit_price * fragment.quantity))


def apply_sale(listing: MarketplaceListing) -> MarketplaceListing:
    """
    Price a listing after one sale.

    Returns:
        A new listing; the input is left untouched. The post-sale price is
        appended to the price history.
    """
    new_supply = max(0, listing.supply - 1)
    new_demand = min(MAX_DEMAND, listing.demand + DEMAND_STEP)
    new_price = max(1, round_half_up(listing.current_price * (1 + PRICE_DRIFT * (1 - new_demand))))

    now = datetime.now(timezone.utc)
    return listing.model_copy(
        update={
            "supply": new_supply,
            "demand": new_demand,
            "current_price": new_price,
            "price_history": [*listing.price_history, PricePoint(price=new_price, recorded_at=now)],
            "updated_at": now,
        }
    )

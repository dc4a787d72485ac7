# Data Models
from .fragment import (
    Affix,
    Fragment,
    FragmentDraft,
    FragmentType,
    ImplicitMod,
    Rarity,
    StatValue,
)
from .game_state import GameState, UpgradeType, User
from .listing import MarketplaceListing, PricePoint

__all__ = [
    "Affix",
    "Fragment",
    "FragmentDraft",
    "FragmentType",
    "ImplicitMod",
    "Rarity",
    "StatValue",
    "GameState",
    "UpgradeType",
    "User",
    "MarketplaceListing",
    "PricePoint",
]

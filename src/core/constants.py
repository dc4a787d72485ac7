"""Voidspinner Game Constants.

Every per-rarity and per-type table lives here. The three rarity multiplier
tables (stats, shatter, mutation cost) are deliberately distinct; look them up
by name rather than reusing one for another.
"""

from typing import Final

from src.data.models import FragmentType, Rarity, UpgradeType

# =============================================================================
# RARITY ORDER
# =============================================================================
RARITY_ORDER: Final[list[str]] = [rarity.value for rarity in Rarity]

# Strict ">" thresholds evaluated highest-first; anything at or below the
# last cut point is common.
RARITY_THRESHOLDS: Final[list[tuple[float, str]]] = [
    (0.999995, Rarity.VOID_TOUCHED),  # 0.0005%
    (0.9999, Rarity.MYTHIC),          # 0.0095%
    (0.999, Rarity.LEGENDARY),        # 0.09%
    (0.99, Rarity.EPIC),              # 0.9%
    (0.95, Rarity.RARE),              # 4%
    (0.8, Rarity.UNCOMMON),           # 15%
]

MAX_ADJUSTED_ROLL: Final[float] = 0.999999

# Nominal probability of each tier at zero bonus
NOMINAL_RARITY_ODDS: Final[dict[str, float]] = {
    Rarity.COMMON: 0.80,
    Rarity.UNCOMMON: 0.15,
    Rarity.RARE: 0.04,
    Rarity.EPIC: 0.009,
    Rarity.LEGENDARY: 0.0009,
    Rarity.MYTHIC: 0.000095,
    Rarity.VOID_TOUCHED: 0.000005,
}

# =============================================================================
# RARITY MULTIPLIER TABLES
# =============================================================================
# Scales rolled base stats
STAT_MULTIPLIER: Final[dict[str, float]] = {
    Rarity.COMMON: 1,
    Rarity.UNCOMMON: 1.5,
    Rarity.RARE: 2.5,
    Rarity.EPIC: 4,
    Rarity.LEGENDARY: 7,
    Rarity.MYTHIC: 12,
    Rarity.VOID_TOUCHED: 20,
}

# Scales flux returned by shattering
SHATTER_MULTIPLIER: Final[dict[str, int]] = {
    Rarity.COMMON: 1,
    Rarity.UNCOMMON: 3,
    Rarity.RARE: 8,
    Rarity.EPIC: 20,
    Rarity.LEGENDARY: 50,
    Rarity.MYTHIC: 125,
    Rarity.VOID_TOUCHED: 300,
}

# Scales flux charged by a mutation (doubles per tier)
MUTATION_COST_MULTIPLIER: Final[dict[str, int]] = {
    Rarity.COMMON: 1,
    Rarity.UNCOMMON: 2,
    Rarity.RARE: 4,
    Rarity.EPIC: 8,
    Rarity.LEGENDARY: 16,
    Rarity.MYTHIC: 32,
    Rarity.VOID_TOUCHED: 64,
}

# Multiplier used when a persisted rarity string is not recognised
DEFAULT_MULTIPLIER: Final[int] = 1

# =============================================================================
# FRAGMENT GENERATION
# =============================================================================
TYPE_WEIGHTS: Final[list[tuple[str, int]]] = [
    (FragmentType.BASE_ITEM, 30),
    (FragmentType.COMPONENT, 40),
    (FragmentType.MODIFIER, 25),
    (FragmentType.BLUEPRINT, 5),
]

# Inclusive (min, max) rolled before the stat multiplier is applied
BASE_STAT_RANGES: Final[dict[str, dict[str, tuple[int, int]]]] = {
    FragmentType.BASE_ITEM: {
        "power": (10, 50),
        "defense": (5, 25),
        "speed": (1, 10),
    },
    FragmentType.COMPONENT: {
        "enhancement": (5, 20),
    },
    FragmentType.MODIFIER: {
        "modifier": (1, 15),
    },
    FragmentType.BLUEPRINT: {},
}

# Inclusive (min, max) number of implicit mods per rarity
IMPLICIT_MOD_COUNT: Final[dict[str, tuple[int, int]]] = {
    Rarity.COMMON: (1, 1),
    Rarity.UNCOMMON: (1, 2),
    Rarity.RARE: (2, 2),
    Rarity.EPIC: (2, 3),
    Rarity.LEGENDARY: (3, 3),
    Rarity.MYTHIC: (3, 4),
    Rarity.VOID_TOUCHED: (4, 4),
}

IMPLICIT_MOD_POOL: Final[list[str]] = [
    "Increased Damage",
    "Increased Defense",
    "Increased Speed",
    "Flux Regeneration",
    "Spin Speed Bonus",
    "Critical Strike Chance",
    "Elemental Resistance",
    "Void Affinity",
    "Mutation Catalyst",
    "Shattering Efficiency",
]

IMPLICIT_MOD_VALUE_RANGE: Final[tuple[int, int]] = (5, 25)

IMPLICIT_MOD_VALUE_SCALE: Final[dict[str, int]] = {
    Rarity.MYTHIC: 2,
    Rarity.VOID_TOUCHED: 3,
}

# =============================================================================
# DISPLAY NAMES
# =============================================================================
FRAGMENT_NAMES: Final[dict[str, list[str]]] = {
    FragmentType.BASE_ITEM: [
        "Gauntlets", "Helmet", "Chestplate", "Boots", "Sword",
        "Shield", "Staff", "Bow", "Ring", "Amulet",
    ],
    FragmentType.COMPONENT: [
        "Void Iron", "Crystal Shard", "Essence Core",
        "Flux Coil", "Astral Fragment", "Quantum Dust",
    ],
    FragmentType.MODIFIER: [
        "Essence of Haste", "Soul of Power", "Spirit of Defense",
        "Echo of Speed", "Whisper of Void",
    ],
}

BLUEPRINT_NAME: Final[str] = "Mysterious Blueprint"

RARITY_PREFIX: Final[dict[str, str]] = {
    Rarity.COMMON: "",
    Rarity.UNCOMMON: "Enhanced",
    Rarity.RARE: "Superior",
    Rarity.EPIC: "Masterwork",
    Rarity.LEGENDARY: "Ancient",
    Rarity.MYTHIC: "Primordial",
    Rarity.VOID_TOUCHED: "Void-Touched",
}

# =============================================================================
# ECONOMY
# =============================================================================
BASE_SPIN_COST: Final[int] = 25
SPIN_COST_REDUCTION_PER_LEVEL: Final[int] = 5
MIN_SPIN_COST: Final[int] = 5

SHATTER_BASE_VALUE: Final[int] = 5

UPGRADE_BASE_COST: Final[dict[str, int]] = {
    UpgradeType.SPIN_SPEED: 500,
    UpgradeType.RARITY_ODDS: 1200,
    UpgradeType.FLUX_COST: 800,
    UpgradeType.MUTATION_SLOTS: 2500,
}
UPGRADE_COST_GROWTH: Final[float] = 1.5

SPIN_SPEED_PER_LEVEL: Final[float] = 0.2
RARITY_BONUS_PER_LEVEL: Final[float] = 0.0005
BASE_MUTATION_SLOTS: Final[int] = 2

# =============================================================================
# MARKETPLACE
# =============================================================================
DEFAULT_SALE_PRICE: Final[int] = 10
MAX_DEMAND: Final[float] = 3.0
DEMAND_STEP: Final[float] = 0.01
PRICE_DRIFT: Final[float] = 0.01
DEFAULT_SUPPLY: Final[int] = 100

# (fragment_type, rarity, base_price, demand)
MARKETPLACE_SEED: Final[list[tuple[str, str, int, float]]] = [
    (FragmentType.COMPONENT, Rarity.COMMON, 10, 1.0),
    (FragmentType.COMPONENT, Rarity.UNCOMMON, 50, 1.1),
    (FragmentType.COMPONENT, Rarity.RARE, 200, 1.2),
    (FragmentType.COMPONENT, Rarity.EPIC, 800, 1.5),
    (FragmentType.COMPONENT, Rarity.LEGENDARY, 3000, 2.0),
    (FragmentType.MODIFIER, Rarity.COMMON, 15, 0.9),
    (FragmentType.MODIFIER, Rarity.UNCOMMON, 75, 1.0),
    (FragmentType.MODIFIER, Rarity.RARE, 300, 1.3),
    (FragmentType.MODIFIER, Rarity.EPIC, 1200, 1.8),
    (FragmentType.BASE_ITEM, Rarity.RARE, 500, 1.1),
    (FragmentType.BASE_ITEM, Rarity.EPIC, 2000, 1.4),
]

# =============================================================================
# MUTATION
# =============================================================================
MUTATION_BASE_COST: Final[int] = 100
MUTATION_COMPONENT_COST_FACTOR: Final[float] = 0.5

MUTATION_SUCCESS_RATE: Final[dict[str, float]] = {
    Rarity.COMMON: 0.85,
    Rarity.UNCOMMON: 0.75,
    Rarity.RARE: 0.65,
    Rarity.EPIC: 0.50,
    Rarity.LEGENDARY: 0.35,
    Rarity.MYTHIC: 0.20,
    Rarity.VOID_TOUCHED: 0.10,
}
DEFAULT_SUCCESS_RATE: Final[float] = 0.5
COMPLEXITY_PENALTY: Final[float] = 0.1
MIN_SUCCESS_RATE: Final[float] = 0.05
MAX_SUCCESS_RATE: Final[float] = 0.95
DEVICE_SUCCESS_BONUS: Final[float] = 0.05

COMPONENT_STAT_TRANSFER: Final[float] = 0.5
COMPONENT_AFFIX_SCALE: Final[float] = 0.7
EVOLUTION_CHANCE: Final[float] = 0.1

MUTATED_PREFIX: Final[str] = "Mutated"
EVOLVED_PREFIX: Final[str] = "Evolved"
MUTATION_AFFIX_SOURCE: Final[str] = "mutation"

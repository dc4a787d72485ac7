# Core simulation modules
from .constants import (
    RARITY_ORDER,
    RARITY_THRESHOLDS,
    NOMINAL_RARITY_ODDS,
    STAT_MULTIPLIER,
    SHATTER_MULTIPLIER,
    MUTATION_COST_MULTIPLIER,
    TYPE_WEIGHTS,
    UPGRADE_BASE_COST,
)
from .exceptions import (
    VoidspinnerError,
    InvalidInputError,
    InsufficientFluxError,
    NotFoundError,
)
from .rng import VoidRNG
from .fragment_generator import FragmentGenerator, generate_fragment
from .economy import (
    DeviceStats,
    EconomyCalculator,
    calculate_spin_cost,
    calculate_shatter_value,
    calculate_device_upgrade_cost,
    get_device_stats,
)
from .marketplace import (
    apply_sale,
    calculate_sale_price,
    listing_id,
    round_half_up,
    seed_listings,
)
from .mutation import (
    MutationEngine,
    MutationOutcome,
    calculate_mutation_cost,
    calculate_mutation_success_rate,
    perform_mutation,
)

__all__ = [
    # Constants
    "RARITY_ORDER",
    "RARITY_THRESHOLDS",
    "NOMINAL_RARITY_ODDS",
    "STAT_MULTIPLIER",
    "SHATTER_MULTIPLIER",
    "MUTATION_COST_MULTIPLIER",
    "TYPE_WEIGHTS",
    "UPGRADE_BASE_COST",
    # Errors
    "VoidspinnerError",
    "InvalidInputError",
    "InsufficientFluxError",
    "NotFoundError",
    # Generation
    "VoidRNG",
    "FragmentGenerator",
    "generate_fragment",
    # Economy
    "DeviceStats",
    "EconomyCalculator",
    "calculate_spin_cost",
    "calculate_shatter_value",
    "calculate_device_upgrade_cost",
    "get_device_stats",
    # Marketplace
    "apply_sale",
    "calculate_sale_price",
    "listing_id",
    "round_half_up",
    "seed_listings",
    # Mutation
    "MutationEngine",
    "MutationOutcome",
    "calculate_mutation_cost",
    "calculate_mutation_success_rate",
    "perform_mutation",
]

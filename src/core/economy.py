"""Economy System for Voidspinner.

Handles spin cost, shatter value, device upgrade costs and the derived
device stats. Everything here is pure; callers compare the returned costs
against the player's balance.
"""

import math
from dataclasses import dataclass

from src.core.constants import (
    BASE_MUTATION_SLOTS,
    BASE_SPIN_COST,
    DEFAULT_MULTIPLIER,
    MIN_SPIN_COST,
    RARITY_BONUS_PER_LEVEL,
    SHATTER_BASE_VALUE,
    SHATTER_MULTIPLIER,
    SPIN_COST_REDUCTION_PER_LEVEL,
    SPIN_SPEED_PER_LEVEL,
    UPGRADE_BASE_COST,
    UPGRADE_COST_GROWTH,
)
from src.core.exceptions import InvalidInputError
from src.data.models import FragmentDraft, GameState, UpgradeType


@dataclass
class DeviceStats:
    """Read-only view of what the device upgrades currently grant."""

    spin_speed: float = 1.0
    rarity_bonus: float = 0.0
    flux_cost_reduction: int = 0  # Flux shaved off each spin
    flux_cost: int = BASE_SPIN_COST  # Resulting spin cost
    mutation_slots: int = BASE_MUTATION_SLOTS + 1


class EconomyCalculator:
    """Calculate all economy-related values."""

    def calculate_spin_cost(self, game_state: GameState) -> int:
        """
        Flux charged per spin.
        25 at level 1, 5 less per flux_cost level, never below 5.
        """
        reduction = (game_state.flux_cost_level - 1) * SPIN_COST_REDUCTION_PER_LEVEL
        return max(BASE_SPIN_COST - reduction, MIN_SPIN_COST)

    def calculate_shatter_value(self, fragment: FragmentDraft) -> int:
        """
        Flux returned for shattering a fragment.

        Args:
            fragment: The fragment being destroyed. Unknown rarities count as common.

        Returns:
            floor(5 * shatter multiplier * quantity).
        """
        multiplier = SHATTER_MULTIPLIER.get(fragment.rarity, DEFAULT_MULTIPLIER)
        return math.floor(SHATTER_BASE_VALUE * multiplier * fragment.quantity)

    def upgrade_cost_for_level(self, level: int, upgrade_type: str) -> int:
        """
        Cost to buy the next level of a track from ``level``.

        Args:
            level: Current level of the track (1-based).
            upgrade_type: UpgradeType value or its camelCase alias.

        Returns:
            floor(base cost * 1.5 ** (level - 1)).

        Raises:
            InvalidInputError: If the track is unknown.
        """
        base_cost = UPGRADE_BASE_COST[self._parse_upgrade_type(upgrade_type)]
        return math.floor(base_cost * UPGRADE_COST_GROWTH ** (level - 1))

    def calculate_device_upgrade_cost(self, game_state: GameState, upgrade_type: str) -> int:
        """Cost of the next level of ``upgrade_type`` for this player."""
        track = self._parse_upgrade_type(upgrade_type)
        return self.upgrade_cost_for_level(game_state.level_for(track), track)

    def get_device_stats(self, game_state: GameState) -> DeviceStats:
        """Derive device stats from upgrade levels."""
        return DeviceStats(
            spin_speed=1 + (game_state.spin_speed_level - 1) * SPIN_SPEED_PER_LEVEL,
            rarity_bonus=(game_state.rarity_odds_level - 1) * RARITY_BONUS_PER_LEVEL,
            flux_cost_reduction=(game_state.flux_cost_level - 1) * SPIN_COST_REDUCTION_PER_LEVEL,
            flux_cost=self.calculate_spin_cost(game_state),
            mutation_slots=BASE_MUTATION_SLOTS + game_state.mutation_slots_level,
        )

    def get_upgrade_costs(self, game_state: GameState) -> dict[str, int]:
        """Next-level cost for every track."""
        return {
            track.value: self.calculate_device_upgrade_cost(game_state, track)
            for track in UpgradeType
        }

    def affordable_spins(self, game_state: GameState) -> int:
        """How many spins the current balance pays for at the current cost."""
        return game_state.flux // self.calculate_spin_cost(game_state)

    @staticmethod
    def _parse_upgrade_type(upgrade_type: str) -> UpgradeType:
        try:
            return UpgradeType(upgrade_type)
        except ValueError:
            raise InvalidInputError(f"Invalid upgrade type: {upgrade_type}") from None


_calculator = EconomyCalculator()


def calculate_spin_cost(game_state: GameState) -> int:
    return _calculator.calculate_spin_cost(game_state)


def calculate_shatter_value(fragment: FragmentDraft) -> int:
    return _calculator.calculate_shatter_value(fragment)


def calculate_device_upgrade_cost(game_state: GameState, upgrade_type: str) -> int:
    return _calculator.calculate_device_upgrade_cost(game_state, upgrade_type)


def get_device_stats(game_state: GameState) -> DeviceStats:
    return _calculator.get_device_stats(game_state)

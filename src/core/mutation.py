"""Mutation (crafting) engine for Voidspinner.

Combines one base item with component/modifier fragments for a chance at an
enhanced item. A mutation always costs its full flux price and always
consumes every input; only a successful attempt produces a result.

Success and evolution are decided by their own unseeded random sources,
independent of the VoidRNG used for spins, so seeded drops stay replayable
while crafting outcomes stay unpredictable.
"""

import math
import random
from dataclasses import dataclass, field
from typing import Optional, Sequence

from src.core.constants import (
    BASE_MUTATION_SLOTS,
    COMPLEXITY_PENALTY,
    COMPONENT_AFFIX_SCALE,
    COMPONENT_STAT_TRANSFER,
    DEFAULT_MULTIPLIER,
    DEFAULT_SUCCESS_RATE,
    DEVICE_SUCCESS_BONUS,
    EVOLUTION_CHANCE,
    EVOLVED_PREFIX,
    MAX_SUCCESS_RATE,
    MIN_SUCCESS_RATE,
    MUTATED_PREFIX,
    MUTATION_AFFIX_SOURCE,
    MUTATION_BASE_COST,
    MUTATION_COMPONENT_COST_FACTOR,
    MUTATION_COST_MULTIPLIER,
    MUTATION_SUCCESS_RATE,
    RARITY_ORDER,
)
from src.core.exceptions import InsufficientFluxError, InvalidInputError
from src.core.marketplace import round_half_up
from src.data.models import Affix, FragmentDraft, FragmentType, GameState


@dataclass
class MutationOutcome:
    """Result of one mutation attempt."""

    success: bool
    flux_cost: int
    success_rate: float
    consumed: list[FragmentDraft] = field(default_factory=list)
    result: Optional[FragmentDraft] = None

    @property
    def success_percent(self) -> int:
        """Success rate as a whole percentage."""
        return round_half_up(self.success_rate * 100)


class MutationEngine:
    """
    Validates, prices and resolves mutations.

    Args:
        success_rng: Source for the success roll. Defaults to a fresh,
            OS-seeded random.Random.
        evolution_rng: Source for the rarity evolution roll. Defaults to a
            separate fresh random.Random.
    """

    def __init__(
        self,
        success_rng: Optional[random.Random] = None,
        evolution_rng: Optional[random.Random] = None,
    ):
        self.success_rng = success_rng or random.Random()
        self.evolution_rng = evolution_rng or random.Random()

    @staticmethod
    def max_components(game_state: GameState) -> int:
        return BASE_MUTATION_SLOTS + game_state.mutation_slots_level

    def validate(
        self,
        base: FragmentDraft,
        components: Sequence[FragmentDraft],
        game_state: GameState,
    ) -> None:
        """
        Check a mutation request before anything is spent.

        Raises:
            InvalidInputError: Base is not a base item, no components were
                given, a component has the wrong type, or there are more
                components than the device has slots.
        """
        if not base.is_base_item:
            raise InvalidInputError("Base fragment must be a base item")

        if not components:
            raise InvalidInputError("At least one component is required")

        if not all(c.is_craft_input for c in components):
            raise InvalidInputError("Components must be of type 'component' or 'modifier'")

        max_slots = self.max_components(game_state)
        if len(components) > max_slots:
            raise InvalidInputError(f"Too many components. Maximum is {max_slots}")

    def calculate_cost(self, base: FragmentDraft, components: Sequence[FragmentDraft]) -> int:
        """
        Flux charged for a mutation.

        floor(100 + 100 * m(base) + sum(50 * m(component))) where m is the
        mutation cost multiplier of the rarity (1 for unknown rarities).
        """
        total = MUTATION_BASE_COST
        total += MUTATION_BASE_COST * MUTATION_COST_MULTIPLIER.get(base.rarity, DEFAULT_MULTIPLIER)

        for component in components:
            multiplier = MUTATION_COST_MULTIPLIER.get(component.rarity, DEFAULT_MULTIPLIER)
            total += MUTATION_BASE_COST * MUTATION_COMPONENT_COST_FACTOR * multiplier

        return math.floor(total)

    def calculate_success_rate(
        self,
        base: FragmentDraft,
        components: Sequence[FragmentDraft],
        game_state: GameState,
    ) -> float:
        """
        Probability that a mutation succeeds.

        Base rate by rarity, minus 0.1 per component beyond the first (not
        below 0.05), plus 0.05 per mutation slot level beyond the first, capped
        at 0.95.
        """
        rate = MUTATION_SUCCESS_RATE.get(base.rarity, DEFAULT_SUCCESS_RATE)

        penalty = (len(components) - 1) * COMPLEXITY_PENALTY
        rate = max(rate - penalty, MIN_SUCCESS_RATE)

        bonus = (game_state.mutation_slots_level - 1) * DEVICE_SUCCESS_BONUS
        return min(rate + bonus, MAX_SUCCESS_RATE)

    def roll_success(self, success_rate: float) -> bool:
        return self.success_rng.random() < success_rate

    def perform_mutation(
        self,
        base: FragmentDraft,
        components: Sequence[FragmentDraft],
        game_state: GameState,
    ) -> FragmentDraft:
        """
        Build the result of a successful mutation.

        Components are applied in order. A ``component`` adds half of each
        stat it shares with the base and contributes its implicit mods as
        affixes at 70% value. A ``modifier`` contributes its implicit mods as
        affixes at full value. Afterwards there is a 10% chance the result
        evolves one rarity tier.

        Args:
            base: The base item. Not modified.
            components: Component and modifier fragments, in input order.
            game_state: Current progression.

        Returns:
            A new unpersisted fragment.
        """
        data = base.model_dump(include=set(FragmentDraft.model_fields))
        mutated = FragmentDraft.model_validate(data)
        mutated.name = f"{MUTATED_PREFIX} {base.name}"

        for component in components:
            if component.type == FragmentType.COMPONENT:
                for stat, value in component.base_stats.items():
                    if stat in mutated.base_stats:
                        mutated.base_stats[stat] += math.floor(value * COMPONENT_STAT_TRANSFER)
                scale = COMPONENT_AFFIX_SCALE
            elif component.type == FragmentType.MODIFIER:
                scale = None
            else:
                continue

            for mod in component.implicit_mods:
                value = math.floor(mod.value * scale) if scale is not None else mod.value
                mutated.affixes.append(
                    Affix(
                        name=f"{component.name} - {mod.name}",
                        value=value,
                        source=MUTATION_AFFIX_SOURCE,
                    )
                )

        if self.evolution_rng.random() < EVOLUTION_CHANCE:
            self._evolve(mutated)

        return mutated

    def attempt(
        self,
        base: FragmentDraft,
        components: Sequence[FragmentDraft],
        game_state: GameState,
    ) -> MutationOutcome:
        """
        Validate, price and resolve one mutation.

        Does not touch game_state; the caller debits ``flux_cost`` and deletes
        every input whatever the outcome.

        Raises:
            InvalidInputError: See validate().
            InsufficientFluxError: Balance is below the mutation cost.
        """
        self.validate(base, components, game_state)

        flux_cost = self.calculate_cost(base, components)
        if game_state.flux < flux_cost:
            raise InsufficientFluxError(flux_cost, game_state.flux)

        success_rate = self.calculate_success_rate(base, components, game_state)
        success = self.roll_success(success_rate)

        return MutationOutcome(
            success=success,
            flux_cost=flux_cost,
            success_rate=success_rate,
            consumed=[base, *components],
            result=self.perform_mutation(base, components, game_state) if success else None,
        )

    @staticmethod
    def _evolve(fragment: FragmentDraft) -> None:
        """Raise rarity one tier; no-op at the top tier."""
        if fragment.rarity not in RARITY_ORDER:
            return

        index = RARITY_ORDER.index(fragment.rarity)
        if index < len(RARITY_ORDER) - 1:
            fragment.rarity = RARITY_ORDER[index + 1]
            fragment.name = f"{EVOLVED_PREFIX} {fragment.name}"


_engine = MutationEngine()


def calculate_mutation_cost(base: FragmentDraft, components: Sequence[FragmentDraft]) -> int:
    return _engine.calculate_cost(base, components)


def calculate_mutation_success_rate(
    base: FragmentDraft, components: Sequence[FragmentDraft], game_state: GameState
) -> float:
    return _engine.calculate_success_rate(base, components, game_state)


def perform_mutation(
    base: FragmentDraft, components: Sequence[FragmentDraft], game_state: GameState
) -> FragmentDraft:
    return _engine.perform_mutation(base, components, game_state)

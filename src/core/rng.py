"""Deterministic random number generation for Voidspinner.

VoidRNG is a linear congruential generator:

    seed = (seed * 9301 + 49297) % 233280
    value = seed / 233280

The period is at most 233280 values. This is plenty for gameplay rolls and
lets tests replay a seeded sequence exactly, but it is NOT suitable for
anything security related.

Every distribution helper is built from calls to ``next()``. The number and
order of those calls is part of the contract: changing it changes every
seeded sequence downstream.

An instance is mutated by every call. Give each spin session its own
instance, or serialize access to a shared one behind a single lock.
"""

import math
import time
from typing import Optional, Sequence, TypeVar

from src.core.constants import MAX_ADJUSTED_ROLL, RARITY_THRESHOLDS
from src.data.models import Rarity

T = TypeVar("T")

MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280


class VoidRNG:
    """
    Seeded linear congruential generator plus the distributions built on it.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the generator.

        Args:
            seed: Starting seed. Defaults to the current time in milliseconds,
                which makes the sequence non-reproducible.
        """
        if seed is None:
            seed = int(time.time() * 1000)
        self.seed = seed

    def next(self) -> float:
        """
        Advance the generator one step.

        Returns:
            A value in [0, 1).
        """
        self.seed = (self.seed * MULTIPLIER + INCREMENT) % MODULUS
        return self.seed / MODULUS

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        """Float in [low, high). Consumes one step."""
        return low + self.next() * (high - low)

    def uniform_int(self, low: int, high: int) -> int:
        """Integer in [low, high], both ends inclusive. Consumes one step."""
        return math.floor(self.uniform(low, high + 1))

    def choice(self, items: Sequence[T]) -> T:
        """Uniformly pick one element. Consumes one step."""
        return items[self.uniform_int(0, len(items) - 1)]

    def weighted_choice(self, items: Sequence[tuple[T, float]]) -> T:
        """
        Pick a value with probability proportional to its weight.

        Walks the items accumulating weight and returns the first whose
        cumulative weight reaches the roll. If floating point drift pushes the
        roll past the total, the last item is returned. With all weights zero
        the roll is 0 and the first item matches.

        Args:
            items: (value, weight) pairs. Weights must be non-negative.

        Returns:
            The chosen value.
        """
        total_weight = sum(weight for _, weight in items)
        roll = self.uniform(0, total_weight)

        cumulative = 0.0
        for value, weight in items:
            cumulative += weight
            if roll <= cumulative:
                return value

        return items[-1][0]

    def roll_rarity(self, bonus_chance: float = 0.0) -> str:
        """
        Roll a rarity tier.

        The raw roll plus ``bonus_chance`` is clamped to 0.999999 and compared
        against the threshold ladder from the top. Comparisons are strict, so
        a roll exactly on a cut point lands in the tier below.

        Args:
            bonus_chance: Flat amount added to the raw roll.

        Returns:
            Rarity value string.
        """
        adjusted = min(self.next() + bonus_chance, MAX_ADJUSTED_ROLL)

        for threshold, rarity in RARITY_THRESHOLDS:
            if adjusted > threshold:
                return rarity.value
        return Rarity.COMMON.value

    def __repr__(self) -> str:
        return f"VoidRNG(seed={self.seed})"

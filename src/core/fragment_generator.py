"""Fragment Generator for Voidspinner.

Builds a complete fragment from one spin. Draw order against the generator:

1. Fragment type (weighted choice)
2. Rarity (threshold ladder with device bonus)
3. Base stats (one draw per stat of the rolled type)
4. Implicit mods (count, then name/value per mod)
5. Display name (skipped for blueprints)
"""

from src.core.constants import (
    BASE_STAT_RANGES,
    BLUEPRINT_NAME,
    DEFAULT_MULTIPLIER,
    FRAGMENT_NAMES,
    IMPLICIT_MOD_COUNT,
    IMPLICIT_MOD_POOL,
    IMPLICIT_MOD_VALUE_RANGE,
    IMPLICIT_MOD_VALUE_SCALE,
    RARITY_BONUS_PER_LEVEL,
    RARITY_PREFIX,
    STAT_MULTIPLIER,
    TYPE_WEIGHTS,
)
from src.core.rng import VoidRNG
from src.data.models import FragmentDraft, GameState, ImplicitMod, StatValue


class FragmentGenerator:
    """
    Rolls fragments from a caller-owned VoidRNG.

    The generator is only borrowed; two FragmentGenerators built on VoidRNGs
    with the same seed produce identical fragments.
    """

    def __init__(self, rng: VoidRNG):
        self.rng = rng

    def roll_type(self) -> str:
        return self.rng.weighted_choice(TYPE_WEIGHTS)

    def roll_rarity(self, game_state: GameState) -> str:
        bonus = (game_state.rarity_odds_level - 1) * RARITY_BONUS_PER_LEVEL
        return self.rng.roll_rarity(bonus)

    def generate_base_stats(self, rarity: str, fragment_type: str) -> dict[str, StatValue]:
        """
        Roll base stats for a fragment.

        Args:
            rarity: Rarity value. Unknown rarities use a multiplier of 1.
            fragment_type: Fragment type value. Unknown types have no stats.

        Returns:
            Mapping of stat name to scaled value.
        """
        multiplier = STAT_MULTIPLIER.get(rarity, DEFAULT_MULTIPLIER)
        ranges = BASE_STAT_RANGES.get(fragment_type, {})

        return {
            stat: self.rng.uniform_int(low, high) * multiplier
            for stat, (low, high) in ranges.items()
        }

    def generate_implicit_mods(self, rarity: str) -> list[ImplicitMod]:
        """
        Roll distinct implicit modifiers.

        Names are drawn with rejection sampling, so the pool must always be
        larger than the highest count in IMPLICIT_MOD_COUNT.

        Args:
            rarity: Rarity value. Unknown rarities roll exactly one mod.

        Returns:
            Mods in the order they were rolled.
        """
        low, high = IMPLICIT_MOD_COUNT.get(rarity, (1, 1))
        count = self.rng.uniform_int(low, high)
        scale = IMPLICIT_MOD_VALUE_SCALE.get(rarity, 1)

        mods: list[ImplicitMod] = []
        chosen: set[str] = set()

        for _ in range(count):
            name = self.rng.choice(IMPLICIT_MOD_POOL)
            while name in chosen:
                name = self.rng.choice(IMPLICIT_MOD_POOL)
            chosen.add(name)

            value = self.rng.uniform_int(*IMPLICIT_MOD_VALUE_RANGE) * scale
            mods.append(ImplicitMod(name=name, value=value))

        return mods

    def generate_name(self, rarity: str, fragment_type: str) -> str:
        names = FRAGMENT_NAMES.get(fragment_type)
        base_name = self.rng.choice(names) if names else BLUEPRINT_NAME

        prefix = RARITY_PREFIX.get(rarity, "")
        return f"{prefix} {base_name}" if prefix else base_name

    def generate(self, game_state: GameState) -> FragmentDraft:
        """
        Roll one complete fragment.

        Args:
            game_state: Current progression; only rarity_odds_level is read.

        Returns:
            A fresh, unpersisted fragment.
        """
        fragment_type = self.roll_type()
        rarity = self.roll_rarity(game_state)
        base_stats = self.generate_base_stats(rarity, fragment_type)
        implicit_mods = self.generate_implicit_mods(rarity)
        name = self.generate_name(rarity, fragment_type)

        return FragmentDraft(
            name=name,
            type=fragment_type,
            rarity=rarity,
            base_stats=base_stats,
            implicit_mods=implicit_mods,
            affixes=[],
            is_corrupted=False,
            quantity=1,
        )


def generate_fragment(game_state: GameState, rng: VoidRNG) -> FragmentDraft:
    """Roll one fragment using ``rng``."""
    return FragmentGenerator(rng).generate(game_state)

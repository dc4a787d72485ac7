"""Tests for the Fragment Generator."""

import pytest

from src.core.constants import (
    BASE_STAT_RANGES,
    FRAGMENT_NAMES,
    IMPLICIT_MOD_COUNT,
    IMPLICIT_MOD_POOL,
    RARITY_ORDER,
)
from src.core.fragment_generator import FragmentGenerator, generate_fragment
from src.core.rng import VoidRNG
from src.data.models import GameState


class TestScriptedGeneration:
    """Exact fragments from a scripted sequence of draws."""

    def test_common_base_item(self, scripted_rng, game_state):
        rng = scripted_rng([
            0.1,              # type -> base_item
            0.5,              # rarity -> common
            0.0, 0.0, 0.0,    # power, defense, speed
            0.0,              # mod count
            0.35, 0.5,        # mod name, mod value
            0.45,             # display name
        ])

        fragment = FragmentGenerator(rng).generate(game_state)

        assert fragment.type == "base_item"
        assert fragment.rarity == "common"
        assert fragment.base_stats == {"power": 10, "defense": 5, "speed": 1}
        assert [(m.name, m.value) for m in fragment.implicit_mods] == [("Flux Regeneration", 15)]
        assert fragment.name == "Sword"
        assert fragment.affixes == []
        assert fragment.quantity == 1
        assert fragment.is_corrupted is False
        assert rng.calls == 9

    def test_mythic_rejects_duplicate_mod_names(self, scripted_rng, game_state):
        """Repeated names are redrawn until a new one comes up."""
        rng = scripted_rng([
            0.1,                  # base_item
            0.99995,              # mythic
            0.0, 0.0, 0.0,        # stats at minimum
            0.0,                  # 3 mods
            0.0, 0.0,             # Increased Damage, 5
            0.0, 0.15, 0.0,       # duplicate, Increased Defense, 5
            0.0, 0.15, 0.25, 0.99,  # duplicate, duplicate, Increased Speed, 25
            0.0,                  # Gauntlets
        ])

        fragment = FragmentGenerator(rng).generate(game_state)

        assert fragment.rarity == "mythic"
        assert fragment.base_stats == {"power": 120, "defense": 60, "speed": 12}
        assert [(m.name, m.value) for m in fragment.implicit_mods] == [
            ("Increased Damage", 10),
            ("Increased Defense", 10),
            ("Increased Speed", 50),
        ]
        assert fragment.name == "Primordial Gauntlets"

    def test_blueprint_skips_name_draw(self, scripted_rng, game_state):
        rng = scripted_rng([
            0.99,   # blueprint
            0.96,   # rare
            0.0,    # 2 mods
            0.0, 0.0,
            0.5, 0.0,
        ])

        fragment = FragmentGenerator(rng).generate(game_state)

        assert fragment.type == "blueprint"
        assert fragment.base_stats == {}
        assert fragment.name == "Superior Mysterious Blueprint"
        assert rng.calls == 7

    def test_rarity_bonus_from_device(self, scripted_rng):
        """rarity_odds level 3 adds 0.001 to the raw roll."""
        base = GameState(rarity_odds_level=1)
        upgraded = GameState(rarity_odds_level=3)

        assert FragmentGenerator(scripted_rng([0.7995])).roll_rarity(base) == "common"
        assert FragmentGenerator(scripted_rng([0.7995])).roll_rarity(upgraded) == "uncommon"


class TestBaseStats:
    """Tests for generate_base_stats."""

    def test_fractional_multiplier_keeps_fraction(self, scripted_rng):
        generator = FragmentGenerator(scripted_rng([0.0]))
        assert generator.generate_base_stats("uncommon", "component") == {"enhancement": 7.5}

    def test_unknown_type_has_no_stats(self, scripted_rng):
        rng = scripted_rng([])
        assert FragmentGenerator(rng).generate_base_stats("common", "relic") == {}
        assert rng.calls == 0

    def test_unknown_rarity_uses_multiplier_one(self, scripted_rng):
        generator = FragmentGenerator(scripted_rng([0.0]))
        assert generator.generate_base_stats("cosmic", "modifier") == {"modifier": 1}

    @pytest.mark.parametrize("fragment_type", ["base_item", "component", "modifier", "blueprint"])
    def test_stat_keys_follow_type(self, fragment_type):
        generator = FragmentGenerator(VoidRNG(99))
        stats = generator.generate_base_stats("rare", fragment_type)
        assert set(stats) == set(BASE_STAT_RANGES[fragment_type])


class TestImplicitMods:
    """Tests for generate_implicit_mods."""

    @pytest.mark.parametrize("rarity", RARITY_ORDER)
    def test_count_and_distinct_names(self, rarity):
        generator = FragmentGenerator(VoidRNG(31337))
        low, high = IMPLICIT_MOD_COUNT[rarity]

        for _ in range(200):
            mods = generator.generate_implicit_mods(rarity)
            names = [m.name for m in mods]

            assert low <= len(mods) <= high
            assert len(set(names)) == len(names)
            assert all(name in IMPLICIT_MOD_POOL for name in names)

    def test_value_scaling(self):
        generator = FragmentGenerator(VoidRNG(8))
        for _ in range(200):
            for mod in generator.generate_implicit_mods("void_touched"):
                assert mod.value % 3 == 0
                assert 15 <= mod.value <= 75

    def test_unknown_rarity_rolls_one_mod(self, scripted_rng):
        generator = FragmentGenerator(scripted_rng([0.9, 0.0, 0.0]))
        mods = generator.generate_implicit_mods("cosmic")

        assert len(mods) == 1
        assert mods[0].value == 5


class TestDeterminism:
    """Seeded generation replays exactly."""

    def test_same_seed_same_fragments(self, game_state):
        a = FragmentGenerator(VoidRNG(4242))
        b = FragmentGenerator(VoidRNG(4242))

        for _ in range(500):
            assert a.generate(game_state).model_dump() == b.generate(game_state).model_dump()

    def test_module_helper_matches_class(self, game_state):
        assert (
            generate_fragment(game_state, VoidRNG(17)).model_dump()
            == FragmentGenerator(VoidRNG(17)).generate(game_state).model_dump()
        )

    def test_names_match_type_and_rarity(self, game_state):
        generator = FragmentGenerator(VoidRNG(555))

        for _ in range(1_000):
            fragment = generator.generate(game_state)
            if fragment.type == "blueprint":
                assert fragment.name.endswith("Mysterious Blueprint")
            else:
                assert any(fragment.name.endswith(n) for n in FRAGMENT_NAMES[fragment.type])
            if fragment.rarity == "common" and fragment.type != "blueprint":
                assert fragment.name in FRAGMENT_NAMES[fragment.type]

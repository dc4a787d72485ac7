"""Shared fixtures and helpers."""

import pytest

from src.core.rng import VoidRNG
from src.data.models import FragmentDraft, GameState, ImplicitMod


class ScriptedRNG(VoidRNG):
    """VoidRNG whose raw draws come from a fixed list."""

    def __init__(self, values):
        super().__init__(seed=0)
        self._values = iter(values)
        self.calls = 0

    def next(self) -> float:
        self.calls += 1
        return next(self._values)


class FixedRandom:
    """Stands in for random.Random, always returning the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value


def make_fragment(
    name="Sword",
    type="base_item",
    rarity="common",
    base_stats=None,
    implicit_mods=(),
    quantity=1,
) -> FragmentDraft:
    return FragmentDraft(
        name=name,
        type=type,
        rarity=rarity,
        base_stats=base_stats if base_stats is not None else {},
        implicit_mods=[ImplicitMod(name=n, value=v) for n, v in implicit_mods],
        quantity=quantity,
    )


@pytest.fixture
def game_state():
    """Fresh level-1 game state with the starting balance."""
    return GameState(id="gs-1", user_id="user-1")


@pytest.fixture
def scripted_rng():
    """Factory for generators that replay a fixed list of draws."""
    return ScriptedRNG


@pytest.fixture
def fixed_random():
    """Factory for random sources that always return one value."""
    return FixedRandom


@pytest.fixture
def fragment_factory():
    """Factory for unpersisted fragments."""
    return make_fragment

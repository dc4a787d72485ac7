#!/usr/bin/env python3
"""Spin Distribution Simulator.

Rolls many fragments from one seeded generator and compares the observed
rarity distribution with the nominal odds.

Usage:
    python simulate.py --spins 100000 --seed 42
    python simulate.py --spins 50000 --rarity-odds-level 5
"""

import argparse

import numpy as np

from src.core.constants import NOMINAL_RARITY_ODDS, RARITY_ORDER, TYPE_WEIGHTS
from src.core.economy import EconomyCalculator
from src.core.fragment_generator import FragmentGenerator
from src.core.rng import VoidRNG
from src.data.models import GameState


def simulate(spins: int, seed: int, rarity_odds_level: int = 1) -> dict:
    """
    Roll ``spins`` fragments and tally them.

    Returns:
        Dictionary with rarity and type counts plus the flux those spins cost.
    """
    game_state = GameState(rarity_odds_level=rarity_odds_level)
    generator = FragmentGenerator(VoidRNG(seed))
    type_names = [fragment_type for fragment_type, _ in TYPE_WEIGHTS]

    rarity_index = np.empty(spins, dtype=np.int64)
    type_index = np.empty(spins, dtype=np.int64)
    shatter_total = 0
    calc = EconomyCalculator()

    for i in range(spins):
        fragment = generator.generate(game_state)
        rarity_index[i] = RARITY_ORDER.index(fragment.rarity)
        type_index[i] = type_names.index(fragment.type)
        shatter_total += calc.calculate_shatter_value(fragment)

    return {
        "spins": spins,
        "rarity_counts": dict(zip(RARITY_ORDER, np.bincount(rarity_index, minlength=len(RARITY_ORDER)).tolist())),
        "type_counts": dict(zip(type_names, np.bincount(type_index, minlength=len(type_names)).tolist())),
        "spin_cost": calc.calculate_spin_cost(game_state) * spins,
        "shatter_value": shatter_total,
    }


def print_report(results: dict) -> None:
    spins = results["spins"]

    print("\n" + "=" * 60)
    print(f"Rarity distribution over {spins:,} spins")
    print("=" * 60)
    print(f"{'Rarity':<14}{'Count':>10}{'Observed':>12}{'Nominal':>12}")
    for rarity, count in results["rarity_counts"].items():
        observed = count / spins * 100
        nominal = NOMINAL_RARITY_ODDS[rarity] * 100
        print(f"{rarity:<14}{count:>10,}{observed:>11.4f}%{nominal:>11.4f}%")

    print("\n" + "-" * 60)
    print(f"{'Type':<14}{'Count':>10}{'Observed':>12}")
    for fragment_type, count in results["type_counts"].items():
        print(f"{fragment_type:<14}{count:>10,}{count / spins * 100:>11.2f}%")

    print("\n" + "-" * 60)
    print(f"Flux spent spinning:   {results['spin_cost']:,}")
    print(f"Flux from shattering:  {results['shatter_value']:,}")


def main():
    parser = argparse.ArgumentParser(
        description="Voidspinner spin distribution simulator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python simulate.py --spins 100000 --seed 42
  python simulate.py --rarity-odds-level 10
        """,
    )
    parser.add_argument(
        "--spins", type=int, default=100_000, help="Number of fragments to roll"
    )
    parser.add_argument(
        "--seed", type=int, default=12345, help="Generator seed"
    )
    parser.add_argument(
        "--rarity-odds-level",
        type=int,
        default=1,
        help="Rarity odds upgrade level of the simulated device",
    )
    args = parser.parse_args()

    if args.spins < 1:
        parser.error("--spins must be positive")
    if args.rarity_odds_level < 1:
        parser.error("--rarity-odds-level must be at least 1")

    print_report(simulate(args.spins, args.seed, args.rarity_odds_level))


if __name__ == "__main__":
    main()

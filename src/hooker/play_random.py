"""
Tiny CLI to play whole matches with random agents.

Usage (from project root, after installing in editable mode):
    python -m hooker.play_random --matches 3 --seed 7
"""
from __future__ import annotations

import argparse
import logging

from .agents import RandomAgent, run_match
from .deck import seeded_rng
from .match import MatchOptions
from .seating import Seat
from .state import GameState


def run_random_match(seed: int) -> GameState:
    agents = {seat: RandomAgent(seed=seed * 10 + i) for i, seat in enumerate(Seat)}
    return run_match(agents, MatchOptions(rng=seeded_rng(seed)))


def describe_match(state: GameState) -> list[str]:
    lines = []
    for result in state.game_results:
        scores = ", ".join(f"{team.value} {points}" for team, points in result.scores.items())
        partners = " & ".join(seat.value for seat in result.teams[result.winner])
        lines.append(f"  game {result.game_index + 1}: {result.winner.value} ({partners}) won; {scores}")
    wins = ", ".join(f"{seat.value}={n}" for seat, n in state.player_game_wins.items())
    lines.append(f"  game wins: {wins}")
    return lines


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Play Hooker matches with random agents.")
    parser.add_argument(
        "--matches",
        type=int,
        default=1,
        help="Number of matches to play.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Seed of the first match; later matches use seed+1, seed+2, ...",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every engine transition.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    for n in range(args.matches):
        seed = args.seed + n
        state = run_random_match(seed)
        print(f"match {n + 1} (seed {seed}):")
        for line in describe_match(state):
            print(line)


if __name__ == "__main__":
    main()

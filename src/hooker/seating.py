"""
Seats, partnerships and the fixed three-game rotation.

A match is three games. Each game has its own seating order and its own
partnerships, so "next seat" is always relative to the current seating,
never to the alphabetical order of the seat identifiers.
"""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple, Sequence

from .errors import SeatingError


class Seat(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class Team(str, Enum):
    NORTH_SOUTH = "NorthSouth"
    EAST_WEST = "EastWest"


SEATS: tuple[Seat, ...] = tuple(Seat)
TEAMS: tuple[Team, ...] = tuple(Team)

MATCH_GAME_TARGET = 10  # a game ends as soon as a team reaches this score
HAND_TRICK_COUNT = 5
HAND_SIZE = 5
KITTY_SIZE = 4


def frozen_map(mapping: Mapping) -> Mapping:
    """Read-only copy of ``mapping``; states never share a writable dict."""
    return MappingProxyType(dict(mapping))


class GameConfig(NamedTuple):
    seating: tuple[Seat, ...]
    teams: Mapping[Team, tuple[Seat, Seat]]


GAME_ROTATION: tuple[GameConfig, ...] = (
    GameConfig(
        seating=(Seat.A, Seat.C, Seat.B, Seat.D),
        teams=frozen_map({Team.NORTH_SOUTH: (Seat.A, Seat.B), Team.EAST_WEST: (Seat.C, Seat.D)}),
    ),
    GameConfig(
        seating=(Seat.A, Seat.B, Seat.C, Seat.D),
        teams=frozen_map({Team.NORTH_SOUTH: (Seat.A, Seat.C), Team.EAST_WEST: (Seat.B, Seat.D)}),
    ),
    GameConfig(
        seating=(Seat.A, Seat.B, Seat.D, Seat.C),
        teams=frozen_map({Team.NORTH_SOUTH: (Seat.A, Seat.D), Team.EAST_WEST: (Seat.B, Seat.C)}),
    ),
)


def game_config(game_index: int) -> GameConfig:
    """Configuration for the given game; cycles once the table is exhausted."""
    return GAME_ROTATION[game_index % len(GAME_ROTATION)]


def next_seat(current: Seat, seating: Sequence[Seat]) -> Seat:
    try:
        index = list(seating).index(current)
    except ValueError:
        raise SeatingError(f"Player {current} is not seated") from None
    return seating[(index + 1) % len(seating)]


def previous_seat(current: Seat, seating: Sequence[Seat]) -> Seat:
    try:
        index = list(seating).index(current)
    except ValueError:
        raise SeatingError(f"Player {current} is not seated") from None
    return seating[(index + len(seating) - 1) % len(seating)]


def rotation_from(start: Seat, seating: Sequence[Seat]) -> list[Seat]:
    """All seats in play order, beginning with ``start``."""
    order = [start]
    current = start
    for _ in range(len(seating) - 1):
        current = next_seat(current, seating)
        order.append(current)
    return order


def assign_teams(teams: Mapping[Team, Sequence[Seat]]) -> dict[Seat, Team]:
    """Invert a team -> seats table into a seat -> team lookup."""
    team_by_player: dict[Seat, Team] = {}
    for team, players in teams.items():
        for player in players:
            team_by_player[Seat(player)] = Team(team)
    missing = [s for s in SEATS if s not in team_by_player]
    if missing:
        raise SeatingError(f"Seats without a team: {', '.join(s.value for s in missing)}")
    return team_by_player


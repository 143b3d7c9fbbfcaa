"""
Hand scoring: tricks per team, points to the hand winner, euchre flag.
The dealer declares trump, so the dealer's team is the calling team unless an
explicit caller is given.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Protocol

from .errors import InvariantError
from .seating import Seat, Team, frozen_map

# Points for the calling team by tricks taken (5 = march).
CALLER_POINTS: Mapping[int, int] = frozen_map({3: 1, 4: 2, 5: 3})
# Flat award to the defenders when the calling team takes fewer than 3.
EUCHRE_POINTS = 2
TRICKS_TO_MAKE = 3


class _HasWinner(Protocol):
    @property
    def winner(self) -> Seat | None: ...


@dataclass(frozen=True)
class HandScoreSummary:
    winning_team: Team
    points: int
    euchred: bool
    tricks_won: Mapping[Team, int]

    def __post_init__(self) -> None:
        object.__setattr__(self, "tricks_won", frozen_map(self.tricks_won))


def count_tricks(tricks: Iterable[_HasWinner], team_by_player: Mapping[Seat, Team]) -> dict[Team, int]:
    counts = {team: 0 for team in Team}
    for trick in tricks:
        if trick.winner is None:
            raise InvariantError("Cannot score trick without winner")
        counts[team_by_player[trick.winner]] += 1
    return counts


def score_hand(
    tricks: Iterable[_HasWinner],
    team_by_player: Mapping[Seat, Team],
    dealer: Seat,
    caller: Seat | None = None,
) -> HandScoreSummary:
    """
    Score five resolved tricks.
    The team with more tricks wins the hand (no ties with 5 tricks). If that is
    the calling team it scores from CALLER_POINTS; otherwise the calling team
    was euchred and the defenders score EUCHRE_POINTS.
    """
    counts = count_tricks(tricks, team_by_player)
    ns, ew = counts[Team.NORTH_SOUTH], counts[Team.EAST_WEST]
    winning_team = Team.NORTH_SOUTH if ns > ew else Team.EAST_WEST
    calling_team = team_by_player[caller if caller is not None else dealer]
    won = counts[winning_team]

    if winning_team == calling_team:
        points = CALLER_POINTS.get(won, 1)
    else:
        points = EUCHRE_POINTS

    return HandScoreSummary(
        winning_team=winning_team,
        points=points,
        euchred=counts[calling_team] < TRICKS_TO_MAKE,
        tricks_won=counts,
    )

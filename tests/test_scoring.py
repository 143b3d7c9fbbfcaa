import pytest

from hooker.errors import InvariantError
from hooker.scoring import CALLER_POINTS, EUCHRE_POINTS, score_hand
from hooker.seating import Seat, Team
from hooker.state import Trick

TEAM_BY_PLAYER = {
    Seat.A: Team.NORTH_SOUTH,
    Seat.C: Team.NORTH_SOUTH,
    Seat.B: Team.EAST_WEST,
    Seat.D: Team.EAST_WEST,
}


def tricks(*winners):
    return [Trick(leader=Seat.A, cards=(), winner=w) for w in winners]


def test_caller_three_tricks_one_point():
    summary = score_hand(tricks(Seat.A, Seat.C, Seat.A, Seat.B, Seat.D), TEAM_BY_PLAYER, Seat.A)
    assert summary.winning_team == Team.NORTH_SOUTH
    assert summary.points == 1
    assert not summary.euchred
    assert summary.tricks_won == {Team.NORTH_SOUTH: 3, Team.EAST_WEST: 2}


def test_caller_four_tricks_two_points():
    summary = score_hand(tricks(Seat.A, Seat.C, Seat.A, Seat.C, Seat.D), TEAM_BY_PLAYER, Seat.C)
    assert summary.points == 2
    assert not summary.euchred


def test_march_three_points():
    summary = score_hand(tricks(*[Seat.B] * 5), TEAM_BY_PLAYER, Seat.D)
    assert summary.winning_team == Team.EAST_WEST
    assert summary.points == CALLER_POINTS[5] == 3
    assert not summary.euchred


def test_euchre_awards_defenders():
    summary = score_hand(tricks(Seat.A, Seat.B, Seat.D, Seat.B, Seat.C), TEAM_BY_PLAYER, Seat.A)
    assert summary.winning_team == Team.EAST_WEST
    assert summary.points == EUCHRE_POINTS
    assert summary.euchred


def test_euchre_when_defenders_sweep():
    summary = score_hand(tricks(*[Seat.D] * 5), TEAM_BY_PLAYER, Seat.C)
    assert summary.winning_team == Team.EAST_WEST
    assert summary.points == EUCHRE_POINTS
    assert summary.euchred


def test_explicit_caller_overrides_dealer():
    ts = tricks(Seat.A, Seat.C, Seat.A, Seat.B, Seat.D)
    as_dealer = score_hand(ts, TEAM_BY_PLAYER, Seat.B)
    as_caller = score_hand(ts, TEAM_BY_PLAYER, Seat.B, caller=Seat.A)
    assert as_dealer.euchred and as_dealer.points == EUCHRE_POINTS
    assert not as_caller.euchred and as_caller.points == 1


def test_trick_without_winner_raises():
    with pytest.raises(InvariantError):
        score_hand(tricks(Seat.A, None, Seat.A, Seat.B, Seat.D), TEAM_BY_PLAYER, Seat.A)

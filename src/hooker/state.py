"""
Value types for the match state machine.

Everything here is frozen: a transition builds a new ``GameState`` with
``dataclasses.replace`` and the previous value stays valid, so callers can
keep old states around for replay or undo.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping

from .deck import Card, Suit
from .errors import IllegalActionError
from .scoring import HandScoreSummary
from .seating import Seat, Team, frozen_map


class Phase(str, Enum):
    MATCH_SETUP = "MatchSetup"
    KITTY_DECISION = "KittyDecision"
    DISCARD = "Discard"
    TRUMP_DECLARATION = "TrumpDeclaration"
    TRICK_PLAY = "TrickPlay"
    HAND_SCORE = "HandScore"
    GAME_OVER = "GameOver"
    MATCH_OVER = "MatchOver"

    def can_transition_to(self, other: "Phase") -> bool:
        return other in PHASE_TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return not PHASE_TRANSITIONS[self]


# Closed successor table. A phase may also stay where it is (kitty passes,
# trick plays); only changes of phase are listed.
PHASE_TRANSITIONS: Mapping[Phase, frozenset[Phase]] = {
    Phase.MATCH_SETUP: frozenset({Phase.KITTY_DECISION}),
    Phase.KITTY_DECISION: frozenset({Phase.DISCARD}),
    Phase.DISCARD: frozenset({Phase.TRUMP_DECLARATION}),
    Phase.TRUMP_DECLARATION: frozenset({Phase.TRICK_PLAY}),
    Phase.TRICK_PLAY: frozenset({Phase.HAND_SCORE}),
    Phase.HAND_SCORE: frozenset({Phase.MATCH_SETUP, Phase.GAME_OVER}),
    Phase.GAME_OVER: frozenset({Phase.MATCH_SETUP, Phase.MATCH_OVER}),
    Phase.MATCH_OVER: frozenset(),
}


@dataclass(frozen=True)
class PlayedCard:
    player: Seat
    card: Card


@dataclass(frozen=True)
class TrickState:
    """Trick in progress: 0-3 plays."""

    leader: Seat
    cards: tuple[PlayedCard, ...] = ()


@dataclass(frozen=True)
class Trick:
    """A resolved trick."""

    leader: Seat
    cards: tuple[PlayedCard, ...]
    winner: Seat | None = None


def _empty_hands() -> dict[Seat, tuple[Card, ...]]:
    return {seat: () for seat in Seat}


@dataclass(frozen=True)
class HandState:
    hands: Mapping[Seat, tuple[Card, ...]] = field(default_factory=_empty_hands)
    kitty: tuple[Card, ...] = ()  # kitty[0] is the face-up top card
    kitty_offeree: Seat | None = None
    initial_offeree: Seat | None = None
    acceptor: Seat | None = None
    forced_accept: bool = False
    trump: Suit | None = None
    current_trick: TrickState | None = None
    completed_tricks: tuple[Trick, ...] = ()
    passes: tuple[Seat, ...] = ()
    picked_from_kitty: Card | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "hands", frozen_map(self.hands))

    @property
    def trick_index(self) -> int:
        return len(self.completed_tricks)

    def with_hand(self, seat: Seat, cards: tuple[Card, ...]) -> "HandState":
        hands = dict(self.hands)
        hands[seat] = cards
        return replace(self, hands=hands)


@dataclass(frozen=True)
class GameResultSummary:
    game_index: int
    winner: Team
    scores: Mapping[Team, int]
    seating: tuple[Seat, ...]
    teams: Mapping[Team, tuple[Seat, Seat]]

    def __post_init__(self) -> None:
        object.__setattr__(self, "scores", frozen_map(self.scores))
        object.__setattr__(self, "teams", frozen_map(self.teams))


def zero_scores() -> dict[Team, int]:
    return {team: 0 for team in Team}


def zero_wins() -> dict[Seat, int]:
    return {seat: 0 for seat in Seat}


@dataclass(frozen=True)
class GameState:
    phase: Phase
    game_index: int
    seating: tuple[Seat, ...]
    teams: Mapping[Team, tuple[Seat, Seat]]
    team_by_player: Mapping[Seat, Team]
    dealer: Seat
    scores: Mapping[Team, int] = field(default_factory=zero_scores)
    hand: HandState = field(default_factory=HandState)
    last_hand_summary: HandScoreSummary | None = None
    game_results: tuple[GameResultSummary, ...] = ()
    player_game_wins: Mapping[Seat, int] = field(default_factory=zero_wins)
    hand_number: int = 0  # hands dealt so far in the current game
    remaining_decks: tuple[tuple[Card, ...], ...] = ()
    ace_deck: tuple[Card, ...] | None = None

    def __post_init__(self) -> None:
        for name in ("teams", "team_by_player", "scores", "player_game_wins"):
            object.__setattr__(self, name, frozen_map(getattr(self, name)))


@dataclass(frozen=True)
class Result:
    """Outcome of an action: the new state, or the reason it was refused."""

    ok: bool
    state: GameState | None = None
    error: str | None = None

    @classmethod
    def success(cls, state: GameState) -> "Result":
        return cls(ok=True, state=state)

    @classmethod
    def failure(cls, error: str) -> "Result":
        return cls(ok=False, error=error)

    def unwrap(self) -> GameState:
        if not self.ok or self.state is None:
            raise IllegalActionError(self.error or "Action rejected")
        return self.state

    def __bool__(self) -> bool:
        return self.ok

"""
Per-viewer projection of the authoritative state.

A snapshot shows the viewer's own hand, only counts for the other hands, the
kitty's top card while it is being offered, and the cards the viewer may
legally use right now. Snapshots are derived on demand and never stored.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from .deal import ace_draw
from .deck import Card, Suit
from .match import expected_player
from .play import legal_plays
from .scoring import HandScoreSummary
from .seating import Seat, Team
from .state import GameResultSummary, GameState, Phase, PlayedCard, Trick, TrickState


class ViewerRole(str, Enum):
    PLAYER = "player"
    SPECTATOR = "spectator"


@dataclass(frozen=True)
class SnapshotViewer:
    role: ViewerRole
    seat: Seat


@dataclass(frozen=True)
class AceDrawEvent:
    """The dealer draw, for clients that animate it."""

    game_index: int
    dealer: Seat
    draws: tuple[PlayedCard, ...]


@dataclass(frozen=True)
class MatchSnapshot:
    phase: Phase
    game_index: int
    seating: tuple[Seat, ...]
    dealer: Seat
    trump: Suit | None
    kitty_top_card: Card | None
    kitty_size: int
    kitty_offeree: Seat | None
    acceptor: Seat | None
    forced_accept: bool
    scores: Mapping[Team, int]
    team_assignments: Mapping[Team, tuple[Seat, Seat]]
    self_hand: tuple[Card, ...]
    other_hand_counts: Mapping[Seat, int]
    current_trick: TrickState | None
    completed_tricks: tuple[Trick, ...]
    legal_cards: tuple[Card, ...]
    last_hand_summary: HandScoreSummary | None
    game_results: tuple[GameResultSummary, ...]
    player_game_wins: Mapping[Seat, int]
    ace_draw: AceDrawEvent | None
    viewer: SnapshotViewer


def legal_cards_for_player(state: GameState, player: Seat) -> list[Card]:
    """
    Cards ``player`` can use in the current phase.
    Discard: the acceptor's hand minus the card just taken from the kitty.
    Trick play: the follow-suit filtered hand, only for the seat on turn.
    Anything else (including kitty and trump decisions): nothing.
    """
    hand = state.hand
    if state.phase == Phase.DISCARD:
        if hand.acceptor != player:
            return []
        picked = hand.picked_from_kitty
        return [c for c in hand.hands[player] if picked is None or c != picked]

    if state.phase != Phase.TRICK_PLAY or hand.current_trick is None or hand.trump is None:
        return []
    if expected_player(state) != player:
        return []
    return legal_plays(hand.hands[player], hand.current_trick.cards, hand.trump)


def ace_draw_event(state: GameState) -> AceDrawEvent | None:
    if not state.ace_deck:
        return None
    draws = ace_draw(state.ace_deck, state.seating)
    if not draws:
        return None
    return AceDrawEvent(game_index=state.game_index, dealer=draws[-1].player, draws=tuple(draws))


def get_snapshot(
    state: GameState,
    viewer: Seat,
    role: ViewerRole = ViewerRole.PLAYER,
) -> MatchSnapshot:
    """
    Redacted view of ``state`` for ``viewer``.
    Spectators get the public part only: no hand, no legal cards.
    """
    viewer = Seat(viewer)
    role = ViewerRole(role)
    hand = state.hand
    kitty_top = hand.kitty[0] if state.phase == Phase.KITTY_DECISION and hand.kitty else None
    is_player = role == ViewerRole.PLAYER

    return MatchSnapshot(
        phase=state.phase,
        game_index=state.game_index,
        seating=state.seating,
        dealer=state.dealer,
        trump=hand.trump,
        kitty_top_card=kitty_top,
        kitty_size=len(hand.kitty),
        kitty_offeree=hand.kitty_offeree,
        acceptor=hand.acceptor,
        forced_accept=hand.forced_accept,
        scores=dict(state.scores),
        team_assignments=dict(state.teams),
        self_hand=tuple(hand.hands[viewer]) if is_player else (),
        other_hand_counts={seat: len(cards) for seat, cards in hand.hands.items()},
        current_trick=hand.current_trick,
        completed_tricks=hand.completed_tricks,
        legal_cards=tuple(legal_cards_for_player(state, viewer)) if is_player else (),
        last_hand_summary=state.last_hand_summary,
        game_results=state.game_results,
        player_game_wins=dict(state.player_game_wins),
        ace_draw=ace_draw_event(state),
        viewer=SnapshotViewer(role=role, seat=viewer),
    )

"""Hooker rules engine (four-player partnership Euchre variant)."""

__version__ = "0.1.0"

from .deck import Card, Rank, Suit, create_deck, shuffle_deck, seeded_rng
from .seating import GAME_ROTATION, Seat, Team, next_seat, previous_seat
from .deal import deal_hand, determine_dealer, start_hand_for_dealer
from .play import can_follow_suit, determine_trick_winner, effective_suit, legal_plays
from .scoring import HandScoreSummary, score_hand
from .state import GameState, HandState, Phase, PlayedCard, Result, Trick
from .match import (
    Action,
    MatchOptions,
    advance_state,
    apply_action,
    create_match,
    handle_declare_trump,
    handle_discard,
    handle_kitty_decision,
    handle_play_card,
    settle,
)
from .snapshot import MatchSnapshot, get_snapshot
from .errors import HookerError, IllegalActionError, InvariantError

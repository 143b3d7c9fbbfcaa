"""
Match orchestration: ace draw → deal → kitty → discard → trump → 5 tricks → score,
hands until a team reaches 10, three games with rotating partnerships.

Every entry point takes a ``GameState`` and returns a new one (or a failed
``Result``); nothing is mutated in place. After each successful action the
caller runs ``advance_state`` (or ``settle``) to apply the transitions that
need no player input.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Literal, Mapping, NamedTuple, Sequence

from .deal import deal_hand, determine_dealer
from .deck import Card, Rng, Suit, create_deck, shuffle_deck
from .errors import InvariantError
from .play import can_follow_suit, determine_trick_winner, effective_suit
from .scoring import score_hand
from .seating import (
    GAME_ROTATION,
    HAND_TRICK_COUNT,
    MATCH_GAME_TARGET,
    SEATS,
    TEAMS,
    Seat,
    Team,
    assign_teams,
    game_config,
    next_seat,
)
from .state import (
    GameResultSummary,
    GameState,
    HandState,
    Phase,
    PlayedCard,
    Result,
    Trick,
    TrickState,
    zero_scores,
    zero_wins,
)

logger = logging.getLogger(__name__)

DeckPurpose = Literal["determineDealer", "dealHand"]


class DeckRequest(NamedTuple):
    """What a deck provider is asked for."""
    purpose: DeckPurpose
    game_index: int
    hand_number: int  # 0-based count of hands already dealt in this game


DeckProvider = Callable[[DeckRequest], Sequence[Card]]


@dataclass
class MatchOptions:
    """
    Where decks come from.

    - ``deck_provider``: called for every ace draw and every deal; wins over ``decks``.
    - ``decks``: preloaded queue, consumed in order (first the dealer ace draw,
      then one per deal or ace draw). Only read by ``create_match``; the rest of
      the queue travels inside the state.
    - ``rng``: shuffles a fresh deck whenever neither of the above supplies one.

    Only ``decks`` is carried in the state. ``rng`` and ``deck_provider`` are
    read from the options each call receives, so pass the same ``MatchOptions``
    to ``create_match`` and to every ``advance_state`` / ``settle`` call for a
    reproducible match; without it later deals fall back to ``random.random``.
    """

    decks: Sequence[Sequence[Card]] = ()
    rng: Rng | None = None
    deck_provider: DeckProvider | None = None

    def random_source(self) -> Rng:
        return self.rng if self.rng is not None else random.random


def _resolve_options(options: MatchOptions | None) -> MatchOptions:
    return options if options is not None else MatchOptions()


def _next_deck(
    purpose: DeckPurpose,
    game_index: int,
    hand_number: int,
    pool: Sequence[Sequence[Card]],
    options: MatchOptions,
) -> tuple[tuple[Card, ...], tuple[tuple[Card, ...], ...]]:
    """Return (deck, remaining pool)."""
    if options.deck_provider is not None:
        deck = options.deck_provider(DeckRequest(purpose, game_index, hand_number))
        return tuple(deck), ()
    if pool:
        head, *rest = pool
        return tuple(head), tuple(tuple(d) for d in rest)
    return tuple(shuffle_deck(create_deck(), options.random_source())), ()


def _enter(state: GameState, phase: Phase, **changes) -> GameState:
    """New state in ``phase``; refuses phase changes missing from the transition table."""
    if phase != state.phase and not state.phase.can_transition_to(phase):
        raise InvariantError(f"Illegal phase transition {state.phase.value} -> {phase.value}")
    if phase != state.phase:
        logger.debug("phase %s -> %s (game %d)", state.phase.value, phase.value, state.game_index)
    return replace(state, phase=phase, **changes)


def _reject(error: str) -> Result:
    logger.debug("action rejected: %s", error)
    return Result.failure(error)


def _ensure_phase(state: GameState, phase: Phase) -> str | None:
    if state.phase != phase:
        return f"Invalid phase: expected {phase.value}, got {state.phase.value}"
    return None


# ---- Match / game / hand setup ----


def _game_start_fields(
    game_index: int,
    pool: Sequence[Sequence[Card]],
    options: MatchOptions,
) -> dict:
    config = game_config(game_index)
    ace_deck, remaining = _next_deck("determineDealer", game_index, 0, pool, options)
    dealer = determine_dealer(ace_deck, config.seating)
    return dict(
        game_index=game_index,
        seating=config.seating,
        teams=dict(config.teams),
        team_by_player=assign_teams(config.teams),
        dealer=dealer,
        scores=zero_scores(),
        hand=HandState(),
        last_hand_summary=None,
        hand_number=0,
        remaining_decks=remaining,
        ace_deck=ace_deck,
    )


def create_match(
    options: MatchOptions | None = None,
    *,
    decks: Sequence[Sequence[Card]] | None = None,
    rng: Rng | None = None,
    deck_provider: DeckProvider | None = None,
) -> GameState:
    """
    Fresh match in MatchSetup for game 0, dealer already chosen by the ace draw.
    Keyword arguments override the matching ``options`` fields.
    """
    options = _resolve_options(options)
    if decks is not None or rng is not None or deck_provider is not None:
        options = MatchOptions(
            decks=decks if decks is not None else options.decks,
            rng=rng if rng is not None else options.rng,
            deck_provider=deck_provider if deck_provider is not None else options.deck_provider,
        )
    fields = _game_start_fields(0, options.decks, options)
    state = GameState(phase=Phase.MATCH_SETUP, game_results=(), player_game_wins=zero_wins(), **fields)
    logger.info("match created; game 0 dealer %s", state.dealer.value)
    return state


def _start_hand(state: GameState, options: MatchOptions) -> GameState:
    deck, remaining = _next_deck(
        "dealHand", state.game_index, state.hand_number, state.remaining_decks, options
    )
    deal = deal_hand(deck, state.dealer, state.seating)
    hand = HandState(
        hands=deal.hands,
        kitty=deal.kitty,
        kitty_offeree=deal.kitty_offeree,
        initial_offeree=deal.kitty_offeree,
    )
    logger.debug(
        "hand %d of game %d dealt by %s; kitty offered to %s",
        state.hand_number, state.game_index, state.dealer.value, deal.kitty_offeree.value,
    )
    return _enter(
        state,
        Phase.KITTY_DECISION,
        hand=hand,
        hand_number=state.hand_number + 1,
        remaining_decks=remaining,
    )


def _start_next_game(state: GameState, options: MatchOptions) -> GameState:
    fields = _game_start_fields(state.game_index + 1, state.remaining_decks, options)
    logger.info("game %d starts; dealer %s", fields["game_index"], fields["dealer"].value)
    return _enter(state, Phase.MATCH_SETUP, **fields)


# ---- Player actions ----


def handle_kitty_decision(state: GameState, player: Seat, accept: bool) -> Result:
    """
    The current offeree takes the top kitty card or passes.
    After four passes the offer comes back to the first offeree, who must take it.
    """
    error = _ensure_phase(state, Phase.KITTY_DECISION)
    if error:
        return _reject(error)
    if player not in SEATS:
        return _reject(f"Unknown seat: {player}")
    player = Seat(player)
    hand = state.hand
    if hand.kitty_offeree != player:
        return _reject("Not your turn for the kitty decision")

    if hand.forced_accept and player == hand.initial_offeree and not accept:
        return _reject("Forced accept requires acceptance")

    if not accept:
        passes = hand.passes + (player,)
        forced = len(passes) >= len(state.seating)
        offeree = hand.initial_offeree if forced else next_seat(player, state.seating)
        if forced:
            logger.debug("kitty passed by every seat; %s must accept", offeree.value)
        return Result.success(
            replace(state, hand=replace(hand, passes=passes, forced_accept=forced, kitty_offeree=offeree))
        )

    if not hand.kitty:
        return _reject("No card available in the kitty")

    top, rest = hand.kitty[0], hand.kitty[1:]
    new_hand = replace(
        hand.with_hand(player, hand.hands[player] + (top,)),
        kitty=rest,
        acceptor=player,
        kitty_offeree=None,
        picked_from_kitty=top,
    )
    return Result.success(_enter(state, Phase.DISCARD, hand=new_hand))


def handle_discard(state: GameState, player: Seat, card: Card) -> Result:
    """The acceptor puts one card face down on the kitty; not the card just picked up."""
    error = _ensure_phase(state, Phase.DISCARD)
    if error:
        return _reject(error)
    if player not in SEATS:
        return _reject(f"Unknown seat: {player}")
    player = Seat(player)
    hand = state.hand
    if hand.acceptor != player:
        return _reject("Only the acceptor may discard")
    if hand.picked_from_kitty is not None and card == hand.picked_from_kitty:
        return _reject("May not discard the picked kitty card")
    cards = hand.hands[player]
    if card not in cards:
        return _reject("Card not found in hand")

    index = cards.index(card)
    new_hand = replace(
        hand.with_hand(player, cards[:index] + cards[index + 1:]),
        kitty=hand.kitty + (cards[index],),
        picked_from_kitty=None,
    )
    return Result.success(_enter(state, Phase.TRUMP_DECLARATION, hand=new_hand))


def handle_declare_trump(state: GameState, player: Seat, suit: Suit | str) -> Result:
    error = _ensure_phase(state, Phase.TRUMP_DECLARATION)
    if error:
        return _reject(error)
    if player not in SEATS:
        return _reject(f"Unknown seat: {player}")
    player = Seat(player)
    if player != state.dealer:
        return _reject("Only the dealer may declare trump")
    try:
        trump = Suit(suit)
    except ValueError:
        return _reject(f"Unknown suit: {suit}")

    logger.debug("%s declares %s", player.value, trump.value)
    new_hand = replace(state.hand, trump=trump, current_trick=TrickState(leader=state.dealer))
    return Result.success(_enter(state, Phase.TRICK_PLAY, hand=new_hand))


def expected_player(state: GameState) -> Seat:
    """Seat due to play: the leader on an empty trick, else left of the last player."""
    trick = state.hand.current_trick
    if trick is None:
        raise InvariantError("No current trick")
    if not trick.cards:
        return trick.leader
    return next_seat(trick.cards[-1].player, state.seating)


def handle_play_card(state: GameState, player: Seat, card: Card) -> Result:
    error = _ensure_phase(state, Phase.TRICK_PLAY)
    if error:
        return _reject(error)
    if player not in SEATS:
        return _reject(f"Unknown seat: {player}")
    player = Seat(player)
    hand = state.hand
    trump = hand.trump
    if trump is None:
        return _reject("Trump has not been declared")
    trick = hand.current_trick
    if trick is None:
        return _reject("No active trick")
    if expected_player(state) != player:
        return _reject("Not your turn to play")

    cards = hand.hands[player]
    if card not in cards:
        return _reject("Card not in hand")

    if trick.cards:
        led = effective_suit(trick.cards[0].card, trump)
        if can_follow_suit(cards, led, trump) and effective_suit(card, trump) != led:
            return _reject("Must follow suit")

    index = cards.index(card)
    plays = trick.cards + (PlayedCard(player=player, card=cards[index]),)
    hand = replace(hand.with_hand(player, cards[:index] + cards[index + 1:]), current_trick=replace(trick, cards=plays))

    if len(plays) < len(state.seating):
        return Result.success(replace(state, hand=hand))

    winner = determine_trick_winner(plays, trump)
    completed = hand.completed_tricks + (Trick(leader=trick.leader, cards=plays, winner=winner),)
    logger.debug("trick %d won by %s", len(completed), winner.value)

    if len(completed) < HAND_TRICK_COUNT:
        hand = replace(hand, completed_tricks=completed, current_trick=TrickState(leader=winner))
        return Result.success(replace(state, hand=hand))

    hand = replace(hand, completed_tricks=completed, current_trick=None)
    summary = score_hand(completed, state.team_by_player, state.dealer)
    scores = dict(state.scores)
    scores[summary.winning_team] += summary.points
    logger.info(
        "hand scored: %s +%d%s (NS %d, EW %d)",
        summary.winning_team.value,
        summary.points,
        " euchre" if summary.euchred else "",
        scores[Team.NORTH_SOUTH],
        scores[Team.EAST_WEST],
    )
    return Result.success(
        _enter(state, Phase.HAND_SCORE, hand=hand, scores=scores, last_hand_summary=summary)
    )


# ---- Automatic transitions ----


def game_winner(scores: Mapping[Team, int]) -> Team:
    """Team with the higher score; NorthSouth on a tie."""
    best = TEAMS[0]
    for team in TEAMS[1:]:
        if scores[team] > scores[best]:
            best = team
    return best


def _finish_game(state: GameState, options: MatchOptions) -> GameState:
    winner = game_winner(state.scores)
    result = GameResultSummary(
        game_index=state.game_index,
        winner=winner,
        scores=dict(state.scores),
        seating=state.seating,
        teams=dict(state.teams),
    )
    results = tuple(r for r in state.game_results if r.game_index != state.game_index) + (result,)
    wins = dict(state.player_game_wins)
    for player in state.teams[winner]:
        wins[player] += 1
    logger.info(
        "game %d won by %s (%d-%d)",
        state.game_index,
        winner.value,
        state.scores[Team.NORTH_SOUTH],
        state.scores[Team.EAST_WEST],
    )

    state = replace(state, game_results=results, player_game_wins=wins)
    if state.game_index >= len(GAME_ROTATION) - 1:
        logger.info("match over")
        return _enter(state, Phase.MATCH_OVER, ace_deck=None)
    return _start_next_game(state, options)


def advance_state(state: GameState, options: MatchOptions | None = None) -> GameState:
    """
    One automatic step. Returns ``state`` itself when nothing applies
    (a player must act, or the match is over).
    """
    options = _resolve_options(options)

    if state.phase == Phase.MATCH_SETUP:
        return _start_hand(state, options)

    if state.phase == Phase.HAND_SCORE:
        if max(state.scores.values()) >= MATCH_GAME_TARGET:
            return _enter(state, Phase.GAME_OVER)
        return _enter(
            state,
            Phase.MATCH_SETUP,
            dealer=next_seat(state.dealer, state.seating),
            ace_deck=None,
        )

    if state.phase == Phase.GAME_OVER:
        return _finish_game(state, options)

    return state


def settle(state: GameState, options: MatchOptions | None = None) -> GameState:
    """Apply ``advance_state`` until it stops changing the state."""
    while True:
        advanced = advance_state(state, options)
        if advanced is state:
            return state
        state = advanced


# ---- Generic action dispatch ----


class ActionKind(str, Enum):
    KITTY = "kitty"
    DISCARD = "discard"
    TRUMP = "trump"
    PLAY = "play"


@dataclass(frozen=True)
class Action:
    """One player decision, as a session layer would decode it from a message."""

    kind: ActionKind
    accept: bool = False
    card: Card | None = None
    suit: Suit | None = None

    @classmethod
    def kitty(cls, accept: bool) -> "Action":
        return cls(ActionKind.KITTY, accept=accept)

    @classmethod
    def discard(cls, card: Card) -> "Action":
        return cls(ActionKind.DISCARD, card=card)

    @classmethod
    def trump(cls, suit: Suit) -> "Action":
        return cls(ActionKind.TRUMP, suit=suit)

    @classmethod
    def play(cls, card: Card) -> "Action":
        return cls(ActionKind.PLAY, card=card)


def seat_to_act(state: GameState) -> Seat | None:
    """Seat whose input the state is waiting for; None during automatic phases."""
    if state.phase == Phase.KITTY_DECISION:
        return state.hand.kitty_offeree
    if state.phase == Phase.DISCARD:
        return state.hand.acceptor
    if state.phase == Phase.TRUMP_DECLARATION:
        return state.dealer
    if state.phase == Phase.TRICK_PLAY:
        return expected_player(state)
    return None


def apply_action(state: GameState, player: Seat, action: Action) -> Result:
    if action.kind == ActionKind.KITTY:
        return handle_kitty_decision(state, player, action.accept)
    if action.kind in (ActionKind.DISCARD, ActionKind.PLAY) and action.card is None:
        return _reject("Action requires a card")
    if action.kind == ActionKind.DISCARD:
        return handle_discard(state, player, action.card)
    if action.kind == ActionKind.TRUMP:
        if action.suit is None:
            return _reject("Action requires a suit")
        return handle_declare_trump(state, player, action.suit)
    if action.kind == ActionKind.PLAY:
        return handle_play_card(state, player, action.card)
    return _reject(f"Unsupported action {action.kind}")

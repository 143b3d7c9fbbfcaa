"""
A fully rigged first hand, shared by the match, snapshot and persistence tests.

Seat A draws the first Ace and deals. In game 0 (seating A C B D) the deal goes
C, B, D, A, so C holds the clubs, B the diamonds, D the hearts and A the spades;
the four Jacks make up the kitty. Everyone passes, C is forced to take the JC,
discards the 9C, and A names spades. A takes four tricks and C wins the last
with the JC (Nassih Ahh).
"""
from hooker.deck import Card, Suit
from hooker.match import (
    advance_state,
    create_match,
    handle_declare_trump,
    handle_discard,
    handle_kitty_decision,
    handle_play_card,
)
from hooker.seating import Seat
from hooker.state import Phase

def c(code):
    return Card.parse(code)


def deck_of(*codes):
    return [c(code) for code in codes]


# First card is an Ace: seat A (first in every seating) deals.
ACE_DECK = deck_of("AS", "9C", "9D", "9H")

# Dealt C, B, D, A in game 0: C gets clubs, B diamonds, D hearts, A spades.
HAND_DECK = deck_of(
    "9C", "9D", "9H", "9S",
    "10C", "10D", "10H", "10S",
    "QC", "QD", "QH", "QS",
    "KC", "KD", "KH", "KS",
    "AC", "AD", "AH", "AS",
    "JC", "JD", "JH", "JS",
)

TRICKS = [
    ("9S", "10C", "9D", "9H"),
    ("10S", "QC", "10D", "10H"),
    ("QS", "KC", "QD", "QH"),
    ("KS", "AC", "KD", "KH"),
    ("AS", "JC", "AD", "AH"),
]


def dealt_match():
    state = advance_state(create_match(decks=[ACE_DECK, HAND_DECK]))
    assert state.phase == Phase.KITTY_DECISION
    return state


def forced_to_c(state):
    for seat in (Seat.C, Seat.B, Seat.D, Seat.A):
        state = handle_kitty_decision(state, seat, False).unwrap()
    return state


def ready_for_tricks():
    state = forced_to_c(dealt_match())
    state = handle_kitty_decision(state, Seat.C, True).unwrap()
    state = handle_discard(state, Seat.C, c("9C")).unwrap()
    return handle_declare_trump(state, Seat.A, Suit.SPADES).unwrap()


def play_out(state):
    for codes in TRICKS:
        for seat, code in zip((Seat.A, Seat.C, Seat.B, Seat.D), codes):
            result = handle_play_card(state, seat, c(code))
            assert result.ok, result.error
            state = result.state
    return state

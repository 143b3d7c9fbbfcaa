"""
Trick-taking: effective suit, legal plays, trick winner.

Two Jacks are special once trump is declared:
- Nassih: Jack of trump. Highest card, and it follows as trump.
- Nassih Ahh: Jack of the other suit of trump's colour. Second highest card,
  but for following suit it still belongs to its printed suit.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from .deck import Card, Rank, Suit, same_color
from .errors import InvariantError
from .seating import Seat
from .state import PlayedCard

# Highest first. Jacks are missing from the trump order: the two trump-colour
# Jacks are ranked separately, above every other trump.
LED_ORDER: tuple[Rank, ...] = (Rank.ACE, Rank.KING, Rank.QUEEN, Rank.JACK, Rank.TEN, Rank.NINE)
TRUMP_ORDER: tuple[Rank, ...] = (Rank.ACE, Rank.KING, Rank.QUEEN, Rank.TEN, Rank.NINE)

NASSIH_STRENGTH = 100
NASSIH_AHH_STRENGTH = 90
TRUMP_BASE_STRENGTH = 80


def is_nassih(card: Card, trump: Suit) -> bool:
    return card.rank == Rank.JACK and card.suit == trump


def is_nassih_ahh(card: Card, trump: Suit) -> bool:
    return card.rank == Rank.JACK and card.suit != trump and same_color(card.suit, trump)


def nassih_ahh_suit(trump: Suit) -> Suit:
    """The suit sharing trump's colour."""
    if not isinstance(trump, Suit):
        raise InvariantError(f"No Nassih Ahh suit for {trump!r}")
    for candidate in Suit:
        if candidate != trump and same_color(candidate, trump):
            return candidate
    raise InvariantError(f"No Nassih Ahh suit for {trump!r}")


def nassih(trump: Suit) -> Card:
    return Card(Rank.JACK, trump)


def nassih_ahh(trump: Suit) -> Card:
    return Card(Rank.JACK, nassih_ahh_suit(trump))


def effective_suit(card: Card, trump: Suit) -> Suit:
    """Suit a card counts as for following. Nassih Ahh keeps its printed suit."""
    if is_nassih(card, trump):
        return trump
    return card.suit


def can_follow_suit(hand: Iterable[Card], led_suit: Suit, trump: Suit) -> bool:
    return any(effective_suit(c, trump) == led_suit for c in hand)


def legal_plays(hand: Sequence[Card], trick: Sequence[PlayedCard], trump: Suit) -> list[Card]:
    """
    Cards ``hand`` may put on ``trick``.
    Leading: anything. Otherwise follow the lead's effective suit when possible.
    """
    if not trick:
        return list(hand)
    led = effective_suit(trick[0].card, trump)
    if not can_follow_suit(hand, led, trump):
        return list(hand)
    return [c for c in hand if effective_suit(c, trump) == led]


def trump_strength(card: Card, trump: Suit) -> int:
    """0 for non-trump cards. Nassih Ahh counts as trump here."""
    if is_nassih(card, trump):
        return NASSIH_STRENGTH
    if is_nassih_ahh(card, trump):
        return NASSIH_AHH_STRENGTH
    if card.suit == trump and card.rank in TRUMP_ORDER:
        return TRUMP_BASE_STRENGTH - TRUMP_ORDER.index(card.rank)
    return 0


def led_strength(card: Card, led: Suit) -> int:
    if card.suit != led:
        return 0
    return 10 - LED_ORDER.index(card.rank)


def card_strength(card: Card, led: Suit, trump: Suit) -> int:
    strength = trump_strength(card, trump)
    if strength > 0:
        return strength
    return led_strength(card, led)


def determine_trick_winner(cards: Sequence[PlayedCard], trump: Suit) -> Seat:
    """
    Seat that wins the trick.
    Nassih > Nassih Ahh > trump A K Q 10 9 > led suit A K Q J 10 9. Cards of any
    other suit never win; the lead is the effective suit of the first card.
    """
    if not cards:
        raise InvariantError("Cannot resolve an empty trick")
    led = effective_suit(cards[0].card, trump)
    best = cards[0]
    best_strength = -1
    for entry in cards:
        strength = card_strength(entry.card, led, trump)
        if strength > best_strength:
            best_strength = strength
            best = entry
    return best.player

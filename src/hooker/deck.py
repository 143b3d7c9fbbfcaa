"""
Hooker deck: 24 cards (9, 10, J, Q, K, A in four suits). No jokers.
Suit colours matter because the Jack of trump's colour partner ranks as trump.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

Rng = Callable[[], float]


class Suit(str, Enum):
    """Declaration order is the deck enumeration order."""
    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]

    @property
    def letter(self) -> str:
        return self.value[0].upper()


class Rank(str, Enum):
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"


SUITS: tuple[Suit, ...] = tuple(Suit)
RANKS: tuple[Rank, ...] = tuple(Rank)

_SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

_SUIT_COLORS = {
    Suit.CLUBS: "black",
    Suit.SPADES: "black",
    Suit.HEARTS: "red",
    Suit.DIAMONDS: "red",
}


def suit_color(suit: Suit) -> str:
    """'black' for clubs/spades, 'red' for hearts/diamonds."""
    return _SUIT_COLORS[suit]


def same_color(a: Suit, b: Suit) -> bool:
    return _SUIT_COLORS[a] == _SUIT_COLORS[b]


@dataclass(frozen=True)
class Card:
    """A single card; two cards are equal when rank and suit match."""

    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        # Accept raw strings ("J", "spades") and normalise them to the enums.
        object.__setattr__(self, "rank", Rank(self.rank))
        object.__setattr__(self, "suit", Suit(self.suit))

    @property
    def code(self) -> str:
        """Short code such as ``"JS"`` or ``"10H"``."""
        return f"{self.rank.value}{self.suit.letter}"

    @classmethod
    def parse(cls, code: str) -> "Card":
        """Inverse of ``code``: ``Card.parse("10H")``."""
        code = code.strip().upper()
        if len(code) < 2:
            raise ValueError(f"Invalid card code: {code!r}")
        rank_part, suit_part = code[:-1], code[-1]
        suit = next((s for s in Suit if s.letter == suit_part), None)
        if suit is None:
            raise ValueError(f"Invalid suit in card code: {code!r}")
        try:
            rank = Rank(rank_part)
        except ValueError:
            raise ValueError(f"Invalid rank in card code: {code!r}") from None
        return cls(rank, suit)

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.symbol}"

    def __repr__(self) -> str:
        return str(self)


def card(rank: Rank | str, suit: Suit | str) -> Card:
    return Card(Rank(rank), Suit(suit))


def create_deck() -> list[Card]:
    """The 24 cards, suit-major then rank (9 .. A). Always the same order."""
    return [Card(rank, suit) for suit in SUITS for rank in RANKS]


def shuffle_deck(deck: Iterable[Card], rng: Rng) -> list[Card]:
    """
    Return a new list holding the same cards in random order.
    ``rng`` returns floats in [0, 1); each step draws one card out of the
    remaining pool, so a deterministic ``rng`` gives a deterministic deck.
    """
    pool = list(deck)
    result: list[Card] = []
    while pool:
        index = int(rng() * len(pool))
        # Guard against sources that can return exactly 1.0.
        index = min(index, len(pool) - 1)
        result.append(pool.pop(index))
    return result


def seeded_rng(seed: int) -> Rng:
    """
    Park-Miller minimal standard generator (16807 mod 2**31 - 1).
    Good enough to pin shuffles in tests and replays; not for production draws.
    """
    modulus = 2147483647
    value = seed % modulus
    if value <= 0:
        value += modulus - 1

    def next_value() -> float:
        nonlocal value
        value = (value * 16807) % modulus
        return (value - 1) / (modulus - 1)

    return next_value


def format_cards(cards: Iterable[Card]) -> str:
    return " ".join(str(c) for c in cards)

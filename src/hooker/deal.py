"""
Distribution and dealer choice.
Deal: 5 cards each, one at a time, starting left of the dealer; 4 cards to the kitty.
Dealer: cards dealt face up one by one in seating order until someone gets an Ace.
"""
from __future__ import annotations

import logging
import random
from typing import NamedTuple, Sequence

from .deck import Card, Rank, create_deck, seeded_rng, shuffle_deck
from .errors import DeckError
from .seating import HAND_SIZE, KITTY_SIZE, Seat, game_config, next_seat, rotation_from
from .state import PlayedCard

logger = logging.getLogger(__name__)

DEAL_SIZE = HAND_SIZE * 4 + KITTY_SIZE


class Deal(NamedTuple):
    """Result of a deal. ``kitty[0]`` is the card offered first."""
    hands: dict[Seat, tuple[Card, ...]]
    kitty: tuple[Card, ...]
    kitty_offeree: Seat


def deal_order(dealer: Seat, seating: Sequence[Seat]) -> list[Seat]:
    """Left of the dealer first, dealer last."""
    return rotation_from(next_seat(dealer, seating), seating)


def deal_hand(deck: Sequence[Card], dealer: Seat, seating: Sequence[Seat]) -> Deal:
    if len(deck) < DEAL_SIZE:
        raise DeckError(f"Need {DEAL_SIZE} cards to deal, got {len(deck)}")
    order = deal_order(dealer, seating)
    hands: dict[Seat, list[Card]] = {seat: [] for seat in Seat}
    for i in range(HAND_SIZE * len(order)):
        hands[order[i % len(order)]].append(deck[i])
    kitty = tuple(deck[HAND_SIZE * len(order):DEAL_SIZE])
    return Deal(
        hands={seat: tuple(cards) for seat, cards in hands.items()},
        kitty=kitty,
        kitty_offeree=order[0],
    )


def ace_draw(deck: Sequence[Card], seating: Sequence[Seat]) -> list[PlayedCard]:
    """Draws up to and including the first Ace; empty if the deck holds none."""
    draws: list[PlayedCard] = []
    for index, c in enumerate(deck):
        draws.append(PlayedCard(player=seating[index % len(seating)], card=c))
        if c.rank == Rank.ACE:
            return draws
    return []


def determine_dealer(deck: Sequence[Card], seating: Sequence[Seat]) -> Seat:
    draws = ace_draw(deck, seating)
    if not draws:
        raise DeckError("Ace method deck does not contain an Ace")
    for draw in draws:
        logger.debug("[Player %s] drew: %s", draw.player.value, draw.card)
    dealer = draws[-1].player
    logger.info("[Player %s] drew %s and deals", dealer.value, draws[-1].card)
    return dealer


class StartedHandPreview(NamedTuple):
    seating: tuple[Seat, ...]
    dealer: Seat
    dealer_seat_index: int
    initial_offeree: int  # seat index in ``seating``
    kitty_offeree: int
    kitty: tuple[Card, ...]
    hands_by_seat: tuple[tuple[Card, ...], ...]
    hands_by_player: dict[Seat, tuple[Card, ...]]


def start_hand_for_dealer(
    dealer_seat_index: int,
    seed: int | None = None,
    game_index: int = 0,
) -> StartedHandPreview:
    """
    Deal one hand for the dealer sitting at ``dealer_seat_index`` (any integer,
    taken modulo the table size) without building a match. Seeded deals are
    reproducible.
    """
    seating = game_config(game_index).seating
    normalized = dealer_seat_index % len(seating)
    dealer = seating[normalized]
    rng = random.random if seed is None else seeded_rng(seed)
    deal = deal_hand(shuffle_deck(create_deck(), rng), dealer, seating)
    offeree_index = seating.index(deal.kitty_offeree)
    return StartedHandPreview(
        seating=seating,
        dealer=dealer,
        dealer_seat_index=normalized,
        initial_offeree=offeree_index,
        kitty_offeree=offeree_index,
        kitty=deal.kitty,
        hands_by_seat=tuple(deal.hands[seat] for seat in seating),
        hands_by_player=dict(deal.hands),
    )

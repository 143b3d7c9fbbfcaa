"""Smoke tests for the deck, deal and dealer draw."""
import random
from collections import Counter

import pytest

from hooker.deal import ace_draw, deal_hand, deal_order, determine_dealer, start_hand_for_dealer
from hooker.deck import Card, Rank, Suit, create_deck, seeded_rng, shuffle_deck
from hooker.errors import DeckError, SeatingError
from hooker.seating import GAME_ROTATION, Seat, Team, assign_teams, game_config, next_seat, previous_seat


def test_deck_24_unique():
    deck = create_deck()
    assert len(deck) == 24
    assert len(set(deck)) == 24
    assert {c.rank for c in deck} == set(Rank)
    assert {c.suit for c in deck} == set(Suit)


def test_deck_order_is_fixed():
    assert create_deck() == create_deck()
    assert create_deck()[0] == Card(Rank.NINE, Suit.CLUBS)
    assert create_deck()[-1] == Card(Rank.ACE, Suit.SPADES)


def test_card_codes():
    assert Card.parse("10H") == Card(Rank.TEN, Suit.HEARTS)
    assert Card.parse("js").code == "JS"
    assert Card("Q", "diamonds") == Card(Rank.QUEEN, Suit.DIAMONDS)
    with pytest.raises(ValueError):
        Card.parse("1X")


def test_shuffle_preserves_cards():
    for seed in range(30):
        deck = create_deck()
        shuffled = shuffle_deck(deck, seeded_rng(seed))
        assert Counter(shuffled) == Counter(deck)
        assert deck == create_deck()  # input untouched


def test_shuffle_is_reproducible():
    a = shuffle_deck(create_deck(), seeded_rng(99))
    b = shuffle_deck(create_deck(), seeded_rng(99))
    c = shuffle_deck(create_deck(), seeded_rng(100))
    assert a == b
    assert a != c


def test_shuffle_accepts_stdlib_random():
    rng = random.Random(5)
    shuffled = shuffle_deck(create_deck(), rng.random)
    assert sorted(c.code for c in shuffled) == sorted(c.code for c in create_deck())


def test_seeded_rng_range():
    rng = seeded_rng(0)
    values = [rng() for _ in range(1000)]
    assert all(0.0 <= v < 1.0 for v in values)


def test_deal_conserves_cards():
    seating = GAME_ROTATION[0].seating
    for seed in range(50):
        deck = shuffle_deck(create_deck(), seeded_rng(seed))
        deal = deal_hand(deck, Seat.A, seating)
        assert all(len(deal.hands[s]) == 5 for s in Seat)
        assert len(deal.kitty) == 4
        all_cards = list(deal.kitty)
        for cards in deal.hands.values():
            all_cards.extend(cards)
        assert len(all_cards) == 24
        assert set(all_cards) == set(create_deck())


def test_deal_starts_left_of_dealer():
    seating = (Seat.A, Seat.C, Seat.B, Seat.D)
    deck = create_deck()
    deal = deal_hand(deck, Seat.A, seating)
    assert deal_order(Seat.A, seating) == [Seat.C, Seat.B, Seat.D, Seat.A]
    assert deal.kitty_offeree == Seat.C
    assert deal.hands[Seat.C][0] == deck[0]
    assert deal.hands[Seat.B][0] == deck[1]
    assert deal.hands[Seat.A][0] == deck[3]
    assert deal.kitty == tuple(deck[20:24])


def test_deal_short_deck_raises():
    with pytest.raises(DeckError):
        deal_hand(create_deck()[:10], Seat.A, GAME_ROTATION[0].seating)


def test_determine_dealer_first_ace():
    seating = GAME_ROTATION[0].seating  # A C B D
    deck = [Card.parse(code) for code in ("9C", "9D", "9H", "9S", "10C", "AD", "AS")]
    assert determine_dealer(deck, seating) == Seat.C
    draws = ace_draw(deck, seating)
    assert [d.player for d in draws] == [Seat.A, Seat.C, Seat.B, Seat.D, Seat.A, Seat.C]
    assert draws[-1].card == Card.parse("AD")


def test_determine_dealer_without_ace_raises():
    deck = [c for c in create_deck() if c.rank != Rank.ACE]
    with pytest.raises(DeckError):
        determine_dealer(deck, GAME_ROTATION[0].seating)


def test_seat_rotation():
    seating = GAME_ROTATION[2].seating  # A B D C
    assert next_seat(Seat.D, seating) == Seat.C
    assert next_seat(Seat.C, seating) == Seat.A
    assert previous_seat(Seat.A, seating) == Seat.C
    with pytest.raises(SeatingError):
        next_seat(Seat.D, (Seat.A, Seat.B, Seat.C))
    with pytest.raises(SeatingError):
        previous_seat(Seat.D, (Seat.A, Seat.B, Seat.C))


def test_game_rotation_cycles():
    assert len(GAME_ROTATION) == 3
    assert game_config(3) == GAME_ROTATION[0]
    assert game_config(4) == GAME_ROTATION[1]
    for config in GAME_ROTATION:
        team_by_player = assign_teams(config.teams)
        assert Counter(team_by_player.values()) == {Team.NORTH_SOUTH: 2, Team.EAST_WEST: 2}
        # partners never sit next to each other
        for seat in Seat:
            assert team_by_player[next_seat(seat, config.seating)] != team_by_player[seat]


def test_start_hand_for_dealer_preview():
    preview = start_hand_for_dealer(0, seed=123)
    assert preview.dealer == Seat.A
    assert preview.initial_offeree == 1  # left of dealer in A C B D
    assert preview.seating[preview.kitty_offeree] == Seat.C
    assert len(preview.kitty) == 4
    assert all(len(h) == 5 for h in preview.hands_by_seat)
    again = start_hand_for_dealer(4, seed=123)
    assert again.dealer_seat_index == 0
    assert again.hands_by_player == preview.hands_by_player
    wrapped = start_hand_for_dealer(-1, seed=1, game_index=1)
    assert wrapped.dealer == Seat.D

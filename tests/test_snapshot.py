"""Per-viewer snapshots: redaction, legal cards and the ace-draw event."""
from hooker.deck import Suit
from hooker.match import (
    advance_state,
    create_match,
    handle_declare_trump,
    handle_discard,
    handle_kitty_decision,
    handle_play_card,
)
from hooker.seating import Seat
from hooker.snapshot import ViewerRole, get_snapshot, legal_cards_for_player
from hooker.state import Phase

from rigged import HAND_DECK, c, dealt_match as dealt, deck_of, play_out, ready_for_tricks


def test_own_hand_only():
    state = dealt()
    for seat in Seat:
        snap = get_snapshot(state, seat)
        assert snap.self_hand == state.hand.hands[seat]
        assert snap.other_hand_counts == {s: 5 for s in Seat}
        assert snap.viewer.seat == seat
        assert snap.viewer.role == ViewerRole.PLAYER
        # no field carries another seat's cards
        others = {x for s in Seat if s != seat for x in state.hand.hands[s]}
        assert not others & set(snap.self_hand)
        assert not others & set(snap.legal_cards)


def test_kitty_top_card_only_while_offered():
    state = dealt()
    snap = get_snapshot(state, Seat.B)
    assert snap.kitty_top_card == c("JC")
    assert snap.kitty_size == 4
    assert snap.kitty_offeree == Seat.C
    assert snap.legal_cards == ()

    state = handle_kitty_decision(state, Seat.C, True).unwrap()
    snap = get_snapshot(state, Seat.B)
    assert snap.kitty_top_card is None
    assert snap.kitty_size == 3
    assert snap.acceptor == Seat.C
    assert snap.other_hand_counts[Seat.C] == 6


def test_discard_legal_cards_exclude_picked_card():
    state = handle_kitty_decision(dealt(), Seat.C, True).unwrap()
    snap = get_snapshot(state, Seat.C)
    assert c("JC") in snap.self_hand
    assert c("JC") not in snap.legal_cards
    assert len(snap.legal_cards) == 5
    assert get_snapshot(state, Seat.A).legal_cards == ()


def test_trick_play_legal_cards_only_for_seat_on_turn():
    state = ready_for_tricks()
    assert get_snapshot(state, Seat.A).legal_cards == state.hand.hands[Seat.A]
    for seat in (Seat.B, Seat.C, Seat.D):
        assert get_snapshot(state, seat).legal_cards == ()
    state = handle_play_card(state, Seat.A, c("9S")).unwrap()
    assert legal_cards_for_player(state, Seat.A) == []
    # C holds no spade (JC follows as a club), so everything is legal
    assert list(get_snapshot(state, Seat.C).legal_cards) == list(state.hand.hands[Seat.C])
    assert get_snapshot(state, Seat.C).trump == Suit.SPADES


def test_trump_declaration_has_no_legal_cards():
    state = handle_kitty_decision(dealt(), Seat.C, True).unwrap()
    state = handle_discard(state, Seat.C, c("9C")).unwrap()
    assert state.phase == Phase.TRUMP_DECLARATION
    assert all(get_snapshot(state, seat).legal_cards == () for seat in Seat)
    state = handle_declare_trump(state, Seat.A, Suit.HEARTS).unwrap()
    assert get_snapshot(state, Seat.D).trump == Suit.HEARTS


def test_spectator_sees_public_state_only():
    state = ready_for_tricks()
    snap = get_snapshot(state, Seat.A, role=ViewerRole.SPECTATOR)
    assert snap.self_hand == ()
    assert snap.legal_cards == ()
    assert snap.other_hand_counts == {s: 5 for s in Seat}
    assert snap.viewer.role == ViewerRole.SPECTATOR
    assert snap.scores == dict(state.scores)


def test_ace_draw_event():
    decks = [deck_of("9C", "9D", "9H", "9S", "10C", "AD"), HAND_DECK]
    state = create_match(decks=decks)
    assert state.dealer == Seat.C
    event = get_snapshot(state, Seat.A).ace_draw
    assert event.game_index == 0
    assert event.dealer == Seat.C
    assert [d.player for d in event.draws] == [Seat.A, Seat.C, Seat.B, Seat.D, Seat.A, Seat.C]
    assert event.draws[-1].card == c("AD")
    # still visible while the first hand is in progress
    assert get_snapshot(advance_state(state), Seat.B).ace_draw == event


def test_ace_draw_cleared_after_first_hand():
    state = play_out(ready_for_tricks())
    assert get_snapshot(state, Seat.A).ace_draw is not None
    nxt = advance_state(state)
    assert nxt.phase == Phase.MATCH_SETUP
    assert get_snapshot(nxt, Seat.A).ace_draw is None


def test_hand_summary_visible_after_scoring():
    state = play_out(ready_for_tricks())
    snap = get_snapshot(state, Seat.D)
    assert snap.phase == Phase.HAND_SCORE
    assert snap.last_hand_summary.points == 2
    assert len(snap.completed_tricks) == 5
    assert snap.current_trick is None

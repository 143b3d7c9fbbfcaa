"""
Game state and snapshot serialization.

Converts ``GameState`` to and from JSON-compatible dicts so a session layer
can ship snapshots to clients or keep the authoritative state between
actions. Field names use the camelCase keys clients already speak.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Mapping

from .deck import Card, Suit
from .errors import PersistenceError
from .scoring import HandScoreSummary
from .seating import Seat, Team
from .snapshot import AceDrawEvent, MatchSnapshot
from .state import (
    GameResultSummary,
    GameState,
    HandState,
    Phase,
    PlayedCard,
    Trick,
    TrickState,
)

SCHEMA_VERSION = 1


def card_to_dict(card: Card) -> Dict[str, str]:
    return {"rank": card.rank.value, "suit": card.suit.value}


def card_from_dict(d: Mapping[str, Any]) -> Card:
    try:
        return Card(d["rank"], d["suit"])
    except (KeyError, TypeError, ValueError) as exc:
        raise PersistenceError(f"Invalid card: {d!r}") from exc


def _cards(cards) -> list[Dict[str, str]]:
    return [card_to_dict(c) for c in cards]


def _cards_from(items) -> tuple[Card, ...]:
    return tuple(card_from_dict(c) for c in items)


def _optional_card(card: Card | None) -> Dict[str, str] | None:
    return card_to_dict(card) if card is not None else None


def _seat(value: Any) -> Seat | None:
    return Seat(value) if value is not None else None


def _played(entry: PlayedCard) -> Dict[str, Any]:
    return {"player": entry.player.value, "card": card_to_dict(entry.card)}


def _played_from(d: Mapping[str, Any]) -> PlayedCard:
    return PlayedCard(player=Seat(d["player"]), card=card_from_dict(d["card"]))


def _trick_state(trick: TrickState | None) -> Dict[str, Any] | None:
    if trick is None:
        return None
    return {"leader": trick.leader.value, "cards": [_played(e) for e in trick.cards]}


def _trick(trick: Trick) -> Dict[str, Any]:
    return {
        "leader": trick.leader.value,
        "cards": [_played(e) for e in trick.cards],
        "winner": trick.winner.value if trick.winner is not None else None,
    }


def _team_seats(teams: Mapping[Team, tuple[Seat, Seat]]) -> Dict[str, list[str]]:
    return {team.value: [s.value for s in seats] for team, seats in teams.items()}


def _team_seats_from(d: Mapping[str, Any]) -> dict[Team, tuple[Seat, Seat]]:
    return {Team(team): tuple(Seat(s) for s in seats) for team, seats in d.items()}


def _summary(summary: HandScoreSummary | None) -> Dict[str, Any] | None:
    if summary is None:
        return None
    return {
        "winningTeam": summary.winning_team.value,
        "points": summary.points,
        "euchred": summary.euchred,
        "tricksWon": {t.value: n for t, n in summary.tricks_won.items()},
    }


def _summary_from(d: Mapping[str, Any] | None) -> HandScoreSummary | None:
    if d is None:
        return None
    return HandScoreSummary(
        winning_team=Team(d["winningTeam"]),
        points=int(d["points"]),
        euchred=bool(d["euchred"]),
        tricks_won={Team(t): int(n) for t, n in d["tricksWon"].items()},
    )


def _game_result(result: GameResultSummary) -> Dict[str, Any]:
    return {
        "gameIndex": result.game_index,
        "winner": result.winner.value,
        "scores": {t.value: n for t, n in result.scores.items()},
        "seating": [s.value for s in result.seating],
        "teams": _team_seats(result.teams),
    }


def _game_result_from(d: Mapping[str, Any]) -> GameResultSummary:
    return GameResultSummary(
        game_index=int(d["gameIndex"]),
        winner=Team(d["winner"]),
        scores={Team(t): int(n) for t, n in d["scores"].items()},
        seating=tuple(Seat(s) for s in d["seating"]),
        teams=_team_seats_from(d["teams"]),
    )


def _hand_to_dict(hand: HandState) -> Dict[str, Any]:
    return {
        "hands": {seat.value: _cards(cards) for seat, cards in hand.hands.items()},
        "kitty": _cards(hand.kitty),
        "kittyOfferee": hand.kitty_offeree.value if hand.kitty_offeree else None,
        "initialOfferee": hand.initial_offeree.value if hand.initial_offeree else None,
        "acceptor": hand.acceptor.value if hand.acceptor else None,
        "forcedAccept": hand.forced_accept,
        "trump": hand.trump.value if hand.trump else None,
        "currentTrick": _trick_state(hand.current_trick),
        "completedTricks": [_trick(t) for t in hand.completed_tricks],
        "passes": [s.value for s in hand.passes],
        "pickedFromKitty": _optional_card(hand.picked_from_kitty),
    }


def _hand_from_dict(d: Mapping[str, Any]) -> HandState:
    current = d.get("currentTrick")
    picked = d.get("pickedFromKitty")
    return HandState(
        hands={Seat(seat): _cards_from(cards) for seat, cards in d["hands"].items()},
        kitty=_cards_from(d.get("kitty", [])),
        kitty_offeree=_seat(d.get("kittyOfferee")),
        initial_offeree=_seat(d.get("initialOfferee")),
        acceptor=_seat(d.get("acceptor")),
        forced_accept=bool(d.get("forcedAccept", False)),
        trump=Suit(d["trump"]) if d.get("trump") else None,
        current_trick=(
            TrickState(
                leader=Seat(current["leader"]),
                cards=tuple(_played_from(e) for e in current["cards"]),
            )
            if current
            else None
        ),
        completed_tricks=tuple(
            Trick(
                leader=Seat(t["leader"]),
                cards=tuple(_played_from(e) for e in t["cards"]),
                winner=_seat(t.get("winner")),
            )
            for t in d.get("completedTricks", [])
        ),
        passes=tuple(Seat(s) for s in d.get("passes", [])),
        picked_from_kitty=card_from_dict(picked) if picked else None,
    )


def game_state_to_dict(state: GameState) -> Dict[str, Any]:
    """Serialize the full (unredacted) state. Keep it server side."""
    return {
        "schema_version": SCHEMA_VERSION,
        "phase": state.phase.value,
        "gameIndex": state.game_index,
        "seating": [s.value for s in state.seating],
        "teams": _team_seats(state.teams),
        "dealer": state.dealer.value,
        "scores": {t.value: n for t, n in state.scores.items()},
        "hand": _hand_to_dict(state.hand),
        "lastHandSummary": _summary(state.last_hand_summary),
        "gameResults": [_game_result(r) for r in state.game_results],
        "playerGameWins": {s.value: n for s, n in state.player_game_wins.items()},
        "handNumber": state.hand_number,
        "remainingDecks": [_cards(deck) for deck in state.remaining_decks],
        "aceDeck": _cards(state.ace_deck) if state.ace_deck is not None else None,
    }


def game_state_from_dict(d: Mapping[str, Any]) -> GameState:
    """Inverse of ``game_state_to_dict``. ``teamByPlayer`` is rebuilt from ``teams``."""
    if not isinstance(d, Mapping):
        raise PersistenceError(f"Game state payload must be an object, got {type(d).__name__}")
    version = d.get("schema_version")
    if version != SCHEMA_VERSION:
        raise PersistenceError(f"Unsupported schema version: {version!r}")
    try:
        teams = _team_seats_from(d["teams"])
        ace_deck = d.get("aceDeck")
        return GameState(
            phase=Phase(d["phase"]),
            game_index=int(d["gameIndex"]),
            seating=tuple(Seat(s) for s in d["seating"]),
            teams=teams,
            team_by_player={seat: team for team, seats in teams.items() for seat in seats},
            dealer=Seat(d["dealer"]),
            scores={Team(t): int(n) for t, n in d["scores"].items()},
            hand=_hand_from_dict(d["hand"]),
            last_hand_summary=_summary_from(d.get("lastHandSummary")),
            game_results=tuple(_game_result_from(r) for r in d.get("gameResults", [])),
            player_game_wins={Seat(s): int(n) for s, n in d["playerGameWins"].items()},
            hand_number=int(d.get("handNumber", 0)),
            remaining_decks=tuple(_cards_from(deck) for deck in d.get("remainingDecks", [])),
            ace_deck=_cards_from(ace_deck) if ace_deck is not None else None,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise PersistenceError(f"Invalid game state payload: {exc}") from exc


def game_state_to_json(state: GameState) -> str:
    return json.dumps(game_state_to_dict(state), indent=2)


def game_state_from_json(s: str) -> GameState:
    try:
        data = json.loads(s)
    except json.JSONDecodeError as exc:
        raise PersistenceError(f"Invalid JSON: {exc}") from exc
    return game_state_from_dict(data)


def _ace_draw(event: AceDrawEvent | None) -> Dict[str, Any] | None:
    if event is None:
        return None
    return {
        "gameIndex": event.game_index,
        "dealer": event.dealer.value,
        "draws": [_played(e) for e in event.draws],
    }


def snapshot_to_dict(snapshot: MatchSnapshot) -> Dict[str, Any]:
    """JSON-ready form of a per-viewer snapshot (what gets broadcast)."""
    return {
        "phase": snapshot.phase.value,
        "gameIndex": snapshot.game_index,
        "seating": [s.value for s in snapshot.seating],
        "dealer": snapshot.dealer.value,
        "trump": snapshot.trump.value if snapshot.trump else None,
        "kittyTopCard": _optional_card(snapshot.kitty_top_card),
        "kittySize": snapshot.kitty_size,
        "kittyOfferee": snapshot.kitty_offeree.value if snapshot.kitty_offeree else None,
        "acceptor": snapshot.acceptor.value if snapshot.acceptor else None,
        "forcedAccept": snapshot.forced_accept,
        "scores": {t.value: n for t, n in snapshot.scores.items()},
        "teamAssignments": _team_seats(snapshot.team_assignments),
        "selfHand": _cards(snapshot.self_hand),
        "otherHandCounts": {s.value: n for s, n in snapshot.other_hand_counts.items()},
        "currentTrick": _trick_state(snapshot.current_trick),
        "completedTricks": [_trick(t) for t in snapshot.completed_tricks],
        "legalCards": _cards(snapshot.legal_cards),
        "lastHandSummary": _summary(snapshot.last_hand_summary),
        "gameResults": [_game_result(r) for r in snapshot.game_results],
        "playerGameWins": {s.value: n for s, n in snapshot.player_game_wins.items()},
        "aceDraw": _ace_draw(snapshot.ace_draw),
        "viewer": {"role": snapshot.viewer.role.value, "seat": snapshot.viewer.seat.value},
    }


def snapshot_to_json(snapshot: MatchSnapshot) -> str:
    return json.dumps(snapshot_to_dict(snapshot))


__all__ = [
    "card_to_dict",
    "card_from_dict",
    "game_state_to_dict",
    "game_state_from_dict",
    "game_state_to_json",
    "game_state_from_json",
    "snapshot_to_dict",
    "snapshot_to_json",
    "SCHEMA_VERSION",
]

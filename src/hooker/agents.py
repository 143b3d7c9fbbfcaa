"""
Baseline agents and a driver that plays a whole match with them.

Agents decide from a ``MatchSnapshot`` (the same redacted view a remote
player gets), so they can never peek at other hands. The ``Policy`` protocol
is the contract: ``act(snapshot) -> Action``.
"""
from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass
from typing import Mapping, Protocol

from .deck import Suit
from .errors import InvariantError
from .match import Action, MatchOptions, apply_action, create_match, seat_to_act, settle
from .seating import Seat
from .snapshot import MatchSnapshot, get_snapshot
from .state import GameState, Phase

logger = logging.getLogger(__name__)

MAX_ACTIONS_PER_MATCH = 20_000


class Policy(Protocol):
    """Decision policy for one seat."""

    def act(self, snapshot: MatchSnapshot) -> Action:
        """
        Choose an action for the viewer of ``snapshot``. Only called when that
        seat is the one the state is waiting for.
        """


@dataclass
class RandomAgent:
    """
    Baseline policy: random among legal choices.

    Usage:
        agent = RandomAgent(seed=42)
        action = agent.act(get_snapshot(state, Seat.A))
    """

    seed: int | None = None
    accept_probability: float = 0.25

    def __post_init__(self) -> None:
        self._rng = random.Random(self.seed)

    def act(self, snapshot: MatchSnapshot) -> Action:
        phase = snapshot.phase
        if phase == Phase.KITTY_DECISION:
            # Once forced, the offer can only be sitting with the initial offeree.
            accept = snapshot.forced_accept or self._rng.random() < self.accept_probability
            return Action.kitty(accept)
        if phase == Phase.DISCARD:
            return Action.discard(self._pick(snapshot))
        if phase == Phase.TRUMP_DECLARATION:
            return Action.trump(self._longest_suit(snapshot))
        if phase == Phase.TRICK_PLAY:
            return Action.play(self._pick(snapshot))
        raise ValueError(f"No decision to make in phase {phase.value}")

    def _pick(self, snapshot: MatchSnapshot):
        if not snapshot.legal_cards:
            raise ValueError("No legal cards available for RandomAgent")
        return self._rng.choice(snapshot.legal_cards)

    def _longest_suit(self, snapshot: MatchSnapshot) -> Suit:
        counts = Counter(c.suit for c in snapshot.self_hand)
        if not counts:
            return self._rng.choice(list(Suit))
        best = max(counts.values())
        return self._rng.choice(sorted(s for s, n in counts.items() if n == best))


def run_match(
    agents: Mapping[Seat, Policy],
    options: MatchOptions | None = None,
    state: GameState | None = None,
) -> GameState:
    """
    Play from ``state`` (a new match by default) to MatchOver, one agent per seat.
    Agents that return an illegal action stop the run with IllegalActionError.
    """
    state = settle(create_match(options) if state is None else state, options)
    actions = 0
    while state.phase != Phase.MATCH_OVER:
        seat = seat_to_act(state)
        if seat is None:
            raise InvariantError(f"Match stalled in phase {state.phase.value}")
        action = agents[seat].act(get_snapshot(state, seat))
        state = settle(apply_action(state, seat, action).unwrap(), options)
        actions += 1
        if actions > MAX_ACTIONS_PER_MATCH:
            raise InvariantError("Match did not finish")
    logger.debug("match finished after %d actions", actions)
    return state


__all__ = ["Policy", "RandomAgent", "run_match"]

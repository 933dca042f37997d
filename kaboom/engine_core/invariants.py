"""
Invariant checks - Structural validation of a GameState.

Validates that:
1. Every card exists exactly once (no duplication, no loss)
2. Owed turns are positive for every live seat
3. Pending records do not overlap on one seat
4. game_over is set exactly when the table is down to one seat
"""

from __future__ import annotations
from collections import Counter

from .cards import DECK_SIZE
from .state import GameState


class InvariantViolation(Exception):
    """Raised when a state breaks an engine invariant."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"State invariant check failed with {len(errors)} error(s): {errors}")


def check_invariants(state: GameState) -> list[str]:
    """
    Check a state against the engine invariants.

    Returns a list of error messages; empty when the state is consistent.
    """
    errors: list[str] = []

    cards = state.all_cards()
    if len(cards) != DECK_SIZE:
        errors.append(f"expected {DECK_SIZE} cards, found {len(cards)}")

    duplicates = [cid for cid, n in Counter(c.card_id for c in cards).items() if n > 1]
    if duplicates:
        errors.append(f"duplicated card ids: {sorted(duplicates)}")

    for seat, player in state.players.items():
        if not player.eliminated and state.turns_owed.get(seat, 0) < 1:
            errors.append(f"seat {seat} owes {state.turns_owed.get(seat)} turns")

    placement, favor = state.pending_placement, state.pending_favor
    if placement and favor and placement.owner in (favor.requester, favor.giver):
        errors.append(f"seat {placement.owner} is both placing a hazard and in a favor")

    alive = state.alive_seats()
    if state.game_over is None and len(alive) <= 1:
        errors.append("one seat left but game_over not set")
    if state.game_over is not None and len(alive) > 1:
        errors.append(f"game_over set with {len(alive)} seats alive")

    if not state.game_over and state.players[state.current_seat].eliminated:
        errors.append(f"current seat {state.current_seat} is eliminated")

    return errors


def assert_invariants(state: GameState) -> None:
    """Raise InvariantViolation if the state is inconsistent."""
    errors = check_invariants(state)
    if errors:
        raise InvariantViolation(errors)

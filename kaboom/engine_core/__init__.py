"""
Engine Core - Game state management and move resolution.

The engine is the runtime that:
1. Builds and deals the deck
2. Manages GameState
3. Generates legal actions per seat
4. Applies actions via the reducer
"""

from .cards import Card, CardKind, PAIR_VARIANTS, DECK_COMPOSITION, DECK_SIZE, build_deck
from .shuffler import shuffle
from .state import (
    GameState,
    Player,
    PendingPlacement,
    PendingFavor,
    ForesightReveal,
    AttackNotice,
    GameOver,
    HUMAN_SEAT,
    NUM_SEATS,
)
from .setup import new_game
from .action import Action, ActionType, ActionPayload, ActionResult, ErrorCode, Outcome
from .errors import InvalidMove, DeckExhaustedError
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, legal_actions, is_legal
from .invariants import check_invariants, assert_invariants, InvariantViolation

__all__ = [
    "Card",
    "CardKind",
    "PAIR_VARIANTS",
    "DECK_COMPOSITION",
    "DECK_SIZE",
    "build_deck",
    "shuffle",
    "GameState",
    "Player",
    "PendingPlacement",
    "PendingFavor",
    "ForesightReveal",
    "AttackNotice",
    "GameOver",
    "HUMAN_SEAT",
    "NUM_SEATS",
    "new_game",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ErrorCode",
    "Outcome",
    "InvalidMove",
    "DeckExhaustedError",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "legal_actions",
    "is_legal",
    "check_invariants",
    "assert_invariants",
    "InvariantViolation",
]

"""
Action System - Actions, payloads, and results.

Actions represent every move a seat can make:
1. Turn moves (draw, play a card)
2. Responses to pending decisions (place hazard, resolve favor)
3. Acknowledgements (dismiss foresight, dismiss attack notice)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    DRAW = "draw"
    PLACE_HAZARD = "place_hazard"

    PLAY_SKIP = "play_skip"
    PLAY_ATTACK = "play_attack"
    PLAY_SHUFFLE = "play_shuffle"
    PLAY_FORESIGHT = "play_foresight"
    PLAY_FAVOR = "play_favor"
    PLAY_PAIR = "play_pair"
    PLAY_SINGLE = "play_single"

    RESOLVE_FAVOR = "resolve_favor"
    DISMISS_FORESIGHT = "dismiss_foresight"
    DISMISS_ATTACK_NOTICE = "dismiss_attack_notice"

    # Sentinel: the seat must wait for someone else. Never applied.
    WAIT_FOR_FAVOR = "wait_for_favor"


class ErrorCode(Enum):
    """Why a move was rejected."""
    OUT_OF_TURN = "OUT_OF_TURN"
    ILLEGAL_CARD_INDEX = "ILLEGAL_CARD_INDEX"
    ILLEGAL_TARGET = "ILLEGAL_TARGET"
    INSUFFICIENT_MATCH = "INSUFFICIENT_MATCH"
    BLOCKED_BY_PENDING = "BLOCKED_BY_PENDING"
    UNPLAYABLE_CARD = "UNPLAYABLE_CARD"
    ILLEGAL_POSITION = "ILLEGAL_POSITION"
    GAME_OVER = "GAME_OVER"
    NO_HANDLER = "NO_HANDLER"


class Outcome(Enum):
    """What an applied move did, for the presentation layer."""
    DRAWN = "drawn"
    DEFUSED = "defused"
    ELIMINATED = "eliminated"
    PLACED = "placed"
    SKIPPED = "skipped"
    ATTACKED = "attacked"
    SHUFFLED = "shuffled"
    FORESIGHT = "foresight"
    FAVOR_RECEIVED = "favor_received"
    FAVOR_PENDING = "favor_pending"
    FAVOR_RESOLVED = "favor_resolved"
    STOLEN = "stolen"
    DISCARDED = "discarded"
    DISMISSED = "dismissed"


@dataclass
class ActionPayload:
    """
    Parameters for an action.

    Different action types use different fields; the reducer validates.
    """
    seat: int
    card_index: int | None = None
    target_seat: int | None = None
    variant: str | None = None
    position: int | None = None


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are validated before application and applied atomically
    by the reducer.
    """
    action_type: ActionType
    payload: ActionPayload

    @classmethod
    def draw(cls, seat: int) -> Action:
        return cls(ActionType.DRAW, ActionPayload(seat=seat))

    @classmethod
    def place_hazard(cls, seat: int, position: int) -> Action:
        """position 0 = top of the draw pile, len(draw_pile) = bottom."""
        return cls(ActionType.PLACE_HAZARD, ActionPayload(seat=seat, position=position))

    @classmethod
    def play_skip(cls, seat: int, card_index: int) -> Action:
        return cls(ActionType.PLAY_SKIP, ActionPayload(seat=seat, card_index=card_index))

    @classmethod
    def play_attack(cls, seat: int, card_index: int) -> Action:
        return cls(ActionType.PLAY_ATTACK, ActionPayload(seat=seat, card_index=card_index))

    @classmethod
    def play_shuffle(cls, seat: int, card_index: int) -> Action:
        return cls(ActionType.PLAY_SHUFFLE, ActionPayload(seat=seat, card_index=card_index))

    @classmethod
    def play_foresight(cls, seat: int, card_index: int) -> Action:
        return cls(ActionType.PLAY_FORESIGHT, ActionPayload(seat=seat, card_index=card_index))

    @classmethod
    def play_favor(cls, seat: int, card_index: int, target_seat: int) -> Action:
        return cls(
            ActionType.PLAY_FAVOR,
            ActionPayload(seat=seat, card_index=card_index, target_seat=target_seat),
        )

    @classmethod
    def play_pair(cls, seat: int, variant: str, target_seat: int) -> Action:
        return cls(
            ActionType.PLAY_PAIR,
            ActionPayload(seat=seat, variant=variant, target_seat=target_seat),
        )

    @classmethod
    def play_single(cls, seat: int, card_index: int) -> Action:
        return cls(ActionType.PLAY_SINGLE, ActionPayload(seat=seat, card_index=card_index))

    @classmethod
    def resolve_favor(cls, seat: int, card_index: int) -> Action:
        return cls(ActionType.RESOLVE_FAVOR, ActionPayload(seat=seat, card_index=card_index))

    @classmethod
    def dismiss_foresight(cls, seat: int) -> Action:
        return cls(ActionType.DISMISS_FORESIGHT, ActionPayload(seat=seat))

    @classmethod
    def dismiss_attack_notice(cls, seat: int) -> Action:
        return cls(ActionType.DISMISS_ATTACK_NOTICE, ActionPayload(seat=seat))

    @classmethod
    def wait_for_favor(cls, seat: int) -> Action:
        return cls(ActionType.WAIT_FOR_FAVOR, ActionPayload(seat=seat))

    @property
    def seat(self) -> int:
        return self.payload.seat

    def describe(self) -> str:
        """Short human-readable form, e.g. 'play_favor(card=2, target=1)'."""
        parts = []
        p = self.payload
        if p.card_index is not None:
            parts.append(f"card={p.card_index}")
        if p.variant is not None:
            parts.append(f"variant={p.variant}")
        if p.target_seat is not None:
            parts.append(f"target={p.target_seat}")
        if p.position is not None:
            parts.append(f"position={p.position}")
        return f"{self.action_type.value}({', '.join(parts)})"


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Error and error code (if failed)
    - Outcome and change log (for UI updates)
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: ErrorCode | None = None

    outcome: Outcome | None = None
    state_changes: list[str] = field(default_factory=list)

    # Card moved by the action when the actor is allowed to see it
    card: Any | None = None

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        outcome: Outcome | None = None,
        changes: list[str] | None = None,
        card: Any | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            outcome=outcome,
            state_changes=changes or [],
            card=card,
        )

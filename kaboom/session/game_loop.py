"""
Game Loop - Drives the computer seats.

The loop:
1. Human makes a move through the session
2. While a computer seat is to act: enumerate, pick at random, apply
3. Observer is notified after every applied move
4. Stop when the human must act, when a computer seat must wait for the
   human to resolve a favor, or when the game ends

Runs under the session lock. Waiting on the human means returning control
to the caller, who resumes the loop after the next human move.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from ..engine_core.action import ActionType
from ..engine_core.action_generator import legal_actions
from ..engine_core.state import HUMAN_SEAT

if TYPE_CHECKING:
    from .manager import Session

logger = logging.getLogger(__name__)

# Far above the longest possible game; a guard, not a rule
MAX_STEPS = 2000


class LoopState(Enum):
    """Where the loop stopped."""
    WAITING_HUMAN_ACTION = "waiting_human_action"
    WAITING_FAVOR = "waiting_favor"
    GAME_OVER = "game_over"
    STALLED = "stalled"


@dataclass
class TurnResult:
    """
    Result of running computer turns.

    Lists what each computer seat did, in order.
    """
    loop_state: LoopState
    automa_actions: list[str] = field(default_factory=list)
    changes: list[str] = field(default_factory=list)
    steps: int = 0
    winner: int | None = None

    @property
    def success(self) -> bool:
        return self.loop_state != LoopState.STALLED


class GameLoop:
    """
    The computer-seat driver.

    Usage:
        loop = GameLoop(session)
        result = loop.run_computer_turns()
        if result.loop_state == LoopState.WAITING_FAVOR:
            # human must choose a card for the favor first
            ...
    """

    def __init__(self, session: Session, max_steps: int = MAX_STEPS):
        self.session = session
        self.max_steps = max_steps

    def run_computer_turns(self) -> TurnResult:
        """
        Run computer moves until the human must act or the game ends.
        """
        actions: list[str] = []
        changes: list[str] = []
        steps = 0

        while True:
            state = self.session.state

            if state.game_over:
                return TurnResult(
                    loop_state=LoopState.GAME_OVER,
                    automa_actions=actions,
                    changes=changes,
                    steps=steps,
                    winner=state.game_over.winner,
                )

            seat = state.current_seat
            if seat == HUMAN_SEAT:
                return TurnResult(
                    loop_state=LoopState.WAITING_HUMAN_ACTION,
                    automa_actions=actions,
                    changes=changes,
                    steps=steps,
                )

            if steps >= self.max_steps:
                logger.warning("Stopped computer turns after %d steps", steps)
                return self._stalled(actions, changes, steps)

            legal = legal_actions(state, seat)
            if not legal:
                logger.warning("Seat %d has no legal moves", seat)
                return self._stalled(actions, changes, steps)

            if legal[0].action_type == ActionType.WAIT_FOR_FAVOR:
                return TurnResult(
                    loop_state=LoopState.WAITING_FAVOR,
                    automa_actions=actions,
                    changes=changes,
                    steps=steps,
                )

            bot = self.session.bots[seat]
            decision = bot.select_action(state, legal)
            self.session.think(seat)

            result = self.session.reducer.apply(state, decision.action)
            if not result.success:
                # Generator and reducer disagree
                logger.warning(
                    "Seat %d: legal move %s rejected: %s",
                    seat, decision.action.describe(), result.error,
                )
                return self._stalled(actions, changes, steps)

            self.session.commit(result)
            player = state.players[seat]
            actions.append(f"{player.name}: {decision.action.action_type.value}")
            changes.extend(result.state_changes)
            steps += 1

    def _stalled(self, actions: list[str], changes: list[str], steps: int) -> TurnResult:
        return TurnResult(
            loop_state=LoopState.STALLED,
            automa_actions=actions,
            changes=changes,
            steps=steps,
        )

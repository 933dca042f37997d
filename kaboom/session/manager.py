"""
Session Manager - Creates and manages game sessions.

A session is one game between the human (seat 0) and three computer
seats. It is the boundary the presentation layer talks to:
- human moves come in through play_card/draw/place_hazard/...
- every applied move is reported to the observer callback
- new_game() throws the whole game away and deals a fresh one

Sessions are in-memory only; nothing is persisted. A session applies one
move at a time: its lock is held from the human move through the last
computer move, so concurrent requests for one game queue up.
"""

from __future__ import annotations
import logging
import random
import threading
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from ..bots import BotPolicy, RandomPolicy, personality_for
from ..engine_core.action import Action, ActionResult, ErrorCode
from ..engine_core.action_generator import legal_actions
from ..engine_core.errors import DeckExhaustedError
from ..engine_core.cards import CardKind
from ..engine_core.reducer import Reducer
from ..engine_core.setup import new_game
from ..engine_core.state import GameState, HUMAN_SEAT, COMPUTER_SEATS
from .game_loop import GameLoop, TurnResult

logger = logging.getLogger(__name__)

Observer = Callable[[GameState], None]
DelayHook = Callable[[int, float], None]

_SIMPLE_PLAYS = {
    CardKind.SKIP: Action.play_skip,
    CardKind.ATTACK: Action.play_attack,
    CardKind.SHUFFLE: Action.play_shuffle,
    CardKind.FORESIGHT: Action.play_foresight,
}


class SessionState(Enum):
    """What the session is waiting for."""
    YOUR_TURN = "your_turn"
    PLACE_HAZARD = "place_hazard"
    GIVE_FAVOR = "give_favor"
    COMPUTER_TURN = "computer_turn"
    GAME_OVER = "game_over"


@dataclass
class Session:
    """
    One game in progress.

    Contains:
    - The current game state
    - One random source shared by the reducer and the bots
    - A RandomPolicy per computer seat
    - Observer and optional thinking-delay hook
    - A lock serializing moves and resets
    """
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    seed: int | None = None
    observer: Observer | None = None
    delay_hook: DelayHook | None = None
    created_at: float = field(default_factory=time.time)

    state: GameState = field(init=False)
    rng: random.Random = field(init=False)
    reducer: Reducer = field(init=False)
    bots: dict[int, BotPolicy] = field(init=False)
    last_turn: TurnResult | None = field(init=False, default=None)
    lock: threading.RLock = field(init=False, repr=False, compare=False, default_factory=threading.RLock)

    def __post_init__(self):
        self.new_game()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def new_game(self) -> GameState:
        """Discard the current game and deal a fresh one."""
        with self.lock:
            self.rng = random.Random(self.seed)
            self.reducer = Reducer(rng=self.rng)
            self.bots = {seat: RandomPolicy(rng=self.rng) for seat in COMPUTER_SEATS}
            self.state = new_game(rng=self.rng)
            self.last_turn = None
            logger.info("Session %s: new game", self.session_id)
            self._notify()
            return self.state

    @property
    def status(self) -> SessionState:
        state = self.state
        if state.game_over:
            return SessionState.GAME_OVER
        if state.pending_favor and state.pending_favor.giver == HUMAN_SEAT:
            return SessionState.GIVE_FAVOR
        if state.pending_placement and state.pending_placement.owner == HUMAN_SEAT:
            return SessionState.PLACE_HAZARD
        if state.current_seat == HUMAN_SEAT:
            return SessionState.YOUR_TURN
        return SessionState.COMPUTER_TURN

    def is_active(self) -> bool:
        return self.state.game_over is None

    def is_human_turn(self) -> bool:
        return self.state.current_seat == HUMAN_SEAT and not self.state.game_over

    # =========================================================================
    # Human move intake
    # =========================================================================

    def play_card(self, index: int, target: int | None = None) -> ActionResult:
        """
        Play hand[index].

        Favor needs a target. A cat card with a target is played as a pair
        (with any matching card); without one it is discarded alone.
        """
        with self.lock:
            hand = self.state.players[HUMAN_SEAT].hand
            if not 0 <= index < len(hand):
                return ActionResult.failure(f"No card at index {index}", ErrorCode.ILLEGAL_CARD_INDEX)

            card = hand[index]
            if card.kind in _SIMPLE_PLAYS:
                action = _SIMPLE_PLAYS[card.kind](HUMAN_SEAT, index)
            elif card.kind == CardKind.FAVOR:
                action = Action.play_favor(HUMAN_SEAT, index, target)
            elif card.kind == CardKind.PAIR:
                if target is None:
                    action = Action.play_single(HUMAN_SEAT, index)
                else:
                    action = Action.play_pair(HUMAN_SEAT, card.variant, target)
            else:
                return ActionResult.failure(
                    f"{card.name} cannot be played from your hand",
                    ErrorCode.UNPLAYABLE_CARD,
                )
            return self.submit(action)

    def draw(self) -> ActionResult:
        return self.submit(Action.draw(HUMAN_SEAT))

    def place_hazard(self, position: int) -> ActionResult:
        """position 0 = top of the deck, len(draw_pile) = bottom."""
        return self.submit(Action.place_hazard(HUMAN_SEAT, position))

    def resolve_favor(self, card_index: int) -> ActionResult:
        return self.submit(Action.resolve_favor(HUMAN_SEAT, card_index))

    def dismiss_foresight(self) -> ActionResult:
        return self.submit(Action.dismiss_foresight(HUMAN_SEAT))

    def dismiss_attack_notice(self) -> ActionResult:
        return self.submit(Action.dismiss_attack_notice(HUMAN_SEAT))

    def legal_moves(self) -> list[Action]:
        """Everything the human may do right now."""
        return legal_actions(self.state, HUMAN_SEAT)

    def submit(self, action: Action) -> ActionResult:
        """
        Apply a human move, then let the computer seats play.

        A rejected move changes nothing. DeckExhaustedError is logged with
        the session id and re-raised.
        """
        if action.seat != HUMAN_SEAT:
            return ActionResult.failure("Only the human seat submits moves", ErrorCode.OUT_OF_TURN)

        with self.lock:
            try:
                result = self.reducer.apply(self.state, action)
            except DeckExhaustedError:
                logger.exception("Session %s: %s broke the game", self.session_id, action.describe())
                raise
            if not result.success:
                return result

            self.commit(result)
            self.run_computer_turns()
            return result

    def run_computer_turns(self) -> TurnResult:
        """Run the computer seats until the human must act."""
        with self.lock:
            try:
                self.last_turn = GameLoop(self).run_computer_turns()
            except DeckExhaustedError:
                logger.exception("Session %s: computer turns broke the game", self.session_id)
                raise
            return self.last_turn

    # =========================================================================
    # Used by the game loop
    # =========================================================================

    def commit(self, result: ActionResult) -> None:
        """Adopt the state from a successful result and notify the observer."""
        self.state = result.new_state
        self._notify()

    def think(self, seat: int) -> None:
        """Cosmetic pause before a computer move."""
        if self.delay_hook:
            self.delay_hook(seat, personality_for(seat).thinking_delay(self.rng))

    def _notify(self) -> None:
        if self.observer:
            self.observer(self.state)


class SessionManager:
    """
    Manages game sessions.

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        seed: int | None = None,
        observer: Observer | None = None,
        delay_hook: DelayHook | None = None,
    ) -> Session:
        """Create a session with a freshly dealt game."""
        session = Session(seed=seed, observer=observer, delay_hook=delay_hook)
        self._sessions[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Remove a session. Returns False if it did not exist."""
        session = self._sessions.pop(session_id, None)
        if session:
            logger.info("Session %s ended", session_id)
            return True
        return False

    def list_sessions(self) -> list[str]:
        """IDs of all sessions."""
        return list(self._sessions)

    def list_active_sessions(self) -> list[str]:
        """IDs of sessions whose game is still running."""
        return [sid for sid, s in self._sessions.items() if s.is_active()]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """Drop finished sessions older than max_age. Returns how many."""
        now = time.time()
        stale = [
            sid for sid, s in self._sessions.items()
            if now - s.created_at > max_age_seconds and not s.is_active()
        ]
        for sid in stale:
            self.end_session(sid)
        return len(stale)

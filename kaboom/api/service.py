"""
API Service - Bridge between the HTTP layer and game sessions.

The service:
1. Creates and looks up sessions
2. Forwards human moves to the session
3. Builds the human-visible view of the game

This layer is framework-agnostic; app.py only maps its return values
to HTTP responses.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable

from ..engine_core.action import ActionResult
from ..engine_core.cards import Card
from ..engine_core.state import HUMAN_SEAT
from ..session import SessionManager, Session
from ..session.manager import DelayHook
from .schemas import (
    SessionStatus,
    ErrorCode,
    CardInfo,
    PlayerInfo,
    FavorRequestInfo,
    ForesightInfo,
    AttackNoticeInfo,
    GameOverInfo,
    LegalMoveInfo,
    CreateGameRequest,
    PlayCardRequest,
    PlaceHazardRequest,
    ResolveFavorRequest,
    GameStateResponse,
    MoveResponse,
    ErrorResponse,
)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        state = service.create_game(CreateGameRequest(seed=7))
        response = service.draw(state.session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    default_seed: int | None = None
    delay_hook: DelayHook | None = None

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_game(self, request: CreateGameRequest | None = None) -> GameStateResponse:
        """Deal a new game."""
        seed = request.seed if request and request.seed is not None else self.default_seed
        session = self.session_manager.create_session(seed=seed, delay_hook=self.delay_hook)
        return self._build_game_state(session)

    def get_game(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._build_game_state(session)

    def restart_game(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Throw the current game away and deal a new one in the same session."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        session.new_game()
        return self._build_game_state(session)

    def end_game(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_games(self) -> list[str]:
        return self.session_manager.list_sessions()

    # =========================================================================
    # Human moves
    # =========================================================================

    def play_card(self, session_id: str, request: PlayCardRequest) -> MoveResponse | ErrorResponse:
        return self._move(session_id, lambda s: s.play_card(request.card_index, request.target_seat))

    def draw(self, session_id: str) -> MoveResponse | ErrorResponse:
        return self._move(session_id, lambda s: s.draw())

    def place_hazard(self, session_id: str, request: PlaceHazardRequest) -> MoveResponse | ErrorResponse:
        return self._move(session_id, lambda s: s.place_hazard(request.position))

    def resolve_favor(self, session_id: str, request: ResolveFavorRequest) -> MoveResponse | ErrorResponse:
        return self._move(session_id, lambda s: s.resolve_favor(request.card_index))

    def dismiss_foresight(self, session_id: str) -> MoveResponse | ErrorResponse:
        return self._move(session_id, lambda s: s.dismiss_foresight())

    def dismiss_attack_notice(self, session_id: str) -> MoveResponse | ErrorResponse:
        return self._move(session_id, lambda s: s.dismiss_attack_notice())

    def _move(
        self,
        session_id: str,
        make_move: Callable[[Session], ActionResult],
    ) -> MoveResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        with session.lock:
            session.last_turn = None
            result = make_move(session)
            if not result.success:
                return ErrorResponse(
                    error=result.error or "Move rejected",
                    error_code=ErrorCode(result.error_code.value),
                )

            turn = session.last_turn
            return MoveResponse(
                success=True,
                outcome=result.outcome.value if result.outcome else None,
                card=self._card_info(result.card) if result.card else None,
                changes=result.state_changes,
                automa_actions=turn.automa_actions if turn else [],
                automa_changes=turn.changes if turn else [],
                state=self._build_game_state(session),
            )

    # =========================================================================
    # View building
    # =========================================================================

    def _build_game_state(self, session: Session) -> GameStateResponse:
        """The game as the human seat may see it."""
        state = session.state
        human = state.players[HUMAN_SEAT]

        players = [
            PlayerInfo(
                seat=seat,
                name=p.name,
                is_human=p.is_human,
                is_current_turn=seat == state.current_seat and not state.game_over,
                eliminated=p.eliminated,
                hand_size=len(p.hand),
                turns_owed=state.turns_owed.get(seat, 1),
            )
            for seat, p in sorted(state.players.items())
        ]

        favor_request = None
        if state.pending_favor and state.pending_favor.giver == HUMAN_SEAT:
            requester = state.pending_favor.requester
            favor_request = FavorRequestInfo(
                requester=requester,
                requester_name=state.players[requester].name,
            )

        foresight = None
        if state.foresight and state.foresight.seat == HUMAN_SEAT:
            foresight = ForesightInfo(cards=[self._card_info(c) for c in state.foresight.cards])

        attack_notice = None
        if state.attack_notice and state.attack_notice.target == HUMAN_SEAT:
            attack_notice = AttackNoticeInfo(
                attacker=state.attack_notice.attacker,
                attacker_name=state.players[state.attack_notice.attacker].name,
                turns_owed=state.attack_notice.turns_owed,
            )

        game_over = None
        if state.game_over:
            winner = state.game_over.winner
            game_over = GameOverInfo(
                winner=winner,
                winner_name=state.players[winner].name if winner is not None else None,
                reason=state.game_over.reason,
            )

        legal_moves = [
            LegalMoveInfo(
                action_type=a.action_type.value,
                card_index=a.payload.card_index,
                target_seat=a.payload.target_seat,
                variant=a.payload.variant,
                position=a.payload.position,
            )
            for a in session.legal_moves()
        ]

        return GameStateResponse(
            session_id=session.session_id,
            status=SessionStatus(session.status.value),
            turn_number=state.turn_number,
            current_seat=state.current_seat,
            players=players,
            hand=[self._card_info(c) for c in human.hand],
            draw_pile_size=len(state.draw_pile),
            discard_pile_size=len(state.discard_pile),
            discard_top=self._card_info(state.discard_pile[-1]) if state.discard_pile else None,
            placing_hazard=bool(
                state.pending_placement and state.pending_placement.owner == HUMAN_SEAT
            ),
            favor_request=favor_request,
            foresight=foresight,
            attack_notice=attack_notice,
            game_over=game_over,
            legal_moves=legal_moves,
        )

    def _card_info(self, card: Card) -> CardInfo:
        return CardInfo(
            card_id=card.card_id,
            kind=card.kind.value,
            name=card.name,
            variant=card.variant,
            description=card.description,
        )

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Game {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a browser UI and the engine.
The game view only shows what the human seat may know: its own hand,
the size of every other hand, and the size (not order) of the draw pile.

Error Codes:
- SESSION_NOT_FOUND: Game does not exist or was ended
- VALIDATION_ERROR: Request body is malformed
- Move rejections reuse the engine codes (OUT_OF_TURN, ILLEGAL_TARGET, ...)
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """What the game is waiting for."""
    YOUR_TURN = "your_turn"
    PLACE_HAZARD = "place_hazard"
    GIVE_FAVOR = "give_favor"
    COMPUTER_TURN = "computer_turn"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    OUT_OF_TURN = "OUT_OF_TURN"
    ILLEGAL_CARD_INDEX = "ILLEGAL_CARD_INDEX"
    ILLEGAL_TARGET = "ILLEGAL_TARGET"
    INSUFFICIENT_MATCH = "INSUFFICIENT_MATCH"
    BLOCKED_BY_PENDING = "BLOCKED_BY_PENDING"
    UNPLAYABLE_CARD = "UNPLAYABLE_CARD"
    ILLEGAL_POSITION = "ILLEGAL_POSITION"
    GAME_OVER = "GAME_OVER"
    NO_HANDLER = "NO_HANDLER"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display."""
    card_id: str
    kind: str
    name: str
    variant: Optional[str] = None
    description: str = ""

    model_config = {"from_attributes": True}


class PlayerInfo(BaseModel):
    """A seat as seen by the human."""
    seat: int
    name: str
    is_human: bool
    is_current_turn: bool = False
    eliminated: bool = False
    hand_size: int = 0
    turns_owed: int = 1


class FavorRequestInfo(BaseModel):
    """A computer seat is waiting for the human to give a card."""
    requester: int
    requester_name: str


class ForesightInfo(BaseModel):
    """Top of the deck; first card is drawn next."""
    cards: list[CardInfo] = Field(default_factory=list)


class AttackNoticeInfo(BaseModel):
    """The human was attacked."""
    attacker: int
    attacker_name: str
    turns_owed: int


class GameOverInfo(BaseModel):
    """Final result."""
    winner: Optional[int] = None
    winner_name: Optional[str] = None
    reason: str


class LegalMoveInfo(BaseModel):
    """A move the human may make now."""
    action_type: str
    card_index: Optional[int] = None
    target_seat: Optional[int] = None
    variant: Optional[str] = None
    position: Optional[int] = None


# =============================================================================
# Requests
# =============================================================================

class CreateGameRequest(BaseModel):
    """Start a new game."""
    seed: Optional[int] = Field(None, description="Seed for a reproducible game")


class PlayCardRequest(BaseModel):
    """Play a card from the human's hand."""
    card_index: int = Field(ge=0, description="Index in your hand")
    target_seat: Optional[int] = Field(
        None, ge=0, le=3, description="Target for Favor or a cat pair"
    )


class PlaceHazardRequest(BaseModel):
    """Put a defused Exploding Kitten back in the deck."""
    position: int = Field(ge=0, description="0 = top of the deck, draw_pile_size = bottom")


class ResolveFavorRequest(BaseModel):
    """Give a card to the seat that asked for a favor."""
    card_index: int = Field(ge=0)


# =============================================================================
# Responses
# =============================================================================

class GameStateResponse(BaseModel):
    """The game from the human seat's point of view."""
    session_id: str
    status: SessionStatus
    turn_number: int
    current_seat: int
    players: list[PlayerInfo] = Field(default_factory=list)
    hand: list[CardInfo] = Field(default_factory=list)
    draw_pile_size: int = 0
    discard_pile_size: int = 0
    discard_top: Optional[CardInfo] = None
    placing_hazard: bool = False
    favor_request: Optional[FavorRequestInfo] = None
    foresight: Optional[ForesightInfo] = None
    attack_notice: Optional[AttackNoticeInfo] = None
    game_over: Optional[GameOverInfo] = None
    legal_moves: list[LegalMoveInfo] = Field(default_factory=list)


class MoveResponse(BaseModel):
    """Result of a human move, including what the computer seats did after."""
    success: bool
    outcome: Optional[str] = None
    card: Optional[CardInfo] = None
    changes: list[str] = Field(default_factory=list)
    automa_actions: list[str] = Field(default_factory=list)
    automa_changes: list[str] = Field(default_factory=list)
    state: GameStateResponse


class ErrorResponse(BaseModel):
    """Standard error body."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None


class SessionListResponse(BaseModel):
    sessions: list[str] = Field(default_factory=list)
    count: int = 0


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str

"""
API Module - Browser UI interface.

Exposes a game session via REST so a web page can play as the human seat.
The page:
1. Creates a game
2. Reads the human's view of it
3. Submits moves and renders what the computer seats did

All state is session-scoped and in memory. This is not a multiplayer
protocol: every game has exactly one human.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    PlayCardRequest,
    PlaceHazardRequest,
    ResolveFavorRequest,
    # Responses
    GameStateResponse,
    MoveResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    ErrorCode,
    SessionStatus,
    CardInfo,
    PlayerInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "PlayCardRequest",
    "PlaceHazardRequest",
    "ResolveFavorRequest",
    # Responses
    "GameStateResponse",
    "MoveResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "ErrorCode",
    "SessionStatus",
    "CardInfo",
    "PlayerInfo",
    # Service
    "APIService",
    "create_app",
]

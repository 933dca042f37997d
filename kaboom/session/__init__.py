"""
Session Module - Manages in-memory game sessions.

A session represents one play-through:
- Created when the user starts a game
- Holds the current game state
- Takes the human's moves and runs the computer seats
- Discarded when the user starts over or leaves

Nothing is persisted.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
]

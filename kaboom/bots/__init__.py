"""
Bots module - Computer-seat players.

Provides:
- BotPolicy: Interface for bot decision-making
- RandomPolicy: Uniform choice among legal moves
- Personality: Cosmetic thinking-time profiles
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy
from .personality import Personality, PERSONALITIES, personality_for

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "Personality",
    "PERSONALITIES",
    "personality_for",
]

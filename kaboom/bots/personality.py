"""
Bot Personalities - Cosmetic pacing for computer seats.

A personality only changes how long a computer seat appears to think
before each move. It never affects which move is chosen.
"""

from __future__ import annotations
import random
from dataclasses import dataclass


@dataclass
class Personality:
    """
    Thinking-time profile for a computer seat.

    Delays are in seconds.
    """
    name: str
    title: str = ""
    min_delay: float = 0.5
    max_delay: float = 2.0

    def thinking_delay(self, rng: random.Random | None = None) -> float:
        """A delay drawn uniformly from [min_delay, max_delay]."""
        rng = rng or random.Random()
        return self.min_delay + rng.random() * (self.max_delay - self.min_delay)


# ============================================================================
# Predefined Personalities
# ============================================================================

THINKING = Personality(name="CPU 1", title="ThinkingBot", min_delay=0.5, max_delay=2.0)

FAST_THINKING = Personality(name="CPU 2", title="FastThinkingBot", min_delay=0.2, max_delay=0.8)

SLOW_THINKING = Personality(name="CPU 3", title="SlowThinkingBot", min_delay=1.0, max_delay=3.0)


# Personality per computer seat
PERSONALITIES: dict[int, Personality] = {
    1: THINKING,
    2: FAST_THINKING,
    3: SLOW_THINKING,
}


def personality_for(seat: int) -> Personality:
    """Personality for a computer seat (ThinkingBot if unknown)."""
    return PERSONALITIES.get(seat, THINKING)

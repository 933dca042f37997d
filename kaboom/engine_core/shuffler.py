"""
Shuffler - Unbiased in-place Fisher-Yates shuffle.

Used for both the initial deal and the Shuffle card, so one injected
random source governs every shuffle in a game.
"""

from __future__ import annotations
import random
from typing import MutableSequence, TypeVar

T = TypeVar("T")


def shuffle(items: MutableSequence[T], rng: random.Random | None = None) -> MutableSequence[T]:
    """
    Shuffle items in place and return the same sequence.

    Walks i from the last index down to 1, picks j uniformly from [0, i]
    and swaps. Every permutation is equally likely.
    """
    rng = rng or random.Random()
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items

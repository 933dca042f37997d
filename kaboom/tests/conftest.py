"""
Pytest fixtures for Kaboom tests.
"""

import random
from typing import Callable, Optional, Union

import pytest

from ..engine_core.cards import Card, CardKind, build_deck
from ..engine_core.reducer import Reducer
from ..engine_core.setup import new_game
from ..engine_core.state import GameState, Player, NUM_SEATS, DEFAULT_PLAYER_NAMES
from ..session import Session, SessionManager

# A wanted card: a kind, or (CardKind.PAIR, variant)
CardWant = Union[CardKind, tuple]


def _take(deck: list[Card], want: CardWant) -> Card:
    kind, variant = (want if isinstance(want, tuple) else (want, None))
    for i, card in enumerate(deck):
        if card.kind == kind and (variant is None or card.variant == variant):
            return deck.pop(i)
    raise ValueError(f"No {want} left in the deck")


def rig_state(
    hands: Optional[dict[int, list[CardWant]]] = None,
    top: Optional[list[CardWant]] = None,
    current_seat: int = 0,
) -> GameState:
    """
    Build a state with known hands and known top of the draw pile.

    top[0] is the next card drawn. Every card not asked for goes under
    the top cards, so all 50 cards are still in play.
    """
    deck = build_deck()
    players = {}
    for seat in range(NUM_SEATS):
        hand = [_take(deck, want) for want in (hands or {}).get(seat, [])]
        players[seat] = Player(seat=seat, name=DEFAULT_PLAYER_NAMES[seat], hand=hand)

    top_cards = [_take(deck, want) for want in (top or [])]
    draw_pile = deck + list(reversed(top_cards))

    return GameState(
        players=players,
        draw_pile=draw_pile,
        discard_pile=[],
        current_seat=current_seat,
        turns_owed={seat: 1 for seat in range(NUM_SEATS)},
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def reducer(rng: random.Random) -> Reducer:
    return Reducer(rng=rng)


@pytest.fixture
def fresh_state() -> GameState:
    """A freshly dealt game."""
    return new_game(seed=42)


@pytest.fixture
def rig() -> Callable[..., GameState]:
    """Factory for states with known hands and deck top."""
    return rig_state


@pytest.fixture
def session() -> Session:
    """A session with a seeded game."""
    return Session(seed=7)


@pytest.fixture
def session_manager() -> SessionManager:
    return SessionManager()

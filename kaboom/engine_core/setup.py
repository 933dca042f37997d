"""
Game Setup - Creates the initial game state.

This module handles:
- Building the deck
- Holding back hazards and shields from the deal
- Dealing 1 shield + 7 other cards to each seat
- Building and shuffling the draw pile

Every seat starts with exactly one shield, and no hazard can be dealt,
so nobody is eliminated before their first draw.
"""

from __future__ import annotations
import logging
import random

from .cards import CardKind, build_deck
from .shuffler import shuffle
from .state import GameState, Player, NUM_SEATS, DEFAULT_PLAYER_NAMES

logger = logging.getLogger(__name__)

HAND_SIZE = 8
FILLERS_PER_HAND = HAND_SIZE - 1


def new_game(
    rng: random.Random | None = None,
    seed: int | None = None,
    player_names: tuple[str, ...] | list[str] | None = None,
) -> GameState:
    """
    Set up a new game.

    Args:
        rng: Random source for both shuffles (created from seed if omitted)
        seed: Seed used when no rng is given
        player_names: Names for seats 0..3

    Returns:
        Initial GameState, seat 0 to act
    """
    rng = rng or random.Random(seed)
    names = list(player_names or DEFAULT_PLAYER_NAMES)
    if len(names) != NUM_SEATS:
        raise ValueError(f"Exactly {NUM_SEATS} player names required")

    deck = build_deck()
    hazards = [c for c in deck if c.kind == CardKind.HAZARD]
    shields = [c for c in deck if c.kind == CardKind.SHIELD]
    fillers = [c for c in deck if c.kind not in (CardKind.HAZARD, CardKind.SHIELD)]

    shuffle(fillers, rng)

    players: dict[int, Player] = {}
    for seat in range(NUM_SEATS):
        hand = [shields[seat]]
        hand.extend(fillers[:FILLERS_PER_HAND])
        del fillers[:FILLERS_PER_HAND]
        players[seat] = Player(seat=seat, name=names[seat], hand=hand)

    draw_pile = shields[NUM_SEATS:] + hazards + fillers
    shuffle(draw_pile, rng)

    logger.debug("New game: %d cards in draw pile", len(draw_pile))

    return GameState(
        players=players,
        draw_pile=draw_pile,
        discard_pile=[],
        current_seat=0,
        turn_number=1,
        turns_owed={seat: 1 for seat in range(NUM_SEATS)},
    )

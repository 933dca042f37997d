"""
Game State - The aggregate root for one game.

Design principles:
- One aggregate per game: a new game builds a new GameState
- The reducer is the only mutator; it works on a clone
- Pending decisions are explicit records, never globals
- Frozen once game_over is set

The draw pile's LAST element is the top of the deck (next card drawn).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
from copy import deepcopy

from .cards import Card, CardKind

NUM_SEATS = 4
HUMAN_SEAT = 0
COMPUTER_SEATS = (1, 2, 3)
DEFAULT_PLAYER_NAMES = ("You", "CPU 1", "CPU 2", "CPU 3")


@dataclass
class Player:
    """
    One seat at the table.

    Players are never removed; elimination is a one-way flag.
    """
    seat: int
    name: str
    hand: list[Card] = field(default_factory=list)
    eliminated: bool = False

    @property
    def is_human(self) -> bool:
        return self.seat == HUMAN_SEAT

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    def count(self, kind: CardKind) -> int:
        """Number of cards of a kind in hand."""
        return sum(1 for c in self.hand if c.kind == kind)

    def find(self, kind: CardKind) -> int | None:
        """Index of the first card of a kind, or None."""
        for i, card in enumerate(self.hand):
            if card.kind == kind:
                return i
        return None

    def matching_pairs(self, variant: str) -> list[int]:
        """Indices of pair cards of the given variant."""
        return [
            i for i, c in enumerate(self.hand)
            if c.kind == CardKind.PAIR and c.variant == variant
        ]


@dataclass
class PendingPlacement:
    """A defused hazard waiting to be put back in the draw pile."""
    card: Card
    owner: int


@dataclass
class PendingFavor:
    """A favor exchange waiting for the giver to choose a card."""
    requester: int
    giver: int


@dataclass
class ForesightReveal:
    """Top-of-deck preview; cards[0] is the next card to be drawn."""
    seat: int
    cards: list[Card] = field(default_factory=list)


@dataclass
class AttackNotice:
    """Tells the human seat it has been attacked."""
    attacker: int
    target: int
    turns_owed: int


@dataclass
class GameOver:
    """Terminal result. winner is None only if nobody survived."""
    winner: int | None
    reason: str


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    All state changes go through the reducer.
    """
    players: dict[int, Player] = field(default_factory=dict)
    draw_pile: list[Card] = field(default_factory=list)
    discard_pile: list[Card] = field(default_factory=list)

    current_seat: int = 0
    turn_number: int = 1
    turns_owed: dict[int, int] = field(default_factory=dict)

    # Decisions the game is waiting on
    pending_placement: PendingPlacement | None = None
    pending_favor: PendingFavor | None = None
    foresight: ForesightReveal | None = None
    attack_notice: AttackNotice | None = None

    game_over: GameOver | None = None

    # History (for replay, logging)
    action_history: list[Any] = field(default_factory=list)

    def get_player(self, seat: int) -> Player | None:
        """Get player by seat."""
        return self.players.get(seat)

    def alive_seats(self) -> list[int]:
        """Seats still in the game, in seat order."""
        return [s for s, p in sorted(self.players.items()) if not p.eliminated]

    def next_alive_seat(self, seat: int) -> int:
        """
        Next non-eliminated seat after `seat`, wrapping around.

        Returns `seat` itself if nobody else is alive.
        """
        num = len(self.players)
        nxt = seat
        for _ in range(num):
            nxt = (nxt + 1) % num
            if not self.players[nxt].eliminated:
                return nxt
        return seat

    def valid_targets(self, seat: int) -> list[int]:
        """Seats that Favor or a pair can target: alive, not self, holding cards."""
        return [
            s for s, p in sorted(self.players.items())
            if s != seat and not p.eliminated and p.hand
        ]

    def peek(self, n: int = 3) -> list[Card]:
        """Top n cards of the draw pile, next-to-draw first."""
        if n <= 0:
            return []
        return list(reversed(self.draw_pile[-n:]))

    def all_cards(self) -> list[Card]:
        """Every card in the game, wherever it currently sits."""
        cards: list[Card] = []
        for _, player in sorted(self.players.items()):
            cards.extend(player.hand)
        cards.extend(self.draw_pile)
        cards.extend(self.discard_pile)
        if self.pending_placement:
            cards.append(self.pending_placement.card)
        return cards

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)

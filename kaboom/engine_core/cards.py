"""
Card Catalog - Card kinds, deck composition, and deck construction.

The catalog is immutable. build_deck() hands out fresh Card instances;
cards then move between hands, the draw pile and the discard pile by
identity and are never modified.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class CardKind(Enum):
    """Kinds of card in the deck."""
    HAZARD = "hazard"
    SHIELD = "shield"
    SKIP = "skip"
    FAVOR = "favor"
    SHUFFLE = "shuffle"
    ATTACK = "attack"
    FORESIGHT = "foresight"
    PAIR = "pair"


# The five pair-card varieties, 4 copies each
PAIR_VARIANTS: tuple[str, ...] = (
    "Tacocat",
    "Rainbow-ralphing Cat",
    "Potato Cat",
    "Beard Cat",
    "Cattermelon",
)

COPIES_PER_VARIANT = 4

DECK_COMPOSITION: dict[CardKind, int] = {
    CardKind.HAZARD: 3,
    CardKind.SHIELD: 6,
    CardKind.SKIP: 4,
    CardKind.FAVOR: 4,
    CardKind.SHUFFLE: 4,
    CardKind.ATTACK: 4,
    CardKind.FORESIGHT: 5,
    CardKind.PAIR: len(PAIR_VARIANTS) * COPIES_PER_VARIANT,
}

DECK_SIZE = sum(DECK_COMPOSITION.values())

CARD_NAMES: dict[CardKind, str] = {
    CardKind.HAZARD: "Exploding Kitten",
    CardKind.SHIELD: "Defuse",
    CardKind.SKIP: "Skip",
    CardKind.FAVOR: "Favor",
    CardKind.SHUFFLE: "Shuffle",
    CardKind.ATTACK: "Attack",
    CardKind.FORESIGHT: "See the Future",
    CardKind.PAIR: "Cat Card",
}

CARD_DESCRIPTIONS: dict[CardKind, str] = {
    CardKind.HAZARD: "Explode unless you have a Defuse card",
    CardKind.SHIELD: "Defuse an Exploding Kitten",
    CardKind.SKIP: "End your turn without drawing",
    CardKind.FAVOR: "Force a player to give you a card",
    CardKind.SHUFFLE: "Shuffle the draw pile",
    CardKind.ATTACK: "End turn, next player takes an extra turn",
    CardKind.FORESIGHT: "Peek at the top 3 cards of the deck",
    CardKind.PAIR: "Play 2 matching cats to steal a random card",
}


@dataclass(frozen=True)
class Card:
    """
    A card instance.

    Identity is the card_id; two cards of the same kind and variant are
    still distinct cards.
    """
    kind: CardKind
    card_id: str
    variant: str | None = None

    def __hash__(self):
        return hash(self.card_id)

    def __eq__(self, other):
        if not isinstance(other, Card):
            return False
        return self.card_id == other.card_id

    @property
    def name(self) -> str:
        """Display name (the variant for pair cards)."""
        if self.kind == CardKind.PAIR and self.variant:
            return self.variant
        return CARD_NAMES[self.kind]

    @property
    def description(self) -> str:
        return CARD_DESCRIPTIONS[self.kind]

    def __str__(self) -> str:
        return self.name


def build_deck() -> list[Card]:
    """
    Build the full 50-card deck, unshuffled.

    Card ids are sequential ("card-00" .. "card-49") and unique within
    the deck. The caller is responsible for shuffling.
    """
    deck: list[Card] = []

    def next_id() -> str:
        return f"card-{len(deck):02d}"

    for kind, count in DECK_COMPOSITION.items():
        if kind == CardKind.PAIR:
            for variant in PAIR_VARIANTS:
                for _ in range(COPIES_PER_VARIANT):
                    deck.append(Card(kind=kind, card_id=next_id(), variant=variant))
        else:
            for _ in range(count):
                deck.append(Card(kind=kind, card_id=next_id()))

    return deck


def count_kind(cards: list[Card], kind: CardKind) -> int:
    """Count cards of a kind in a list."""
    return sum(1 for c in cards if c.kind == kind)

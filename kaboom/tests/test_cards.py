"""
Tests for the card catalog and the shuffler.
"""

import random
from collections import Counter

from ..engine_core.cards import (
    Card,
    CardKind,
    PAIR_VARIANTS,
    DECK_COMPOSITION,
    DECK_SIZE,
    build_deck,
    count_kind,
)
from ..engine_core.shuffler import shuffle


class TestDeck:
    """Tests for deck construction."""

    def test_deck_has_fifty_cards(self):
        assert DECK_SIZE == 50
        assert len(build_deck()) == 50

    def test_composition(self):
        deck = build_deck()
        counts = Counter(card.kind for card in deck)
        assert counts == DECK_COMPOSITION
        assert counts[CardKind.HAZARD] == 3
        assert counts[CardKind.SHIELD] == 6
        assert counts[CardKind.FORESIGHT] == 5

    def test_four_of_each_pair_variant(self):
        deck = build_deck()
        variants = Counter(card.variant for card in deck if card.kind == CardKind.PAIR)
        assert set(variants) == set(PAIR_VARIANTS)
        assert all(n == 4 for n in variants.values())

    def test_only_pair_cards_have_variants(self):
        for card in build_deck():
            assert (card.variant is not None) == (card.kind == CardKind.PAIR)

    def test_ids_are_unique(self):
        deck = build_deck()
        assert len({card.card_id for card in deck}) == len(deck)

    def test_each_build_is_fresh(self):
        """Building twice gives equal, but separate, card lists."""
        first, second = build_deck(), build_deck()
        assert first == second
        assert first is not second

    def test_count_kind(self):
        assert count_kind(build_deck(), CardKind.ATTACK) == 4
        assert count_kind([], CardKind.ATTACK) == 0


class TestCard:
    """Tests for card identity and display."""

    def test_equality_is_by_id(self):
        a = Card(kind=CardKind.SKIP, card_id="card-01")
        b = Card(kind=CardKind.SKIP, card_id="card-01")
        c = Card(kind=CardKind.SKIP, card_id="card-02")
        assert a == b
        assert a != c
        assert len({a, b, c}) == 2

    def test_pair_card_name_is_variant(self):
        card = Card(kind=CardKind.PAIR, card_id="card-30", variant="Tacocat")
        assert card.name == "Tacocat"

    def test_names(self):
        assert Card(kind=CardKind.HAZARD, card_id="x").name == "Exploding Kitten"
        assert Card(kind=CardKind.SHIELD, card_id="y").name == "Defuse"
        assert Card(kind=CardKind.FORESIGHT, card_id="z").description


class TestShuffle:
    """Tests for the Fisher-Yates shuffler."""

    def test_result_is_permutation(self):
        deck = build_deck()
        ids = sorted(card.card_id for card in deck)
        shuffle(deck, random.Random(3))
        assert sorted(card.card_id for card in deck) == ids

    def test_shuffles_in_place(self):
        items = list(range(10))
        result = shuffle(items, random.Random(0))
        assert result is items

    def test_same_seed_same_order(self):
        a = shuffle(list(range(20)), random.Random(99))
        b = shuffle(list(range(20)), random.Random(99))
        assert a == b

    def test_actually_reorders(self):
        """With 20 items some seed in a handful must move something."""
        original = list(range(20))
        assert any(
            shuffle(list(original), random.Random(seed)) != original
            for seed in range(5)
        )

    def test_empty_and_single(self):
        assert shuffle([], random.Random(1)) == []
        assert shuffle(["only"], random.Random(1)) == ["only"]

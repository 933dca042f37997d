"""
Tests for game setup (dealing and the initial draw pile).
"""

import random

import pytest

from ..engine_core.cards import CardKind
from ..engine_core.invariants import check_invariants
from ..engine_core.setup import new_game, HAND_SIZE
from ..engine_core.state import NUM_SEATS, HUMAN_SEAT


class TestDeal:
    """Tests for the deal."""

    def test_every_hand_has_eight_cards(self, fresh_state):
        for player in fresh_state.players.values():
            assert len(player.hand) == HAND_SIZE

    def test_every_hand_has_exactly_one_shield(self, fresh_state):
        for player in fresh_state.players.values():
            assert player.count(CardKind.SHIELD) == 1

    def test_no_hazard_is_dealt(self, fresh_state):
        for player in fresh_state.players.values():
            assert player.count(CardKind.HAZARD) == 0

    def test_draw_pile_contents(self, fresh_state):
        """2 spare shields, all 3 hazards, and the undealt rest."""
        pile = fresh_state.draw_pile
        assert len(pile) == 50 - NUM_SEATS * HAND_SIZE
        assert sum(1 for c in pile if c.kind == CardKind.HAZARD) == 3
        assert sum(1 for c in pile if c.kind == CardKind.SHIELD) == 2

    def test_initial_bookkeeping(self, fresh_state):
        state = fresh_state
        assert state.current_seat == HUMAN_SEAT
        assert state.turn_number == 1
        assert state.turns_owed == {0: 1, 1: 1, 2: 1, 3: 1}
        assert state.discard_pile == []
        assert state.pending_placement is None
        assert state.pending_favor is None
        assert state.foresight is None
        assert state.game_over is None
        assert not any(p.eliminated for p in state.players.values())

    def test_initial_state_is_consistent(self, fresh_state):
        assert check_invariants(fresh_state) == []

    def test_default_names(self, fresh_state):
        names = [fresh_state.players[s].name for s in range(NUM_SEATS)]
        assert names == ["You", "CPU 1", "CPU 2", "CPU 3"]
        assert fresh_state.players[HUMAN_SEAT].is_human


class TestSetupOptions:
    """Tests for seeding and naming."""

    def test_same_seed_same_deal(self):
        a, b = new_game(seed=5), new_game(seed=5)
        assert [c.card_id for c in a.draw_pile] == [c.card_id for c in b.draw_pile]
        assert [c.card_id for c in a.players[0].hand] == [c.card_id for c in b.players[0].hand]

    def test_rng_takes_precedence(self):
        a = new_game(rng=random.Random(8), seed=1)
        b = new_game(rng=random.Random(8), seed=2)
        assert [c.card_id for c in a.draw_pile] == [c.card_id for c in b.draw_pile]

    def test_custom_names(self):
        state = new_game(seed=1, player_names=["Ada", "B", "C", "D"])
        assert state.players[0].name == "Ada"

    def test_wrong_number_of_names_rejected(self):
        with pytest.raises(ValueError):
            new_game(seed=1, player_names=["Solo"])

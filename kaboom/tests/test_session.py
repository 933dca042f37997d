"""
Tests for sessions: human move intake, favor suspension, reset.
"""

import logging
import threading
import time

import pytest

from ..bots import FirstLegalPolicy
from ..bots.personality import personality_for
from ..engine_core.action import Action, ActionType, ErrorCode, Outcome
from ..engine_core.cards import CardKind
from ..engine_core.errors import DeckExhaustedError
from ..engine_core.state import COMPUTER_SEATS, GameOver
from ..session import Session, SessionState, LoopState


TACO = (CardKind.PAIR, "Tacocat")


def scripted(session, state):
    session.state = state
    session.bots = {seat: FirstLegalPolicy() for seat in COMPUTER_SEATS}
    return session


class TestNewSession:
    """Tests for a freshly created session."""

    def test_human_starts(self, session):
        assert session.status == SessionState.YOUR_TURN
        assert session.is_human_turn()
        assert session.is_active()
        assert len(session.state.players[0].hand) == 8

    def test_observer_called_on_deal(self):
        seen = []
        Session(seed=1, observer=seen.append)
        assert len(seen) == 1
        assert seen[0].turn_number == 1

    def test_same_seed_same_game(self):
        a, b = Session(seed=3), Session(seed=3)
        assert [c.card_id for c in a.state.draw_pile] == [c.card_id for c in b.state.draw_pile]
        assert a.session_id != b.session_id

    def test_new_game_replaces_state(self, session):
        old = session.state
        session.draw()

        fresh = session.new_game()

        assert fresh is session.state
        assert fresh is not old
        assert fresh.turn_number == 1
        assert fresh.action_history == []
        assert [c.card_id for c in fresh.draw_pile] == [c.card_id for c in old.draw_pile]
        assert session.last_turn is None


class TestMoveIntake:
    """Tests for play_card/draw/... on the session."""

    def test_draw_runs_computer_seats(self, session):
        result = session.draw()

        assert result.success
        assert session.status != SessionState.COMPUTER_TURN
        assert session.last_turn is not None
        assert session.last_turn.loop_state != LoopState.STALLED

    def test_bad_index(self, session):
        before = session.state
        result = session.play_card(99)
        assert result.error_code == ErrorCode.ILLEGAL_CARD_INDEX
        assert session.state is before

    def test_shield_is_unplayable(self, session, rig):
        scripted(session, rig(hands={0: [CardKind.SHIELD]}))
        result = session.play_card(0)
        assert result.error_code == ErrorCode.UNPLAYABLE_CARD

    def test_favor_needs_target(self, session, rig):
        scripted(session, rig(hands={0: [CardKind.FAVOR], 1: [CardKind.SKIP]}))
        result = session.play_card(0)
        assert result.error_code == ErrorCode.ILLEGAL_TARGET

    def test_favor_on_computer(self, session, rig):
        scripted(session, rig(hands={0: [CardKind.FAVOR], 1: [CardKind.ATTACK]}))

        result = session.play_card(0, target=1)

        assert result.outcome == Outcome.FAVOR_RECEIVED
        assert [c.kind for c in session.state.players[0].hand] == [CardKind.ATTACK]
        assert session.status == SessionState.YOUR_TURN

    def test_cat_with_target_plays_pair(self, session, rig):
        scripted(session, rig(hands={0: [TACO, TACO], 2: [CardKind.SKIP]}))
        result = session.play_card(1, target=2)
        assert result.outcome == Outcome.STOLEN
        assert session.state.action_history[-1].action_type == ActionType.PLAY_PAIR

    def test_cat_without_target_is_single(self, session, rig):
        scripted(session, rig(hands={0: [TACO, TACO]}))
        result = session.play_card(0)
        assert result.outcome == Outcome.DISCARDED
        assert len(session.state.players[0].hand) == 1

    def test_defuse_then_place(self, session, rig):
        scripted(session, rig(hands={0: [CardKind.SHIELD]}, top=[CardKind.HAZARD, CardKind.SKIP]))

        assert session.draw().outcome == Outcome.DEFUSED
        assert session.status == SessionState.PLACE_HAZARD
        assert session.draw().error_code == ErrorCode.BLOCKED_BY_PENDING

        n = len(session.state.draw_pile)
        result = session.place_hazard(n)

        assert result.outcome == Outcome.PLACED
        assert session.state.draw_pile[0].kind == CardKind.HAZARD
        # CPU 1 drew the Skip; the rest is up to the deck
        assert session.last_turn.automa_actions[0] == "CPU 1: draw"

    def test_only_human_moves_accepted(self, session):
        result = session.submit(Action.draw(1))
        assert result.error_code == ErrorCode.OUT_OF_TURN

    def test_foresight_and_dismiss(self, session, rig):
        scripted(session, rig(hands={0: [CardKind.FORESIGHT]}, top=[CardKind.SKIP] * 3))

        session.play_card(0)
        assert len(session.state.foresight.cards) == 3

        assert session.dismiss_foresight().success
        assert session.state.foresight is None

    def test_attack_notice(self, session, rig):
        # Human skips; CPU 1..3 play their first legal move (CPU 3 attacks)
        state = rig(
            hands={0: [CardKind.SKIP, CardKind.SHIELD], 3: [CardKind.ATTACK]},
            top=[CardKind.SKIP, CardKind.SKIP],
        )
        scripted(session, state)

        session.play_card(0)

        assert session.state.attack_notice.attacker == 3
        assert session.state.turns_owed[0] == 2
        assert session.dismiss_attack_notice().success
        assert session.state.attack_notice is None


class TestFavorSuspension:
    """A computer seat asks the human for a favor."""

    def _waiting(self, session, rig):
        state = rig(
            hands={0: [CardKind.SKIP, CardKind.SHIELD], 1: [CardKind.FAVOR]},
            top=[CardKind.SKIP, CardKind.SKIP, CardKind.SKIP],
        )
        scripted(session, state)
        session.play_card(0)
        return session

    def test_loop_suspends(self, session, rig):
        self._waiting(session, rig)

        assert session.last_turn.loop_state == LoopState.WAITING_FAVOR
        assert session.status == SessionState.GIVE_FAVOR
        assert session.state.current_seat == 1

    def test_human_cannot_do_anything_else(self, session, rig):
        self._waiting(session, rig)
        assert session.draw().error_code == ErrorCode.BLOCKED_BY_PENDING

    def test_resolving_resumes_computer_turns(self, session, rig):
        self._waiting(session, rig)

        result = session.resolve_favor(0)

        assert result.outcome == Outcome.FAVOR_RESOLVED
        assert result.card.kind == CardKind.SHIELD
        assert session.state.pending_favor is None
        assert session.last_turn.loop_state == LoopState.WAITING_HUMAN_ACTION
        assert session.last_turn.automa_actions == ["CPU 1: draw", "CPU 2: draw", "CPU 3: draw"]
        assert session.status == SessionState.YOUR_TURN
        assert session.state.players[0].hand == []
        assert [c.kind for c in session.state.players[1].hand] == [CardKind.SHIELD, CardKind.SKIP]


class TestDelayHook:
    """The thinking delay is an optional hook."""

    def test_hook_called_per_computer_move(self, session, rig):
        calls = []
        session.delay_hook = lambda seat, delay: calls.append((seat, delay))
        scripted(session, rig(hands={0: [CardKind.SKIP]}, top=[CardKind.SKIP] * 3))

        session.play_card(0)

        assert [seat for seat, _ in calls] == [1, 2, 3]
        for seat, delay in calls:
            p = personality_for(seat)
            assert p.min_delay <= delay <= p.max_delay


class TestConcurrentMoves:
    """Moves arriving from two threads are applied one at a time."""

    def test_history_grows_by_one_per_commit(self, session, rig):
        scripted(session, rig(top=[CardKind.SKIP] * 4))
        thinking = threading.Event()

        def slow_think(seat, delay):
            thinking.set()
            time.sleep(0.05)

        lengths = []
        session.delay_hook = slow_think
        session.observer = lambda state: lengths.append(len(state.action_history))

        worker = threading.Thread(target=session.draw)
        worker.start()
        assert thinking.wait(timeout=5)
        session.dismiss_foresight()
        worker.join(timeout=5)

        assert not worker.is_alive()
        assert lengths == list(range(1, len(lengths) + 1))
        assert len(session.state.action_history) == len(lengths)
        assert session.state.action_history[:4] == [
            Action.draw(0), Action.draw(1), Action.draw(2), Action.draw(3),
        ]

    def test_new_game_waits_for_running_move(self, session, rig):
        scripted(session, rig(top=[CardKind.SKIP] * 4))
        thinking = threading.Event()

        def slow_think(seat, delay):
            thinking.set()
            time.sleep(0.05)

        session.delay_hook = slow_think
        worker = threading.Thread(target=session.draw)
        worker.start()
        assert thinking.wait(timeout=5)
        fresh = session.new_game()
        worker.join(timeout=5)

        assert session.state is fresh
        assert fresh.action_history == []


class TestBrokenGame:
    """A draw from an empty pile is logged against the session."""

    def test_empty_pile_logged_with_session_id(self, session, rig, caplog):
        state = rig()
        state.draw_pile = []
        scripted(session, state)

        with caplog.at_level(logging.ERROR):
            with pytest.raises(DeckExhaustedError):
                session.draw()

        assert session.session_id in caplog.text
        assert session.state is state


class TestSessionManager:
    """Tests for the in-memory session registry."""

    def test_create_and_get(self, session_manager):
        session = session_manager.create_session(seed=1)
        assert session_manager.get_session(session.session_id) is session
        assert session_manager.get_session("missing") is None

    def test_end_session(self, session_manager):
        session = session_manager.create_session()
        assert session_manager.end_session(session.session_id)
        assert not session_manager.end_session(session.session_id)
        assert session_manager.list_sessions() == []

    def test_list_sessions(self, session_manager):
        a = session_manager.create_session()
        b = session_manager.create_session()
        b.state.game_over = GameOver(winner=0, reason="test")

        assert set(session_manager.list_sessions()) == {a.session_id, b.session_id}
        assert session_manager.list_active_sessions() == [a.session_id]

    def test_cleanup_stale_sessions(self, session_manager):
        old_done = session_manager.create_session()
        old_done.created_at = time.time() - 7200
        old_done.state.game_over = GameOver(winner=0, reason="test")
        old_running = session_manager.create_session()
        old_running.created_at = time.time() - 7200

        assert session_manager.cleanup_stale_sessions(max_age_seconds=3600) == 1
        assert session_manager.list_sessions() == [old_running.session_id]

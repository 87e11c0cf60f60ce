"""
Tests for session management.

Tests:
- Session creation wires board, layout and loop
- Session state follows the game
- Ending and stale cleanup
"""

import asyncio
import time
from dataclasses import replace

from ..engine_core.dice import ScriptedDice
from ..engine_core.state import Difficulty, GameOutcome
from ..session import LoopState, SessionState


class TestSessionManager:
    """Tests for SessionManager."""

    def test_create_session(self, session_manager):
        session = session_manager.create_session(difficulty=Difficulty.MEDIUM, seed=3)
        assert session.session_id
        assert session.state == SessionState.CREATED
        assert session.is_active()
        assert len(session.machine.board) == 40
        assert session.machine.economy.difficulty == Difficulty.MEDIUM
        assert session.loop.state == LoopState.WAITING_ROLL

    def test_layout_computed_for_every_tile(self, session_manager):
        session = session_manager.create_session(seed=5)
        positions = session.layout.get_all_positions()
        assert len(positions) == len(session.machine.board)
        assert positions[0].x == 0 and positions[0].y == 0

    def test_sessions_are_independent(self, session_manager):
        a = session_manager.create_session(seed=1, dice=ScriptedDice([3]))
        b = session_manager.create_session(seed=1, dice=ScriptedDice([5]))
        asyncio.run(a.loop.roll())
        assert a.machine.economy.turn == 1
        assert b.machine.economy.turn == 0
        assert a.machine.board is not b.machine.board

    def test_state_becomes_active_after_roll(self, session_manager):
        session = session_manager.create_session(seed=2, dice=ScriptedDice([1]))
        asyncio.run(session.loop.roll())
        assert session.state == SessionState.ACTIVE

    def test_get_session(self, session_manager):
        session = session_manager.create_session()
        assert session_manager.get_session(session.session_id) is session
        assert session_manager.get_session("missing") is None

    def test_end_session(self, session_manager):
        session = session_manager.create_session()
        assert session_manager.end_session(session.session_id, reason="left")
        assert session_manager.get_session(session.session_id) is None
        assert session.state == SessionState.ABANDONED
        assert session.ended_reason == "left"
        assert session.loop.state == LoopState.CLOSED
        assert not session_manager.end_session(session.session_id)

    def test_list_sessions(self, session_manager):
        a = session_manager.create_session()
        b = session_manager.create_session()
        assert set(session_manager.list_sessions()) == {a.session_id, b.session_id}
        assert set(session_manager.list_active_sessions()) == {a.session_id, b.session_id}

    def test_finished_session_not_listed_as_active(self, session_manager):
        session = session_manager.create_session()
        session.machine.outcome = GameOutcome.CAUGHT
        assert session.state == SessionState.GAME_OVER
        assert session.session_id not in session_manager.list_active_sessions()
        assert session.session_id in session_manager.list_sessions()

    def test_cleanup_stale_sessions(self, session_manager):
        finished = session_manager.create_session()
        finished.machine.outcome = GameOutcome.CAUGHT
        finished.created_at = time.time() - 7200
        playing = session_manager.create_session()
        playing.created_at = time.time() - 7200
        fresh = session_manager.create_session()
        fresh.machine.outcome = GameOutcome.CAUGHT

        removed = session_manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == 1
        assert session_manager.get_session(finished.session_id) is None
        assert session_manager.get_session(playing.session_id) is playing
        assert session_manager.get_session(fresh.session_id) is fresh

    def test_per_session_config_override(self, session_manager, fast_config):
        session = session_manager.create_session(config=replace(fast_config, tile_count=7))
        assert len(session.machine.board) == 7
        assert session.config.tile_count == 7

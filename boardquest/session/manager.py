"""
Session Manager - Creates and manages board sessions.

LIFECYCLE:
1. Player starts a game -> new session with a freshly generated board
2. During the game:
   - Roll / move commands go through the session's game loop
   - Puzzle screens report back through complete_minigame
3. Game ends (end tile or caught), or the player navigates away
   -> session ended, pending delays cancelled, state dropped

PERSISTENCE RULES:
- Everything is in memory and scoped to one session
- No two sessions share a board, tokens or economy
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable
import logging
import time
import uuid

from ..config import EngineConfig
from ..engine_core.dice import DiceSource
from ..engine_core.layout import BoardLayout
from ..engine_core.machine import TurnStateMachine
from ..engine_core.state import Difficulty
from .collaborators import Sleeper, ScreenSwitcher, AsyncioSleeper, RecordingScreenSwitcher
from .game_loop import BoardGameLoop

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    CREATED = "created"  # Board generated, nothing rolled yet
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # End tile reached or player caught
    ABANDONED = "abandoned"  # Ended before the game finished


@dataclass
class Session:
    """
    One play-through.

    Owns the state machine (board, tokens, economy) and the loop that
    paces it. The layout is computed once at creation for renderers.
    """
    session_id: str
    created_at: float
    config: EngineConfig
    machine: TurnStateMachine
    loop: BoardGameLoop
    layout: BoardLayout
    seed: int | None = None
    ended_reason: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def state(self) -> SessionState:
        if self.machine.is_finished:
            return SessionState.GAME_OVER
        if self.ended_reason is not None:
            return SessionState.ABANDONED
        if self.machine.economy.turn == 0:
            return SessionState.CREATED
        return SessionState.ACTIVE

    def is_active(self) -> bool:
        """Check if session is still playable."""
        return self.state in {SessionState.CREATED, SessionState.ACTIVE}


class SessionManager:
    """
    Manages board sessions.

    Responsibilities:
    - Create sessions with a generated board and fresh economy
    - Track sessions by id
    - Tear sessions down (cancelling pending delays)

    No persistence - sessions are in-memory only.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        sleeper_factory: Callable[[], Sleeper] = AsyncioSleeper,
        screen_switcher_factory: Callable[[], ScreenSwitcher] = RecordingScreenSwitcher,
    ):
        self.config = (config or EngineConfig()).validate()
        self.sleeper_factory = sleeper_factory
        self.screen_switcher_factory = screen_switcher_factory
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        difficulty: Difficulty = Difficulty.EASY,
        seed: int | None = None,
        dice: DiceSource | None = None,
        config: EngineConfig | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            difficulty: Puzzle difficulty for this play-through
            seed: Seed for board generation and dice (random if None)
            dice: Replacement dice source, e.g. ScriptedDice in tests
            config: Per-session override of the manager's config

        Returns:
            New Session ready for its first roll
        """
        session_config = (config or self.config).validate()
        machine = TurnStateMachine.create(session_config, seed=seed, dice=dice, difficulty=difficulty)

        layout = BoardLayout(session_config.tile_offset)
        layout.compute_positions(machine.board)

        loop = BoardGameLoop(
            machine,
            sleeper=self.sleeper_factory(),
            screen_switcher=self.screen_switcher_factory(),
            delays=session_config.delays,
        )

        session = Session(
            session_id=str(uuid.uuid4()),
            created_at=time.time(),
            config=session_config,
            machine=machine,
            loop=loop,
            layout=layout,
            seed=seed,
        )
        self._sessions[session.session_id] = session
        logger.info(
            "Session %s created: %d tiles, difficulty %s",
            session.session_id, len(machine.board), difficulty.value,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and clean up.

        Pending delays are cancelled before the session is dropped.
        Returns False if there was no such session.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False

        session.ended_reason = reason
        session.loop.close()
        logger.info("Session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions that can still be played."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def list_sessions(self) -> list[str]:
        return list(self._sessions.keys())

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End sessions older than max_age that are no longer playable.

        Returns how many were removed.
        """
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)

"""
Session Module - Manages ephemeral board sessions.

A session represents one play-through:
- Created when the player starts a game
- Owns the board, tokens and economy
- Paces turns through the async game loop
- Destroyed when the game ends or the player leaves

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import BoardGameLoop, LoopState, TurnResult
from .collaborators import (
    Sleeper,
    AsyncioSleeper,
    NoDelaySleeper,
    ScreenSwitcher,
    RecordingScreenSwitcher,
)

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "BoardGameLoop",
    "LoopState",
    "TurnResult",
    "Sleeper",
    "AsyncioSleeper",
    "NoDelaySleeper",
    "ScreenSwitcher",
    "RecordingScreenSwitcher",
]

"""
API Module - Presentation client interface.

Exposes the board engine via REST. A client:
1. Starts a session
2. Fetches the board to render it
3. Issues roll / move commands and mirrors the results
4. Reports puzzle results after a minigame hand-off

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    MinigameResultRequest,
    # Responses
    SessionResponse,
    BoardResponse,
    RollResponse,
    MoveResponse,
    MinigameResultResponse,
    ErrorResponse,
    # Enums
    ErrorCode,
    SessionStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "MinigameResultRequest",
    # Responses
    "SessionResponse",
    "BoardResponse",
    "RollResponse",
    "MoveResponse",
    "MinigameResultResponse",
    "ErrorResponse",
    # Enums
    "ErrorCode",
    "SessionStatus",
    # Service
    "APIService",
    "create_app",
]

"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a presentation client and the
board engine. The client renders from BoardResponse and mirrors every
command result; it never computes game rules itself.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has been ended
- INVALID_PHASE: Command issued out of turn order
- SESSION_BUSY: Another command is still running its delays
- SESSION_CLOSED: Session was torn down while the command waited
- VALIDATION_ERROR: Request body is invalid
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    CREATED = "created"
    ACTIVE = "active"
    GAME_OVER = "game_over"
    ABANDONED = "abandoned"


class DifficultyLevel(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class MinigameName(str, Enum):
    PIZZA = "pizza"
    SPACE_RESCUE = "space_rescue"
    EQUATION = "equation"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_PHASE = "INVALID_PHASE"
    SESSION_BUSY = "SESSION_BUSY"
    SESSION_CLOSED = "SESSION_CLOSED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class TileInfo(BaseModel):
    """One tile with its layout position."""
    tile_id: str
    index: int = Field(description="Progress index; 0 is the start tile")
    tile_type: str = Field(description="normal, end, minigame1, minigame2 or minigame3")
    x: Optional[int] = None
    y: Optional[int] = None
    successors: dict[str, str] = Field(
        default_factory=dict, description="direction -> tile_id"
    )


class TokenInfo(BaseModel):
    name: str
    tile_id: str
    progress: int
    visible: bool = True


class BoardStateInfo(BaseModel):
    """Snapshot of the turn state machine."""
    phase: str
    pending_roll: int
    bonus_roll: int
    turn: int
    difficulty: DifficultyLevel
    player: TokenInfo
    pursuer: TokenInfo
    awaiting_pursuer: bool = False
    outcome: Optional[str] = None


class ScreenInfo(BaseModel):
    screen: str
    reason: Optional[str] = None


class PursuerInfo(BaseModel):
    visible: bool
    revealed: bool
    roll: Optional[int] = None
    steps_taken: int = 0
    progress: int
    caught: bool


class StepInfo(BaseModel):
    tile_id: str
    progress: int
    moved: bool
    used_bonus: bool
    pending_roll: int
    bonus_roll: int


class BoundsInfo(BaseModel):
    min_x: int
    min_y: int
    max_x: int
    max_y: int


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to start a new board session."""
    difficulty: DifficultyLevel = Field(DifficultyLevel.EASY, description="Puzzle difficulty")
    seed: Optional[int] = Field(None, description="Seed for a reproducible board and dice")
    tile_count: Optional[int] = Field(
        None, ge=1, le=500, description="Override the configured board length"
    )


class MinigameResultRequest(BaseModel):
    """Result reported by a puzzle screen."""
    minigame: MinigameName
    solved: bool


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    api_version: str = Field("v1", description="API version")


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    tile_count: int
    state: BoardStateInfo
    created_at: float = 0.0
    api_version: str = "v1"


class BoardResponse(BaseModel):
    """The whole board, ready to render."""
    session_id: str
    tiles: list[TileInfo] = Field(default_factory=list)
    start_tile_id: str
    end_tile_id: str
    first_minigame_tile_id: str
    tile_offset: int
    bounds: Optional[BoundsInfo] = None
    api_version: str = "v1"


class RollResponse(BaseModel):
    session_id: str
    roll: int
    turn: int
    pursuer: PursuerInfo
    screen: Optional[ScreenInfo] = None
    state: BoardStateInfo
    events: list[str] = Field(default_factory=list)
    api_version: str = "v1"


class MoveResponse(BaseModel):
    session_id: str
    steps: list[StepInfo] = Field(default_factory=list)
    landed_tile_id: str
    landed_tile_type: str
    screen: Optional[ScreenInfo] = None
    state: BoardStateInfo
    events: list[str] = Field(default_factory=list)
    api_version: str = "v1"


class MinigameResultResponse(BaseModel):
    session_id: str
    bonus_awarded: int
    bonus_roll: int
    screen: ScreenInfo
    state: BoardStateInfo
    api_version: str = "v1"


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    sessions: list[str] = Field(default_factory=list)
    count: int = 0
    api_version: str = "v1"


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str
    active_sessions: int = 0

"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine calls
2. Manages sessions
3. Turns engine errors into structured error responses
4. Formats board data for renderers

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import asdict, dataclass, field, replace
import logging

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
    # Shared
    TileInfo,
    TokenInfo,
    BoardStateInfo,
    ScreenInfo,
    PursuerInfo,
    StepInfo,
    BoundsInfo,
    # Enums
    SessionStatus,
    DifficultyLevel,
    MinigameName,
    ErrorCode,
)
from ..config import EngineConfig
from ..engine_core.action import ScreenDescriptor
from ..engine_core.errors import EngineError, InvalidPhaseTransition, LoopBusy, SessionClosed
from ..engine_core.state import Difficulty
from ..engine_core.tile import MinigameVariant
from ..session import NoDelaySleeper, SessionManager, Session

logger = logging.getLogger(__name__)

MINIGAME_VARIANTS = {
    MinigameName.PIZZA: MinigameVariant.PIZZA,
    MinigameName.SPACE_RESCUE: MinigameVariant.SPACE_RESCUE,
    MinigameName.EQUATION: MinigameVariant.EQUATION,
}


def _error_for(exc: EngineError) -> ErrorResponse:
    if isinstance(exc, LoopBusy):
        code = ErrorCode.SESSION_BUSY
    elif isinstance(exc, SessionClosed):
        code = ErrorCode.SESSION_CLOSED
    elif isinstance(exc, InvalidPhaseTransition):
        code = ErrorCode.INVALID_PHASE
    else:
        code = ErrorCode.INTERNAL_ERROR
    return ErrorResponse(error=str(exc), error_code=code)


def _not_found(session_id: str) -> ErrorResponse:
    return ErrorResponse(
        error=f"Session {session_id} not found",
        error_code=ErrorCode.SESSION_NOT_FOUND,
    )


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        session = service.create_session(CreateSessionRequest(seed=4))
        board = service.get_board(session.session_id)

        rolled = await service.roll(session.session_id)
        moved = await service.move(session.session_id)
    """
    session_manager: SessionManager = field(
        default_factory=lambda: SessionManager(
            config=EngineConfig.from_env(), sleeper_factory=NoDelaySleeper
        )
    )

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """Create a new board session."""
        config = None
        if request.tile_count is not None:
            config = replace(self.session_manager.config, tile_count=request.tile_count)

        session = self.session_manager.create_session(
            difficulty=Difficulty(request.difficulty.value),
            seed=request.seed,
            config=config,
        )
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)
        return self._session_to_response(session)

    def get_board(self, session_id: str) -> BoardResponse | ErrorResponse:
        """Tiles with layout positions for rendering."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        board = session.machine.board
        tiles = []
        for tile in board:
            position = session.layout.get_position(tile)
            tiles.append(TileInfo(
                tile_id=tile.tile_id,
                index=tile.index,
                tile_type=tile.tile_type.label,
                x=position.x if position else None,
                y=position.y if position else None,
                successors={
                    direction.value: board.tile(target).tile_id
                    for direction, target in tile.successors.edges()
                },
            ))

        bounds = session.layout.bounds()
        return BoardResponse(
            session_id=session_id,
            tiles=tiles,
            start_tile_id=board.start.tile_id,
            end_tile_id=board.end.tile_id,
            first_minigame_tile_id=board.first_minigame.tile_id,
            tile_offset=session.layout.step,
            bounds=BoundsInfo(**asdict(bounds)) if bounds else None,
        )

    async def roll(self, session_id: str) -> RollResponse | ErrorResponse:
        """Roll the dice and run the pursuer turn."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        try:
            result = await session.loop.roll()
        except EngineError as e:
            logger.warning("Roll rejected for %s: %s", session_id, e)
            return _error_for(e)

        pursuer = result.pursuer
        return RollResponse(
            session_id=session_id,
            roll=result.roll.value,
            turn=result.roll.turn,
            pursuer=PursuerInfo(
                visible=pursuer.visible,
                revealed=pursuer.revealed,
                roll=pursuer.roll,
                steps_taken=pursuer.steps_taken,
                progress=pursuer.progress,
                caught=pursuer.caught,
            ),
            screen=self._screen_info(result.screen),
            state=self._state_info(session),
            events=result.events,
        )

    async def move(self, session_id: str) -> MoveResponse | ErrorResponse:
        """Spend the pending roll and resolve the landing tile."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        try:
            result = await session.loop.move()
        except EngineError as e:
            logger.warning("Move rejected for %s: %s", session_id, e)
            return _error_for(e)

        landed = session.machine.player.current_tile
        return MoveResponse(
            session_id=session_id,
            steps=[
                StepInfo(
                    tile_id=step.tile_id,
                    progress=step.progress,
                    moved=step.moved,
                    used_bonus=step.used_bonus,
                    pending_roll=step.pending_roll,
                    bonus_roll=step.bonus_roll,
                )
                for step in result.steps
            ],
            landed_tile_id=landed.tile_id,
            landed_tile_type=landed.tile_type.label,
            screen=self._screen_info(result.screen),
            state=self._state_info(session),
            events=result.events,
        )

    def complete_minigame(
        self,
        session_id: str,
        request: MinigameResultRequest,
    ) -> MinigameResultResponse | ErrorResponse:
        """Credit the board with a puzzle result."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return _not_found(session_id)

        try:
            result = session.loop.complete_minigame(
                MINIGAME_VARIANTS[request.minigame], request.solved
            )
        except EngineError as e:
            logger.warning("Minigame result rejected for %s: %s", session_id, e)
            return _error_for(e)

        return MinigameResultResponse(
            session_id=session_id,
            bonus_awarded=result.minigame.bonus_awarded,
            bonus_roll=result.minigame.bonus_roll,
            screen=self._screen_info(result.screen),
            state=self._state_info(session),
        )

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _session_to_response(self, session: Session) -> SessionResponse:
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            tile_count=len(session.machine.board),
            state=self._state_info(session),
            created_at=session.created_at,
        )

    def _state_info(self, session: Session) -> BoardStateInfo:
        snapshot = session.machine.snapshot()
        return BoardStateInfo(
            phase=snapshot.phase.value,
            pending_roll=snapshot.pending_roll,
            bonus_roll=snapshot.bonus_roll,
            turn=snapshot.turn,
            difficulty=DifficultyLevel(snapshot.difficulty.value),
            player=TokenInfo(
                name=session.machine.player.name,
                tile_id=snapshot.player_tile,
                progress=snapshot.player_progress,
            ),
            pursuer=TokenInfo(
                name=session.machine.pursuer.name,
                tile_id=snapshot.pursuer_tile,
                progress=snapshot.pursuer_progress,
                visible=snapshot.pursuer_visible,
            ),
            awaiting_pursuer=snapshot.awaiting_pursuer,
            outcome=snapshot.outcome.value if snapshot.outcome else None,
        )

    def _screen_info(self, screen: ScreenDescriptor | None) -> ScreenInfo | None:
        if screen is None:
            return None
        return ScreenInfo(screen=screen.screen.value, reason=screen.reason)

"""
FastAPI Application - REST API for presentation clients.

Endpoints:
    GET    /api/v1/health                          Health check
    POST   /api/v1/sessions                        Start a board session
    GET    /api/v1/sessions                        List active sessions
    GET    /api/v1/sessions/{id}                   Session status and board state
    DELETE /api/v1/sessions/{id}                   End session
    GET    /api/v1/sessions/{id}/board             Tiles and layout positions
    POST   /api/v1/sessions/{id}/roll              Roll (runs the pursuer turn)
    POST   /api/v1/sessions/{id}/move              Spend the pending roll
    POST   /api/v1/sessions/{id}/minigame          Report a puzzle result

Turn order is enforced by the engine: roll, then move, then (if the
board handed off to a puzzle) minigame, then roll again. Out-of-order
commands answer 409 with error_code INVALID_PHASE.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Union
import os

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..logging_config import configure_logging
from .service import APIService
from .schemas import (
    CreateSessionRequest,
    MinigameResultRequest,
    SessionResponse,
    BoardResponse,
    RollResponse,
    MoveResponse,
    MinigameResultResponse,
    ErrorResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorCode,
)

# Environment configuration
BOARDQUEST_ENV = os.getenv("BOARDQUEST_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

STATUS_CODES = {
    ErrorCode.SESSION_NOT_FOUND: 404,
    ErrorCode.INVALID_PHASE: 409,
    ErrorCode.SESSION_BUSY: 409,
    ErrorCode.SESSION_CLOSED: 410,
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.INTERNAL_ERROR: 500,
}

ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Session not found"},
    409: {"model": ErrorResponse, "description": "Command out of turn order or session busy"},
}


def create_app(service: APIService | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Boardquest Engine API",
        description="""
Fraction board game engine - generated boards, turn state machine and pursuit.

## Turn order

1. `POST /roll` - rolls the die; the pursuer takes its turn right after
2. `POST /move` - spends the roll (bonus steps first) and resolves the tile
3. `POST /minigame` - only after landing on a minigame tile

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `INVALID_PHASE` | Command issued out of turn order |
| `SESSION_BUSY` | Previous command still running |
| `SESSION_CLOSED` | Session ended while the command waited |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=STATUS_CODES.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/v1/health", response_model=HealthResponse, tags=["Health"])
    async def health() -> HealthResponse:
        return HealthResponse(
            version=__version__,
            active_sessions=len(api_service.list_sessions()),
        )

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        tags=["Sessions"],
        summary="Start a new board session",
    )
    async def create_session(request: CreateSessionRequest) -> SessionResponse:
        """Generate a board and set up player, pursuer and economy."""
        return api_service.create_session(request)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses=ERROR_RESPONSES,
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        return respond(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: str = Query("user_ended", description="Reason for ending"),
    ) -> EndSessionResponse:
        """End a session and cancel anything it is still waiting on."""
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    @app.get(
        "/api/v1/sessions/{session_id}/board",
        response_model=BoardResponse,
        responses=ERROR_RESPONSES,
        tags=["Board"],
        summary="Tiles and layout positions",
    )
    async def get_board(session_id: str) -> Union[BoardResponse, JSONResponse]:
        return respond(api_service.get_board(session_id))

    # =========================================================================
    # Turn Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/roll",
        response_model=RollResponse,
        responses=ERROR_RESPONSES,
        tags=["Turn"],
        summary="Roll the die",
    )
    async def roll(session_id: str) -> Union[RollResponse, JSONResponse]:
        """Roll, then let the pursuer take its turn and check for a catch."""
        return respond(await api_service.roll(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/move",
        response_model=MoveResponse,
        responses=ERROR_RESPONSES,
        tags=["Turn"],
        summary="Spend the pending roll",
    )
    async def move(session_id: str) -> Union[MoveResponse, JSONResponse]:
        return respond(await api_service.move(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/minigame",
        response_model=MinigameResultResponse,
        responses=ERROR_RESPONSES,
        tags=["Turn"],
        summary="Report a puzzle result",
    )
    async def complete_minigame(
        session_id: str,
        request: MinigameResultRequest,
    ) -> Union[MinigameResultResponse, JSONResponse]:
        """A solved puzzle credits bonus steps for the next move."""
        return respond(api_service.complete_minigame(session_id, request))

    return app


def main():
    """Run the API with uvicorn."""
    import uvicorn

    configure_logging()
    uvicorn.run(
        create_app(),
        host=os.getenv("BOARDQUEST_HOST", "127.0.0.1"),
        port=int(os.getenv("BOARDQUEST_PORT", "8000")),
    )

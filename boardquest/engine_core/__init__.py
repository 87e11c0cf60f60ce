"""
Engine Core - Board generation, layout and the turn state machine.

The engine is the runtime that:
1. Generates a tile graph
2. Lays it out in 2-D for a renderer
3. Holds the player and pursuer tokens
4. Applies roll / pursuer / move commands in strict order
5. Resolves the tile the player lands on
"""

from .tile import Board, Tile, TileType, TileKind, TileSuccessors, MinigameVariant, Direction
from .generator import BoardGenerator, generate_line_board
from .layout import BoardLayout, Position, Bounds, DEFAULT_TILE_OFFSET
from .tokens import Token
from .pursuit import PursuitRule
from .dice import DiceSource, RandomDice, ScriptedDice
from .state import BoardPhase, BoardSnapshot, Difficulty, GameEconomy, GameOutcome
from .action import (
    Action, ActionType, ScreenType, ScreenDescriptor,
    RollResult, PursuerTurnResult, StepResult, TileResolution, MinigameResult,
)
from .errors import EngineError, InvalidPhaseTransition, GraphTraversalGap, LoopBusy, SessionClosed
from .machine import TurnStateMachine

__all__ = [
    "Board",
    "Tile",
    "TileType",
    "TileKind",
    "TileSuccessors",
    "MinigameVariant",
    "Direction",
    "BoardGenerator",
    "generate_line_board",
    "BoardLayout",
    "Position",
    "Bounds",
    "DEFAULT_TILE_OFFSET",
    "Token",
    "PursuitRule",
    "DiceSource",
    "RandomDice",
    "ScriptedDice",
    "BoardPhase",
    "BoardSnapshot",
    "Difficulty",
    "GameEconomy",
    "GameOutcome",
    "Action",
    "ActionType",
    "ScreenType",
    "ScreenDescriptor",
    "RollResult",
    "PursuerTurnResult",
    "StepResult",
    "TileResolution",
    "MinigameResult",
    "EngineError",
    "InvalidPhaseTransition",
    "GraphTraversalGap",
    "LoopBusy",
    "SessionClosed",
    "TurnStateMachine",
]

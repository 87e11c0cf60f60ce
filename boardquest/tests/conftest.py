"""
Pytest fixtures for Boardquest tests.
"""

import pytest

from ..config import DelayConfig, EngineConfig
from ..engine_core.dice import ScriptedDice
from ..engine_core.machine import TurnStateMachine
from ..engine_core.state import GameEconomy
from ..engine_core.tile import Board, Tile, TileType, TileSuccessors, MinigameVariant
from ..session import BoardGameLoop, NoDelaySleeper, RecordingScreenSwitcher, SessionManager
from ..api.service import APIService


def build_board(tile_types: list[TileType]) -> Board:
    """Straight east-wired board from explicit tile types; the last one is the end tile."""
    tiles = []
    last = len(tile_types) - 1
    for index, tile_type in enumerate(tile_types):
        if index == last:
            tiles.append(Tile(index=index, tile_id="t_end", tile_type=TileType.end()))
        else:
            tiles.append(Tile(
                index=index,
                tile_id=f"t_{index + 1}",
                tile_type=tile_type,
                successors=TileSuccessors(east=index + 1),
            ))
    first_minigame = next((t.index for t in tiles if t.is_minigame), last)
    return Board(tiles=tuple(tiles), first_minigame_index=first_minigame)


def normal_board(length: int) -> Board:
    return build_board([TileType.normal()] * length)


@pytest.fixture
def board_factory():
    """Build boards from a list of tile types."""
    return build_board


@pytest.fixture
def long_board() -> Board:
    """40 normal tiles, long enough that nobody reaches the end."""
    return normal_board(40)


@pytest.fixture
def pizza_board() -> Board:
    """Pizza minigame on the third tile (progress 2)."""
    return build_board([
        TileType.normal(),
        TileType.normal(),
        TileType.minigame(MinigameVariant.PIZZA),
    ] + [TileType.normal()] * 10)


@pytest.fixture
def machine_factory():
    """
    Build a state machine over a board with scripted dice.

    Dice values are consumed in command order: the player's roll first,
    then the pursuer's roll once it is active.
    """
    def make(board: Board, rolls: list[int], bonus: int = 0) -> TurnStateMachine:
        return TurnStateMachine(
            board,
            economy=GameEconomy(bonus_roll=bonus),
            dice=ScriptedDice(rolls),
        )
    return make


@pytest.fixture
def loop_factory(machine_factory):
    """Game loop over a scripted machine, with recording collaborators."""
    def make(board: Board, rolls: list[int], bonus: int = 0) -> BoardGameLoop:
        return BoardGameLoop(
            machine_factory(board, rolls, bonus),
            sleeper=NoDelaySleeper(),
            screen_switcher=RecordingScreenSwitcher(),
            delays=DelayConfig(),
        )
    return make


@pytest.fixture
def fast_config() -> EngineConfig:
    """Default rules with every delay disabled."""
    return EngineConfig(delays=DelayConfig().scaled(0))


@pytest.fixture
def session_manager(fast_config) -> SessionManager:
    return SessionManager(config=fast_config, sleeper_factory=NoDelaySleeper)


@pytest.fixture
def api_service(session_manager) -> APIService:
    return APIService(session_manager=session_manager)

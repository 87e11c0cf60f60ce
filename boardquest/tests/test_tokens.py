"""
Tests for tokens and the pursuit rule.

Tests:
- Movement along successors, edge precedence
- End tile and graph gaps
- Catch decisions by progress and turn
"""

import pytest

from ..engine_core.errors import GraphTraversalGap
from ..engine_core.pursuit import PursuitRule
from ..engine_core.tile import Board, Tile, TileType, TileSuccessors
from ..engine_core.tokens import Token
from .conftest import normal_board


class TestTokenMovement:
    """Tests for Token.move."""

    def test_starts_on_start_tile(self):
        board = normal_board(5)
        token = Token("player", board)
        assert token.current_tile is board.start
        assert token.get_current_tile() is board.start
        assert token.progress == 0

    def test_move_follows_successor(self):
        board = normal_board(5)
        token = Token("player", board)
        assert token.move()
        assert token.current_tile.tile_id == "t_2"
        assert token.progress == 1

    def test_move_on_end_tile_is_noop(self):
        board = normal_board(3)
        token = Token("player", board)
        token.move()
        token.move()
        assert token.current_tile.is_end
        assert token.move() is False
        assert token.current_tile.is_end

    def test_east_taken_before_north_and_south(self):
        tiles = (
            Tile(0, "t_1", TileType.normal(), TileSuccessors(north=1, east=2, south=3)),
            Tile(1, "t_2", TileType.normal(), TileSuccessors(east=3)),
            Tile(2, "t_3", TileType.normal(), TileSuccessors(east=3)),
            Tile(3, "t_end", TileType.end()),
        )
        token = Token("player", Board(tiles, first_minigame_index=3))
        token.move()
        assert token.current_tile.tile_id == "t_3"

    def test_north_taken_before_south(self):
        tiles = (
            Tile(0, "t_1", TileType.normal(), TileSuccessors(north=2, south=1)),
            Tile(1, "t_2", TileType.normal(), TileSuccessors(east=2)),
            Tile(2, "t_end", TileType.end()),
        )
        token = Token("player", Board(tiles, first_minigame_index=2))
        token.move()
        assert token.current_tile.is_end

    def test_gap_raises(self):
        tiles = (
            Tile(0, "t_1", TileType.normal()),
            Tile(1, "t_end", TileType.end()),
        )
        token = Token("pursuer", Board(tiles, first_minigame_index=1))
        with pytest.raises(GraphTraversalGap) as excinfo:
            token.move()
        assert excinfo.value.tile_id == "t_1"
        assert excinfo.value.token_name == "pursuer"

    def test_custom_start_and_reset(self):
        board = normal_board(6)
        token = Token("player", board, start=board.tile(2))
        token.move()
        assert token.progress == 3
        token.reset()
        assert token.progress == 2

    def test_tokens_share_board(self):
        board = normal_board(6)
        a = Token("a", board)
        b = Token("b", board)
        a.move()
        assert b.progress == 0
        assert a.is_ahead_of(b)
        assert not b.is_ahead_of(a)


class TestPursuitRule:
    """Tests for the catch decision."""

    def _tokens(self, pursuer_steps: int, player_steps: int):
        board = normal_board(20)
        pursuer = Token("pursuer", board)
        player = Token("player", board)
        for _ in range(pursuer_steps):
            pursuer.move()
        for _ in range(player_steps):
            player.move()
        return pursuer, player

    def test_inactive_before_turn_three(self):
        rule = PursuitRule()
        pursuer, player = self._tokens(5, 1)
        assert not rule.is_active(2)
        assert not rule.is_caught(pursuer, player, turn=2)

    def test_catch_when_level(self):
        """Equal progress counts as caught."""
        pursuer, player = self._tokens(4, 4)
        assert PursuitRule().is_caught(pursuer, player, turn=3)

    def test_catch_when_ahead(self):
        pursuer, player = self._tokens(6, 4)
        assert PursuitRule().is_caught(pursuer, player, turn=5)

    def test_no_catch_when_behind(self):
        pursuer, player = self._tokens(3, 4)
        assert not PursuitRule().is_caught(pursuer, player, turn=10)

    def test_gap(self):
        pursuer, player = self._tokens(3, 7)
        assert PursuitRule().gap(pursuer, player) == 4

    def test_custom_start_turn(self):
        rule = PursuitRule(active_from_turn=5)
        pursuer, player = self._tokens(0, 0)
        assert not rule.is_caught(pursuer, player, turn=4)
        assert rule.is_caught(pursuer, player, turn=5)

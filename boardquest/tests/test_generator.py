"""
Tests for board generation.

Tests:
- Tile count, ids and progress indices
- Single end tile, one successor per tile
- Minigame and branch probabilities at the extremes
- Degenerate sizes and seeded reproducibility
"""

import random

import pytest

from ..engine_core.generator import BoardGenerator, generate_line_board
from ..engine_core.tile import Direction, MinigameVariant, TileKind


class TestLineBoard:
    """Tests for the shape of generated boards."""

    def test_tile_count(self):
        board = generate_line_board(10)
        assert len(board) == 10

    def test_single_end_tile_is_last(self):
        board = generate_line_board(10, minigame_chance=0.5, branch_chance=0.3, seed=1)
        ends = [t for t in board if t.is_end]
        assert len(ends) == 1
        assert board.end is ends[0]
        assert board.end.tile_id == "t_end"
        assert board.end.progress == 9

    def test_tile_ids_and_indices(self):
        board = generate_line_board(5)
        assert [t.tile_id for t in board] == ["t_1", "t_2", "t_3", "t_4", "t_end"]
        assert [t.progress for t in board] == [0, 1, 2, 3, 4]

    def test_end_tile_has_no_successors(self):
        board = generate_line_board(6, branch_chance=0.5, seed=3)
        assert board.end.successors.edges() == []

    def test_every_other_tile_has_one_successor(self):
        board = generate_line_board(30, minigame_chance=0.3, branch_chance=0.3, seed=11)
        for tile in board:
            if tile.is_end:
                continue
            edges = tile.successors.edges()
            assert len(edges) == 1
            assert edges[0][1] == tile.index + 1

    def test_following_successors_reaches_end(self):
        board = generate_line_board(25, branch_chance=0.4, seed=5)
        tile = board.start
        hops = 0
        while not tile.is_end:
            (_, target), = tile.successors.edges()
            tile = board.tile(target)
            hops += 1
        assert hops == 24

    def test_generated_boards_validate(self):
        for seed in range(20):
            board = generate_line_board(40, minigame_chance=0.3, branch_chance=0.08, seed=seed)
            assert board.validate() == []


class TestProbabilities:
    """Tests for minigame and branch chances."""

    def test_no_minigames_at_zero_chance(self):
        board = generate_line_board(20, minigame_chance=0.0, seed=2)
        assert board.minigame_tiles() == []

    def test_no_minigames_means_first_minigame_is_end(self):
        board = generate_line_board(10)
        assert board.first_minigame is board.end

    def test_all_minigames_at_full_chance(self):
        board = generate_line_board(12, minigame_chance=1.0, seed=4)
        assert len(board.minigame_tiles()) == 11
        assert board.first_minigame is board.start
        for tile in board.minigame_tiles():
            assert tile.tile_type.variant in set(MinigameVariant)

    def test_first_minigame_is_closest_to_start(self):
        board = generate_line_board(40, minigame_chance=0.3, seed=8)
        minigames = board.minigame_tiles()
        assert minigames
        assert board.first_minigame.index == min(t.index for t in minigames)

    def test_all_east_at_zero_branch(self):
        board = generate_line_board(15, branch_chance=0.0, seed=6)
        for tile in list(board)[:-1]:
            assert tile.successors.east == tile.index + 1

    def test_all_north_at_full_branch(self):
        """r < 1 always holds, so every edge goes north."""
        board = generate_line_board(15, branch_chance=1.0, seed=6)
        for tile in list(board)[:-1]:
            assert [d for d, _ in tile.successors.edges()] == [Direction.NORTH]

    def test_invalid_probabilities_rejected(self):
        with pytest.raises(ValueError):
            BoardGenerator(minigame_chance=1.5, branch_chance=0.0)
        with pytest.raises(ValueError):
            BoardGenerator(minigame_chance=0.0, branch_chance=-0.1)


class TestEdgeCases:
    """Tests for degenerate sizes and seeding."""

    @pytest.mark.parametrize("n", [0, 1])
    def test_tiny_board_is_a_lone_end_tile(self, n):
        board = generate_line_board(n, minigame_chance=1.0)
        assert len(board) == 1
        assert board.start is board.end
        assert board.start.kind == TileKind.END
        assert board.start.progress == 0
        assert board.first_minigame is board.end

    def test_two_tiles(self):
        board = generate_line_board(2)
        assert board.start.tile_id == "t_1"
        assert board.start.successors.east == 1

    def test_same_seed_same_board(self):
        a = generate_line_board(40, 0.3, 0.08, seed=42)
        b = generate_line_board(40, 0.3, 0.08, seed=42)
        assert a == b

    def test_generator_uses_injected_rng(self):
        a = BoardGenerator(0.5, 0.5, rng=random.Random(9)).generate_line_board(20)
        b = BoardGenerator(0.5, 0.5, rng=random.Random(9)).generate_line_board(20)
        assert [t.tile_type for t in a] == [t.tile_type for t in b]
        assert [t.successors for t in a] == [t.successors for t in b]

    def test_tile_lookup_out_of_range(self):
        board = generate_line_board(3)
        with pytest.raises(IndexError):
            board.tile(3)

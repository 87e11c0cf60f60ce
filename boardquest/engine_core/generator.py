"""
Board Generator - Procedural tile graph construction.

The board is built backward from a single end tile. Each new tile gets
exactly one successor (the previously built tile) wired through a
randomly chosen slot, so the path is logically linear but geometrically
branching:

    r < branch_chance        -> north
    r > 1 - branch_chance    -> south
    otherwise                -> east

The tile closest to start that turned out to be a minigame is
remembered so the presentation layer can point at it.
"""

from __future__ import annotations
import logging
import random

from .tile import (
    Board, Tile, TileType, TileSuccessors, MinigameVariant, Direction,
)

logger = logging.getLogger(__name__)


class BoardGenerator:
    """
    Generates line boards.

    Usage:
        generator = BoardGenerator(minigame_chance=0.3, branch_chance=0.08)
        board = generator.generate_line_board(40)
    """

    def __init__(
        self,
        minigame_chance: float,
        branch_chance: float,
        rng: random.Random | None = None,
    ):
        if not 0.0 <= minigame_chance <= 1.0:
            raise ValueError(f"minigame_chance must be in [0, 1], got {minigame_chance}")
        if not 0.0 <= branch_chance <= 1.0:
            raise ValueError(f"branch_chance must be in [0, 1], got {branch_chance}")
        self.minigame_chance = minigame_chance
        self.branch_chance = branch_chance
        self.rng = rng or random.Random()

    def generate_line_board(self, n: int) -> Board:
        """
        Build a board of n tiles.

        n <= 1 degenerates to a lone end tile, which is then also the
        start and the fallback first minigame.
        """
        end_index = max(n - 1, 0)
        end_tile = Tile(index=end_index, tile_id="t_end", tile_type=TileType.end())

        # Built backward, so tiles are prepended as we go
        tiles = [end_tile]
        first_minigame_index = end_index

        for i in range(n - 1, 0, -1):
            index = i - 1
            tile_type = TileType.normal()
            if self.rng.random() < self.minigame_chance:
                tile_type = TileType.minigame(self.rng.choice(list(MinigameVariant)))

            direction = self._pick_direction()
            successors = TileSuccessors(**{direction.value: index + 1})

            tile = Tile(index=index, tile_id=f"t_{i}", tile_type=tile_type, successors=successors)
            tiles.insert(0, tile)

            if tile.is_minigame:
                first_minigame_index = index

        board = Board(tiles=tuple(tiles), first_minigame_index=first_minigame_index)
        logger.debug(
            "Generated board: %d tiles, %d minigames, first minigame at %s",
            len(board),
            len(board.minigame_tiles()),
            board.first_minigame.tile_id,
        )
        return board

    def _pick_direction(self) -> Direction:
        roll = self.rng.random()
        if roll < self.branch_chance:
            return Direction.NORTH
        if roll > 1 - self.branch_chance:
            return Direction.SOUTH
        return Direction.EAST


def generate_line_board(
    n: int,
    minigame_chance: float = 0.0,
    branch_chance: float = 0.0,
    seed: int | None = None,
) -> Board:
    """Convenience wrapper around BoardGenerator."""
    generator = BoardGenerator(minigame_chance, branch_chance, rng=random.Random(seed))
    return generator.generate_line_board(n)

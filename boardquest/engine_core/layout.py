"""
Board Layout - Assigns 2-D coordinates to tiles.

Coordinates are relative to the start tile at (0, 0). Moving east adds
the offset to x; north subtracts it from y; south adds it to y. The
renderer reads the result; nothing here touches the graph.
"""

from __future__ import annotations
from dataclasses import dataclass

from .tile import Board, Tile, Direction

# 120px tile + half of a 10px stroke + 10px gap
DEFAULT_TILE_OFFSET = 135


@dataclass(frozen=True)
class Position:
    x: int
    y: int


@dataclass(frozen=True)
class Bounds:
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y


_DELTAS = {
    Direction.EAST: (1, 0),
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
}


class BoardLayout:
    """
    Depth-first layout of a board from a start tile.

    A tile already placed is never repositioned, which also keeps the
    traversal finite should a graph ever contain a cycle.
    """

    def __init__(self, step: int = DEFAULT_TILE_OFFSET):
        if step <= 0:
            raise ValueError(f"Layout step must be positive, got {step}")
        self.step = step
        self._positions: dict[int, Position] = {}

    def compute_positions(self, board: Board, start: Tile | None = None) -> dict[int, Position]:
        """
        Recompute every reachable tile's position.

        Successors are visited east, then north, then south.
        """
        self._positions.clear()
        origin = start if start is not None else board.start

        stack = [(origin.index, 0, 0)]
        while stack:
            index, x, y = stack.pop()
            if index in self._positions:
                continue
            self._positions[index] = Position(x, y)

            tile = board.tile(index)
            # Pushed in reverse so east is popped first
            for direction, target in reversed(tile.successors.edges()):
                dx, dy = _DELTAS[direction]
                stack.append((target, x + dx * self.step, y + dy * self.step))

        return dict(self._positions)

    def get_position(self, tile: Tile) -> Position | None:
        return self._positions.get(tile.index)

    def get_all_positions(self) -> dict[int, Position]:
        return dict(self._positions)

    def bounds(self) -> Bounds | None:
        """Bounding box of all placed tiles, or None before layout."""
        if not self._positions:
            return None
        xs = [p.x for p in self._positions.values()]
        ys = [p.y for p in self._positions.values()]
        return Bounds(min(xs), min(ys), max(xs), max(ys))

"""
Tokens - Player and pursuer markers on the board.
"""

from __future__ import annotations
import logging

from .errors import GraphTraversalGap
from .tile import Board, Tile, Direction

logger = logging.getLogger(__name__)


class Token:
    """
    A named marker holding an index into a shared board.

    The board is referenced, never owned; move() is the only mutation.
    """

    def __init__(self, name: str, board: Board, start: Tile | None = None):
        self.name = name
        self.board = board
        self._start_index = (start or board.start).index
        self._current_index = self._start_index

    @property
    def current_tile(self) -> Tile:
        return self.board.tile(self._current_index)

    def get_current_tile(self) -> Tile:
        return self.current_tile

    @property
    def progress(self) -> int:
        return self.current_tile.progress

    def move(self) -> bool:
        """
        Follow the outgoing edge (east, then north, then south).

        Returns False when standing on the end tile, where there is
        nowhere left to go.
        """
        tile = self.current_tile
        for direction in Direction:
            target = tile.successors.get(direction)
            if target is not None:
                self._current_index = target
                return True

        if tile.is_end:
            return False

        logger.error("Token %s has no way forward from %s", self.name, tile.tile_id)
        raise GraphTraversalGap(self.name, tile.tile_id)

    def is_ahead_of(self, other: Token) -> bool:
        """Strictly closer to the end tile than the other token."""
        return self.progress > other.progress

    def reset(self) -> None:
        self._current_index = self._start_index

    def __repr__(self):
        return f"Token({self.name!r}, tile={self.current_tile.tile_id})"

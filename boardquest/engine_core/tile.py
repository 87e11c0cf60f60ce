"""
Tiles and the board arena.

The board is a list of tiles indexed by progress index: position 0 is
the start tile and the last position is the single end tile. Successor
slots hold arena indices rather than object references, so tokens and
the layout engine only ever carry integers into the shared board.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator


class TileKind(Enum):
    """Closed set of tile kinds."""
    NORMAL = "normal"
    END = "end"
    MINIGAME = "minigame"


class MinigameVariant(Enum):
    """Puzzle screens a minigame tile can hand off to."""
    PIZZA = 1
    SPACE_RESCUE = 2
    EQUATION = 3


class Direction(Enum):
    """Outgoing edge slots, in the order tokens check them."""
    EAST = "east"
    NORTH = "north"
    SOUTH = "south"


@dataclass(frozen=True)
class TileType:
    """
    Tagged tile type: normal, end, or minigame(variant).

    Use the factories rather than building one by hand; a minigame
    type without a variant is rejected.
    """
    kind: TileKind
    variant: MinigameVariant | None = None

    def __post_init__(self):
        if self.kind == TileKind.MINIGAME and self.variant is None:
            raise ValueError("Minigame tiles need a variant")
        if self.kind != TileKind.MINIGAME and self.variant is not None:
            raise ValueError(f"{self.kind.value} tiles cannot carry a variant")

    @classmethod
    def normal(cls) -> TileType:
        return cls(TileKind.NORMAL)

    @classmethod
    def end(cls) -> TileType:
        return cls(TileKind.END)

    @classmethod
    def minigame(cls, variant: MinigameVariant) -> TileType:
        return cls(TileKind.MINIGAME, variant)

    @property
    def label(self) -> str:
        if self.kind == TileKind.MINIGAME:
            return f"minigame{self.variant.value}"
        return self.kind.value


@dataclass(frozen=True)
class TileSuccessors:
    """Outgoing edges; each slot is an arena index or None."""
    north: int | None = None
    east: int | None = None
    south: int | None = None

    def get(self, direction: Direction) -> int | None:
        return getattr(self, direction.value)

    def edges(self) -> list[tuple[Direction, int]]:
        """Populated slots in east, north, south order."""
        return [
            (direction, self.get(direction))
            for direction in Direction
            if self.get(direction) is not None
        ]


@dataclass(frozen=True)
class Tile:
    """A node of the board graph. Never mutated after generation."""
    index: int  # Progress index; also the arena position
    tile_id: str
    tile_type: TileType
    successors: TileSuccessors = field(default_factory=TileSuccessors)

    @property
    def kind(self) -> TileKind:
        return self.tile_type.kind

    @property
    def is_end(self) -> bool:
        return self.tile_type.kind == TileKind.END

    @property
    def is_minigame(self) -> bool:
        return self.tile_type.kind == TileKind.MINIGAME

    @property
    def progress(self) -> int:
        return self.index


@dataclass(frozen=True)
class Board:
    """
    Arena of tiles produced by the generator.

    Owns the tiles; everything else refers to them by index.
    """
    tiles: tuple[Tile, ...]
    first_minigame_index: int

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self.tiles)

    @property
    def start(self) -> Tile:
        return self.tiles[0]

    @property
    def end(self) -> Tile:
        return self.tiles[-1]

    @property
    def first_minigame(self) -> Tile:
        """Minigame tile closest to start, or the end tile if none."""
        return self.tiles[self.first_minigame_index]

    def tile(self, index: int) -> Tile:
        if index < 0 or index >= len(self.tiles):
            raise IndexError(f"No tile at index {index}")
        return self.tiles[index]

    def successor(self, tile: Tile, direction: Direction) -> Tile | None:
        target = tile.successors.get(direction)
        return None if target is None else self.tiles[target]

    def minigame_tiles(self) -> list[Tile]:
        return [t for t in self.tiles if t.is_minigame]

    def validate(self) -> list[str]:
        """
        Check generation invariants.

        Returns a list of problems; empty means the board is sound.
        """
        problems = []
        ends = [t for t in self.tiles if t.is_end]
        if len(ends) != 1:
            problems.append(f"Expected exactly one end tile, found {len(ends)}")
        elif not self.tiles[-1].is_end:
            problems.append("End tile is not the last tile")

        for position, tile in enumerate(self.tiles):
            if tile.index != position:
                problems.append(f"{tile.tile_id} has index {tile.index} out of place")
            edges = tile.successors.edges()
            if tile.is_end:
                if edges:
                    problems.append(f"End tile {tile.tile_id} has outgoing edges")
                continue
            if len(edges) != 1:
                problems.append(f"{tile.tile_id} has {len(edges)} successors, expected 1")
                continue
            _, target = edges[0]
            if target != tile.index + 1:
                problems.append(
                    f"{tile.tile_id} points at index {target}, expected {tile.index + 1}"
                )
        return problems

"""
Game State - Economy, phases and the snapshot handed to presentation.

Design principles:
- One GameEconomy per session, constructed explicitly (no singleton)
- Only the state machine and minigame completion mutate it
- Snapshots are immutable copies the renderer can hold on to
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class BoardPhase(Enum):
    """Which command the board accepts next."""
    ROLL = "roll"
    MOVE = "move"


class Difficulty(Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"

    @property
    def max_denominator(self) -> int:
        """Largest denominator puzzle generators should use."""
        return {
            Difficulty.EASY: 6,
            Difficulty.MEDIUM: 9,
            Difficulty.HARD: 12,
        }[self]


class GameOutcome(Enum):
    REACHED_END = "reached_end"
    CAUGHT = "caught"


@dataclass
class GameEconomy:
    """
    Per-session counters.

    bonus_roll is a pool of pre-paid move steps spent before the rolled
    value; turn counts completed roll commands.
    """
    difficulty: Difficulty = Difficulty.EASY
    bonus_roll: int = 0
    turn: int = 0

    def __post_init__(self):
        if self.bonus_roll < 0:
            raise ValueError("Bonus roll cannot start negative")
        if self.turn < 0:
            raise ValueError("Turn counter cannot start negative")

    def add_bonus(self, amount: int) -> int:
        """Credit bonus steps. Returns the new total."""
        if amount < 0:
            raise ValueError(f"Bonus credit must be non-negative, got {amount}")
        self.bonus_roll += amount
        return self.bonus_roll

    def consume_bonus(self) -> bool:
        """Spend one bonus step if any are left."""
        if self.bonus_roll <= 0:
            return False
        self.bonus_roll -= 1
        return True

    def increment_turn(self) -> int:
        self.turn += 1
        return self.turn

    def set_difficulty(self, difficulty: Difficulty) -> None:
        self.difficulty = difficulty


@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only view of a board session at one point in time."""
    phase: BoardPhase
    pending_roll: int
    bonus_roll: int
    turn: int
    difficulty: Difficulty
    player_tile: str
    player_progress: int
    pursuer_tile: str
    pursuer_progress: int
    pursuer_visible: bool
    awaiting_pursuer: bool
    outcome: GameOutcome | None = None
    tile_count: int = 0

    @property
    def is_finished(self) -> bool:
        return self.outcome is not None

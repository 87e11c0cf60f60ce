"""
Action System - Board commands and their results.

Commands are the only way the presentation layer drives the board:
1. ROLL - draw a die value into the pending roll
2. PURSUER_TURN - evaluate the pursuer after a roll
3. MOVE_STEP - spend one step of the pending roll (or bonus)
4. COMPLETE_MINIGAME - report a puzzle result back to the board

Results carry everything a renderer needs to mirror the change,
including the screen the session should navigate to, if any.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .tile import MinigameVariant
from .state import BoardPhase, GameOutcome


class ActionType(Enum):
    """Types of board commands."""
    ROLL = "roll"
    PURSUER_TURN = "pursuer_turn"
    MOVE_STEP = "move_step"
    COMPLETE_MINIGAME = "complete_minigame"


class ScreenType(Enum):
    """Screens the board can hand off to."""
    BOARD = "board"
    END = "end"
    PIZZA = "pizza"
    SPACE_RESCUE = "space_rescue"
    EQUATION = "equation"
    MENU = "menu"


MINIGAME_SCREENS = {
    MinigameVariant.PIZZA: ScreenType.PIZZA,
    MinigameVariant.SPACE_RESCUE: ScreenType.SPACE_RESCUE,
    MinigameVariant.EQUATION: ScreenType.EQUATION,
}


@dataclass(frozen=True)
class ScreenDescriptor:
    """Tagged destination for the screen switcher."""
    screen: ScreenType
    reason: str | None = None

    @classmethod
    def end(cls, outcome: GameOutcome) -> ScreenDescriptor:
        return cls(ScreenType.END, reason=outcome.value)

    @classmethod
    def minigame(cls, variant: MinigameVariant) -> ScreenDescriptor:
        return cls(MINIGAME_SCREENS[variant])

    @classmethod
    def board(cls) -> ScreenDescriptor:
        return cls(ScreenType.BOARD)


@dataclass(frozen=True)
class Action:
    """A command for the state machine."""
    action_type: ActionType
    params: dict[str, Any] | None = None

    @classmethod
    def roll(cls) -> Action:
        return cls(ActionType.ROLL)

    @classmethod
    def pursuer_turn(cls) -> Action:
        return cls(ActionType.PURSUER_TURN)

    @classmethod
    def move_step(cls) -> Action:
        return cls(ActionType.MOVE_STEP)

    @classmethod
    def complete_minigame(cls, variant: MinigameVariant, solved: bool) -> Action:
        return cls(
            ActionType.COMPLETE_MINIGAME,
            params={"variant": variant, "solved": solved},
        )


@dataclass(frozen=True)
class RollResult:
    value: int
    turn: int
    phase: BoardPhase


@dataclass(frozen=True)
class PursuerTurnResult:
    """
    What the pursuer did this turn.

    revealed is True only on the turn it first becomes visible.
    """
    turn: int
    visible: bool
    revealed: bool
    roll: int | None
    steps_taken: int
    progress: int
    caught: bool
    screen: ScreenDescriptor | None = None


@dataclass(frozen=True)
class TileResolution:
    """Outcome of landing on a tile once the pending roll is spent."""
    tile_id: str
    tile_label: str
    screen: ScreenDescriptor | None
    outcome: GameOutcome | None = None


@dataclass(frozen=True)
class StepResult:
    """
    One move step.

    used_bonus tells whether the step came out of the bonus pool;
    resolution is set on the step that spends the last pending unit.
    """
    moved: bool
    used_bonus: bool
    pending_roll: int
    bonus_roll: int
    tile_id: str
    progress: int
    resolution: TileResolution | None = None

    @property
    def is_final(self) -> bool:
        return self.resolution is not None


@dataclass(frozen=True)
class MinigameResult:
    variant: MinigameVariant
    solved: bool
    bonus_awarded: int
    bonus_roll: int
    screen: ScreenDescriptor

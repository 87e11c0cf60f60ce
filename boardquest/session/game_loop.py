"""
Game Loop - The async board turn driver.

The loop:
1. Player presses roll
2. Dice animation plays (suspension point)
3. Pursuer takes its turn; first sighting pauses (suspension point)
4. On a catch, the reveal pauses and the end screen is shown
5. Player presses move; each step animates (suspension point)
6. The landing tile resolves: end screen, puzzle screen, or back to roll

Only one command runs at a time. While a command is suspended, any
other command raises LoopBusy; the presentation layer is expected to
disable its buttons for the duration.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import asyncio
import logging

from ..config import DelayConfig
from ..engine_core.action import (
    RollResult, PursuerTurnResult, StepResult, ScreenDescriptor, ScreenType, MinigameResult,
)
from ..engine_core.errors import LoopBusy, SessionClosed
from ..engine_core.machine import TurnStateMachine
from ..engine_core.state import BoardSnapshot
from ..engine_core.tile import MinigameVariant
from .collaborators import Sleeper, ScreenSwitcher, AsyncioSleeper, RecordingScreenSwitcher

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    WAITING_ROLL = "waiting_roll"
    ROLLING = "rolling"
    WAITING_MOVE = "waiting_move"
    MOVING = "moving"
    IN_MINIGAME = "in_minigame"
    GAME_OVER = "game_over"
    CLOSED = "closed"


@dataclass
class TurnResult:
    """
    Result of one loop command.

    events are short human-readable lines a presentation layer can show
    or log.
    """
    success: bool
    loop_state: LoopState
    snapshot: BoardSnapshot
    roll: RollResult | None = None
    pursuer: PursuerTurnResult | None = None
    steps: list[StepResult] = field(default_factory=list)
    minigame: MinigameResult | None = None
    screen: ScreenDescriptor | None = None
    events: list[str] = field(default_factory=list)


class BoardGameLoop:
    """
    Drives a TurnStateMachine through its suspension points.

    Usage:
        loop = BoardGameLoop(machine, sleeper=AsyncioSleeper())

        result = await loop.roll()
        if result.loop_state == LoopState.WAITING_MOVE:
            result = await loop.move()

        loop.close()  # on navigation away
    """

    def __init__(
        self,
        machine: TurnStateMachine,
        sleeper: Sleeper | None = None,
        screen_switcher: ScreenSwitcher | None = None,
        delays: DelayConfig | None = None,
    ):
        self.machine = machine
        self.sleeper = sleeper or AsyncioSleeper()
        self.screen_switcher = screen_switcher or RecordingScreenSwitcher()
        self.delays = delays or DelayConfig()
        self.state = LoopState.WAITING_ROLL

        self._running: str | None = None
        self._closed = False

    @property
    def is_busy(self) -> bool:
        return self._running is not None

    @property
    def accepting_input(self) -> bool:
        return not self._closed and self._running is None and not self.machine.is_finished

    async def roll(self) -> TurnResult:
        """Roll, animate, then run the pursuer turn and catch check."""
        self._begin("roll")
        try:
            roll = self.machine.roll()
            self.state = LoopState.ROLLING
            events = [f"Turn {roll.turn}: rolled {roll.value}"]
            await self._pause(self.delays.dice_animation_ms)

            pursuer = self.machine.pursuer_turn()
            if pursuer.revealed:
                events.append(f"{self.machine.pursuer.name} has been sighted")
                await self._pause(self.delays.sighting_ms)
            if pursuer.roll is not None:
                events.append(
                    f"{self.machine.pursuer.name} rolled {pursuer.roll} "
                    f"and moved {pursuer.steps_taken}"
                )

            screen = None
            if pursuer.caught:
                events.append(f"{self.machine.player.name} was caught")
                await self._pause(self.delays.catch_reveal_ms)
                screen = pursuer.screen
                self.screen_switcher.switch_to_screen(screen)
                self.state = LoopState.GAME_OVER
            else:
                self.state = LoopState.WAITING_MOVE

            return TurnResult(
                success=True,
                loop_state=self.state,
                snapshot=self.machine.snapshot(),
                roll=roll,
                pursuer=pursuer,
                screen=screen,
                events=events,
            )
        finally:
            self._running = None

    async def move(self) -> TurnResult:
        """Spend the whole pending roll one animated step at a time."""
        self._begin("move")
        try:
            steps: list[StepResult] = []
            while True:
                step = self.machine.step()
                steps.append(step)
                self.state = LoopState.MOVING
                await self._pause(self.delays.step_ms)
                if step.is_final or self.machine.pending_roll <= 0:
                    break

            events = [f"Moved to {steps[-1].tile_id}"]
            resolution = steps[-1].resolution
            screen = resolution.screen if resolution else None

            if screen is None:
                self.state = LoopState.WAITING_ROLL
            elif screen.screen == ScreenType.END:
                events.append("Reached the end of the board")
                self.screen_switcher.switch_to_screen(screen)
                self.state = LoopState.GAME_OVER
            else:
                events.append(f"Entering {screen.screen.value}")
                await self._pause(self.delays.fade_ms)
                self.screen_switcher.switch_to_screen(screen)
                self.state = LoopState.IN_MINIGAME

            return TurnResult(
                success=True,
                loop_state=self.state,
                snapshot=self.machine.snapshot(),
                steps=steps,
                screen=screen,
                events=events,
            )
        finally:
            self._running = None

    def complete_minigame(self, variant: MinigameVariant, solved: bool) -> TurnResult:
        """Return from a puzzle screen to the board."""
        self._begin("complete a minigame")
        try:
            result = self.machine.complete_minigame(variant, solved)
            self.screen_switcher.switch_to_screen(result.screen)
            self.state = LoopState.WAITING_ROLL
            events = [f"Bonus +{result.bonus_awarded}"] if result.bonus_awarded else []
            return TurnResult(
                success=True,
                loop_state=self.state,
                snapshot=self.machine.snapshot(),
                minigame=result,
                screen=result.screen,
                events=events,
            )
        finally:
            self._running = None

    def close(self) -> int:
        """
        Tear the loop down.

        Pending delays are cancelled so no suspended command resumes
        against a discarded session; that command raises SessionClosed.
        Returns the number cancelled.
        """
        self._closed = True
        self.state = LoopState.CLOSED
        cancelled = self.sleeper.cancel_all()
        if cancelled:
            logger.info("Cancelled %d pending delay(s) on close", cancelled)
        return cancelled

    async def _pause(self, milliseconds: int) -> None:
        """Wait on the sleeper; a delay cancelled by close() surfaces as SessionClosed."""
        try:
            await self.sleeper.sleep(milliseconds)
        except asyncio.CancelledError:
            if not self._closed:
                raise
            raise SessionClosed(f"Session closed while {self._running} was waiting") from None

    def _begin(self, command: str) -> None:
        if self._closed:
            raise SessionClosed(f"Cannot {command}: session is closed")
        if self._running is not None:
            raise LoopBusy(command, self._running)
        self._running = command

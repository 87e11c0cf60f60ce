"""
Turn State Machine - The single point of board state mutation.

One player turn runs strictly in this order:

    roll -> pursuer_turn -> move_step ... move_step -> (resolution)

- roll: only in ROLL phase. Draws the pending roll, counts the turn,
  switches to MOVE.
- pursuer_turn: exactly once after every roll. The pursuer shows up on
  the reveal turn and moves from the active turn onward; a catch ends
  the session whatever the phase.
- move_step: only in MOVE phase, after the pursuer turn. Spends a bonus
  step if any are left, otherwise one unit of the pending roll, and
  moves the player one tile. Spending the last pending unit resolves
  the tile the player stands on.

Out-of-order commands raise InvalidPhaseTransition and leave the state
untouched.
"""

from __future__ import annotations
import logging
import random
from typing import Callable, TYPE_CHECKING

from .action import (
    Action, ActionType, RollResult, PursuerTurnResult, StepResult,
    TileResolution, MinigameResult, ScreenDescriptor,
)
from .dice import DiceSource, RandomDice
from .errors import InvalidPhaseTransition
from .generator import BoardGenerator
from .pursuit import PursuitRule
from .state import BoardPhase, BoardSnapshot, Difficulty, GameEconomy, GameOutcome
from .tile import Board, MinigameVariant, TileKind
from .tokens import Token

if TYPE_CHECKING:
    from ..config import EngineConfig

logger = logging.getLogger(__name__)


class TurnStateMachine:
    """
    Orchestrates one board session.

    Usage:
        machine = TurnStateMachine.create(config, seed=7)

        machine.roll()
        result = machine.pursuer_turn()
        if not result.caught:
            steps = machine.move_all()
    """

    def __init__(
        self,
        board: Board,
        economy: GameEconomy | None = None,
        dice: DiceSource | None = None,
        dice_sides: int = 6,
        pursuit: PursuitRule | None = None,
        pursuer_reveal_turn: int = 2,
        minigame_bonus: int = 3,
        player_name: str = "player",
        pursuer_name: str = "pursuer",
    ):
        self.board = board
        self.economy = economy or GameEconomy()
        self.dice = dice or RandomDice()
        self.dice_sides = dice_sides
        self.pursuit = pursuit or PursuitRule()
        self.pursuer_reveal_turn = pursuer_reveal_turn
        self.minigame_bonus = minigame_bonus

        self.player = Token(player_name, board)
        self.pursuer = Token(pursuer_name, board)

        self.phase = BoardPhase.ROLL
        self.pending_roll = 0
        self.pursuer_visible = False
        self.outcome: GameOutcome | None = None
        self.pending_minigame: MinigameVariant | None = None
        self.action_history: list[Action] = []

        self._awaiting_pursuer = False

    @classmethod
    def create(
        cls,
        config: EngineConfig,
        seed: int | None = None,
        dice: DiceSource | None = None,
        difficulty: Difficulty = Difficulty.EASY,
    ) -> TurnStateMachine:
        """Generate a board from config and wire up a fresh session."""
        rng = random.Random(seed)
        generator = BoardGenerator(config.minigame_chance, config.branch_chance, rng=rng)
        board = generator.generate_line_board(config.tile_count)
        return cls(
            board=board,
            economy=GameEconomy(difficulty=difficulty, bonus_roll=config.initial_bonus),
            dice=dice or RandomDice(rng=rng),
            dice_sides=config.dice_sides,
            pursuit=PursuitRule(active_from_turn=config.pursuer_start_turn),
            pursuer_reveal_turn=config.pursuer_reveal_turn,
            minigame_bonus=config.minigame_bonus,
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def apply(self, action: Action):
        """
        Apply a command and record it.

        Raises InvalidPhaseTransition for out-of-order commands.
        """
        handler = self._get_handler(action.action_type)
        if handler is None:
            raise ValueError(f"No handler for action type: {action.action_type}")
        result = handler(action)
        self.action_history.append(action)
        return result

    def _get_handler(self, action_type: ActionType) -> Callable | None:
        handlers = {
            ActionType.ROLL: lambda a: self.roll(),
            ActionType.PURSUER_TURN: lambda a: self.pursuer_turn(),
            ActionType.MOVE_STEP: lambda a: self.step(),
            ActionType.COMPLETE_MINIGAME: lambda a: self.complete_minigame(
                a.params["variant"], a.params["solved"]
            ),
        }
        return handlers.get(action_type)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def roll(self) -> RollResult:
        self._ensure_playing("roll")
        if self.phase != BoardPhase.ROLL:
            raise InvalidPhaseTransition("roll", self.phase.value, "resolve the current move first")
        if self.pending_minigame is not None:
            raise InvalidPhaseTransition(
                "roll", self.phase.value, f"minigame {self.pending_minigame.name} is still open"
            )

        self.pending_roll = self.dice.roll(self.dice_sides)
        self.phase = BoardPhase.MOVE
        turn = self.economy.increment_turn()
        self._awaiting_pursuer = True

        logger.info("Turn %d: rolled %d (bonus %d)", turn, self.pending_roll, self.economy.bonus_roll)
        return RollResult(value=self.pending_roll, turn=turn, phase=self.phase)

    def pursuer_turn(self) -> PursuerTurnResult:
        self._ensure_playing("evaluate the pursuer")
        if not self._awaiting_pursuer:
            raise InvalidPhaseTransition(
                "evaluate the pursuer", self.phase.value, "no roll is waiting for a pursuer turn"
            )
        self._awaiting_pursuer = False

        turn = self.economy.turn
        revealed = False
        if turn >= self.pursuer_reveal_turn and not self.pursuer_visible:
            self.pursuer_visible = True
            revealed = True
            logger.info("Turn %d: %s sighted", turn, self.pursuer.name)

        roll = None
        steps_taken = 0
        if self.pursuit.is_active(turn):
            self.pursuer_visible = True
            roll = self.dice.roll(self.dice_sides)
            for _ in range(roll):
                if self.pursuer.move():
                    steps_taken += 1
            logger.info(
                "Turn %d: %s moved %d to %s",
                turn, self.pursuer.name, steps_taken, self.pursuer.current_tile.tile_id,
            )

        caught = self.pursuit.is_caught(self.pursuer, self.player, turn)
        screen = None
        if caught:
            self.outcome = GameOutcome.CAUGHT
            screen = ScreenDescriptor.end(GameOutcome.CAUGHT)
            logger.info(
                "Turn %d: %s caught %s on %s",
                turn, self.pursuer.name, self.player.name, self.player.current_tile.tile_id,
            )

        return PursuerTurnResult(
            turn=turn,
            visible=self.pursuer_visible,
            revealed=revealed,
            roll=roll,
            steps_taken=steps_taken,
            progress=self.pursuer.progress,
            caught=caught,
            screen=screen,
        )

    def step(self) -> StepResult:
        """
        Spend one move step.

        With nothing pending this is a no-op that reports the current
        position.
        """
        self._ensure_playing("move")
        if self.phase != BoardPhase.MOVE:
            raise InvalidPhaseTransition("move", self.phase.value, "roll the dice first")
        if self._awaiting_pursuer:
            raise InvalidPhaseTransition("move", self.phase.value, "the pursuer has not taken its turn")

        if self.pending_roll <= 0:
            return self._step_result(moved=False, used_bonus=False)

        used_bonus = self.economy.consume_bonus()
        if not used_bonus:
            self.pending_roll -= 1

        moved = self.player.move()

        resolution = None
        if self.pending_roll == 0:
            resolution = self._resolve_tile()
        return self._step_result(moved=moved, used_bonus=used_bonus, resolution=resolution)

    def move_all(self) -> list[StepResult]:
        """Step until the pending roll is spent and the tile resolved."""
        results = []
        while self.phase == BoardPhase.MOVE and self.pending_roll > 0 and not self.is_finished:
            results.append(self.step())
        return results

    def complete_minigame(self, variant: MinigameVariant, solved: bool) -> MinigameResult:
        """Report the result of the puzzle the board handed off to."""
        self._ensure_playing("complete a minigame")
        if self.pending_minigame is None:
            raise InvalidPhaseTransition(
                "complete a minigame", self.phase.value, "no minigame is open"
            )
        if variant != self.pending_minigame:
            raise InvalidPhaseTransition(
                "complete a minigame",
                self.phase.value,
                f"open minigame is {self.pending_minigame.name}, not {variant.name}",
            )

        self.pending_minigame = None
        awarded = 0
        if solved:
            awarded = self.minigame_bonus
            self.economy.add_bonus(awarded)
        logger.info("Minigame %s %s, bonus +%d", variant.name, "solved" if solved else "failed", awarded)

        return MinigameResult(
            variant=variant,
            solved=solved,
            bonus_awarded=awarded,
            bonus_roll=self.economy.bonus_roll,
            screen=ScreenDescriptor.board(),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_finished(self) -> bool:
        return self.outcome is not None

    @property
    def awaiting_pursuer(self) -> bool:
        return self._awaiting_pursuer

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(
            phase=self.phase,
            pending_roll=self.pending_roll,
            bonus_roll=self.economy.bonus_roll,
            turn=self.economy.turn,
            difficulty=self.economy.difficulty,
            player_tile=self.player.current_tile.tile_id,
            player_progress=self.player.progress,
            pursuer_tile=self.pursuer.current_tile.tile_id,
            pursuer_progress=self.pursuer.progress,
            pursuer_visible=self.pursuer_visible,
            awaiting_pursuer=self._awaiting_pursuer,
            outcome=self.outcome,
            tile_count=len(self.board),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_playing(self, command: str) -> None:
        if self.outcome is not None:
            raise InvalidPhaseTransition(command, self.phase.value, f"session is over ({self.outcome.value})")

    def _resolve_tile(self) -> TileResolution:
        tile = self.player.current_tile
        screen = None
        outcome = None

        if tile.kind == TileKind.END:
            outcome = GameOutcome.REACHED_END
            self.outcome = outcome
            screen = ScreenDescriptor.end(outcome)
        elif tile.kind == TileKind.MINIGAME:
            self.pending_minigame = tile.tile_type.variant
            screen = ScreenDescriptor.minigame(tile.tile_type.variant)

        self.phase = BoardPhase.ROLL
        logger.info("Landed on %s (%s)", tile.tile_id, tile.tile_type.label)
        return TileResolution(
            tile_id=tile.tile_id,
            tile_label=tile.tile_type.label,
            screen=screen,
            outcome=outcome,
        )

    def _step_result(
        self,
        moved: bool,
        used_bonus: bool,
        resolution: TileResolution | None = None,
    ) -> StepResult:
        return StepResult(
            moved=moved,
            used_bonus=used_bonus,
            pending_roll=self.pending_roll,
            bonus_roll=self.economy.bonus_roll,
            tile_id=self.player.current_tile.tile_id,
            progress=self.player.progress,
            resolution=resolution,
        )

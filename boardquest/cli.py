"""
Boardquest CLI - Command-line interface for the engine.

Usage:
    boardquest board [--tiles N] [--seed S]     Generate a board and print its layout
    boardquest play [--seed S] [--difficulty D]  Auto-play a session to the end
    boardquest serve                            Run the REST API
"""

import argparse
import asyncio
import random
import sys

from .config import EngineConfig
from .engine_core import (
    BoardGenerator, BoardLayout, Difficulty, EngineError, MinigameVariant, TurnStateMachine,
)
from .logging_config import configure_logging
from .minigames import AsteroidOrdering, PizzaAssembler
from .rational import Fraction
from .session import SessionManager, NoDelaySleeper, LoopState


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Boardquest - Fraction board game engine",
        prog="boardquest",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from env)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    board_parser = subparsers.add_parser("board", help="Generate a board and print its layout")
    board_parser.add_argument("--tiles", type=int, default=None, help="Number of tiles")
    board_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    play_parser = subparsers.add_parser("play", help="Auto-play a session to the end")
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    play_parser.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=Difficulty.EASY.value,
        help="Puzzle difficulty",
    )
    play_parser.add_argument("--max-turns", type=int, default=200, help="Safety limit")

    subparsers.add_parser("serve", help="Run the REST API with uvicorn")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = EngineConfig.from_env()
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(2)

    if args.command == "board":
        cmd_board(args, config)
    elif args.command == "play":
        cmd_play(args, config)
    elif args.command == "serve":
        cmd_serve()
    else:
        parser.print_help()
        sys.exit(1)


def cmd_board(args, config: EngineConfig):
    """Print every tile with its type, successor and position."""
    generator = BoardGenerator(
        config.minigame_chance, config.branch_chance, rng=random.Random(args.seed)
    )
    board = generator.generate_line_board(args.tiles or config.tile_count)
    layout = BoardLayout(config.tile_offset)
    layout.compute_positions(board)

    for tile in board:
        position = layout.get_position(tile)
        edges = ", ".join(
            f"{direction.value}->{board.tile(target).tile_id}"
            for direction, target in tile.successors.edges()
        )
        print(f"{tile.tile_id:>6}  {tile.tile_type.label:<10} ({position.x:>6}, {position.y:>6})  {edges}")

    print(f"\nFirst minigame: {board.first_minigame.tile_id}")
    bounds = layout.bounds()
    print(f"Bounds: {bounds.width} x {bounds.height}")


def cmd_play(args, config: EngineConfig):
    """Play a whole session, solving puzzles with the puzzle models."""
    manager = SessionManager(config=config, sleeper_factory=NoDelaySleeper)
    session = manager.create_session(difficulty=Difficulty(args.difficulty), seed=args.seed)
    rng = random.Random(args.seed)

    print(f"Session {session.session_id}: {len(session.machine.board)} tiles")
    try:
        result = asyncio.run(_autoplay(session, rng, args.max_turns))
    except EngineError as e:
        print(f"Error: {e}")
        sys.exit(1)
    finally:
        manager.end_session(session.session_id)

    print(f"\nResult: {result}")


async def _autoplay(session, rng: random.Random, max_turns: int) -> str:
    loop = session.loop
    machine = session.machine

    while not machine.is_finished and machine.economy.turn < max_turns:
        rolled = await loop.roll()
        _print_events(rolled.events)
        if rolled.loop_state == LoopState.GAME_OVER:
            break

        moved = await loop.move()
        _print_events(moved.events)
        if moved.loop_state == LoopState.IN_MINIGAME:
            solved = _solve_minigame(machine, rng)
            completed = loop.complete_minigame(machine.pending_minigame, solved)
            _print_events(completed.events or ["Puzzle failed, no bonus"])

    if machine.outcome is None:
        return f"stopped after {machine.economy.turn} turns"
    return machine.outcome.value


def _solve_minigame(machine: TurnStateMachine, rng: random.Random) -> bool:
    """Play the open puzzle with its model; equation rounds are a coin flip."""
    variant = machine.pending_minigame
    if variant == MinigameVariant.PIZZA:
        pizza = PizzaAssembler([Fraction(1, 2), Fraction(1, 4), Fraction(1, 8)], rng=rng)
        pizza.reset_with_random_start()
        while True:
            result = pizza.add_slice(Fraction(1, 8))
            if result.completed:
                return True
    if variant == MinigameVariant.SPACE_RESCUE:
        rescue = AsteroidOrdering(machine.economy.difficulty, rng=rng)
        for asteroid in list(rescue.target_order):
            rescue.check_click(asteroid)
        return rescue.is_round_complete()
    return rng.random() < 0.5


def _print_events(events: list[str]):
    for event in events:
        print(f"  {event}")


def cmd_serve():
    from .api.app import main as serve

    serve()


if __name__ == "__main__":
    main()

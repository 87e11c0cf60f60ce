"""
Engine errors.

Phase and traversal errors are programmer errors: they mean a caller
broke the turn-ordering contract or the board was built wrong. They are
raised, never swallowed, so the caller sees them immediately.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for board engine errors."""


class InvalidPhaseTransition(EngineError):
    """A command was issued in a phase that does not accept it."""

    def __init__(self, command: str, phase: str, reason: str | None = None):
        self.command = command
        self.phase = phase
        message = f"Cannot {command} during {phase} phase"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class LoopBusy(EngineError):
    """A command arrived while another one is suspended on a delay."""

    def __init__(self, command: str, running: str):
        self.command = command
        self.running = running
        super().__init__(f"Cannot {command} while {running} is still in progress")


class SessionClosed(EngineError):
    """A command arrived after the session was torn down."""


class GraphTraversalGap(EngineError):
    """A token on a non-end tile found no outgoing edge."""

    def __init__(self, token_name: str, tile_id: str):
        self.token_name = token_name
        self.tile_id = tile_id
        super().__init__(f"{token_name} is stuck on {tile_id}: tile has no successor")

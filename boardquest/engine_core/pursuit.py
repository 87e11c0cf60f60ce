"""
Pursuit Rule - Decides when the pursuer has caught the player.

Progress is the generation-time progress index of each token's tile
(start is 0, the end tile is highest). The pursuer catches the player
once it is no longer strictly behind, but only after it has become
active.
"""

from __future__ import annotations
from dataclasses import dataclass

from .tokens import Token


@dataclass(frozen=True)
class PursuitRule:
    active_from_turn: int = 3

    def is_active(self, turn: int) -> bool:
        return turn >= self.active_from_turn

    def is_caught(self, pursuer: Token, player: Token, turn: int) -> bool:
        if not self.is_active(turn):
            return False
        return not player.is_ahead_of(pursuer)

    def gap(self, pursuer: Token, player: Token) -> int:
        """Tiles between pursuer and player; negative once passed."""
        return player.progress - pursuer.progress

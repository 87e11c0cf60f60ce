"""
Engine configuration.

Defaults match the shipped game; every value can be overridden through
BOARDQUEST_* environment variables (see EngineConfig.from_env).
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
import os

from .engine_core.layout import DEFAULT_TILE_OFFSET


@dataclass(frozen=True)
class DelayConfig:
    """Pacing of the suspension points, in milliseconds."""
    dice_animation_ms: int = 800
    step_ms: int = 250
    sighting_ms: int = 1000
    catch_reveal_ms: int = 1500
    fade_ms: int = 800

    def scaled(self, factor: float) -> DelayConfig:
        """Same pacing sped up or slowed down; 0 disables every delay."""
        return DelayConfig(**{
            f.name: int(getattr(self, f.name) * factor) for f in fields(self)
        })


@dataclass(frozen=True)
class EngineConfig:
    tile_count: int = 40
    minigame_chance: float = 0.3
    branch_chance: float = 0.08
    tile_offset: int = DEFAULT_TILE_OFFSET
    dice_sides: int = 6
    pursuer_reveal_turn: int = 2
    pursuer_start_turn: int = 3
    minigame_bonus: int = 3
    initial_bonus: int = 0
    delays: DelayConfig = field(default_factory=DelayConfig)

    def validate(self) -> EngineConfig:
        """Raise ValueError on out-of-range settings. Returns self."""
        if self.tile_count < 1:
            raise ValueError("tile_count must be at least 1")
        for name in ("minigame_chance", "branch_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.tile_offset <= 0:
            raise ValueError("tile_offset must be positive")
        if self.dice_sides < 1:
            raise ValueError("dice_sides must be at least 1")
        if self.pursuer_reveal_turn > self.pursuer_start_turn:
            raise ValueError("Pursuer cannot move before it is revealed")
        if self.minigame_bonus < 0 or self.initial_bonus < 0:
            raise ValueError("Bonus values cannot be negative")
        for f in fields(self.delays):
            if getattr(self.delays, f.name) < 0:
                raise ValueError(f"{f.name} cannot be negative")
        return self

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> EngineConfig:
        """
        Build a config from environment variables.

        BOARDQUEST_TILE_COUNT, BOARDQUEST_MINIGAME_CHANCE,
        BOARDQUEST_BRANCH_CHANCE, BOARDQUEST_TILE_OFFSET,
        BOARDQUEST_DICE_SIDES, BOARDQUEST_MINIGAME_BONUS,
        BOARDQUEST_INITIAL_BONUS and BOARDQUEST_DELAY_SCALE.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        def get(name: str, cast, default):
            raw = env.get(f"BOARDQUEST_{name}")
            if raw is None or raw == "":
                return default
            try:
                return cast(raw)
            except ValueError:
                raise ValueError(f"BOARDQUEST_{name}={raw!r} is not a valid {cast.__name__}")

        delay_scale = get("DELAY_SCALE", float, 1.0)
        config = cls(
            tile_count=get("TILE_COUNT", int, defaults.tile_count),
            minigame_chance=get("MINIGAME_CHANCE", float, defaults.minigame_chance),
            branch_chance=get("BRANCH_CHANCE", float, defaults.branch_chance),
            tile_offset=get("TILE_OFFSET", int, defaults.tile_offset),
            dice_sides=get("DICE_SIDES", int, defaults.dice_sides),
            pursuer_reveal_turn=defaults.pursuer_reveal_turn,
            pursuer_start_turn=defaults.pursuer_start_turn,
            minigame_bonus=get("MINIGAME_BONUS", int, defaults.minigame_bonus),
            initial_bonus=get("INITIAL_BONUS", int, defaults.initial_bonus),
            delays=DelayConfig().scaled(delay_scale),
        )
        return config.validate()

"""Tunable settings for a game session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GameConfig:
    """Timing, scoring and spawn settings.

    The board dimensions are fixed in :mod:`termtris.board` and are not part
    of the configuration.
    """

    # Seconds between automatic one-row falls at the starting level.
    initial_fall_interval: float = 0.7
    # Factor applied to the fall interval on each level-up.
    speedup: float = 0.8
    lines_per_level: int = 10
    starting_level: int = 1
    # Pause at the end of every tick of the main loop.
    tick_interval: float = 0.005
    spawn_x: int = 4
    spawn_y: int = 0
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.initial_fall_interval <= 0:
            raise ValueError("initial_fall_interval must be positive")
        if not 0 < self.speedup <= 1:
            raise ValueError("speedup must be in (0, 1]")
        if self.lines_per_level <= 0:
            raise ValueError("lines_per_level must be positive")
        if self.tick_interval < 0:
            raise ValueError("tick_interval must not be negative")

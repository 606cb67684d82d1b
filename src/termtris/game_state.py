"""High level game state container."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import logging
import random

from .board import Board
from .config import GameConfig
from .tetromino import SHAPE_IDS, Tetromino
from .utils import can_place


LOGGER = logging.getLogger(__name__)


class GameStatus(str, Enum):
    """Whether the session is running, paused or finished."""

    PLAYING = "playing"
    PAUSED = "paused"
    OVER = "over"


@dataclass
class Stats:
    """Player progress shown next to the board."""

    level: int = 1
    lines: int = 0
    score: int = 0


@dataclass
class FallTimer:
    """Speed and timing of the automatic fall."""

    interval: float
    last_at: Optional[float] = None


@dataclass
class GameState:
    """Mutable state for a termtris session.

    All game rules live here: moving the piece, locking it, clearing lines,
    scoring and the fall schedule.  Collaborators such as the renderer and
    the clock stay outside; the current time is passed in where it matters.
    """

    config: GameConfig = field(default_factory=GameConfig)
    rng: Optional[random.Random] = None
    board: Board = field(default_factory=Board)
    active: Optional[Tetromino] = None
    upcoming: Optional[int] = None
    status: GameStatus = GameStatus.PLAYING
    stats: Stats = field(init=False)
    fall: FallTimer = field(init=False)
    last_cleared: int = 0
    flash_pending: bool = False

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = random.Random(self.config.seed)
        self.stats = Stats(level=self.config.starting_level)
        self.fall = FallTimer(interval=self.config.initial_fall_interval)

    def _random_shape(self) -> int:
        """Return a shape id drawn uniformly from all shapes."""

        return self.rng.choice(SHAPE_IDS)

    def _spawn_piece(self, shape: int) -> Tetromino:
        return Tetromino(shape, 1, self.config.spawn_x, self.config.spawn_y)

    def reset_game(self) -> None:
        """Reset the entire game state for a new game."""

        self.board = Board()
        self.stats = Stats(level=self.config.starting_level)
        self.fall = FallTimer(interval=self.config.initial_fall_interval)
        self.status = GameStatus.PLAYING
        self.last_cleared = 0
        self.flash_pending = False
        self.active = self._spawn_piece(self._random_shape())
        self.upcoming = self._random_shape()

    # Moving the piece -------------------------------------------------
    def is_playing(self) -> bool:
        return self.status is GameStatus.PLAYING

    def try_move(self, candidate: Tetromino) -> bool:
        """Make ``candidate`` the active piece if it fits on the board.

        Returns ``False`` and leaves the active piece untouched otherwise,
        including whenever the game is paused or over.
        """

        if self.active is None or self.status is not GameStatus.PLAYING:
            return False
        if not can_place(self.board, candidate):
            return False
        self.active = candidate
        return True

    def shift(self, dx: int = 0, dy: int = 0) -> bool:
        if self.active is None:
            return False
        return self.try_move(self.active.shifted(dx, dy))

    def rotate(self) -> bool:
        """Turn the piece to its next rotation in place; there is no wall kick."""

        if self.active is None:
            return False
        return self.try_move(self.active.rotated())

    def hard_drop(self) -> int:
        """Drop the piece as far as it goes and lock it immediately.

        Returns the number of lines cleared by the lock.
        """

        if self.active is None or self.status is not GameStatus.PLAYING:
            return 0
        while self.shift(dy=1):
            pass
        return self.lock_and_spawn()

    # Locking ----------------------------------------------------------
    def lock_and_spawn(self) -> int:
        """Lock the active piece, clear lines, score and spawn the next piece.

        Only the rows covered by the locked piece can have been completed, so
        only those are examined.  Returns the number of lines cleared.
        """

        piece = self.active
        if piece is None or self.status is not GameStatus.PLAYING:
            return 0
        self.board.lock_piece(piece)
        LOGGER.debug("Locked shape %d at (%d, %d)", piece.shape, piece.x, piece.y)

        rows = range(piece.y + 1, piece.y + piece.height() + 1)
        cleared = self.board.clear_full_rows(rows)
        self._record_lines(cleared)

        self.spawn_tetromino()
        return cleared

    def _record_lines(self, cleared: int) -> None:
        self.last_cleared = cleared
        if not cleared:
            return
        for _ in range(cleared):
            self.stats.lines += 1
            if self.stats.lines % self.config.lines_per_level == 0:
                self.stats.level += 1
                self.fall.interval *= self.config.speedup
                LOGGER.info(
                    "Level %d reached, fall interval %.3fs",
                    self.stats.level,
                    self.fall.interval,
                )
        self.stats.score += cleared * cleared
        self.flash_pending = True
        LOGGER.info("Cleared %d line(s). Score: %d", cleared, self.stats.score)

    def spawn_tetromino(self) -> bool:
        """Bring in the upcoming piece at the spawn point.

        If the spawn point is obstructed the game is over and no new upcoming
        piece is drawn.  Returns ``True`` when the piece was placed.
        """

        shape = self.upcoming if self.upcoming is not None else self._random_shape()
        self.active = self._spawn_piece(shape)
        if not can_place(self.board, self.active):
            self.status = GameStatus.OVER
            LOGGER.info(
                "Game over. Level %d, lines %d, score %d",
                self.stats.level,
                self.stats.lines,
                self.stats.score,
            )
            return False
        self.upcoming = self._random_shape()
        return True

    # Timing -----------------------------------------------------------
    def lower_piece_at_right_time(self, now: float) -> bool:
        """Move the piece down one row once the fall interval has passed.

        Does nothing unless the game is playing.  The first call only starts
        the timer.  Returns ``True`` if a fall step (move or lock) happened.
        """

        if self.status is not GameStatus.PLAYING:
            return False
        if self.fall.last_at is None:
            self.fall.last_at = now
        if now - self.fall.last_at < self.fall.interval:
            return False
        if not self.shift(dy=1):
            self.lock_and_spawn()
        self.fall.last_at = now
        return True

    def toggle_pause(self, now: float) -> None:
        """Switch between playing and paused; a finished game stays over.

        Resuming restarts the fall timer from ``now`` so paused time never
        triggers a catch-up fall.
        """

        if self.status is GameStatus.PLAYING:
            self.status = GameStatus.PAUSED
            LOGGER.info("Paused")
        elif self.status is GameStatus.PAUSED:
            self.status = GameStatus.PLAYING
            self.fall.last_at = now
            LOGGER.info("Resumed")
        elif self.status is GameStatus.OVER:
            return
        else:
            raise ValueError(f"Unknown game status: {self.status!r}")

    def consume_flash(self) -> bool:
        """Return ``True`` once after a lock that cleared lines."""

        pending = self.flash_pending
        self.flash_pending = False
        return pending

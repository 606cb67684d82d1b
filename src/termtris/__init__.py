"""Falling-block puzzle engine with a curses front-end."""

from .board import BORDER, EMPTY, HEIGHT, WIDTH, Board
from .config import GameConfig
from .tetromino import SHAPE_IDS, Tetromino, rotate_mask, rotations_of, shape_cells
from .game_state import FallTimer, GameState, GameStatus, Stats
from .utils import can_place, is_valid_placement, render_grid

__all__ = [
    "BORDER",
    "EMPTY",
    "HEIGHT",
    "WIDTH",
    "Board",
    "GameConfig",
    "SHAPE_IDS",
    "Tetromino",
    "rotate_mask",
    "rotations_of",
    "shape_cells",
    "FallTimer",
    "GameState",
    "GameStatus",
    "Stats",
    "can_place",
    "is_valid_placement",
    "render_grid",
]

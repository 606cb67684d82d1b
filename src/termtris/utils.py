"""Utility helpers for the termtris engine."""

from __future__ import annotations

from typing import List, Optional

from .board import EMPTY, Board
from .tetromino import Tetromino


def is_valid_placement(board: Board, shape: int, rotation: int, x: int, y: int) -> bool:
    """Return ``True`` if ``shape`` at ``rotation`` anchored at ``(x, y)`` fits.

    Every cell the piece would cover must be empty.  The border and anything
    outside the playfield read as occupied, so this single check rejects
    moves into walls, the floor, locked pieces and the space above the board.
    """

    return can_place(board, Tetromino(shape, rotation, x, y))


def can_place(board: Board, tetromino: Tetromino) -> bool:
    """Return ``True`` if every cell of ``tetromino`` is empty on ``board``."""

    return all(board.cell_at(x, y) == EMPTY for x, y in tetromino.cells())


def render_grid(board: Board, active: Optional[Tetromino] = None) -> List[List[int]]:
    """Return a copy of the playfield rows with the active piece overlaid.

    The copy is indexed ``grid[y - 1][x - 1]``.  The board itself is left
    untouched.
    """

    grid = board.playfield.tolist()
    if active is not None:
        for x, y in active.cells():
            if board.in_bounds(x, y):
                grid[y - 1][x - 1] = active.shape
    return grid

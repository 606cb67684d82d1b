"""Board representation for the termtris playfield."""

from __future__ import annotations

from typing import Iterable, List, Optional

import numpy as np
from numpy.typing import NDArray

from .tetromino import SHAPE_IDS, Tetromino


# Dimensions of the playable area.
WIDTH = 11
HEIGHT = 20

# Cell values.  Positive values are the shape id locked into the cell.
EMPTY = 0
BORDER = -1

Grid = NDArray[np.int8]


def create_empty_grid() -> Grid:
    """Return a new grid: empty playfield wrapped in a U-shaped border.

    The grid is indexed ``grid[y - 1, x]``.  Column ``0``, column
    ``WIDTH + 1`` and the last row (``y == HEIGHT + 1``) hold ``BORDER``.
    """

    grid = np.full((HEIGHT + 1, WIDTH + 2), EMPTY, dtype=np.int8)
    grid[:, 0] = BORDER
    grid[:, -1] = BORDER
    grid[-1, :] = BORDER
    return grid


class Board:
    """Locked cells of a game, addressed by 1-based ``(x, y)``.

    Row ``1`` is the top of the playfield and row ``HEIGHT`` the bottom.
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    @property
    def playfield(self) -> Grid:
        """Writable view of the playable cells, indexed ``[y - 1, x - 1]``."""

        return self.grid[:-1, 1:-1]

    def in_bounds(self, x: int, y: int) -> bool:
        return 1 <= x <= self.width and 1 <= y <= self.height

    def cell_at(self, x: int, y: int) -> int:
        """Return the value at ``(x, y)``.

        Coordinates outside the playable rectangle, including anything above
        the top row, read as ``BORDER`` so callers never need a separate
        bounds check.
        """

        if 0 <= x <= self.width + 1 and 1 <= y <= self.height + 1:
            return int(self.grid[y - 1, x])
        return BORDER

    def set_cell(self, x: int, y: int, value: int) -> None:
        """Set a playable cell to ``EMPTY`` or a shape id.

        Raises:
            IndexError: If ``(x, y)`` is outside the playable rectangle.
            ValueError: If ``value`` is neither empty nor a shape id.
        """

        if not self.in_bounds(x, y):
            raise IndexError("Cell out of bounds")
        if value != EMPTY and value not in SHAPE_IDS:
            raise ValueError(f"Invalid cell value: {value}")
        self.grid[y - 1, x] = np.int8(value)

    def is_empty(self, x: int, y: int) -> bool:
        return self.cell_at(x, y) == EMPTY

    def lock_piece(self, tetromino: Tetromino) -> None:
        """Write the tetromino's shape id into every cell it covers."""

        for x, y in tetromino.cells():
            self.set_cell(x, y, tetromino.shape)

    def row_is_full(self, y: int) -> bool:
        return bool(np.all(self.playfield[y - 1] != EMPTY))

    def full_rows(self, rows: Optional[Iterable[int]] = None) -> List[int]:
        """Return the completed rows among ``rows`` (all rows by default)."""

        if rows is None:
            rows = range(1, self.height + 1)
        return [y for y in rows if self.in_bounds(1, y) and self.row_is_full(y)]

    def clear_full_rows(self, rows: Optional[Iterable[int]] = None) -> int:
        """Remove completed rows and return how many were removed.

        Only ``rows`` are examined when given.  Everything above a removed row
        moves down by one and empty rows are fed in at the top.
        """

        full = self.full_rows(rows)
        if not full:
            return 0
        keep = np.ones(self.height, dtype=bool)
        keep[[y - 1 for y in full]] = False
        remaining = self.playfield[keep]
        new_rows = np.zeros((len(full), self.width), dtype=self.grid.dtype)
        self.playfield[:] = np.vstack((new_rows, remaining))
        return len(full)

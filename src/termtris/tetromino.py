"""Tetromino definitions and the falling piece.

Each of the seven shapes is written down once, in the orientation it is
drawn in below.  The four rotation states are derived from that drawing when
the module is imported and are never modified afterwards, so no rotation maths
happens while a game is being played.

Rotated states are stored as *masks*: tuples of columns indexed ``mask[x][y]``
with ``0``-based local coordinates.  Piece coordinates elsewhere in the package
are ``1``-based, matching the board.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterator, Sequence, Tuple

Mask = Tuple[Tuple[int, ...], ...]

NUM_ROTATIONS = 4


# One drawing per shape, rows top to bottom.  Shape ids are the positions in
# this table starting at 1; they are also the values locked into the board.
BASE_SHAPES: Dict[int, Mask] = {
    1: ((0, 1, 0),
        (1, 1, 1)),
    2: ((0, 1, 1),
        (1, 1, 0)),
    3: ((1, 1, 0),
        (0, 1, 1)),
    4: ((1, 1, 1, 1),),
    5: ((1, 1),
        (1, 1)),
    6: ((1, 0, 0),
        (1, 1, 1)),
    7: ((0, 0, 1),
        (1, 1, 1)),
}

SHAPE_IDS: Tuple[int, ...] = tuple(BASE_SHAPES)


def rotate_mask(mask: Sequence[Sequence[int]]) -> Mask:
    """Return ``mask`` turned by 90 degrees.

    For a source of ``height`` outer entries and ``width`` inner entries the
    result has ``width`` outer entries, and ``new[i][j] == mask[j][width - 1 - i]``.
    This is a rotation about the origin followed by a shift back into
    non-negative coordinates, so four applications give back the input.
    """

    height = len(mask)
    width = len(mask[0])
    return tuple(
        tuple(mask[j][width - 1 - i] for j in range(height)) for i in range(width)
    )


def _generate_rotations(mask: Mask) -> Tuple[Mask, ...]:
    """Generate the four rotation states, rotation ``1`` first."""

    rotations = []
    for _ in range(NUM_ROTATIONS):
        mask = rotate_mask(mask)
        rotations.append(mask)
    return tuple(rotations)


SHAPE_ROTATIONS: Dict[int, Tuple[Mask, ...]] = {
    shape: _generate_rotations(mask) for shape, mask in BASE_SHAPES.items()
}


def rotations_of(shape: int) -> Tuple[Mask, ...]:
    """Return the four masks of ``shape`` ordered by rotation index 1-4.

    Raises:
        KeyError: If ``shape`` is not a known shape id.
    """

    return SHAPE_ROTATIONS[shape]


def next_rotation(rotation: int) -> int:
    """Map rotation indices 1 -> 2 -> 3 -> 4 -> 1."""

    return rotation % NUM_ROTATIONS + 1


def mask_cells(mask: Mask) -> Iterator[Tuple[int, int]]:
    """Yield the occupied ``(x, y)`` cells of ``mask`` using 1-based coordinates."""

    for x, column in enumerate(mask, start=1):
        for y, filled in enumerate(column, start=1):
            if filled:
                yield x, y


def shape_cells(shape: int, rotation: int) -> Iterator[Tuple[int, int]]:
    """Yield the local cells of ``shape`` at ``rotation`` (an index in 1-4)."""

    return mask_cells(rotations_of(shape)[rotation - 1])


@dataclass
class Tetromino:
    """The piece currently falling, or a candidate placement for it.

    ``x`` and ``y`` form the anchor: a local cell ``(lx, ly)`` lands on board
    cell ``(x + lx, y + ly)``.
    """

    shape: int
    rotation: int = 1
    x: int = 0
    y: int = 0

    def cells(self) -> Iterator[Tuple[int, int]]:
        """Yield the board coordinates covered by this piece.

        A new generator is returned on every call so validation, locking and
        drawing can each walk the cells independently.
        """

        for lx, ly in shape_cells(self.shape, self.rotation):
            yield self.x + lx, self.y + ly

    def height(self) -> int:
        """Number of rows spanned by the current rotation."""

        return len(rotations_of(self.shape)[self.rotation - 1][0])

    def shifted(self, dx: int = 0, dy: int = 0) -> "Tetromino":
        """Return a copy of the piece moved by ``dx`` columns and ``dy`` rows."""

        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "Tetromino":
        """Return a copy of the piece in its next rotation state."""

        return replace(self, rotation=next_rotation(self.rotation))

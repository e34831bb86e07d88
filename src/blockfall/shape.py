"""Shape definitions and rotation.

A shape is a 4x4 grid of cell values stored row-major.  ``0`` marks an empty
cell, ``1`` a filled one and a single ``2`` marks the pivot: the cell used as
the piece's position and as the centre of rotation.  Shapes are immutable;
rotating one returns a new value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import random
from typing import Callable, Dict, List, Optional, Tuple

# Side length of the square cell matrix every shape is laid out on.
SHAPE_DIMENSION = 4

# Pivot used when a shape has no cell marked with ``2``.
DEFAULT_PIVOT = (1, 1)

Block = Tuple[int, int, int]  # (dx, dy, value) relative to the pivot


class ShapeKind(str, Enum):
    """The seven tetromino kinds.  ``R`` is the mirrored ``L``."""

    T = "T"
    S = "S"
    Z = "Z"
    O = "O"
    L = "L"
    R = "R"
    I = "I"


def index_to_coords(index: int) -> Tuple[int, int]:
    """Return the local ``(x, y)`` of a flat cell index."""

    return index % SHAPE_DIMENSION, index // SHAPE_DIMENSION


def coords_to_index(x: int, y: int) -> int:
    return y * SHAPE_DIMENSION + x


@dataclass(frozen=True)
class Shape:
    """Immutable 4x4 cell layout of a piece."""

    cells: Tuple[int, ...]
    rotatable: bool = True
    kind: Optional[ShapeKind] = None

    def __post_init__(self) -> None:
        if len(self.cells) != SHAPE_DIMENSION * SHAPE_DIMENSION:
            raise ValueError(
                f"Shape needs {SHAPE_DIMENSION * SHAPE_DIMENSION} cells, got {len(self.cells)}"
            )
        # Normalise lists passed by callers so equality and hashing work.
        object.__setattr__(self, "cells", tuple(int(c) for c in self.cells))

    def pivot(self) -> Tuple[int, int]:
        """Return the local coordinates of the pivot cell.

        The pivot is the first cell holding a value greater than ``1``.  When
        no such cell exists :data:`DEFAULT_PIVOT` is returned.
        """

        for index, value in enumerate(self.cells):
            if value > 1:
                return index_to_coords(index)
        return DEFAULT_PIVOT

    def rotate(self) -> "Shape":
        """Return the shape turned by 90 degrees.

        The cell at local ``(x, y)`` of the result is the cell at
        ``(y, N - 1 - x)`` of this shape.  Shapes that are not rotatable are
        returned unchanged.
        """

        if not self.rotatable:
            return self
        n = SHAPE_DIMENSION
        rotated = []
        for index in range(len(self.cells)):
            x, y = index_to_coords(index)
            rotated.append(self.cells[coords_to_index(y, n - 1 - x)])
        return Shape(tuple(rotated), self.rotatable, self.kind)

    def filled_blocks(self) -> List[Block]:
        """Return ``(dx, dy, value)`` for every filled cell in row-major order.

        Offsets are relative to :meth:`pivot`.
        """

        px, py = self.pivot()
        blocks: List[Block] = []
        for index, value in enumerate(self.cells):
            if not value:
                continue
            x, y = index_to_coords(index)
            blocks.append((x - px, y - py, value))
        return blocks

    def for_each_filled_block(self, callback: Callable[[int, int, int], None]) -> None:
        """Invoke ``callback(dx, dy, value)`` for each filled cell."""

        for dx, dy, value in self.filled_blocks():
            callback(dx, dy, value)


# Spawn orientation of every kind.  Rows are listed top to bottom.
_LAYOUTS: Dict[ShapeKind, Tuple[int, ...]] = {
    ShapeKind.T: (
        0, 0, 0, 0,
        1, 2, 1, 0,
        0, 1, 0, 0,
        0, 0, 0, 0,
    ),
    ShapeKind.S: (
        0, 0, 0, 0,
        0, 2, 1, 0,
        1, 1, 0, 0,
        0, 0, 0, 0,
    ),
    ShapeKind.Z: (
        0, 0, 0, 0,
        1, 2, 0, 0,
        0, 1, 1, 0,
        0, 0, 0, 0,
    ),
    ShapeKind.O: (
        0, 0, 0, 0,
        0, 2, 1, 0,
        0, 1, 1, 0,
        0, 0, 0, 0,
    ),
    ShapeKind.L: (
        0, 1, 0, 0,
        0, 2, 0, 0,
        0, 1, 1, 0,
        0, 0, 0, 0,
    ),
    ShapeKind.R: (
        0, 1, 0, 0,
        0, 2, 0, 0,
        1, 1, 0, 0,
        0, 0, 0, 0,
    ),
    ShapeKind.I: (
        0, 1, 0, 0,
        0, 2, 0, 0,
        0, 1, 0, 0,
        0, 1, 0, 0,
    ),
}


SHAPES: Dict[ShapeKind, Shape] = {
    kind: Shape(cells, rotatable=kind is not ShapeKind.O, kind=kind)
    for kind, cells in _LAYOUTS.items()
}


def pick(rng: Optional[random.Random] = None) -> Shape:
    """Return a catalog shape chosen uniformly at random.

    Parameters
    ----------
    rng:
        Source of randomness.  The module-level :mod:`random` generator is
        used when omitted.
    """

    chooser = rng if rng is not None else random
    return SHAPES[chooser.choice(list(ShapeKind))]


__all__ = [
    "Block",
    "DEFAULT_PIVOT",
    "SHAPES",
    "SHAPE_DIMENSION",
    "Shape",
    "ShapeKind",
    "coords_to_index",
    "index_to_coords",
    "pick",
]

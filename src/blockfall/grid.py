"""Grid representation for the Blockfall playfield."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:  # pragma: no cover - import only needed for annotations
    from .figure import Figure


# Default playfield size in cells.
WIDTH = 8
HEIGHT = 18

Cells = NDArray[np.int32]


def create_empty_cells(width: int, height: int) -> Cells:
    """Return a new ``height`` x ``width`` matrix filled with zeros."""

    return np.zeros((height, width), dtype=np.int32)


class Grid:
    """Fixed-size matrix of locked blocks.

    Cells are addressed as ``(x, y)`` with ``y`` growing downwards.  Access
    outside the grid never raises: reads return ``0`` and writes are ignored.
    """

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells: Cells = create_empty_cells(width, height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> int:
        """Return the value at ``(x, y)`` or ``0`` outside the grid."""

        if self.in_bounds(x, y):
            return int(self.cells[y, x])
        return 0

    def set(self, x: int, y: int, value: int) -> None:
        """Store ``value`` at ``(x, y)``; ignored outside the grid.

        Any non-zero value, negative ones included, marks the cell occupied.
        """

        if self.in_bounds(x, y):
            self.cells[y, x] = value

    def is_row_full(self, row: int) -> bool:
        """Return ``True`` if every cell of ``row`` is occupied."""

        return bool(np.all(self.cells[row] != 0))

    def clear_row(self, row: int) -> None:
        """Remove ``row`` and insert an empty row at the top.

        Rows above ``row`` move down by one; rows below keep their place.
        """

        remaining = np.delete(self.cells, row, axis=0)
        empty = np.zeros((1, self.width), dtype=self.cells.dtype)
        self.cells = np.vstack((empty, remaining))

    def clear_full_rows(self) -> List[int]:
        """Clear every full row and return the cleared indices.

        Rows are scanned top to bottom.  Clearing a row only shifts rows above
        it, so the scan can continue with the next index.
        """

        cleared: List[int] = []
        for row in range(self.height):
            if self.is_row_full(row):
                self.clear_row(row)
                cleared.append(row)
        return cleared

    def lock_figure(self, figure: "Figure") -> None:
        """Bake the figure's filled blocks into the grid.

        A block only replaces a cell when its own value is non-zero, so locking
        never erases existing blocks.  Blocks outside the grid are dropped.
        """

        for x, y, value in figure.blocks():
            self.set(x, y, value or self.get(x, y))

    def reset(self) -> None:
        """Empty every cell."""

        self.cells = create_empty_cells(self.width, self.height)

    def to_list(self) -> List[List[int]]:
        """Return the cells as nested Python lists, one list per row."""

        return self.cells.tolist()


__all__ = ["Cells", "Grid", "HEIGHT", "WIDTH", "create_empty_cells"]

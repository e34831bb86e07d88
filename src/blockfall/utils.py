"""Utility helpers for the Blockfall engine."""

from __future__ import annotations

from functools import partial
from typing import List, Optional

from .figure import CollisionPredicate, Figure
from .grid import Grid


def is_blocked(grid: Grid, x: int, y: int) -> bool:
    """Return ``True`` if the absolute cell ``(x, y)`` cannot hold a block.

    Columns outside the grid and rows below the floor are blocked, as is any
    occupied cell.  Rows above the top edge are always free so pieces can
    spawn and rotate partially off screen.
    """

    if x < 0 or x >= grid.width or y >= grid.height:
        return True
    return grid.get(x, y) != 0


def collider_for(grid: Grid) -> CollisionPredicate:
    """Return :func:`is_blocked` bound to ``grid``."""

    return partial(is_blocked, grid)


def score_for_rows(rows: int, base: int = 1000, multiplier: float = 1.5) -> int:
    """Return the points awarded for clearing ``rows`` rows in one landing.

    The first row is worth ``base``; every further row is worth the previous
    row's award times ``multiplier``.  With the defaults one row scores 1000,
    two rows 2500 and three rows 4750.  Each award is rounded to the nearest
    integer (see :func:`round`) before it is added, so fractional awards from
    a long combo or a custom ``multiplier`` never truncate the total.
    """

    running = 0
    total = 0
    for _ in range(rows):
        running = round(running * multiplier) if running else base
        total += running
    return total


def render_grid(grid: Grid, figure: Optional[Figure] = None) -> List[List[int]]:
    """Return a copy of the grid cells with ``figure`` overlaid.

    Blocks of the figure that lie outside the grid are skipped.  The grid
    itself is left untouched.
    """

    cells = grid.to_list()
    if figure is not None:
        for x, y, value in figure.blocks():
            if grid.in_bounds(x, y):
                cells[y][x] = value
    return cells


def format_grid(cells: List[List[int]]) -> str:
    """Return ``cells`` as text, ``#`` for occupied and ``.`` for empty."""

    return "\n".join("".join("#" if cell else "." for cell in row) for row in cells)


__all__ = ["collider_for", "format_grid", "is_blocked", "render_grid", "score_for_rows"]

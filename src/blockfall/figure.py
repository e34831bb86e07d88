"""The active falling piece and its movement rules.

Every attempt takes a collision predicate ``collides_at(x, y) -> bool`` that
reports whether an absolute cell is blocked.  The predicate is the only link
between a :class:`Figure` and the playfield; see
:func:`blockfall.utils.collider_for`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Tuple

from .shape import SHAPE_DIMENSION, SHAPES, Shape, ShapeKind

CollisionPredicate = Callable[[int, int], bool]

# Spawn position of the pivot cell.  ``y`` starts above the visible area.
SPAWN_X = SHAPE_DIMENSION
SPAWN_Y = -1

# Offsets tried in order when a rotation collides: in place, left, right, up.
ROTATION_KICKS: Tuple[Tuple[int, int], ...] = ((0, 0), (-1, 0), (1, 0), (0, -1))


class FallResult(str, Enum):
    FALLING = "falling"
    LANDED = "landed"


def collides(shape: Shape, x: int, y: int, collides_at: CollisionPredicate) -> bool:
    """Return ``True`` if ``shape`` placed with its pivot at ``(x, y)`` collides."""

    for dx, dy, _ in shape.filled_blocks():
        if collides_at(x + dx, y + dy):
            return True
    return False


@dataclass
class Figure:
    """Active piece: a shape and the grid position of its pivot."""

    shape: Shape = SHAPES[ShapeKind.T]
    x: int = SPAWN_X
    y: int = SPAWN_Y

    def reset(self, shape: Shape, x: int = SPAWN_X, y: int = SPAWN_Y) -> None:
        """Replace the shape and move back to the spawn position."""

        self.shape = shape
        self.x = x
        self.y = y

    def collides(self, collides_at: CollisionPredicate) -> bool:
        return collides(self.shape, self.x, self.y, collides_at)

    def attempt_move(self, dx: int, dy: int, collides_at: CollisionPredicate) -> bool:
        """Shift by ``(dx, dy)`` unless the new position collides.

        Returns ``True`` when the move was committed.
        """

        if collides(self.shape, self.x + dx, self.y + dy, collides_at):
            return False
        self.x += dx
        self.y += dy
        return True

    def attempt_rotate(self, collides_at: CollisionPredicate) -> bool:
        """Rotate, nudging the piece by one cell if needed.

        The rotated shape is tried at each offset in :data:`ROTATION_KICKS`;
        the first free placement is committed.  If none fits the figure is
        left untouched and ``False`` is returned.
        """

        rotated = self.shape.rotate()
        for dx, dy in ROTATION_KICKS:
            if not collides(rotated, self.x + dx, self.y + dy, collides_at):
                self.shape = rotated
                self.x += dx
                self.y += dy
                return True
        return False

    def attempt_fall(self, collides_at: CollisionPredicate) -> FallResult:
        """Move down one row or report that the figure has landed."""

        if self.attempt_move(0, 1, collides_at):
            return FallResult.FALLING
        return FallResult.LANDED

    def blocks(self) -> List[Tuple[int, int, int]]:
        """Return absolute ``(x, y, value)`` for each filled block."""

        return [(self.x + dx, self.y + dy, value) for dx, dy, value in self.shape.filled_blocks()]


__all__ = [
    "CollisionPredicate",
    "Figure",
    "FallResult",
    "ROTATION_KICKS",
    "SPAWN_X",
    "SPAWN_Y",
    "collides",
]

from __future__ import annotations

import pytest

from blockfall.shape import ShapeKind


class FixedShapes:
    """Stand-in random source that always picks the same shape kind."""

    def __init__(self, kind: ShapeKind = ShapeKind.O) -> None:
        self.kind = kind

    def choice(self, _seq):
        return self.kind

    def seed(self, _value=None) -> None:
        pass


@pytest.fixture
def squares() -> FixedShapes:
    return FixedShapes(ShapeKind.O)

"""Blockfall: a small falling-block puzzle engine."""

from .config import GameConfig
from .controls import Command, InputQueue
from .figure import Figure, FallResult, collides
from .game import Game, Mode
from .grid import Grid
from .shape import SHAPES, Shape, ShapeKind, pick
from .utils import collider_for, is_blocked, render_grid, score_for_rows

__all__ = [
    "Command",
    "FallResult",
    "Figure",
    "Game",
    "GameConfig",
    "Grid",
    "InputQueue",
    "Mode",
    "SHAPES",
    "Shape",
    "ShapeKind",
    "collider_for",
    "collides",
    "is_blocked",
    "pick",
    "render_grid",
    "score_for_rows",
]

"""Tunable settings for a Blockfall session."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional

from .controls import Command
from .shape import SHAPES


# Host key names (as reported by browser ``KeyboardEvent.key``) mapped to the
# command they trigger.  The pygame front-end translates its key codes to the
# same names.
DEFAULT_KEY_BINDINGS: Dict[str, Command] = {
    " ": Command.ROTATE,
    "ArrowUp": Command.ROTATE,
    "ArrowLeft": Command.LEFT,
    "ArrowRight": Command.RIGHT,
    "ArrowDown": Command.ACCELERATE,
}


@dataclass(frozen=True)
class GameConfig:
    """Immutable configuration consumed by :class:`blockfall.game.Game`.

    Raises:
        ValueError: If a dimension, interval or factor is not positive, or if
            some shape would overlap a side wall at ``spawn_x``.

    ``spawn_x`` defaults to the middle column, ``width // 2``.
    """

    width: int = 8
    height: int = 18
    tick_ms: float = 150.0
    fast_fall_factor: float = 10.0
    line_score: int = 1000
    combo_multiplier: float = 1.5
    spawn_x: Optional[int] = None
    spawn_y: int = -1
    input_queue_size: int = 32
    key_bindings: Dict[str, Command] = field(
        default_factory=lambda: dict(DEFAULT_KEY_BINDINGS)
    )

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Grid size must be positive, got {self.width}x{self.height}")
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")
        if self.fast_fall_factor <= 0:
            raise ValueError(f"fast_fall_factor must be positive, got {self.fast_fall_factor}")
        if self.input_queue_size <= 0:
            raise ValueError(f"input_queue_size must be positive, got {self.input_queue_size}")
        if self.spawn_x is None:
            object.__setattr__(self, "spawn_x", self.width // 2)
        offsets = [dx for shape in SHAPES.values() for dx, _, _ in shape.filled_blocks()]
        if self.spawn_x + min(offsets) < 0 or self.spawn_x + max(offsets) >= self.width:
            raise ValueError(
                f"spawn_x {self.spawn_x} does not fit every shape in a grid {self.width} wide"
            )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "GameConfig":
        """Build a config from ``values``, ignoring ``None`` entries.

        Unknown keys raise :class:`ValueError` so typos in overrides are not
        silently dropped.
        """

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**{k: v for k, v in values.items() if v is not None})


__all__ = ["DEFAULT_KEY_BINDINGS", "GameConfig"]

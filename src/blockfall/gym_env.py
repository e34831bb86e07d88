"""Gymnasium-compatible wrapper around a Blockfall :class:`Game`.

Each ``step`` applies one action and then runs exactly one simulation tick,
so an agent plays at the game's native tick granularity.

Observation is a flat ``float32`` vector of ``height * width`` cells (1 for
occupied, 0 for empty) with the falling figure overlaid.

Actions (``Discrete(4)``):
  - 0: do nothing
  - 1: move left
  - 2: move right
  - 3: rotate

Reward is the score gained during the step divided by the single-row score,
so clearing one row yields ``1.0``.
"""

from __future__ import annotations

from typing import Dict, Optional

import gymnasium as gym
from gymnasium import spaces
import numpy as np

from .config import GameConfig
from .game import Game, Mode
from .utils import format_grid, render_grid

ACTION_NOOP = 0
ACTION_LEFT = 1
ACTION_RIGHT = 2
ACTION_ROTATE = 3


class BlockfallEnv(gym.Env):
    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        render_mode: Optional[str] = None,
        max_steps: Optional[int] = None,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.action_space = spaces.Discrete(4)
        self.observation_space = spaces.Box(
            low=0.0,
            high=1.0,
            shape=(self.config.width * self.config.height,),
            dtype=np.float32,
        )
        self.game = Game(self.config)
        self._steps = 0
        self._max_steps = max_steps

    # ----------------------- Env API -----------------------
    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        # Shapes are drawn from a generator derived from the env's np_random
        # so seeding the env makes the piece sequence reproducible.
        self.game.rng.seed(int(self.np_random.integers(0, 2**31 - 1)))
        self.game.restart()
        self._steps = 0
        return self._observation(), self._info()

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action!r}")
        game = self.game
        score_before = game.score
        collides_at = game.collides_at
        if action == ACTION_LEFT:
            game.figure.attempt_move(-1, 0, collides_at)
        elif action == ACTION_RIGHT:
            game.figure.attempt_move(1, 0, collides_at)
        elif action == ACTION_ROTATE:
            game.figure.attempt_rotate(collides_at)
        game.advance(game.tick_interval_ms)
        self._steps += 1

        reward = (game.score - score_before) / self.config.line_score
        terminated = game.mode is Mode.GAME_OVER
        truncated = self._max_steps is not None and self._steps >= self._max_steps
        return self._observation(), float(reward), terminated, truncated, self._info()

    def render(self):
        if self.render_mode == "ansi":
            return format_grid(render_grid(self.game.grid, self.game.figure))
        return None

    def close(self):
        return None

    # -------------------- Helpers -------------------------
    def _observation(self) -> np.ndarray:
        cells = np.array(render_grid(self.game.grid, self.game.figure), dtype=np.float32)
        return (cells != 0).astype(np.float32).reshape(-1)

    def _info(self) -> Dict:
        return {
            "score": self.game.score,
            "lines_cleared": self.game.lines_cleared,
            "pieces": self.game.pieces,
        }


__all__ = ["BlockfallEnv"]

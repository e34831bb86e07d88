"""Game session: owns the playfield, the active figure and the timing loop.

The host drives a :class:`Game` by reporting key events and the current time.
Elapsed time is collected into a tick accumulator and every whole tick runs
one simulation step, so the fall speed does not depend on the frame rate.
"""

from __future__ import annotations

from enum import Enum
import logging
import random
from typing import Optional, Tuple

from .config import GameConfig
from .controls import PRESS, RELEASE, Command, InputQueue, parse_input_name
from .figure import CollisionPredicate, FallResult, Figure
from .grid import Grid
from .shape import pick
from .utils import collider_for, score_for_rows


LOGGER = logging.getLogger(__name__)


class Mode(str, Enum):
    """Session modes.  ``BEGIN`` is reserved for a title screen."""

    BEGIN = "begin"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class Game:
    """Mutable state of one Blockfall session.

    Parameters
    ----------
    config:
        Session settings; defaults to :class:`GameConfig`.
    rng:
        Random source for picking shapes.  A new :class:`random.Random`
        seeded with ``seed`` is created when omitted.
    seed:
        Seed for the default random source.
    mode:
        Initial mode.  Pass :attr:`Mode.BEGIN` to hold the game until
        :meth:`begin` is called.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        mode: Mode = Mode.PLAYING,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng if rng is not None else random.Random(seed)
        self.grid = Grid(self.config.width, self.config.height)
        self.figure = Figure()
        self.inputs = InputQueue(self.config.input_queue_size)
        self.mode = mode
        if not self.spawn():
            self.mode = Mode.GAME_OVER
        self.score = 0
        self.lines_cleared = 0
        self.pieces = 0
        self.tick_accumulator = 0.0
        self.tick_interval_ms = float(self.config.tick_ms)
        self.fast_fall_active = False
        self.last_timestamp: Optional[float] = None

    @property
    def collides_at(self) -> CollisionPredicate:
        return collider_for(self.grid)

    # Lifecycle ---------------------------------------------------------
    def begin(self) -> None:
        """Leave the title mode and start playing."""

        if self.mode is Mode.BEGIN:
            self.mode = Mode.PLAYING
            LOGGER.info("Game started")

    def restart(self) -> None:
        """Throw away the current session and start a fresh one."""

        self.grid.reset()
        self.inputs.clear()
        self.score = 0
        self.lines_cleared = 0
        self.pieces = 0
        self.tick_accumulator = 0.0
        self.tick_interval_ms = float(self.config.tick_ms)
        self.fast_fall_active = False
        self.last_timestamp = None
        self.mode = Mode.PLAYING
        if not self.spawn():
            self.mode = Mode.GAME_OVER
        LOGGER.info("Game restarted")

    def spawn(self) -> bool:
        """Give the figure a random shape at the spawn position.

        Returns ``False`` if the new figure overlaps the grid.
        """

        self.figure.reset(pick(self.rng), self.config.spawn_x, self.config.spawn_y)
        return not self.figure.collides(self.collides_at)

    # Timing ------------------------------------------------------------
    def update(self, now_ms: float) -> int:
        """Advance by the time elapsed since the previous call.

        The first call only records ``now_ms``.  Returns the number of
        simulation steps run.
        """

        if self.last_timestamp is None:
            self.last_timestamp = now_ms
            return 0
        elapsed = now_ms - self.last_timestamp
        self.last_timestamp = now_ms
        return self.advance(elapsed)

    def advance(self, elapsed_ms: float) -> int:
        """Add ``elapsed_ms`` to the tick accumulator and run due steps.

        Every whole tick interval in the accumulator produces one step, so a
        long pause is caught up in a burst instead of being skipped.  Nothing
        happens outside :attr:`Mode.PLAYING`.
        """

        if self.mode is not Mode.PLAYING:
            return 0
        self.tick_accumulator += max(0.0, elapsed_ms)
        steps = 0
        while self.tick_accumulator >= self.tick_interval_ms:
            self.step()
            steps += 1
            self.tick_accumulator -= self.tick_interval_ms
            if self.mode is not Mode.PLAYING:
                break
        return steps

    def step(self) -> None:
        """Run one simulation tick: fall, or lock and spawn the next figure."""

        if self.figure.attempt_fall(self.collides_at) is FallResult.LANDED:
            self._lock_figure()

    def _lock_figure(self) -> None:
        self.grid.lock_figure(self.figure)
        self.pieces += 1
        cleared = self.grid.clear_full_rows()
        if cleared:
            points = score_for_rows(
                len(cleared), self.config.line_score, self.config.combo_multiplier
            )
            self.score += points
            self.lines_cleared += len(cleared)
            LOGGER.debug("Cleared rows %s for %d points. Score: %d", cleared, points, self.score)
        if not self.spawn():
            self.mode = Mode.GAME_OVER
            LOGGER.info("Game over. Score: %d", self.score)

    # Fast fall ---------------------------------------------------------
    def start_fast_fall(self) -> None:
        """Speed up the tick rate.  Calling it again has no effect."""

        if self.fast_fall_active:
            return
        factor = self.config.fast_fall_factor
        self.tick_accumulator /= factor
        self.tick_interval_ms /= factor
        self.fast_fall_active = True
        LOGGER.debug("Fast fall on, tick interval %.2fms", self.tick_interval_ms)

    def stop_fast_fall(self) -> None:
        """Restore the normal tick rate.  Calling it again has no effect."""

        if not self.fast_fall_active:
            return
        factor = self.config.fast_fall_factor
        self.tick_accumulator *= factor
        self.tick_interval_ms *= factor
        self.fast_fall_active = False
        LOGGER.debug("Fast fall off, tick interval %.2fms", self.tick_interval_ms)

    # Input -------------------------------------------------------------
    def _resolve(self, name: str) -> Optional[Tuple[Command, str]]:
        parsed = parse_input_name(name)
        if parsed is None:
            return None
        key, edge = parsed
        command = self.config.key_bindings.get(key)
        if command is None:
            return None
        return command, edge

    def accepts(self, name: str) -> bool:
        """Return ``True`` if :meth:`process_input` would handle ``name`` now."""

        if self.mode is not Mode.PLAYING:
            return False
        resolved = self._resolve(name)
        if resolved is None:
            return False
        command, edge = resolved
        return edge == PRESS or command is Command.ACCELERATE

    def process_input(self, name: str) -> bool:
        """Apply the input ``name`` (``"<key>_down"`` or ``"<key>_up"``).

        Returns ``False`` when the input is unknown or not applicable in the
        current mode, letting the host keep its default behaviour for the key.
        """

        if self.mode is Mode.PLAYING:
            return self._playing_input(name)
        # BEGIN and GAME_OVER ignore every input.
        return False

    def _playing_input(self, name: str) -> bool:
        resolved = self._resolve(name)
        if resolved is None:
            return False
        command, edge = resolved
        collides_at = self.collides_at
        if edge == PRESS:
            if command is Command.ROTATE:
                self.figure.attempt_rotate(collides_at)
            elif command is Command.LEFT:
                self.figure.attempt_move(-1, 0, collides_at)
            elif command is Command.RIGHT:
                self.figure.attempt_move(1, 0, collides_at)
            elif command is Command.ACCELERATE:
                self.start_fast_fall()
            else:
                return False
            return True
        if edge == RELEASE and command is Command.ACCELERATE:
            self.stop_fast_fall()
            return True
        return False

    def enqueue_input(self, name: str) -> bool:
        """Queue ``name`` for the next :meth:`frame`.

        Returns whether the input will be handled, so the host can decide to
        suppress the key's default action.  Rejected inputs are not queued.
        """

        if not self.accepts(name):
            return False
        self.inputs.push(name)
        return True

    def frame(self, now_ms: float) -> int:
        """Apply queued inputs in order, then advance to ``now_ms``."""

        for name in self.inputs.drain():
            self.process_input(name)
        return self.update(now_ms)


__all__ = ["Game", "Mode"]

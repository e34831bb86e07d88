"""pygame front-end for the Blockfall engine.

This module glues a :class:`~blockfall.game.Game` to a pygame window: key
events become queued ``<key>_down`` / ``<key>_up`` inputs, the pygame clock
feeds :meth:`Game.frame` and :class:`~blockfall.render.Renderer` draws the
result.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

import pygame

from .config import GameConfig
from .controls import input_name
from .game import Game, Mode
from .render import Renderer, base_window_size

# Frames per second to run the game loop at
FPS = 60

LOGGER = logging.getLogger(__name__)

# pygame key codes mapped to the host key names used in key bindings
KEY_NAMES = {
    pygame.K_SPACE: " ",
    pygame.K_UP: "ArrowUp",
    pygame.K_LEFT: "ArrowLeft",
    pygame.K_RIGHT: "ArrowRight",
    pygame.K_DOWN: "ArrowDown",
}


def key_name(key: int) -> str:
    """Return the host key name for a pygame key code."""

    return KEY_NAMES.get(key, pygame.key.name(key))


def handle_event(event: pygame.event.Event, game: Game) -> bool:
    """Route one pygame event to ``game``.

    Returns ``False`` when the event asks the loop to quit.
    """

    if event.type == pygame.QUIT:
        return False
    if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
        return True
    pressed = event.type == pygame.KEYDOWN
    if pressed and event.key == pygame.K_ESCAPE:
        return False
    if game.mode is Mode.BEGIN and pressed:
        game.begin()
    elif game.mode is Mode.GAME_OVER and pressed and event.key == pygame.K_r:
        game.restart()
    else:
        game.enqueue_input(input_name(key_name(event.key), pressed))
    return True


class GameRunner:
    """Run a game in a resizable pygame window."""

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None) -> None:
        self.config = config or GameConfig()
        self.seed = seed
        self.game: Optional[Game] = None
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._running

    def _frame(self, screen: pygame.Surface, renderer: Renderer, now_ms: int) -> None:
        assert self.game is not None
        try:
            self.game.frame(now_ms)
            renderer.draw(screen, self.game)
        except Exception:  # pragma: no cover - guard for the interactive loop
            LOGGER.exception("Crash detected, restarting")
            self.game.restart()
        pygame.display.set_caption(f"Blockfall - Score: {self.game.score}")
        pygame.display.flip()

    async def _run_loop(self) -> None:
        # Let SDL bind to the page canvas when running in a browser.
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_CANVAS_ELEMENT_ID", "#canvas")
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_KEYBOARD_ELEMENT", "#canvas")
        pygame.init()
        size = base_window_size(self.config.width, self.config.height)
        screen = pygame.display.set_mode(size, pygame.RESIZABLE)
        pygame.display.set_caption("Blockfall")
        font = pygame.font.SysFont(None, 22)
        renderer = Renderer(font)
        clock = pygame.time.Clock()

        self.game = Game(self.config, seed=self.seed, mode=Mode.BEGIN)
        LOGGER.info("Window opened at %dx%d", *size)

        self._running = True
        while self._running:
            clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.VIDEORESIZE:
                    screen = pygame.display.set_mode(event.size, pygame.RESIZABLE)
                    renderer.resize(event.w, event.h, self.config.width, self.config.height)
                elif not handle_event(event, self.game):
                    self._running = False
            self._frame(screen, renderer, pygame.time.get_ticks())
            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped. Final score: %d", self.game.score)

    def start(self) -> None:
        if self._task and not self._task.done():
            LOGGER.info("Game already running")
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running loop (plain Python); block until the window closes
            asyncio.run(self._run_loop())
        else:
            self._task = loop.create_task(self._run_loop())

    def stop(self) -> None:
        if not self._running:
            LOGGER.info("Stop ignored: game not running")
            return
        self._running = False


def main(config: Optional[GameConfig] = None, seed: Optional[int] = None) -> None:
    GameRunner(config, seed).start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()

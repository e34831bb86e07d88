"""pygame drawing for a :class:`~blockfall.game.Game`.

The renderer only reads game state: grid cells, the figure's blocks, the
score and the mode.  Everything is drawn at ``TILE_SIZE * scale`` pixels per
cell, where ``scale`` follows the window size.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import pygame

from .game import Game, Mode

# Size of a single cell in pixels at scale 1
TILE_SIZE = 20
# Gap around the playfield in pixels at scale 1
MARGIN = 10
# Offset of the figure's drop shadow in pixels at scale 1
SHADOW_OFFSET = 3

BACKGROUND = (16, 16, 24)
GRID_LINE = (50, 50, 60)
LOCKED_COLORS = {1: (120, 120, 140), 2: (160, 160, 180)}
FIGURE_COLOR = (240, 200, 60)
SHADOW_COLOR = (0, 0, 0)
TEXT_COLOR = (230, 230, 230)
OVERLAY_COLOR = (0, 0, 0, 160)


def compute_scale(
    window_w: int,
    window_h: int,
    grid_w: int,
    grid_h: int,
    tile: int = TILE_SIZE,
    margin: int = MARGIN,
) -> float:
    """Return the largest scale at which the playfield fits the window.

    The result is never below a small positive floor so a minimised window
    does not produce a zero-sized tile.
    """

    content_w = grid_w * tile + 2 * margin
    content_h = grid_h * tile + 2 * margin
    return max(0.1, min(window_w / content_w, window_h / content_h))


def base_window_size(grid_w: int, grid_h: int) -> Tuple[int, int]:
    """Return the window size that shows the playfield at scale 1."""

    return grid_w * TILE_SIZE + 2 * MARGIN, grid_h * TILE_SIZE + 2 * MARGIN


class Renderer:
    """Draw the playfield, the falling figure and the HUD onto a surface."""

    def __init__(self, font: Optional[pygame.font.Font] = None, scale: float = 1.0) -> None:
        self.font = font
        self.scale = scale

    def resize(self, window_w: int, window_h: int, grid_w: int, grid_h: int) -> None:
        """Recompute :attr:`scale` after the window changed size."""

        self.scale = compute_scale(window_w, window_h, grid_w, grid_h)

    def _rect(self, x: float, y: float, offset: int = 0) -> pygame.Rect:
        tile = TILE_SIZE * self.scale
        left = MARGIN * self.scale + x * tile + offset * self.scale
        top = MARGIN * self.scale + y * tile + offset * self.scale
        return pygame.Rect(round(left), round(top), max(1, round(tile)), max(1, round(tile)))

    def draw_grid(self, surface: pygame.Surface, cells: Sequence[Sequence[int]]) -> None:
        """Render the locked cells and the cell outlines."""

        for y, row in enumerate(cells):
            for x, value in enumerate(row):
                rect = self._rect(x, y)
                if value:
                    pygame.draw.rect(surface, LOCKED_COLORS.get(value, LOCKED_COLORS[1]), rect)
                pygame.draw.rect(surface, GRID_LINE, rect, 1)

    def draw_figure(
        self, surface: pygame.Surface, blocks: Sequence[Tuple[int, int, int]]
    ) -> None:
        """Render the falling figure: a shadow pass then the piece itself.

        Blocks above the top edge are not drawn.
        """

        visible = [(x, y) for x, y, _ in blocks if y >= 0]
        for x, y in visible:
            pygame.draw.rect(surface, SHADOW_COLOR, self._rect(x, y, SHADOW_OFFSET))
        for x, y in visible:
            pygame.draw.rect(surface, FIGURE_COLOR, self._rect(x, y))

    def draw_hud(self, surface: pygame.Surface, game: Game) -> None:
        if self.font is None:
            return
        text = self.font.render(f"Score: {game.score}", True, TEXT_COLOR)
        surface.blit(text, (round(MARGIN * self.scale) + 2, 2))
        if game.mode is Mode.GAME_OVER:
            overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
            overlay.fill(OVERLAY_COLOR)
            surface.blit(overlay, (0, 0))
            self._centered(surface, "GAME OVER", 0)
            self._centered(surface, "Press R to restart", 1)
        elif game.mode is Mode.BEGIN:
            self._centered(surface, "Press any key", 0)

    def _centered(self, surface: pygame.Surface, message: str, line: int) -> None:
        assert self.font is not None
        text = self.font.render(message, True, TEXT_COLOR)
        width, height = surface.get_size()
        rect = text.get_rect(center=(width // 2, height // 2 + line * text.get_height()))
        surface.blit(text, rect)

    def draw(self, surface: pygame.Surface, game: Game) -> None:
        """Render one complete frame of ``game``."""

        surface.fill(BACKGROUND)
        self.draw_grid(surface, game.grid.to_list())
        self.draw_figure(surface, game.figure.blocks())
        self.draw_hud(surface, game)


__all__ = ["MARGIN", "Renderer", "TILE_SIZE", "base_window_size", "compute_scale"]

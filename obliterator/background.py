"""The endlessly tiled ground that scrolls under the player."""

from __future__ import annotations

import pygame

from obliterator.animation import ASSETS_DIR, Sprite
from obliterator.collider import Rect

GROUND_PATH = ASSETS_DIR / "Textures" / "ground.jpg"


def _load_ground() -> pygame.Surface | None:
    try:
        return pygame.image.load(str(GROUND_PATH))
    except (OSError, pygame.error):
        return None


class Background(Sprite):
    """A repeating texture whose visible window moves opposite to the player."""

    def __init__(self, texture: pygame.Surface | None = None) -> None:
        super().__init__(texture if texture is not None else _load_ground())
        self.texture_pos: tuple[float, float] = (0.0, 0.0)

    def update_texture_positions(self, x: float, y: float) -> None:
        """Shift the texture window by ``(-x, -y)``."""
        px, py = self.texture_pos
        px -= x
        py -= y
        self.texture_pos = (px, py)
        rect = self.texture_rect
        self.texture_rect = Rect(int(px), int(py), rect.width, rect.height)

    def fill_the_window(self, window_size: tuple[int, int]) -> None:
        """Make the visible window as large as the game window."""
        px, py = self.texture_pos
        self.texture_rect = Rect(int(px), int(py), window_size[0], window_size[1])

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the visible window, wrapping the texture in both directions."""
        if self.texture is None:
            return
        tile_w, tile_h = self.texture.get_size()
        rect = self.texture_rect
        width, height = int(rect.width), int(rect.height)
        if tile_w == 0 or tile_h == 0 or width <= 0 or height <= 0:
            return
        x0, y0 = round(self.position[0]), round(self.position[1])
        previous_clip = surface.get_clip()
        surface.set_clip(pygame.Rect(x0, y0, width, height).clip(previous_clip))
        start_x = x0 - int(rect.left) % tile_w
        start_y = y0 - int(rect.top) % tile_h
        for ty in range(start_y, y0 + height, tile_h):
            for tx in range(start_x, x0 + width, tile_w):
                surface.blit(self.texture, (tx, ty))
        surface.set_clip(previous_clip)
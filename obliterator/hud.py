"""On-screen indicators: health, experience, time and the game-over banner."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

import pygame

from obliterator.animation import ASSETS_DIR
from obliterator.collider import Rect

FONT_PATH = ASSETS_DIR / "Textures" / "PixelifySans-Medium.ttf"

Color = tuple[int, ...]

RED: Color = (255, 0, 0)
GREEN: Color = (0, 255, 0)
BLUE: Color = (0, 0, 255)
YELLOW: Color = (255, 255, 0)
BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    try:
        return pygame.font.Font(str(FONT_PATH), size)
    except (OSError, pygame.error):
        return pygame.font.Font(None, size)


@dataclass
class _Text:
    string: str = ""
    size: int = 30
    color: Color = WHITE
    position: tuple[float, float] = (0.0, 0.0)

    @property
    def bounds(self) -> Rect:
        width, height = _font(self.size).size(self.string)
        return Rect(self.position[0], self.position[1], width, height)

    def draw(self, surface: pygame.Surface) -> None:
        if not self.string:
            return
        image = _font(self.size).render(self.string, True, self.color[:3])
        if len(self.color) == 4:
            image.set_alpha(self.color[3])
        surface.blit(image, (round(self.position[0]), round(self.position[1])))


def _fill_rect(surface: pygame.Surface, rect: Rect, color: Color) -> None:
    width, height = round(rect.width), round(rect.height)
    if width <= 0 or height <= 0:
        return
    if len(color) == 4:
        panel = pygame.Surface((width, height), pygame.SRCALPHA)
        panel.fill(color)
        surface.blit(panel, (round(rect.left), round(rect.top)))
    else:
        pygame.draw.rect(surface, color, pygame.Rect(round(rect.left), round(rect.top), width, height))


def format_time(seconds: float) -> str:
    """Format a non-negative duration as ``MM:SS`` (whole seconds)."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class HealthBar:
    """A green bar over a red one, with the hit points written on it."""

    def __init__(self, x: float, y: float, width: float, height: float) -> None:
        self.background = Rect(x, y, width, height)
        self.bar = Rect(x, y, width, height)
        self._label = _Text(size=int(height - 2), color=BLACK, position=(x + 10, y - 2))

    @property
    def text(self) -> str:
        return self._label.string

    def update(self, current_health: float, max_health: float) -> None:
        current = max(current_health, 0)
        fraction = current / max_health if max_health else 0.0
        bg = self.background
        self.bar = Rect(bg.left, bg.top, bg.width * fraction, bg.height)
        self._label.string = f"{int(current)}/{int(max_health)}"

    def draw(self, surface: pygame.Surface) -> None:
        _fill_rect(surface, self.background, RED)
        _fill_rect(surface, self.bar, GREEN)
        self._label.draw(surface)


class XpBar:
    """A blue bar over a yellow one, with the experience and the level."""

    def __init__(self, x: float, y: float, width: float, height: float) -> None:
        self.background = Rect(x, y, width, height)
        self.bar = Rect(x, y, width, height)
        self._xp_label = _Text(size=int(height - 2), color=BLACK, position=(x + 10, y - 2))
        self._level_label = _Text(size=int(height), color=YELLOW, position=(x + 10 + width, y - 2))

    @property
    def text(self) -> str:
        return self._xp_label.string

    @property
    def level_text(self) -> str:
        return self._level_label.string

    def update(self, current_xp: float, xp_for_next_level: float, current_level: int) -> None:
        current = min(current_xp, xp_for_next_level)
        fraction = current / xp_for_next_level if xp_for_next_level else 0.0
        bg = self.background
        self.bar = Rect(bg.left, bg.top, bg.width * fraction, bg.height)
        self._xp_label.string = f"{int(current)}/{int(xp_for_next_level)}"
        self._level_label.string = f"LVL: {int(current_level)}"

    def draw(self, surface: pygame.Surface) -> None:
        _fill_rect(surface, self.background, YELLOW)
        _fill_rect(surface, self.bar, BLUE)
        self._xp_label.draw(surface)
        self._level_label.draw(surface)


class TimeCounter:
    """The elapsed in-game time, in yellow."""

    def __init__(self, position: tuple[float, float], font_size: int) -> None:
        self._label = _Text("0", int(font_size), YELLOW, (float(position[0]), float(position[1])))

    @property
    def text(self) -> str:
        return self._label.string

    def update_time(self, time: float) -> None:
        self._label.string = format_time(time)

    def draw(self, surface: pygame.Surface) -> None:
        self._label.draw(surface)


class GameOverText:
    """A translucent banner announcing the end of the game."""

    BACKGROUND_COLOR: Color = (133, 43, 37, 150)

    def __init__(self, position: tuple[float, float]) -> None:
        x, y = float(position[0]), float(position[1])
        self.background = Rect(x, y, 600, 300)
        self._game_over = _Text("GAME OVER", 60, WHITE)
        self._restart = _Text("PRESS ENTER TO RESTART", 40, WHITE)

        bounds = self._game_over.bounds
        game_over_x = x + (self.background.width - bounds.width) / 2
        game_over_y = y + (self.background.height - bounds.height) / 2 - 60
        self._game_over.position = (game_over_x, game_over_y)

        restart_bounds = self._restart.bounds
        restart_x = x + (self.background.width - restart_bounds.width) / 2
        restart_y = y + game_over_y + 10
        self._restart.position = (restart_x, restart_y)

    @property
    def game_over_bounds(self) -> Rect:
        return self._game_over.bounds

    @property
    def restart_bounds(self) -> Rect:
        return self._restart.bounds

    def draw(self, surface: pygame.Surface) -> None:
        _fill_rect(surface, self.background, self.BACKGROUND_COLOR)
        self._game_over.draw(surface)
        self._restart.draw(surface)
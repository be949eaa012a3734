"""Sprite-sheet animations and the sprites that play them."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import pygame

from obliterator.collider import Rect

ASSETS_DIR = Path("..") / "Resourses"


@dataclass
class AnimationState:
    """A named run of frames inside a sprite sheet."""

    state_name: str = "idle"
    number_of_frames: int = 1
    loopable: bool = True


@dataclass
class Animation:
    """A sprite sheet split into equally wide frames grouped into states."""

    number_of_frames: int = 1
    animation_states: list[AnimationState] = field(default_factory=list)
    texture: pygame.Surface | None = None
    width_of_frame: int = field(init=False)

    def __post_init__(self) -> None:
        self.width_of_frame = self.texture_size[0] // self.number_of_frames

    @property
    def texture_size(self) -> tuple[int, int]:
        if self.texture is None:
            return (0, 0)
        return tuple(self.texture.get_size())

    @classmethod
    def load(
        cls,
        path: str | Path,
        number_of_frames: int = 1,
        animation_states: Iterable[AnimationState] = (),
    ) -> Animation:
        """Build an animation from an image file; a missing file leaves it blank."""
        texture = None
        if str(path):
            try:
                texture = pygame.image.load(str(path))
            except (OSError, pygame.error):
                texture = None
        return cls(number_of_frames, list(animation_states), texture)


class Sprite:
    """A positioned, scaled view onto a rectangle of a texture."""

    def __init__(self, texture: pygame.Surface | None = None) -> None:
        self.position: tuple[float, float] = (0.0, 0.0)
        self.scale: tuple[float, float] = (1.0, 1.0)
        self.texture = texture
        if texture is None:
            self.texture_rect = Rect()
        else:
            width, height = texture.get_size()
            self.texture_rect = Rect(0, 0, width, height)

    def move(self, dx: float, dy: float) -> None:
        x, y = self.position
        self.position = (x + dx, y + dy)

    @property
    def global_bounds(self) -> Rect:
        x, y = self.position
        sx, sy = self.scale
        return Rect(
            x,
            y,
            abs(self.texture_rect.width * sx),
            abs(self.texture_rect.height * sy),
        )

    def draw(self, surface: pygame.Surface) -> None:
        """Blit the visible part of the texture onto ``surface``."""
        rect = self.texture_rect
        if self.texture is None or rect.width <= 0 or rect.height <= 0:
            return
        area = pygame.Rect(int(rect.left), int(rect.top), int(rect.width), int(rect.height))
        area = area.clip(self.texture.get_rect())
        if area.width == 0 or area.height == 0:
            return
        image = self.texture.subsurface(area)
        sx, sy = self.scale
        if (sx, sy) != (1.0, 1.0):
            size = (max(1, round(area.width * abs(sx))), max(1, round(area.height * abs(sy))))
            image = pygame.transform.scale(image, size)
        surface.blit(image, (round(self.position[0]), round(self.position[1])))


class AnimatedSprite(Sprite):
    """A sprite that steps through the frames of its current animation state.

    A non-loopable state returns to ``"idle"`` once it has played.
    """

    def __init__(self, fps: float = 1.0, current_state: str = "idle") -> None:
        super().__init__()
        self.fps = fps
        self.time_since_last_frame = 0.0
        self.current_frame = 0
        self._state = current_state
        self._animation = Animation()
        self.texture_rect = self._first_frame_rect()

    def _first_frame_rect(self) -> Rect:
        width, height = self._animation.texture_size
        return Rect(0, 0, width // self._animation.number_of_frames, height)

    @property
    def animation(self) -> Animation:
        return self._animation

    @animation.setter
    def animation(self, animation: Animation) -> None:
        self._animation = animation
        self.texture = animation.texture
        self.texture_rect = self._first_frame_rect()

    @property
    def animation_state(self) -> str:
        return self._state

    def animate(self, elapsed: float) -> None:
        """Advance the animation by ``elapsed`` seconds."""
        states = self._animation.animation_states
        frames_in_state = 0
        frame_offset = 0
        for state in states:
            if state.state_name == self._state:
                frames_in_state = state.number_of_frames
                break
            frame_offset += state.number_of_frames

        self.time_since_last_frame += elapsed
        if self.time_since_last_frame < 1.0 / self.fps:
            return

        self.current_frame += 1
        if self.current_frame == frames_in_state:
            for state in states:
                if state.state_name == self._state:
                    if state.loopable:
                        self.current_frame = 0
                    else:
                        self._state = "idle"

        width = self._animation.width_of_frame
        self.texture_rect = Rect(
            self.current_frame * width + frame_offset * width,
            0,
            width,
            self._animation.texture_size[1],
        )
        self.time_since_last_frame = 0.0

    def change_animation_state(self, new_state: str) -> None:
        """Switch to ``new_state``, restarting it after a short delay."""
        if self._state == new_state:
            return
        if any(state.loopable for state in self._animation.animation_states):
            self._state = new_state
            self.current_frame = 0
            self.time_since_last_frame = 0.8 / self.fps
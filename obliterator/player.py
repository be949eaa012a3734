"""The player character."""

from __future__ import annotations

import copy
import math
import sys
from collections.abc import Iterable, MutableSequence
from enum import IntEnum

import pygame

from obliterator.animation import ASSETS_DIR, AnimatedSprite, Animation, AnimationState
from obliterator.bullet import Bullet
from obliterator.controls import normalize_vector
from obliterator.enemy import Enemy

_PI = 3.14159265


class Facing(IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @property
    def suffix(self) -> str:
        return f"_{self.name.lower()}"


def find_distance(pos1: tuple[float, float], pos2: tuple[float, float]) -> float:
    return math.hypot(pos1[0] - pos2[0], pos1[1] - pos2[1])


def calculate_angle(pos1: tuple[float, float], pos2: tuple[float, float]) -> float:
    """Return the direction from ``pos1`` to ``pos2`` in degrees, within [0, 360)."""
    radians = math.atan2(pos2[1] - pos1[1], pos2[0] - pos1[0])
    degrees = radians * 180.0 / _PI
    if degrees < 0:
        degrees += 360
    return degrees


def _player_states() -> list[AnimationState]:
    kinds = [("idle", 4, True), ("move", 6, True), ("hit", 6, False), ("death", 11, False), ("dead", 1, True)]
    return [
        AnimationState(f"{prefix}_{side}", frames, loopable)
        for prefix, frames, loopable in kinds
        for side in ("down", "left", "right", "up")
    ]


def _load_image(path) -> pygame.Surface | None:
    try:
        return pygame.image.load(str(path))
    except (OSError, pygame.error):
        print(f"Failed to load {path.name}", file=sys.stderr)
        return None


class Player(AnimatedSprite):
    """The hero: shoots at the closest enemy and dies when out of hit points."""

    def __init__(self) -> None:
        super().__init__()
        self._max_hp = 100.0
        self.hp = 100.0
        self.attack_speed = 0.6
        self.damage = 20.0
        self.critical_hit_chance = 0.1
        self.critical_damage_coefficient = 1.3
        self._movement_speed = 100
        # Angles of the bullets of one shot, relative to the aim direction.
        self.bullets: list[float] = [0.0]
        self.bullet_penetration = False
        self.bullet_velocity = 140.0
        self.bullet_range = 300.0
        self.facing = Facing.DOWN
        self.position_of_closest_enemy: tuple[float, float] = (0.0, 0.0)
        self.shot_cooldown = 1.0
        self.dead = False

        self.position = (300.0, 300.0)
        self.change_animation_state("idle")
        self.animation = Animation.load(
            ASSETS_DIR / "Animations" / "Character.png", 112, _player_states()
        )
        self.fps = 5

    @property
    def max_hp(self) -> float:
        return self._max_hp

    @max_hp.setter
    def max_hp(self, value: float) -> None:
        self._max_hp = value
        cap = value if value != 0 else 1
        if self.hp > cap:
            self.hp = cap

    @property
    def movement_speed(self) -> int:
        return self._movement_speed

    @movement_speed.setter
    def movement_speed(self, value: float) -> None:
        self._movement_speed = int(value)

    def _center(self) -> tuple[float, float]:
        return self.global_bounds.center

    def add_bullet(self, angle: float = 0.0) -> None:
        self.bullets.append(float(angle))

    def take_damage(self, damage: float) -> None:
        self.hp -= damage
        if self.hp <= 0 and not self.dead:
            self.death()

    def death(self) -> None:
        """Play the death animation and stop shooting and moving."""
        self.dead = True
        self.shot_cooldown = 30.0
        self.movement_speed = 2
        self.fps = 12
        self.change_animation_state("death" + self.facing.suffix)

    def add_beard(self) -> None:
        """Overlay the beard image onto the character's sprite sheet."""
        body = _load_image(ASSETS_DIR / "Animations" / "Character.png")
        beard = _load_image(ASSETS_DIR / "Animations" / "Equipment" / "Beard.png")
        size = body.get_size() if body is not None else (0, 0)
        combined = pygame.Surface(size, pygame.SRCALPHA)
        combined.fill((0, 0, 0, 0))
        for layer in (body, beard):
            if layer is not None:
                combined.blit(layer, (0, 0))
        animation = copy.copy(self.animation)
        animation.texture = combined
        self.animation = animation

    def find_closest_enemy(self, game_objects: Iterable) -> tuple[float, float]:
        """Find and remember the centre of the nearest living enemy."""
        player_pos = self._center()
        closest = (math.inf, math.inf)
        for obj in game_objects:
            if not isinstance(obj, Enemy):
                continue
            if obj.animation_state in ("death_right", "death_left"):
                continue
            enemy_pos = obj.global_bounds.center
            if find_distance(player_pos, closest) > find_distance(player_pos, enemy_pos):
                closest = enemy_pos
        self.position_of_closest_enemy = closest
        return closest

    def shoot(self, game_objects: MutableSequence, elapsed: float) -> None:
        """Fire at the closest enemy when ready, otherwise count down the cooldown."""
        if self.shot_cooldown > 0:
            self.shot_cooldown -= elapsed
            return
        player_pos = self._center()
        aim = calculate_angle(player_pos, self.position_of_closest_enemy)
        for offset in self.bullets:
            angle = (offset + aim) * _PI / 180.0
            vx, vy = normalize_vector((math.cos(angle), math.sin(angle)))
            bullet = Bullet(
                self.damage,
                self.critical_hit_chance,
                self.critical_damage_coefficient,
                int(self.bullet_velocity),
                self.bullet_range,
                self.bullet_penetration,
                (vx, vy),
            )
            bullet.position = player_pos
            bullet.move(vx * 30, vy * 30)
            game_objects.append(bullet)
        self.shot_cooldown += 1.0 / self.attack_speed
"""Enemies that chase and attack the player."""

from __future__ import annotations

import math
import random
from typing import Protocol

from obliterator.animation import AnimatedSprite
from obliterator.collider import Collider, Rect

_UID_SOURCE = random.SystemRandom()


class _Target(Protocol):
    def take_damage(self, damage: float) -> None: ...


class _XpSink(Protocol):
    def add_xp(self, xp: int) -> None: ...


def _quarter_bounds(bounds: Rect) -> Rect:
    return Rect(
        bounds.left + bounds.width / 4,
        bounds.top + bounds.height / 4,
        bounds.width / 2,
        bounds.height / 2,
    )


class Enemy(AnimatedSprite, Collider):
    """A monster that walks towards the player and hits them in range."""

    def __init__(
        self,
        max_hp: float = 50,
        movement_speed: float = 0,
        attack_range: int = 30,
        damage_per_hit: float = 0,
        attack_speed: float = 1,
        xp_drop: int = 10,
    ) -> None:
        AnimatedSprite.__init__(self)
        Collider.__init__(self, _quarter_bounds(self.global_bounds))
        self.max_hp = max_hp
        self.current_hp = max_hp
        self.movement_speed = movement_speed
        self.attack_range = int(attack_range)
        self.damage_per_hit = damage_per_hit
        self.attack_speed = attack_speed
        self.xp_drop = xp_drop
        self.attack_cooldown = 1.0
        self.distance_to_player = 0.0
        self.taking_damage_cooldown = 0.0
        self.current_taking_damage_cooldown = 0.0
        self.facing = "left"
        self.dying = False
        self.uid = _UID_SOURCE.getrandbits(64)

    def _center(self) -> tuple[float, float]:
        bounds = self.global_bounds
        x, y = self.position
        return (x + bounds.width / 2, y + bounds.height / 2)

    def attack(self, player: _Target) -> None:
        """Hit ``player`` if in range and the attack is ready."""
        if self.distance_to_player <= self.attack_range and self.attack_cooldown <= 0:
            player.take_damage(self.damage_per_hit)
            self.attack_cooldown += 1.0 / self.attack_speed
            self.change_animation_state(f"attack_{self.facing}")

    def take_damage(self, damage: float, spawner: _XpSink) -> None:
        """Lose ``damage`` hit points unless still recovering from a hit."""
        if self.current_taking_damage_cooldown <= 0:
            self.current_hp -= damage
            if self.current_hp <= 0:
                self.death(spawner)
            self.current_taking_damage_cooldown = self.taking_damage_cooldown

    def death(self, spawner: _XpSink) -> None:
        """Start dying and award experience, unless already in a death animation."""
        if self.animation_state in ("death_right", "death_left"):
            return
        self.change_animation_state(f"death_{self.facing}")
        self.dying = True
        self.attack_cooldown = 11111111.0
        self.movement_speed = 2
        spawner.add_xp(self.xp_drop)

    def find_distance_to_player(self, player_pos: tuple[float, float]) -> float:
        """Measure and remember the distance from this enemy's centre to the player."""
        cx, cy = self._center()
        self.distance_to_player = math.hypot(player_pos[0] - cx, player_pos[1] - cy)
        return self.distance_to_player

    def unit_vector_to_player(self, player_pos: tuple[float, float]) -> tuple[float, float]:
        cx, cy = self._center()
        distance = self.find_distance_to_player(player_pos)
        return ((player_pos[0] - cx) / distance, (player_pos[1] - cy) / distance)

    def move_towards_player(self, player_pos: tuple[float, float], elapsed: float) -> None:
        """Step towards the player and count down the cooldowns."""
        dx = 0.0
        if self.find_distance_to_player(player_pos) > self.attack_range:
            ux, uy = self.unit_vector_to_player(player_pos)
            dx = ux * elapsed * self.movement_speed
            dy = uy * elapsed * self.movement_speed
            self.move(dx, dy)

        self.facing = "left" if dx < 0 else "right"

        self.attack_cooldown = max(0.0, self.attack_cooldown - elapsed)
        self.current_taking_damage_cooldown -= elapsed
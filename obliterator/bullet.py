"""Projectiles fired by the player."""

from __future__ import annotations

import math
import random

from obliterator.animation import ASSETS_DIR, AnimatedSprite, Animation, AnimationState
from obliterator.collider import Collider

BULLET_ANIMATION = Animation.load(
    ASSETS_DIR / "Animations" / "Bullet.png",
    8,
    [AnimationState("idle", 4, True), AnimationState("burst", 4, False)],
)


class Bullet(AnimatedSprite, Collider):
    """A bullet that flies along a unit vector and bursts at its range limit."""

    def __init__(
        self,
        damage: float,
        critical_hit_chance: float,
        critical_damage_coefficient: float,
        movement_speed: int,
        max_flight_distance: float,
        penetrating: bool,
        movement_unit_vector: tuple[float, float],
    ) -> None:
        AnimatedSprite.__init__(self)
        Collider.__init__(self, self.global_bounds)
        self.damage = damage
        self.critical_hit_chance = critical_hit_chance
        self.critical_damage_coefficient = critical_damage_coefficient
        self.movement_speed = float(int(movement_speed))
        self.max_flight_distance = max_flight_distance
        self.penetrating = penetrating
        self.movement_unit_vector = movement_unit_vector
        self.current_flight_distance = 0.0
        self.damaged_enemies: list[int] = []
        self.exploding = False
        self.animation = BULLET_ANIMATION
        self.fps = 10

    def move_bullet(self, elapsed: float) -> None:
        """Fly for ``elapsed`` seconds, bursting once the range is used up."""
        if self.current_flight_distance >= self.max_flight_distance:
            self.blow_up()
        ux, uy = self.movement_unit_vector
        dx = ux * elapsed * self.movement_speed
        dy = uy * elapsed * self.movement_speed
        self.move(dx, dy)
        self.current_flight_distance += math.hypot(dx, dy)

    def roll_damage(self) -> float:
        """Return the damage of one hit, which may be critical."""
        if random.randint(0, 100) < self.critical_hit_chance * 100:
            return self.damage * self.critical_damage_coefficient
        return self.damage

    def blow_up(self) -> None:
        """Start the burst animation; the bullet is removed once it ends."""
        self.change_animation_state("burst")
        self.exploding = True
        self.movement_speed = 5.0
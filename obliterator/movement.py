"""Per-frame movement and animation of everything around the player."""

from __future__ import annotations

from collections.abc import MutableSequence

from obliterator.background import Background
from obliterator.bullet import Bullet
from obliterator.enemy import Enemy
from obliterator.player import Facing, Player


def _facing_for(vector: tuple[float, float], current: Facing) -> Facing:
    """Pick the facing for a world-movement vector; horizontal wins over vertical."""
    x, y = vector
    if x == -1:
        return Facing.RIGHT
    if x == 1:
        return Facing.LEFT
    if y == 1:
        return Facing.UP
    if y == -1:
        return Facing.DOWN
    return current


class MovementManager:
    """Moves and animates game objects, scaled by the current time scale.

    The player stands still on screen: walking shifts the world the other way.
    """

    def animate_game_objects(
        self,
        game_objects: MutableSequence,
        elapsed: float,
        time_scale: float,
        movement_vector: tuple[float, float],
    ) -> None:
        """Animate every object and drop enemies and bullets whose last animation ended."""
        elapsed *= time_scale
        kept = []
        for obj in game_objects:
            if isinstance(obj, Player):
                self._animate_player(obj, elapsed, movement_vector)
            elif isinstance(obj, Enemy):
                if not self._animate_enemy(obj, elapsed):
                    continue
            elif isinstance(obj, Bullet):
                obj.animate(elapsed)
                if obj.animation_state == "idle" and obj.exploding:
                    continue
            kept.append(obj)
        game_objects[:] = kept

    @staticmethod
    def _animate_player(
        player: Player, elapsed: float, movement_vector: tuple[float, float]
    ) -> None:
        player.facing = _facing_for(movement_vector, player.facing)
        suffix = player.facing.suffix
        state = player.animation_state
        if player.dead and state == "idle":
            player.change_animation_state("dead" + suffix)
        elif state[:4] in ("idle", "move"):
            if tuple(movement_vector) == (0, 0):
                player.change_animation_state("idle" + suffix)
            else:
                player.change_animation_state("move" + suffix)
        player.animate(elapsed)

    @staticmethod
    def _animate_enemy(enemy: Enemy, elapsed: float) -> bool:
        """Animate ``enemy``; return False once it has finished dying."""
        if enemy.animation_state in ("move_right", "move_left"):
            enemy.change_animation_state(f"move_{enemy.facing}")
        if enemy.animation_state == "idle":
            if enemy.dying:
                return False
            enemy.change_animation_state(f"move_{enemy.facing}")
        enemy.animate(elapsed)
        return True

    def move_enemies(
        self,
        game_objects: MutableSequence,
        elapsed: float,
        time_scale: float,
        player_pos: tuple[float, float],
    ) -> None:
        """Walk every enemy towards ``player_pos``."""
        elapsed *= time_scale
        for obj in game_objects:
            if isinstance(obj, Enemy):
                obj.move_towards_player(player_pos, elapsed)

    def move_player(
        self,
        game_objects: MutableSequence,
        elapsed: float,
        time_scale: float,
        movement_vector: tuple[float, float],
    ) -> None:
        """Shift the ground, enemies and bullets by the player's movement."""
        elapsed *= time_scale
        speed = 0.0
        for obj in game_objects:
            if isinstance(obj, Player):
                speed = obj.movement_speed

        dx = movement_vector[0] * elapsed * speed
        dy = movement_vector[1] * elapsed * speed
        for obj in game_objects:
            if isinstance(obj, Background):
                obj.update_texture_positions(dx, dy)
            elif isinstance(obj, (Enemy, Bullet)):
                obj.move(dx, dy)

    def move_bullets(
        self, game_objects: MutableSequence, elapsed: float, time_scale: float
    ) -> None:
        """Fly every bullet along its own direction."""
        elapsed *= time_scale
        for obj in game_objects:
            if isinstance(obj, Bullet):
                obj.move_bullet(elapsed)
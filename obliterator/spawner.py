"""Enemy spawning, experience and levelling."""

from __future__ import annotations

import math
import random
from collections.abc import Callable, MutableSequence

from obliterator.enemy import Enemy
from obliterator.enemy_types import Bat, Crab, Slime

_ENEMY_KINDS: dict[int, type[Enemy]] = {0: Bat, 1: Crab, 2: Slime}


def random_int(low: int, high: int) -> int:
    """Return a random integer in ``[low, high]``; an empty span gives 0."""
    if high - low == 0:
        return 0
    return random.randint(low, high)


def to_radians(degrees: float) -> float:
    return degrees * 3.14159265 / 180.0


class EnemySpawner:
    """Spends difficulty points that build up over time on new enemies.

    Also tracks the player's experience and level; every level-up runs the
    callbacks in ``on_level_up``.
    """

    def __init__(self, player_position: tuple[float, float] = (0.0, 0.0)) -> None:
        self.player_position = player_position
        self.spawn_range: tuple[float, float] = (400.0, 500.0)
        self.current_difficulty_points = 0.0
        self.difficulty_accumulation = 0.7
        self.next_enemy = 0
        self.current_level = 1
        self.current_xp = 0
        self.xp_for_next_level = 100
        self.enemy_difficulty_cost = [1, 4, 12]  # bat, crab, slime
        self.on_level_up: list[Callable[[], None]] = []
        self.level_was_increased = False

    def find_random_position(
        self, player_pos: tuple[float, float], spawn_range: tuple[float, float]
    ) -> tuple[float, float]:
        """Pick a point at a random angle and distance around ``player_pos``."""
        angle = to_radians(random_int(0, 360))
        distance = random_int(int(spawn_range[0]), int(spawn_range[1]))
        return (
            player_pos[0] + distance * math.cos(angle),
            player_pos[1] + distance * math.sin(angle),
        )

    def spawn_enemy(self, enemy_number: int, game_objects: MutableSequence) -> None:
        """Create the enemy of kind ``enemy_number`` near the player; unknown kinds are ignored."""
        kind = _ENEMY_KINDS.get(enemy_number)
        if kind is None:
            return
        enemy = kind()
        enemy.position = self.find_random_position(self.player_position, self.spawn_range)
        game_objects.append(enemy)

    def choose_next_enemy(self, current_level: int) -> int:
        """Choose the kind of the next enemy; stronger kinds unlock every third level."""
        max_enemy = min(int(current_level / 3.0), len(self.enemy_difficulty_cost) - 1)
        self.next_enemy = random_int(0, max_enemy)
        return self.next_enemy

    def update(self, elapsed: float, game_objects: MutableSequence) -> None:
        """Accumulate difficulty for ``elapsed`` seconds and spawn when affordable."""
        self.current_difficulty_points += self.difficulty_accumulation * elapsed
        cost = self.enemy_difficulty_cost[self.next_enemy]
        if cost <= self.current_difficulty_points:
            self.current_difficulty_points -= cost
            self.spawn_enemy(self.next_enemy, game_objects)
            self.choose_next_enemy(self.current_level)

    def add_xp(self, xp: int) -> None:
        """Gain experience, levelling up as many times as it allows."""
        self.current_xp += xp
        while self.current_xp >= self.xp_for_next_level:
            self.level_up()

    def level_up(self) -> None:
        self.current_level += 1
        self.difficulty_accumulation *= 1.2
        self.calculate_xp_for_next_level()
        for callback in list(self.on_level_up):
            callback()

    def calculate_xp_for_next_level(self) -> None:
        self.xp_for_next_level += self.current_level * 200
"""The game window, main loop and the rules that tie everything together."""

from __future__ import annotations

import math
from collections.abc import Iterator

import pygame

from obliterator.background import Background
from obliterator.boosters import BoostersManager
from obliterator.bullet import Bullet
from obliterator.collider import Rect
from obliterator.console import Console
from obliterator.controls import movement_vector_from_keys
from obliterator.enemy import Enemy
from obliterator.hud import GameOverText, HealthBar, TimeCounter, XpBar
from obliterator.movement import MovementManager
from obliterator.player import Player
from obliterator.spawner import EnemySpawner


def time_scale_for(domain: float) -> float:
    """Map the slow-down domain (0.01 to 1) onto a time scale: 10 ln(10x) / 46 + 0.5."""
    return 10 * math.log(domain * 10) / 46 + 0.5


def _enemy_hitbox(bounds: Rect) -> Rect:
    return Rect(
        bounds.left + bounds.width / 4,
        bounds.top + bounds.height / 4,
        bounds.width / 2,
        bounds.height / 2,
    )


class Game:
    """One window of the game, restartable after the player dies."""

    TITLE = "The great Obliterator"
    WINDOW_SIZE = (800, 600)
    FRAMERATE_LIMIT = 200

    def __init__(self) -> None:
        if not pygame.get_init():
            pygame.init()
        self.window = pygame.display.set_mode(self.WINDOW_SIZE)
        pygame.display.set_caption(self.TITLE)
        width, height = self.window.get_size()
        self.window_centre = (float(width // 2), float(height // 2))
        self.clock = pygame.time.Clock()
        self.running = True

        self.game_objects: list = []
        self.ui_objects: list = []
        self.total_time = 0.0
        self.in_game_time = 0.0
        self.time_scale = 1.0
        self.time_slower_domain = 1.0
        self.time_slowing = False
        self.game_is_over = False

        self.movement_manager = MovementManager()
        self.enemy_spawner = EnemySpawner()
        self.boosters_manager = BoostersManager(self.game_objects)
        self.console = Console(0, 400, 800, 200, self.game_objects)

    def _players(self) -> Iterator[Player]:
        for obj in self.game_objects:
            if isinstance(obj, Player):
                yield obj

    def reset_all_parameters(self) -> None:
        """Clear the world and the clocks for a fresh run."""
        self.game_objects.clear()
        self.ui_objects.clear()
        self.total_time = 0.0
        self.in_game_time = 0.0
        self.time_slower_domain = 1.0
        self.time_scale = 1.0
        self.time_slowing = False
        self.game_is_over = False

        self.enemy_spawner = EnemySpawner()
        self.enemy_spawner.on_level_up.append(self.choose_booster)
        self.enemy_spawner.on_level_up.append(self.heal_player)

    def _new_run(self) -> None:
        self.reset_all_parameters()
        self.window.fill((0, 0, 0))

        background = Background()
        background.fill_the_window(self.window.get_size())
        self.game_objects.append(background)

        player = Player()
        player.position = self.window_centre
        bounds = player.global_bounds
        player.move(-bounds.width / 2, -bounds.height / 2)
        player.add_beard()
        self.enemy_spawner.player_position = player.position
        self.game_objects.append(player)

        self.ui_objects.append(HealthBar(40, 510, 200, 20))
        self.ui_objects.append(XpBar(40, 550, 180, 15))
        self.ui_objects.append(TimeCounter((self.window.get_size()[0] - 80, 40), 15))

    def start(self) -> None:
        """Set up a new run and play until the window is closed."""
        self._new_run()
        self.update()

    def update(self) -> None:
        """Run the main loop: one iteration per frame."""
        while self.running:
            elapsed = self.clock.tick(self.FRAMERATE_LIMIT) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                self.console.handle_event(event)
                self.boosters_manager.handle_event(event)

            keys = pygame.key.get_pressed()
            movement = movement_vector_from_keys(
                keys[pygame.K_w], keys[pygame.K_a], keys[pygame.K_s], keys[pygame.K_d]
            )
            self._advance(elapsed, movement)

            if self.game_is_over and keys[pygame.K_RETURN] and not self.console.is_open:
                self._new_run()
                continue

            self._draw()

    def _advance(self, elapsed: float, movement: tuple[float, float]) -> None:
        manager = self.movement_manager
        manager.animate_game_objects(self.game_objects, elapsed, self.time_scale, movement)
        manager.move_enemies(self.game_objects, elapsed, self.time_scale, self.window_centre)
        manager.move_player(self.game_objects, elapsed, self.time_scale, movement)
        manager.move_bullets(self.game_objects, elapsed, self.time_scale)

        self.console.update()
        self.time_slowing = (
            self.console.is_open
            or self.game_is_over
            or self.boosters_manager.booster_choosing
        )

        self.check_enemy_attacks()
        self.handle_shooting(elapsed * self.time_scale)
        self.check_bullet_hits()
        self._update_health_bar()
        self._update_xp_bar()
        self._update_time_counter(self.in_game_time)
        self.enemy_spawner.update(elapsed * self.time_scale, self.game_objects)

        self.exponential_time_slower(elapsed, self.time_slowing)
        self.total_time += elapsed
        self.in_game_time += elapsed * self.time_scale

        self.check_player_death()

    def _draw(self) -> None:
        self.window.fill((0, 0, 0))
        for obj in self.game_objects:
            obj.draw(self.window)
        for ui in self.ui_objects:
            ui.draw(self.window)
        self.console.draw(self.window)
        self.boosters_manager.display_boosters_menu(self.window)
        pygame.display.flip()

    def check_enemy_attacks(self) -> None:
        """Let every enemy after the player in the object list try to hit them."""
        player = None
        for obj in self.game_objects:
            if isinstance(obj, Player):
                player = obj
            elif isinstance(obj, Enemy) and player is not None:
                obj.attack(player)

    def handle_shooting(self, elapsed: float) -> None:
        """Let the first player aim at the nearest enemy and fire."""
        for player in self._players():
            player.find_closest_enemy(self.game_objects)
            player.shoot(self.game_objects, elapsed)
            return

    def check_bullet_hits(self) -> None:
        """Damage each enemy a bullet touches, at most once per bullet."""
        for bullet in list(self.game_objects):
            if not isinstance(bullet, Bullet):
                continue
            bullet.bounds = bullet.global_bounds
            for enemy in list(self.game_objects):
                if not isinstance(enemy, Enemy):
                    continue
                enemy.bounds = _enemy_hitbox(enemy.global_bounds)
                if not bullet.check_collision(enemy):
                    continue
                if enemy.uid in bullet.damaged_enemies:
                    continue
                enemy.take_damage(bullet.roll_damage(), self.enemy_spawner)
                bullet.damaged_enemies.append(enemy.uid)
                if not bullet.penetrating:
                    bullet.blow_up()

    def _update_health_bar(self) -> None:
        player = None
        for player in self._players():
            pass
        if player is None:
            return
        for ui in self.ui_objects:
            if isinstance(ui, HealthBar):
                ui.update(player.hp, player.max_hp)

    def _update_xp_bar(self) -> None:
        spawner = self.enemy_spawner
        for ui in self.ui_objects:
            if isinstance(ui, XpBar):
                ui.update(spawner.current_xp, spawner.xp_for_next_level, spawner.current_level)

    def _update_time_counter(self, time: float) -> None:
        for ui in self.ui_objects:
            if isinstance(ui, TimeCounter):
                ui.update_time(time)

    def check_player_death(self) -> None:
        if any(player.dead for player in self._players()):
            self.game_over()

    def game_over(self) -> None:
        """End the run once: slow time down and show the game-over banner."""
        if self.game_is_over:
            return
        self.game_is_over = True
        self.time_slowing = True
        self.ui_objects.append(GameOverText((100, 100)))

    def exponential_time_slower(self, elapsed: float, slowing: bool) -> None:
        """Ease the time scale down while ``slowing``, and back up otherwise."""
        self.time_scale = time_scale_for(self.time_slower_domain)
        if slowing:
            if self.time_slower_domain > 0.01:
                self.time_slower_domain = max(0.01, self.time_slower_domain - elapsed)
        elif self.time_scale < 1:
            self.time_slower_domain = min(1.0, self.time_slower_domain + elapsed)

    def choose_booster(self) -> None:
        """Offer three random boosters."""
        chosen = self.boosters_manager.choose_three_based_on_rarity()
        self.boosters_manager.set_boosters_to_choose(chosen)
        self.boosters_manager.booster_choosing = True

    def heal_player(self) -> None:
        for player in self._players():
            if player.hp < player.max_hp:
                player.hp = player.max_hp


def main(argv=None) -> int:
    """Open the game window and play until it is closed."""
    pygame.init()
    game = Game()
    game.start()
    pygame.quit()
    return 1
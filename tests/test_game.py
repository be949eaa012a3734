import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

from obliterator.background import Background
from obliterator.bullet import Bullet
from obliterator.collider import Rect
from obliterator.enemy_types import Bat
from obliterator.game import Game, time_scale_for
from obliterator.hud import GameOverText, HealthBar, TimeCounter, XpBar
from obliterator.player import Player


@pytest.fixture
def game():
    g = Game()
    g.reset_all_parameters()
    return g


def _bat_at_origin():
    bat = Bat()
    bat.texture_rect = Rect(0, 0, 40, 40)
    bat.position = (0.0, 0.0)
    return bat


def _bullet(damage, penetrating=False):
    bullet = Bullet(damage, 0.0, 2.0, 100, 300, penetrating, (1.0, 0.0))
    bullet.texture_rect = Rect(0, 0, 10, 10)
    bullet.position = (20.0, 20.0)
    return bullet


def test_time_scale_is_about_one_at_full_domain():
    assert time_scale_for(1.0) == pytest.approx(1.0, abs=0.001)


def test_time_scale_grows_with_domain():
    values = [time_scale_for(d) for d in (0.01, 0.1, 0.5, 1.0)]
    assert values == sorted(values)
    assert values[0] < 0.01


def test_slowing_reduces_domain(game):
    game.time_slower_domain = 1.0
    game.exponential_time_slower(0.1, True)
    assert game.time_slower_domain == pytest.approx(0.9)
    assert game.time_scale == pytest.approx(time_scale_for(1.0))


def test_slowing_clamps_at_lower_bound(game):
    game.time_slower_domain = 0.5
    game.exponential_time_slower(10.0, True)
    assert game.time_slower_domain == pytest.approx(0.01)


def test_recovery_clamps_at_one(game):
    game.time_slower_domain = 0.01
    game.exponential_time_slower(10.0, False)
    assert game.time_slower_domain == 1.0


def test_no_recovery_when_scale_already_full(game):
    game.time_slower_domain = 1.0
    game.exponential_time_slower(0.5, False)
    assert game.time_slower_domain == 1.0


def test_game_over_adds_banner_once(game):
    game.game_over()
    game.game_over()
    banners = [u for u in game.ui_objects if isinstance(u, GameOverText)]
    assert len(banners) == 1
    assert game.game_is_over and game.time_slowing


def test_check_player_death(game):
    player = Player()
    game.game_objects.append(player)
    game.check_player_death()
    assert not game.game_is_over
    player.death()
    game.check_player_death()
    assert game.game_is_over


def test_heal_player(game):
    player = Player()
    player.hp = 10
    game.game_objects.append(player)
    game.heal_player()
    assert player.hp == player.max_hp


def test_choose_booster_offers_three_distinct(game):
    game.choose_booster()
    names = [b.name for b in game.boosters_manager.boosters_to_choose]
    assert game.boosters_manager.booster_choosing
    assert len(set(names)) == 3


def test_level_up_triggers_booster_and_heal(game):
    player = Player()
    player.hp = 5
    game.game_objects.append(player)
    game.enemy_spawner.add_xp(game.enemy_spawner.xp_for_next_level)
    assert game.boosters_manager.booster_choosing
    assert len(game.boosters_manager.boosters_to_choose) == 3
    assert player.hp == player.max_hp


def test_reset_clears_world(game):
    game.game_objects.append(Player())
    game.game_over()
    game.in_game_time = 42.0
    game.reset_all_parameters()
    assert game.game_objects == []
    assert game.ui_objects == []
    assert not game.game_is_over
    assert game.in_game_time == 0.0
    assert game.enemy_spawner.on_level_up == [game.choose_booster, game.heal_player]


def test_enemy_after_player_attacks(game):
    player = Player()
    bat = Bat()
    bat.distance_to_player = 0.0
    bat.attack_cooldown = 0.0
    game.game_objects.extend([player, bat])
    game.check_enemy_attacks()
    assert player.hp == player.max_hp - bat.damage_per_hit


def test_enemy_before_player_does_not_attack(game):
    player = Player()
    bat = Bat()
    bat.distance_to_player = 0.0
    bat.attack_cooldown = 0.0
    game.game_objects.extend([bat, player])
    game.check_enemy_attacks()
    assert player.hp == player.max_hp


def test_handle_shooting_fires_bullet(game):
    player = Player()
    player.shot_cooldown = 0.0
    game.game_objects.append(player)
    game.handle_shooting(0.1)
    bullets = [o for o in game.game_objects if isinstance(o, Bullet)]
    assert len(bullets) == 1
    assert player.shot_cooldown == pytest.approx(1.0 / player.attack_speed)


def test_bullet_hit_damages_once_and_bursts(game):
    bat = _bat_at_origin()
    bullet = _bullet(10)
    game.game_objects.extend([bat, bullet])
    game.check_bullet_hits()
    assert bat.current_hp == bat.max_hp - 10
    assert bullet.damaged_enemies == [bat.uid]
    assert bullet.exploding
    game.check_bullet_hits()
    assert bat.current_hp == bat.max_hp - 10


def test_penetrating_bullet_keeps_flying(game):
    bat = _bat_at_origin()
    bullet = _bullet(10, penetrating=True)
    game.game_objects.extend([bat, bullet])
    game.check_bullet_hits()
    assert bullet.damaged_enemies == [bat.uid]
    assert not bullet.exploding


def test_killing_blow_awards_xp(game):
    bat = _bat_at_origin()
    bullet = _bullet(1000)
    game.game_objects.extend([bat, bullet])
    game.check_bullet_hits()
    assert bat.dying
    assert game.enemy_spawner.current_xp == bat.xp_drop


def test_start_builds_world_and_stops_on_quit(game):
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    game.start()
    assert not game.running
    assert isinstance(game.game_objects[0], Background)
    player = game.game_objects[1]
    assert isinstance(player, Player)
    assert player.position == game.window_centre
    assert game.enemy_spawner.player_position == game.window_centre
    kinds = [type(u) for u in game.ui_objects]
    assert kinds == [HealthBar, XpBar, TimeCounter]
    assert game.ui_objects[0].text == "100/100"
    assert game.ui_objects[2].text == "00:00"
import pygame
import pytest

from obliterator.console import Console
from obliterator.player import Player


@pytest.fixture
def player():
    return Player()


@pytest.fixture
def console(player):
    return Console(0, 400, 800, 200, [None, player])


def key(code):
    return pygame.event.Event(pygame.KEYDOWN, key=code)


def text(value):
    return pygame.event.Event(pygame.TEXTINPUT, text=value)


def test_unknown_command_is_reported_then_echoed(console):
    console.execute_command("fly away")
    assert console.output_log == ["Unknown command: fly", "> fly away"]


def test_set_speed(console, player):
    console.execute_command("setSpeed 42")
    assert player.movement_speed == 42
    assert console.output_log == ["Speed is set to 42", "> setSpeed 42"]


def test_set_speed_reads_leading_integer(console, player):
    console.execute_command("setSpeed 12abc")
    assert player.movement_speed == 12


def test_set_speed_invalid(console, player):
    before = player.movement_speed
    console.execute_command("setSpeed abc")
    assert player.movement_speed == before
    assert console.output_log[0] == "Error: Invalid number format."


def test_set_speed_out_of_range(console):
    console.execute_command("setSpeed 99999999999")
    assert console.output_log[0] == "Error: Number out of range."


def test_set_float_out_of_range(console):
    console.execute_command("setDamage 1e300")
    assert console.output_log[0] == "Error: Number out of range."


def test_set_max_hp_caps_hp(console, player):
    console.execute_command("setMaxHP 50")
    assert player.max_hp == 50
    assert player.hp == 50
    assert console.output_log[0] == "Max HP is set to 50"


@pytest.mark.parametrize(
    "command, attribute",
    [
        ("setHP", "hp"),
        ("setAttackSpeed", "attack_speed"),
        ("setDamage", "damage"),
        ("setCriticalHitChance", "critical_hit_chance"),
        ("setBulletVelocity", "bullet_velocity"),
        ("setBulletRange", "bullet_range"),
        ("setShotCooldown", "shot_cooldown"),
        ("setCriticalDamageCoefficient", "critical_hit_chance"),
    ],
)
def test_float_commands(console, player, command, attribute):
    console.execute_command(f"{command} 2.5")
    assert getattr(player, attribute) == 2.5
    assert console.output_log[-1] == f"> {command} 2.5"


@pytest.mark.parametrize("arg, expected", [("1", True), ("true", True), ("0", False), ("false", False)])
def test_bullet_penetration(console, player, arg, expected):
    player.bullet_penetration = not expected
    console.execute_command(f"setBulletPenetration {arg}")
    assert player.bullet_penetration is expected
    assert console.output_log[0] == f"Bullet penetration is set to {arg}"


def test_bullet_penetration_invalid(console, player):
    console.execute_command("setBulletPenetration maybe")
    assert player.bullet_penetration is False
    assert console.output_log[0] == "Enter true or false"


def test_kill(console, player):
    console.execute_command("kill")
    assert player.dead is True
    assert console.output_log == ["Player is killed.", "> kill"]


def test_commands_without_player_only_echo():
    console = Console(0, 0, 100, 100, [])
    console.execute_command("setSpeed 10")
    assert console.output_log == ["> setSpeed 10"]


def test_register_command(console):
    received = []
    console.register_command("say", received.append)
    console.execute_command("say hello there")
    assert received == ["hello there"]


def test_toggle_and_typing(console):
    console.handle_event(text("x"))
    assert console.input_string == ""
    console.handle_event(key(pygame.K_BACKQUOTE))
    assert console.is_open is True
    for char in "kilx`":
        console.handle_event(text(char))
    console.handle_event(key(pygame.K_BACKSPACE))
    console.handle_event(text("l"))
    assert console.input_string == "kill"
    console.update()
    assert console.input_text == "> kill"
    console.handle_event(key(pygame.K_RETURN))
    assert console.input_string == ""
    assert console.output_log[-1] == "> kill"
    console.handle_event(key(pygame.K_BACKQUOTE))
    assert console.is_open is False


def test_visible_log_is_a_suffix(console):
    for number in range(30):
        console.output_log.append(str(number))
    visible = console.visible_log
    assert 0 < len(visible) < 30
    assert visible == console.output_log[-len(visible):]


def test_draw_only_when_open(console):
    surface = pygame.Surface((800, 600))
    surface.fill((255, 255, 255))
    console.draw(surface)
    assert tuple(surface.get_at((790, 405)))[:3] == (255, 255, 255)
    console.is_open = True
    console.draw(surface)
    assert surface.get_at((790, 405))[0] < 255
    assert tuple(surface.get_at((790, 300)))[:3] == (255, 255, 255)
"""In-game developer console for changing the player's stats at run time."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, MutableSequence
from dataclasses import dataclass
from functools import lru_cache

import pygame

from obliterator.animation import ASSETS_DIR
from obliterator.player import Player

FONT_PATH = ASSETS_DIR / "Textures" / "PixelifySans-Medium.ttf"

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_FLOAT32_MAX = 3.4028234663852886e38

_INT_PREFIX = re.compile(r"\s*[+-]?\d+")
_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def _parse_int(text: str) -> int:
    """Parse a leading 32-bit integer; trailing characters are ignored."""
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(text)
    value = int(match.group())
    if not _INT_MIN <= value <= _INT_MAX:
        raise OverflowError(text)
    return value


def _parse_float(text: str, limit: float | None = None) -> float:
    """Parse a leading floating-point number; trailing characters are ignored."""
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        raise ValueError(text)
    literal = match.group().strip()
    value = float(literal)
    textual_infinity = "inf" in literal.lower()
    if not textual_infinity and value in (float("inf"), float("-inf")):
        raise OverflowError(text)
    if limit is not None and not textual_infinity and abs(value) > limit:
        raise OverflowError(text)
    return value


def _parse_single(text: str) -> float:
    return _parse_float(text, _FLOAT32_MAX)


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    try:
        return pygame.font.Font(str(FONT_PATH), size)
    except (OSError, pygame.error):
        return pygame.font.Font(None, size)


@dataclass
class _Area:
    x: float
    y: float
    width: float
    height: float


class Console:
    """A drop-down command line toggled with the backquote key."""

    FONT_SIZE = 20
    BACKGROUND_COLOR = (0, 0, 0, 150)
    TEXT_COLOR = (255, 255, 255)

    def __init__(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        game_objects: MutableSequence,
    ) -> None:
        self.game_objects = game_objects
        self.area = _Area(x, y, width, height)
        self.input_string = ""
        self.input_text = ""
        self.output_log: list[str] = []
        self.is_open = False
        self.commands: dict[str, Callable[[str], None]] = {}

        for name, handler in (
            ("setSpeed", self.set_speed),
            ("setMaxHP", self.set_max_hp),
            ("setHP", self.set_hp),
            ("setAttackSpeed", self.set_attack_speed),
            ("setDamage", self.set_damage),
            ("setCriticalHitChance", self.set_critical_hit_chance),
            ("setCriticalDamageCoefficient", self.set_critical_damage_coefficient),
            ("setBulletPenetration", self.set_bullet_penetration),
            ("setBulletVelocity", self.set_bullet_velocity),
            ("setBulletRange", self.set_bullet_range),
            ("setShotCooldown", self.set_shot_cooldown),
            ("kill", self.kill),
        ):
            self.register_command(name, handler)

    def register_command(self, name: str, func: Callable[[str], None]) -> None:
        self.commands[name] = func

    def execute_command(self, line: str) -> None:
        """Run ``line``: the first word names the command, the rest is its argument."""
        command, _, args = line.partition(" ")
        handler = self.commands.get(command)
        if handler is None:
            self.output_log.append(f"Unknown command: {command}")
        else:
            handler(args)
        self.output_log.append(f"> {line}")

    def handle_event(self, event: pygame.event.Event) -> None:
        """Toggle the console and edit the input line from keyboard events."""
        if event.type == pygame.KEYDOWN and event.key == pygame.K_BACKQUOTE:
            self.is_open = not self.is_open
            if self.is_open:
                self.input_string = ""

        if not self.is_open:
            return
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_BACKSPACE:
                self.input_string = self.input_string[:-1]
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.execute_command(self.input_string)
                self.input_string = ""
        elif event.type == pygame.TEXTINPUT:
            self.input_string += event.text.replace("`", "")

    def update(self) -> None:
        if self.is_open:
            self.input_text = f"> {self.input_string}"

    @property
    def visible_log(self) -> list[str]:
        """The most recent log lines that fit above the input line."""
        line_height = self.FONT_SIZE + 5
        lines_to_show = int((self.area.height - 35) / line_height)
        start = max(0, len(self.output_log) - lines_to_show)
        return self.output_log[start:]

    def draw(self, surface: pygame.Surface) -> None:
        if not self.is_open:
            return
        area = self.area
        width, height = max(0, round(area.width)), max(0, round(area.height))
        if width and height:
            panel = pygame.Surface((width, height), pygame.SRCALPHA)
            panel.fill(self.BACKGROUND_COLOR)
            surface.blit(panel, (round(area.x), round(area.y)))

        font = _font(self.FONT_SIZE)
        if self.input_text:
            image = font.render(self.input_text, True, self.TEXT_COLOR)
            surface.blit(image, (round(area.x + 5), round(area.y + area.height - 30)))

        top = area.y + 5
        for line in self.visible_log:
            if line:
                image = font.render(line, True, self.TEXT_COLOR)
                surface.blit(image, (round(area.x + 5), round(top)))
            top += self.FONT_SIZE + 5

    # Commands

    def _players(self) -> Iterator[Player]:
        for obj in self.game_objects:
            if isinstance(obj, Player):
                yield obj

    def _set_number(
        self,
        arg: str,
        parse: Callable[[str], float],
        apply: Callable[[Player, float], None],
        message: str,
    ) -> None:
        for player in self._players():
            try:
                value = parse(arg)
            except OverflowError:
                self.output_log.append("Error: Number out of range.")
                continue
            except ValueError:
                self.output_log.append("Error: Invalid number format.")
                continue
            apply(player, value)
            self.output_log.append(f"{message} is set to {arg}")

    def set_speed(self, arg: str) -> None:
        self._set_number(
            arg, _parse_int, lambda p, v: setattr(p, "movement_speed", v), "Speed"
        )

    def set_max_hp(self, arg: str) -> None:
        self._set_number(arg, _parse_float, lambda p, v: setattr(p, "max_hp", v), "Max HP")

    def set_hp(self, arg: str) -> None:
        self._set_number(arg, _parse_float, lambda p, v: setattr(p, "hp", v), "HP")

    def set_attack_speed(self, arg: str) -> None:
        self._set_number(
            arg, _parse_single, lambda p, v: setattr(p, "attack_speed", v), "Attack speed"
        )

    def set_damage(self, arg: str) -> None:
        self._set_number(arg, _parse_single, lambda p, v: setattr(p, "damage", v), "Damage")

    def set_critical_hit_chance(self, arg: str) -> None:
        self._set_number(
            arg,
            _parse_single,
            lambda p, v: setattr(p, "critical_hit_chance", v),
            "Critical chance",
        )

    def set_critical_damage_coefficient(self, arg: str) -> None:
        # This command has always written the critical hit chance.
        self._set_number(
            arg,
            _parse_single,
            lambda p, v: setattr(p, "critical_hit_chance", v),
            "Critical damage coefficient",
        )

    def set_bullet_penetration(self, arg: str) -> None:
        for player in self._players():
            if arg in ("1", "true"):
                player.bullet_penetration = True
            elif arg in ("0", "false"):
                player.bullet_penetration = False
            else:
                self.output_log.append("Enter true or false")
                continue
            self.output_log.append(f"Bullet penetration is set to {arg}")

    def set_bullet_velocity(self, arg: str) -> None:
        self._set_number(
            arg,
            _parse_single,
            lambda p, v: setattr(p, "bullet_velocity", v),
            "Bullet velocity",
        )

    def set_bullet_range(self, arg: str) -> None:
        self._set_number(
            arg, _parse_single, lambda p, v: setattr(p, "bullet_range", v), "Bullet range"
        )

    def set_shot_cooldown(self, arg: str) -> None:
        self._set_number(
            arg, _parse_single, lambda p, v: setattr(p, "shot_cooldown", v), "Shot cooldown"
        )

    def kill(self, arg: str) -> None:
        for player in self._players():
            player.death()
            self.output_log.append("Player is killed.")
"""Level-up boosters: the cards the player picks from and what they do."""

from __future__ import annotations

import bisect
import copy
import random
import sys
from collections.abc import Callable, MutableSequence, Sequence
from dataclasses import dataclass
from functools import lru_cache

import pygame

from obliterator.animation import ASSETS_DIR, Sprite
from obliterator.collider import Rect
from obliterator.player import Player

FONT_PATH = ASSETS_DIR / "Textures" / "PixelifySans-Medium.ttf"
CARDS_DIR = ASSETS_DIR / "Textures" / "BoosterCards"

Color = tuple[int, ...]

# Name colours (fill, outline) for each rarity.
RARITY_COLORS: dict[int, tuple[Color, Color]] = {
    5: ((9, 255, 0), (50, 168, 82)),
    4: ((0, 102, 255), (0, 32, 81)),
    2: ((255, 179, 0), (245, 0, 122)),
    1: ((44, 0, 94), (255, 28, 28)),
}

# Packed RGBA 0x001E0051.
DESCRIPTION_COLOR: Color = (0, 30, 0, 81)


@lru_cache(maxsize=None)
def _font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    try:
        return pygame.font.Font(str(FONT_PATH), size)
    except (OSError, pygame.error):
        return pygame.font.Font(None, size)


@dataclass
class _Text:
    string: str = ""
    size: int = 30
    fill: Color = (255, 255, 255)
    outline: Color = (0, 0, 0)
    outline_thickness: int = 0
    position: tuple[float, float] = (0.0, 0.0)

    @property
    def lines(self) -> list[str]:
        return self.string.split("\n")

    @property
    def bounds(self) -> Rect:
        font = _font(self.size)
        width = max(font.size(line)[0] for line in self.lines)
        height = len(self.lines) * font.get_linesize()
        pad = self.outline_thickness
        x, y = self.position
        return Rect(x - pad, y - pad, width + 2 * pad, height + 2 * pad)

    def _render_line(self, font: pygame.font.Font, line: str, color: Color) -> pygame.Surface:
        image = font.render(line, True, color[:3])
        if len(color) == 4:
            image.set_alpha(color[3])
        return image

    def draw(self, surface: pygame.Surface) -> None:
        font = _font(self.size)
        x, y = self.position
        step = font.get_linesize()
        t = self.outline_thickness
        offsets = [
            (dx, dy)
            for dx in range(-t, t + 1)
            for dy in range(-t, t + 1)
            if (dx, dy) != (0, 0) and dx * dx + dy * dy <= t * t
        ]
        for number, line in enumerate(self.lines):
            top = round(y + number * step)
            left = round(x)
            if offsets:
                shadow = self._render_line(font, line, self.outline)
                for dx, dy in offsets:
                    surface.blit(shadow, (left + dx, top + dy))
            surface.blit(self._render_line(font, line, self.fill), (left, top))


class Booster(Sprite):
    """A card granting a one-off upgrade; ``rarity`` is its selection weight."""

    def __init__(
        self,
        ability: Callable[[], None],
        rarity: int,
        name: str,
        description: str,
        texture: pygame.Surface | None = None,
    ) -> None:
        super().__init__(texture)
        self.ability = ability
        self.rarity = rarity
        self.name = name
        self.description = description
        self.highlighted = False
        self.shown = False


class InfoBox:
    """A panel showing the name and description of the highlighted booster."""

    def __init__(self, position: tuple[float, float]) -> None:
        self.bg = Sprite()
        self.bg.position = (float(position[0]), float(position[1]))
        self.bg.scale = (1.5, 1.5)
        self._name = _Text(size=25)
        self._description = _Text(size=15, fill=DESCRIPTION_COLOR)
        self.position_texts()

    @property
    def name(self) -> str:
        return self._name.string

    @name.setter
    def name(self, value: str) -> None:
        self._name.string = value

    @property
    def description(self) -> str:
        return self._description.string

    @description.setter
    def description(self, value: str) -> None:
        self._description.string = value

    @property
    def name_fill(self) -> Color:
        return self._name.fill

    @property
    def name_outline(self) -> Color:
        return self._name.outline

    @property
    def name_position(self) -> tuple[float, float]:
        return self._name.position

    @property
    def description_position(self) -> tuple[float, float]:
        return self._description.position

    def set_background(self, texture: pygame.Surface | None) -> None:
        position, scale = self.bg.position, self.bg.scale
        self.bg = Sprite(texture)
        self.bg.position, self.bg.scale = position, scale

    def position_texts(self) -> None:
        """Centre the name and the description horizontally on the panel."""
        self._name.size = 20
        self._name.outline_thickness = 3
        self._description.size = 15

        bg = self.bg.global_bounds
        name_bounds = self._name.bounds
        self._name.position = (bg.left + (bg.width - name_bounds.width) / 2, bg.top + 5)

        description_bounds = self._description.bounds
        name_bounds = self._name.bounds
        self._description.position = (
            bg.left + (bg.width - description_bounds.width) / 2,
            name_bounds.top + name_bounds.height + 10,
        )

    def set_text_color_from_rarity(self, rarity: int) -> None:
        """Colour the name by rarity; unknown rarities keep the current colours."""
        colors = RARITY_COLORS.get(rarity)
        if colors is not None:
            self._name.fill, self._name.outline = colors

    def draw(self, surface: pygame.Surface) -> None:
        self.bg.draw(surface)
        self._name.draw(surface)
        self._description.draw(surface)


def _load_card(filename: str) -> pygame.Surface | None:
    try:
        return pygame.image.load(str(CARDS_DIR / filename))
    except (OSError, pygame.error):
        print("Failed to load texture", file=sys.stderr)
        return None


class BoostersManager:
    """Offers three random boosters on level-up and applies the chosen one."""

    HIGHLIGHTED_SCALE = (1.2, 1.2)
    NORMAL_SCALE = (1.0, 1.0)

    def __init__(self, game_objects: MutableSequence) -> None:
        self.game_objects = game_objects
        self.boosters_to_choose: list[Booster] = []
        self.booster_choosing = False
        self.current_highlighted = 0
        self.info_box = InfoBox((550, 100))

        _load_card("boosterEmpty.jpg")
        self.info_box.set_background(_load_card("card_blank.png"))

        catalogue = [
            (self.fearless_bastard, 5, "Fearless bastard",
             "A bit less movement\nspeed\nA bit more damage", "fearless_bastard.png"),
            (self.glass_cannon, 4, "Glass cannon",
             "MUCH less HP\nTriple damage\nMuch more speed", "glass_cannon.png"),
            (self.hit_the_gym, 5, "Hit the gym",
             "A bit more damage\nA bit more movement\nspeed", "hit_the_gym.png"),
            (self.limpy_sniper, 4, "Limpy sniper",
             "Much more damage\nMuch less movement\nspeed\nMuch bigger bullet range\n"
             "Bullets are much faster", "limpy_sniper.png"),
            (self.my_daddies_rapiers, 1, "My dadies rapiers",
             "Bullets pierce\nthrough enemies", "my_daddies_rapiers.png"),
            (self.my_teeth_are_sharp, 2, "My teeth are SHARK",
             "A bit more damage\nMuch smaller bullet range\nA bit more speed\n"
             "A bit faster bullets", "my_teeth_are_sharp.png"),
            (self.one_of_the_edema_ruh, 2, "The Edema Ruh",
             "Bigger critical chance\nBigger critical damage\nA bit mere speed\n"
             "Smaller bullet range", "one_of_the_edema_ruh.png"),
            (self.requiescat_in_pace, 1, "Requiescat in pace",
             "Double critical damage\nMuch more critical chance\nDouble bullet range",
             "requiescat_in_pace.png"),
            (self.son_of_a_gun, 2, "Son of a gun",
             "A bit more damage\nBigger critical damage\nMuch faster bullets",
             "son_of_a_gun.png"),
            (self.tra_ta_ta, 1, "Trra-ta-ta-ta-ta!!!",
             "MUCH faster shooting\nA bit more movement\nspeed\nA bit faster bullets\n"
             "Critical chanse = 0\nMUCH smaller damage", "tra_ta_ta.png"),
            (self.try_to_catch_me_slowpoke, 4, "Can't catch me!",
             "Bigger critical chance\nMUCH more movement\nspeed\nTwice less HP",
             "try_to_catch_me_slowpoke.png"),
            (self.we_have_a_shotgun_at_home, 2, "SHOT!gun",
             "Shotgun shooting patern\nLess movement speed\nFaster bullets\n"
             "Much shorter bullet range\nA bit faster attask speed",
             "we_have_a_shotgun_at_home.png"),
        ]
        self.boosters: list[Booster] = [
            Booster(ability, rarity, name, description, _load_card(filename))
            for ability, rarity, name, description, filename in catalogue
        ]

    def _players(self):
        for obj in self.game_objects:
            if obj is None:
                print("Null pointer found in gameObjects", file=sys.stderr)
                continue
            if isinstance(obj, Player):
                yield obj

    def fearless_bastard(self) -> None:
        for p in self._players():
            p.movement_speed = p.movement_speed * 0.6
            p.damage = p.damage * 1.2

    def glass_cannon(self) -> None:
        for p in self._players():
            p.max_hp = p.max_hp * 0.1
            p.damage = p.damage * 3
            p.movement_speed = p.movement_speed * 1.4

    def hit_the_gym(self) -> None:
        for p in self._players():
            p.damage = p.damage * 1.4
            p.movement_speed = p.movement_speed * 1.2

    def limpy_sniper(self) -> None:
        for p in self._players():
            p.damage = p.damage * 2
            p.movement_speed = p.movement_speed * 0.85
            p.bullet_range = p.bullet_range * 2.5
            p.bullet_velocity = p.bullet_velocity * 3

    def my_daddies_rapiers(self) -> None:
        for p in self._players():
            p.bullet_penetration = True

    def my_teeth_are_sharp(self) -> None:
        for p in self._players():
            p.damage = p.damage * 1.35
            p.bullet_range = p.bullet_range * 0.3
            p.movement_speed = p.movement_speed * 1.1
            p.bullet_velocity = p.bullet_velocity * 1.4

    def one_of_the_edema_ruh(self) -> None:
        for p in self._players():
            p.critical_hit_chance = p.critical_hit_chance + 0.3
            p.critical_damage_coefficient = p.critical_damage_coefficient * 1.5
            p.bullet_range = p.bullet_range * 0.4
            p.movement_speed = p.movement_speed * 1.1

    def requiescat_in_pace(self) -> None:
        for p in self._players():
            p.critical_hit_chance = p.critical_hit_chance + 0.3
            p.critical_damage_coefficient = p.critical_damage_coefficient * 2
            p.bullet_range = p.bullet_range * 2

    def son_of_a_gun(self) -> None:
        for p in self._players():
            p.critical_damage_coefficient = p.critical_damage_coefficient + 0.2
            p.bullet_velocity = p.bullet_velocity * 1.4
            p.damage = p.damage * 1.4

    def tra_ta_ta(self) -> None:
        for p in self._players():
            p.critical_hit_chance = 0.0
            p.bullet_velocity = p.bullet_velocity * 1.4
            p.damage = p.damage * 0.1
            p.movement_speed = p.movement_speed * 1.1
            p.attack_speed = p.attack_speed * 10

    def try_to_catch_me_slowpoke(self) -> None:
        for p in self._players():
            p.critical_hit_chance = p.critical_hit_chance + 0.2
            p.max_hp = p.max_hp * 0.5
            p.movement_speed = p.movement_speed * 1.2

    def we_have_a_shotgun_at_home(self) -> None:
        for p in self._players():
            p.movement_speed = p.movement_speed * 0.9
            p.bullets = [-15.0, -10.0, -5.0, 0.0, 5.0, 10.0, 15.0]
            p.bullet_range = p.bullet_range * 0.35
            p.attack_speed = p.attack_speed * 1.3
            p.bullet_velocity = p.bullet_velocity * 1.4
            p.damage = p.damage * 0.18

    def choose_three_based_on_rarity(self) -> list[Booster]:
        """Return copies of three distinct boosters drawn with rarity as weight."""
        cumulative: list[float] = []
        total = 0.0
        for booster in self.boosters:
            total += booster.rarity
            cumulative.append(total)

        if len(self.boosters) < 3:
            print("Not enough elements to choose 3 unique objects.", file=sys.stderr)
            return []

        chosen: list[Booster] = []
        selected: set[int] = set()
        while len(selected) < 3:
            index = bisect.bisect_left(cumulative, random.uniform(0.0, total))
            if index not in selected:
                selected.add(index)
                chosen.append(copy.copy(self.boosters[index]))
        return chosen

    def handle_event(self, event: pygame.event.Event) -> None:
        """Move the highlight with Left/Right and pick with Enter."""
        if not self.booster_choosing or event.type != pygame.KEYDOWN:
            return
        if event.key == pygame.K_LEFT:
            self.current_highlighted = (self.current_highlighted - 1) % 3
        elif event.key == pygame.K_RIGHT:
            self.current_highlighted = (self.current_highlighted + 1) % 3
        if event.key == pygame.K_RETURN:
            self.activate_booster()

    def set_boosters_to_choose(self, boosters: Sequence[Booster]) -> None:
        self.boosters_to_choose = list(boosters)

    def _show_info(self, booster: Booster, surface: pygame.Surface) -> None:
        self.info_box.name = booster.name
        self.info_box.description = booster.description
        self.info_box.position_texts()
        self.info_box.set_text_color_from_rarity(booster.rarity)
        self.info_box.draw(surface)

    def display_boosters_menu(self, surface: pygame.Surface) -> None:
        """Lay out and draw the three cards and the info panel while choosing."""
        if not self.booster_choosing:
            return
        if len(self.boosters_to_choose) < 3:
            print("Not enough boosters", end="")
            self.booster_choosing = False
            return

        self._show_info(self.boosters_to_choose[self.current_highlighted], surface)

        x_offset = 0.0
        for index, booster in enumerate(self.boosters_to_choose[:3]):
            booster.shown = True
            booster.position = (100 + x_offset, 100.0)
            booster.highlighted = index == self.current_highlighted
            if booster.highlighted:
                booster.scale = self.HIGHLIGHTED_SCALE
                self._show_info(booster, surface)
            else:
                booster.scale = self.NORMAL_SCALE
            booster.draw(surface)
            x_offset += booster.global_bounds.width + 20

    def activate_booster(self) -> None:
        """Apply the highlighted booster and close the menu."""
        self.boosters_to_choose[self.current_highlighted].ability()
        self.booster_choosing = False
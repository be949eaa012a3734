"""A top-down survival shooter with levelling, boosters and a developer console."""

__version__ = "0.1.0"
__all__ = [
    "animation",
    "background",
    "boosters",
    "bullet",
    "collider",
    "console",
    "controls",
    "enemy",
    "enemy_types",
    "game",
    "hud",
    "movement",
    "player",
    "spawner",
]
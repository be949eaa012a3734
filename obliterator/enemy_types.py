"""The concrete enemy kinds and their sprite sheets."""

from __future__ import annotations

from obliterator.animation import ASSETS_DIR, Animation, AnimationState
from obliterator.enemy import Enemy


def _enemy_states(move: int, attack: int, hit: int, death: int) -> list[AnimationState]:
    return [
        state
        for side in ("right", "left")
        for state in (
            AnimationState(f"move_{side}", move, True),
            AnimationState(f"attack_{side}", attack, False),
            AnimationState(f"hit_{side}", hit, False),
            AnimationState(f"death_{side}", death, False),
        )
    ]


BAT_ANIMATION = Animation.load(
    ASSETS_DIR / "Animations" / "bat.png", 54, _enemy_states(4, 7, 5, 11)
)
CRAB_ANIMATION = Animation.load(
    ASSETS_DIR / "Animations" / "crab.png", 48, _enemy_states(6, 10, 3, 5)
)
SLIME_ANIMATION = Animation.load(
    ASSETS_DIR / "Animations" / "slime.png", 36, _enemy_states(4, 4, 4, 6)
)


class _Kind(Enemy):
    _stats: tuple[float, float, int, float, float, int]
    _sheet: Animation

    def __init__(self) -> None:
        super().__init__(*self._stats)
        self.change_animation_state("idle")
        self.animation = self._sheet
        self.scale = (1.4, 1.4)
        self.fps = 8


class Bat(_Kind):
    """Cheap, fast and fragile."""

    _stats = (70, 80, 40, 25, 1.2, 20)
    _sheet = BAT_ANIMATION


class Crab(_Kind):
    """Sturdy mid-tier enemy."""

    _stats = (300, 100, 40, 60, 1, 50)
    _sheet = CRAB_ANIMATION


class Slime(_Kind):
    """Slow-hitting tank with a large experience reward."""

    _stats = (700, 110, 40, 70, 0.8, 150)
    _sheet = SLIME_ANIMATION
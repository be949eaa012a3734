"""Axis-aligned rectangles and collision checks."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Rect:
    """A rectangle given by its top-left corner and its size."""

    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def center(self) -> tuple[float, float]:
        return (self.left + self.width / 2, self.top + self.height / 2)


@dataclass
class Collider:
    """An object that occupies a rectangular area for collision purposes."""

    bounds: Rect = field(default_factory=Rect)

    def check_collision(self, other: Collider) -> bool:
        """Return True if this collider overlaps ``other`` (AABB test)."""
        a = self.bounds
        b = other.bounds
        return (
            a.left < b.left + b.width
            and a.left + a.width > b.left
            and a.top < b.top + b.height
            and a.top + a.height > b.top
        )
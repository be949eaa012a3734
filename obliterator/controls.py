"""Keyboard movement input as normalised vectors."""

from __future__ import annotations

import math


def normalize_vector(vector: tuple[float, float]) -> tuple[float, float]:
    """Scale ``vector`` to unit length; the zero vector stays zero."""
    x, y = vector
    magnitude = math.hypot(x, y)
    if magnitude == 0:
        return (0.0, 0.0)
    return (x / magnitude, y / magnitude)


def movement_vector_from_keys(
    up: bool, left: bool, down: bool, right: bool
) -> tuple[float, float]:
    """Return the unit vector by which the world shifts for the held keys.

    The world moves opposite to the player: up gives +y, left gives +x.
    """
    x = 0.0
    y = 0.0
    if up:
        y += 1
    if left:
        x += 1
    if down:
        y -= 1
    if right:
        x -= 1
    return normalize_vector((x, y))
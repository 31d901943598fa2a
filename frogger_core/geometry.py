"""
Geometry
========

Immutable 2D vectors and the play-field wrap rules.

The field is 600 units wide. Obstacles re-enter at the opposite edge; the
player re-enters with a smaller margin and is bounced off the top bank
unless it lands in one of the three target columns.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


FIELD_WIDTH = 600.0

# Obstacle vertical wrap band
OBJECT_TOP = 40.0
OBJECT_BOTTOM = 560.0
OBJECT_VERTICAL_SHIFT = 80.0

# Player horizontal wrap
FROG_LEFT = 30.0
FROG_RIGHT = 570.0
FROG_HORIZONTAL_SHIFT = 585.0

# Player vertical wrap
BANK_Y = 80.0
FROG_BOTTOM = 570.0

# Target columns where the player may stand on the bank.
# The middle column differs by 5 units between the two jump modes.
FROG_GAPS: Tuple[Tuple[float, float], ...] = ((100.0, 135.0), (285.0, 320.0), (460.0, 495.0))
DOUBLE_JUMP_GAPS: Tuple[Tuple[float, float], ...] = ((100.0, 135.0), (280.0, 315.0), (460.0, 495.0))


@dataclass(frozen=True)
class Vector:
    """Immutable (x, y) pair. Every operation returns a new Vector."""
    x: float = 0.0
    y: float = 0.0

    def add(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def scale(self, s: float) -> "Vector":
        return Vector(self.x * s, self.y * s)

    def subtract(self, other: "Vector") -> "Vector":
        return self.add(other.scale(-1))

    def length(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __repr__(self) -> str:
        return f"Vector({self.x:g}, {self.y:g})"


ZERO = Vector(0.0, 0.0)


def _in_gap(x: float, gaps: Tuple[Tuple[float, float], ...]) -> bool:
    return any(low <= x <= high for low, high in gaps)


def _wrap_frog_x(x: float) -> float:
    if x < FROG_LEFT:
        return x + FROG_HORIZONTAL_SHIFT
    if x > FROG_RIGHT:
        return x - FROG_HORIZONTAL_SHIFT
    return x


def object_torus_wrap(v: Vector) -> Vector:
    """
    Wrap a non-player body around the field.

    Args:
        v: Candidate position after applying velocity.

    Returns:
        Position re-entered at the opposite edge if it left the field.
    """
    x, y = v.x, v.y
    if x < 0:
        x += FIELD_WIDTH
    elif x > FIELD_WIDTH:
        x -= FIELD_WIDTH

    if y < OBJECT_TOP:
        y += OBJECT_VERTICAL_SHIFT
    elif y > OBJECT_BOTTOM:
        y -= OBJECT_VERTICAL_SHIFT

    return Vector(x, y)


def frog_torus_wrap(v: Vector) -> Vector:
    """
    Wrap the player at normal step size.

    Above the bank the player is pushed back down. On the bank row itself
    the player may only stay inside a target column; elsewhere it is
    bounced back onto the river.
    """
    x = _wrap_frog_x(v.x)
    y = v.y

    if y < BANK_Y:
        y += 80.0
    elif y == BANK_Y:
        # Gap test uses the pre-wrap x
        if not _in_gap(v.x, FROG_GAPS):
            y += 60.0
    elif y > FROG_BOTTOM:
        y -= 60.0

    return Vector(x, y)


def double_jump_torus_wrap(v: Vector) -> Vector:
    """Wrap the player while the double jump is active (doubled vertical steps)."""
    x = _wrap_frog_x(v.x)
    y = v.y

    if y <= BANK_Y:
        if _in_gap(v.x, DOUBLE_JUMP_GAPS):
            if y != BANK_Y:
                y += 60.0
        else:
            y += 120.0
    elif y > FROG_BOTTOM:
        y -= 120.0

    return Vector(x, y)

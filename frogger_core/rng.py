"""
RNG - Immutable Linear Congruential Generator
=============================================

Provides deterministic powerup placement. The generator is a value: drawing
never mutates it, and next() returns a new generator.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


LCG_MODULUS = 2 ** 31
LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345

# Powerup placement range
POWERUP_X_SPAN = 600
POWERUP_Y_SPAN = 300
POWERUP_Y_OFFSET = 200


def round_half_up(value: float) -> int:
    """Round to nearest integer with halves going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class RNG:
    """
    Seeded LCG with m = 2^31, a = 1103515245, c = 12345.

    Same state always yields the same outputs.
    """
    state: int

    m = LCG_MODULUS
    a = LCG_MULTIPLIER
    c = LCG_INCREMENT

    def int(self) -> int:
        """Next raw integer in [0, m)."""
        return (self.a * self.state + self.c) % self.m

    def float(self) -> float:
        """Next value scaled by m - 1."""
        return self.int() / (self.m - 1)

    def next(self) -> "RNG":
        """Generator advanced by one step."""
        return RNG(self.int())


def powerup_position(rng: RNG) -> Tuple[int, int]:
    """
    Draw the powerup position from a generator.

    Consumes two outputs: x from this generator, y from its successor.

    Returns:
        (x, y) with x in [0, 600] and y in [200, 500].
    """
    x = round_half_up(rng.float() * POWERUP_X_SPAN)
    y = round_half_up(rng.next().float() * POWERUP_Y_SPAN + POWERUP_Y_OFFSET)
    return (x, y)

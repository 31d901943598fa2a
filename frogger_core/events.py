"""
Input Events
============

The three event kinds the engine consumes. `Event` is a closed union:
the reducer rejects anything else.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from frogger_core.config_loader import GameConfig, get_config


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)

    @property
    def sign(self) -> int:
        """-1 towards the left/top of the field, +1 otherwise."""
        return -1 if self in (Direction.LEFT, Direction.UP) else 1

    @classmethod
    def from_key(cls, key: str) -> "Direction":
        """
        Map a movement key to a direction.

        Raises:
            ValueError: If the key is not a movement key.
        """
        try:
            return MOVE_KEYS[key.lower()]
        except KeyError:
            raise ValueError(f"Not a movement key: {key!r}") from None


MOVE_KEYS: Dict[str, Direction] = {
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
}

RESTART_KEY = "r"


@dataclass(frozen=True)
class Move:
    """Player step. `steps` is signed: negative moves left or up."""
    direction: Direction
    steps: int

    @classmethod
    def from_direction(
        cls,
        direction: Direction,
        config: Optional[GameConfig] = None
    ) -> "Move":
        """Build the conventional move for a direction (±45 across, ±60 along)."""
        if config is None:
            config = get_config()
        if direction.is_horizontal:
            magnitude = config.input.horizontal_step
        else:
            magnitude = config.input.vertical_step
        return cls(direction, direction.sign * magnitude)


@dataclass(frozen=True)
class Tick:
    """Clock pulse carrying the elapsed-time value."""
    elapsed: float


@dataclass(frozen=True)
class Restart:
    pass


Event = Union[Move, Tick, Restart]


def event_for_key(key: str, config: Optional[GameConfig] = None) -> Optional[Event]:
    """
    Translate a key press into an event.

    Returns:
        Move or Restart, or None if the key is not bound.
    """
    key = key.lower()
    if key == RESTART_KEY:
        return Restart()
    if key in MOVE_KEYS:
        return Move.from_direction(MOVE_KEYS[key], config)
    return None

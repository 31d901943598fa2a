"""
Game State
==========

Immutable domain model: Body, State and the initial-state factory.

Every transform builds new values with dataclasses.replace(); nothing is
mutated in place, so lanes can be shared freely between successive states.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from frogger_core.config_loader import (
    GameConfig,
    LaneConfig,
    LANE_NAMES,
    get_config,
)
from frogger_core.geometry import Vector, ZERO
from frogger_core.rng import RNG, powerup_position


@dataclass(frozen=True)
class Body:
    """
    A positioned, collidable entity.

    `length` is a collision half-extent, not a drawn size. The flags are
    only meaningful on some bodies: the frog uses the river and riding
    flags, targets use `filled`.
    """
    id: str
    position: Vector
    length: float
    velocity: Vector = ZERO
    in_river: bool = False
    on_log: bool = False
    on_croc: bool = False
    on_turtle: bool = False
    filled: bool = False
    time_on_croc: int = 0

    def moved_to(self, position: Vector) -> "Body":
        return replace(self, position=position)


Lane = Tuple[Body, ...]


@dataclass(frozen=True)
class State:
    """Full game snapshot handed to the renderer after every event."""
    frog: Body
    frog_count: int
    cars: Lane
    buses: Lane
    planks: Lane
    crocs: Lane
    snakes: Lane
    turtles: Lane
    target_one: Body
    target_two: Body
    target_three: Body
    jump_power: Body
    double_jump: bool
    snake_bite: bool
    removables: Tuple[str, ...]
    time: float
    reached: bool
    level_beaten: bool
    game_over: bool
    restart: bool
    level: int
    score: int
    high_score: int
    rng: RNG

    @property
    def targets(self) -> Tuple[Body, Body, Body]:
        return (self.target_one, self.target_two, self.target_three)

    @property
    def all_targets_filled(self) -> bool:
        return all(t.filled for t in self.targets)

    def lanes(self) -> Dict[str, Lane]:
        """Lane tuples keyed by name, in canonical order."""
        return {name: getattr(self, name) for name in LANE_NAMES}


def ghost_frog_id(frog_count: int) -> str:
    """Id of the static frog the renderer leaves on a reached target."""
    return f"frog{frog_count}"


def build_lane(lane: LaneConfig, velocity: Optional[Vector] = None) -> Lane:
    """
    Build a lane in its base layout.

    Args:
        lane: Lane configuration.
        velocity: Shared lane velocity. Uses the configured one if None.

    Returns:
        Tuple of `lane.count` bodies at x = index * spacing.
    """
    if velocity is None:
        velocity = Vector(lane.velocity_x, 0.0)
    return tuple(
        Body(
            id=f"{lane.id_prefix}{index}",
            position=Vector(index * lane.spacing, lane.y),
            length=lane.length,
            velocity=velocity,
        )
        for index in range(lane.count)
    )


def build_frog(config: GameConfig) -> Body:
    frog = config.frog
    return Body(
        id=frog.id,
        position=Vector(frog.start_x, frog.start_y),
        length=frog.length,
    )


def build_targets(config: GameConfig) -> Tuple[Body, Body, Body]:
    """Fresh, unfilled targets."""
    one, two, three = (
        Body(id=t.id, position=Vector(t.x, t.y), length=t.length)
        for t in config.targets
    )
    return one, two, three


def build_jump_power(config: GameConfig, rng: RNG) -> Body:
    x, y = powerup_position(rng)
    return Body(
        id=config.jump_power.id,
        position=Vector(x, y),
        length=config.jump_power.length,
    )


def initial_state(config: Optional[GameConfig] = None, seed: Optional[int] = None) -> State:
    """
    Build the canonical starting state.

    Pure factory: called at startup and at every reset boundary, so no two
    games ever share a mutable default.

    Args:
        config: Game configuration. Uses default if None.
        seed: Powerup RNG seed. Uses config.rng.seed if None.

    Returns:
        Level 1 state with zero score and the powerup placed from the seed.
    """
    if config is None:
        config = get_config()
    if seed is None:
        seed = config.rng.seed

    rng = RNG(seed)
    lanes = {lane.name: build_lane(lane) for lane in config.lanes}
    target_one, target_two, target_three = build_targets(config)

    return State(
        frog=build_frog(config),
        frog_count=0,
        target_one=target_one,
        target_two=target_two,
        target_three=target_three,
        jump_power=build_jump_power(config, rng),
        double_jump=False,
        snake_bite=False,
        removables=(),
        time=0,
        reached=False,
        level_beaten=False,
        game_over=False,
        restart=False,
        level=1,
        score=0,
        high_score=0,
        rng=rng,
        **lanes,
    )

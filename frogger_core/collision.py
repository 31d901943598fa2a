"""
Collision System
================

Detects frog contacts and resolves the riding, powerup, bite, target and
loss flags for one tick.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional

from frogger_core.config_loader import GameConfig, get_config
from frogger_core.geometry import ZERO, Vector, frog_torus_wrap
from frogger_core.scoring import add_points, target_points
from frogger_core.state import Body, State

# Maximum vertical offset for the additive-extent branch
ROW_TOLERANCE = 20.0


def bodies_collided(a: Body, b: Body) -> bool:
    """
    Proximity test between two bodies. Not symmetric in (a, b).

    When `a` is strictly right of `b` and on roughly the same row the
    extents add; otherwise `b`'s extent is subtracted from `a`'s, so a
    large `b.length` can suppress a hit. Pass the frog as `a`.
    """
    dy = a.position.y - b.position.y
    if a.position.x > b.position.x and -ROW_TOLERANCE <= dy <= ROW_TOLERANCE:
        return a.position.subtract(b.position).length() < a.length + b.length
    return b.position.subtract(a.position).length() < a.length - b.length


def collides_with_any(body: Body, others: Iterable[Body]) -> bool:
    return any(bodies_collided(body, other) for other in others)


def _riding_velocity(state: State) -> Vector:
    # Riding flags here are the ones stored by the previous pass
    frog = state.frog
    if frog.on_log:
        return state.planks[0].velocity
    if frog.on_croc:
        return state.crocs[0].velocity
    if frog.on_turtle:
        return state.turtles[0].velocity
    if state.snake_bite:
        return state.snakes[0].velocity
    return ZERO


def resolve_collisions(state: State, config: Optional[GameConfig] = None) -> State:
    """
    Resolve every frog contact against the current lanes.

    All tests use the frog position as it is on entry; the frog is moved by
    its derived velocity only at the end.

    Args:
        state: State with lanes already advanced for this tick.
        config: Game configuration. Uses default if None.

    Returns:
        New state with collision-derived fields updated.
    """
    if config is None:
        config = get_config()

    frog = state.frog

    on_plank = collides_with_any(frog, state.planks)
    on_croc = collides_with_any(frog, state.crocs)
    on_turtle = collides_with_any(frog, state.turtles)

    # Cars and buses kill; so does open water
    frog_collided = (
        collides_with_any(frog, state.cars)
        or collides_with_any(frog, state.buses)
        or (frog.in_river and not (on_plank or on_croc or on_turtle))
    )

    targets = state.targets
    hits = tuple(bodies_collided(frog, target) for target in targets)
    frog_reached = any(hits)
    power_up = bodies_collided(frog, state.jump_power)
    bitten = collides_with_any(frog, state.snakes)

    next_frog = replace(
        frog,
        on_log=on_plank and frog.in_river,
        on_croc=on_croc and frog.in_river,
        on_turtle=on_turtle and frog.in_river,
        velocity=_riding_velocity(state),
    )
    next_frog = next_frog.moved_to(frog_torus_wrap(next_frog.position.add(next_frog.velocity)))

    target_one, target_two, target_three = (
        replace(target, filled=target.filled or hit)
        for target, hit in zip(targets, hits)
    )

    points = target_points((t.filled for t in targets), hits, config)
    score, high_score = add_points(state.score, state.high_score, points)

    return replace(
        state,
        frog=next_frog,
        double_jump=state.double_jump or power_up,
        snake_bite=state.snake_bite or bitten,
        target_one=target_one,
        target_two=target_two,
        target_three=target_three,
        score=score,
        high_score=high_score,
        reached=frog_reached,
        game_over=frog_collided,
    )

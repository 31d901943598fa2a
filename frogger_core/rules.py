"""
Game Rules
==========

Tick state machine: level completion, game over, round completion and the
normal physics advance, plus the three reset paths that rebuild a state
from the initial one.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import Optional

from frogger_core.collision import resolve_collisions
from frogger_core.config_loader import GameConfig, get_config
from frogger_core.geometry import Vector, object_torus_wrap
from frogger_core.scoring import add_points, level_bonus
from frogger_core.state import (
    Body,
    Lane,
    State,
    build_jump_power,
    build_lane,
    ghost_frog_id,
    initial_state,
)

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Transition the next tick takes, in the order the checks run."""
    LEVEL_WON = "level_won"
    GAME_OVER = "game_over"
    ROUND_WON = "round_won"
    PLAYING = "playing"


def croc_time_exceeded(state: State, config: Optional[GameConfig] = None) -> bool:
    """True once the frog has ridden crocs for longer than the grace period."""
    if config is None:
        config = get_config()
    return state.frog.time_on_croc > config.rules.croc_grace_ticks


def classify(state: State, config: Optional[GameConfig] = None) -> Phase:
    """
    Decide which transition a tick applies to this state.

    Level completion is checked first, so filling the last target wins the
    level even on a tick that would otherwise end the game.
    """
    if state.all_targets_filled:
        return Phase.LEVEL_WON
    if state.game_over or croc_time_exceeded(state, config):
        return Phase.GAME_OVER
    if state.reached:
        return Phase.ROUND_WON
    return Phase.PLAYING


def in_river(position: Vector, config: Optional[GameConfig] = None) -> bool:
    if config is None:
        config = get_config()
    return config.rules.river_top < position.y <= config.rules.river_bottom


def move_body(body: Body) -> Body:
    """Advance a lane body by its velocity and wrap it."""
    return body.moved_to(object_torus_wrap(body.position.add(body.velocity)))


def move_lane(lane: Lane) -> Lane:
    return tuple(move_body(body) for body in lane)


def _redraw_power(state: State, config: GameConfig) -> Body:
    # Position comes from the pre-advance generator
    return build_jump_power(config, state.rng)


def level_won_state(state: State, config: Optional[GameConfig] = None) -> State:
    """
    Rebuild for the next level.

    Lanes return to the base layout with every lane's speed ramped by its
    level step; targets are fresh. Score and high score carry over with
    the level bonus.
    """
    if config is None:
        config = get_config()

    lanes = {}
    for lane in config.lanes:
        current = getattr(state, lane.name)[0].velocity
        lanes[lane.name] = build_lane(lane, current.add(Vector(lane.level_step, 0.0)))

    score, high_score = add_points(state.score, state.high_score, level_bonus(config))
    base = initial_state(config, seed=state.rng.state)

    logger.debug("Level %d won, score %d", state.level, score)

    return replace(
        base,
        removables=state.removables + (ghost_frog_id(state.frog_count),),
        level_beaten=True,
        level=state.level + 1,
        score=score,
        high_score=high_score,
        rng=state.rng.next(),
        jump_power=_redraw_power(state, config),
        **lanes,
    )


def round_won_state(state: State, config: Optional[GameConfig] = None) -> State:
    """
    Rebuild for the next life after a target is reached.

    Lanes, targets, level, time, double jump and scores carry over; the
    frog starts again from the bottom.
    """
    if config is None:
        config = get_config()

    base = initial_state(config, seed=state.rng.state)

    logger.debug("Round %d won at level %d", state.frog_count, state.level)

    return replace(
        base,
        frog_count=state.frog_count + 1,
        cars=state.cars,
        buses=state.buses,
        planks=state.planks,
        crocs=state.crocs,
        snakes=state.snakes,
        turtles=state.turtles,
        target_one=state.target_one,
        target_two=state.target_two,
        target_three=state.target_three,
        level=state.level,
        time=state.time,
        double_jump=state.double_jump,
        removables=state.removables + (ghost_frog_id(state.frog_count),),
        reached=False,
        score=state.score,
        high_score=state.high_score,
        rng=state.rng.next(),
        jump_power=_redraw_power(state, config),
    )


def restart_state(state: State, config: Optional[GameConfig] = None) -> State:
    """
    Manual restart: a fresh game keeping ghost ids and the high score.

    `restart` tells the renderer to retire every id in `removables`.
    """
    if config is None:
        config = get_config()

    logger.debug("Restart requested at level %d, score %d", state.level, state.score)

    return replace(
        initial_state(config),
        frog_count=state.frog_count,
        removables=state.removables,
        restart=True,
        high_score=state.high_score,
    )


def game_over_state(state: State) -> State:
    """Terminal sink: only the flag changes."""
    if not state.game_over:
        logger.debug("Game over at level %d, score %d", state.level, state.score)
    return replace(state, game_over=True)


def advance(state: State, elapsed: float, config: Optional[GameConfig] = None) -> State:
    """
    Normal physics step: update river and croc timers, move every lane,
    then resolve collisions.
    """
    if config is None:
        config = get_config()

    frog = state.frog
    frog = replace(
        frog,
        in_river=in_river(frog.position, config),
        time_on_croc=frog.time_on_croc + 1 if frog.on_croc else 0,
    )

    moved = replace(
        state,
        frog=frog,
        time=elapsed,
        cars=move_lane(state.cars),
        buses=move_lane(state.buses),
        planks=move_lane(state.planks),
        crocs=move_lane(state.crocs),
        snakes=move_lane(state.snakes),
        turtles=move_lane(state.turtles),
    )
    return resolve_collisions(moved, config)


def tick(state: State, elapsed: float, config: Optional[GameConfig] = None) -> State:
    """
    Apply one clock tick.

    Args:
        state: Current state.
        elapsed: Clock value carried by the Tick event.
        config: Game configuration. Uses default if None.

    Returns:
        The next state.
    """
    if config is None:
        config = get_config()

    phase = classify(state, config)
    if phase is Phase.LEVEL_WON:
        return level_won_state(state, config)
    if phase is Phase.GAME_OVER:
        return game_over_state(state)
    if phase is Phase.ROUND_WON:
        return round_won_state(state, config)
    return advance(state, elapsed, config)

"""
State Reducer
=============

Folds Move, Tick and Restart events into successive states.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Iterator, Optional

from frogger_core.config_loader import GameConfig, get_config
from frogger_core.events import Event, Move, Restart, Tick
from frogger_core.geometry import ZERO, Vector, double_jump_torus_wrap, frog_torus_wrap
from frogger_core.rules import restart_state, tick
from frogger_core.state import State, initial_state


def apply_move(state: State, move: Move) -> State:
    """
    Step the frog.

    Ignored once the game is over. A bitten frog keeps its position. With
    the double jump active, vertical steps are doubled and wrapped with the
    double-jump rules. The frog velocity is always cleared.
    """
    if state.game_over:
        return state

    frog = state.frog
    if state.snake_bite:
        position = frog.position
    else:
        dx = move.steps if move.direction.is_horizontal else 0
        dy = move.steps if move.direction.is_vertical else 0
        if state.double_jump:
            position = double_jump_torus_wrap(frog.position.add(Vector(dx, dy * 2)))
        else:
            position = frog_torus_wrap(frog.position.add(Vector(dx, dy)))

    return replace(state, frog=replace(frog, position=position, velocity=ZERO))


def reduce_state(state: State, event: Event, config: Optional[GameConfig] = None) -> State:
    """
    Apply one event.

    Raises:
        TypeError: If `event` is not a Move, Tick or Restart.
    """
    if config is None:
        config = get_config()

    if isinstance(event, Move):
        return apply_move(state, event)
    if isinstance(event, Tick):
        return tick(state, event.elapsed, config)
    if isinstance(event, Restart):
        return restart_state(state, config)
    raise TypeError(f"Unknown event type: {type(event).__name__}")


def scan_states(
    events: Iterable[Event],
    state: Optional[State] = None,
    config: Optional[GameConfig] = None
) -> Iterator[State]:
    """
    Yield the state produced by each event in order.

    Args:
        events: Events in arrival order.
        state: Starting state. Uses the initial state if None.
        config: Game configuration. Uses default if None.
    """
    if config is None:
        config = get_config()
    if state is None:
        state = initial_state(config)

    for event in events:
        state = reduce_state(state, event, config)
        yield state


def fold_events(
    events: Iterable[Event],
    state: Optional[State] = None,
    config: Optional[GameConfig] = None
) -> State:
    """Final state after applying every event."""
    if config is None:
        config = get_config()
    if state is None:
        state = initial_state(config)

    for state in scan_states(events, state, config):
        pass
    return state

"""
Frogger Core - deterministic simulation of the lane-crossing game.

Every state transition is a pure function of (state, event); the classes
here only hold the current state for drivers such as tools/play_human.py.

Main exports:
- State, Body, initial_state: immutable game model
- reduce_state: (state, event) -> state
- Move, Tick, Restart, Direction: input events
- CoreGame: stateful orchestrator around the reducer
- GameLoop: merged-source event loop
- FroggerEnv: Gymnasium environment
- GameConfig: Configuration loaded from game_config.yaml
"""

from frogger_core.config_loader import GameConfig, load_config
from frogger_core.geometry import Vector
from frogger_core.rng import RNG
from frogger_core.state import Body, State, initial_state
from frogger_core.events import Direction, Event, Move, Restart, Tick
from frogger_core.rules import Phase, tick
from frogger_core.reducer import reduce_state, scan_states
from frogger_core.game import CoreGame
from frogger_core.event_loop import FixedRateClock, GameLoop, KeySource
from frogger_core.env_gym import FroggerEnv
from frogger_core.replay_recorder import ReplayRecorder, replay_file

__all__ = [
    "GameConfig",
    "load_config",
    "Vector",
    "RNG",
    "Body",
    "State",
    "initial_state",
    "Direction",
    "Event",
    "Move",
    "Restart",
    "Tick",
    "Phase",
    "tick",
    "reduce_state",
    "scan_states",
    "CoreGame",
    "FixedRateClock",
    "GameLoop",
    "KeySource",
    "FroggerEnv",
    "ReplayRecorder",
    "replay_file",
]

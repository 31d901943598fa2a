"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the Frogger game.
Reward is always 0.0 - agents must compute their own from info.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

import gymnasium as gym
from gymnasium import spaces

from frogger_core.config_loader import GameConfig, LANE_NAMES, LANE_SIZE, load_config
from frogger_core.events import Direction
from frogger_core.game import CoreGame
from frogger_core.geometry import FIELD_WIDTH
from frogger_core.state_snapshot import FROG_FLAG_NAMES, LANE_FEATURES, SnapshotBuilder

# Action index -> direction (0 is "stay")
ACTION_DIRECTIONS = (None, Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)

FIELD_HEIGHT = 640.0


class FroggerEnv(gym.Env):
    """
    Frogger lane-crossing game as a Gymnasium environment.

    Action Space:
        Discrete(5): stay, up, down, left, right.
        Each step applies the move, then config.env.ticks_per_step ticks.

    Observation Space:
        Dict of frog, lane and target arrays (see SnapshotBuilder).

    Reward:
        Always 0.0. Agents must compute their own reward from the info dict.

    Info:
        Contains score, delta_score, level, rounds, phase, etc.
    """

    metadata = {
        "render_modes": [],
        "render_fps": 10,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        ticks_per_step: Optional[int] = None,
        max_steps: Optional[int] = None,
        debug: bool = False,
    ):
        """
        Initialize Frogger environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            ticks_per_step: Override config.env.ticks_per_step.
            max_steps: Override config.env.max_steps (truncation cap).
            debug: If True, prints a line per step.
        """
        super().__init__()

        self._config = load_config(config_path)
        self._ticks_per_step = ticks_per_step or self._config.env.ticks_per_step
        self._max_steps = max_steps or self._config.env.max_steps
        self._debug = debug

        self._game = CoreGame(config=self._config)
        self._snapshot_builder = SnapshotBuilder(self._config)
        self._steps = 0

        self.action_space = spaces.Discrete(len(ACTION_DIRECTIONS))
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] FroggerEnv initialized")
            print(f"[DEBUG]   Ticks per step: {self._ticks_per_step}")
            print(f"[DEBUG]   Max steps: {self._max_steps}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        int64_max = np.iinfo(np.int64).max
        return spaces.Dict({
            "frog": spaces.Box(low=-np.inf, high=np.inf, shape=(4,), dtype=np.float32),
            "frog_flags": spaces.Box(low=0, high=1, shape=(len(FROG_FLAG_NAMES),), dtype=np.int8),
            "lanes": spaces.Box(
                low=-np.inf, high=np.inf,
                shape=(len(LANE_NAMES), LANE_SIZE, LANE_FEATURES),
                dtype=np.float32,
            ),
            "targets_filled": spaces.Box(low=0, high=1, shape=(3,), dtype=np.int8),
            "jump_power": spaces.Box(low=0, high=max(FIELD_WIDTH, FIELD_HEIGHT), shape=(2,), dtype=np.float32),
            "time_on_croc": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),
            "score": spaces.Box(low=0, high=int64_max, shape=(), dtype=np.int64),
            "high_score": spaces.Box(low=0, high=int64_max, shape=(), dtype=np.int64),
            "level": spaces.Box(low=1, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),
            "game_over": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Powerup RNG seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        state = self._game.reset(seed=seed)
        self._steps = 0

        obs = self._snapshot_builder.build(state).to_obs_dict()
        info = self._game.get_info()
        info["delta_score"] = 0

        return obs, info

    def step(
        self,
        action: Union[int, np.integer, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one step.

        Args:
            action: Index into ACTION_DIRECTIONS.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item())
        action = int(action)
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action}")

        score_before = self._game.score

        direction = ACTION_DIRECTIONS[action]
        if direction is not None:
            self._game.move(direction)
        state = self._game.run_ticks(self._ticks_per_step)
        self._steps += 1

        obs = self._snapshot_builder.build(state).to_obs_dict()
        reward = 0.0
        terminated = self._game.is_over
        truncated = (not terminated) and self._steps >= self._max_steps

        info = self._game.get_info()
        info["delta_score"] = state.score - score_before
        info["steps"] = self._steps

        if self._debug:
            print(f"[DEBUG] Step: action={action}, delta_score={info['delta_score']}, "
                  f"frog=({state.frog.position.x:.0f}, {state.frog.position.y:.0f}), "
                  f"phase={info['phase']}")
            if terminated:
                print(f"[DEBUG] TERMINATED at level {state.level}, score {state.score}")

        return obs, reward, terminated, truncated, info

    def close(self) -> None:
        """Nothing to release; present for the Gymnasium API."""

    @property
    def game(self) -> CoreGame:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

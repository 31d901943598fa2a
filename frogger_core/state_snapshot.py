"""
State Snapshot
==============

Packs a State into fixed-size numpy arrays for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from frogger_core.config_loader import GameConfig, LANE_NAMES, LANE_SIZE, get_config
from frogger_core.state import State

# Per-body lane features: x, y, vx, length
LANE_FEATURES = 4

FROG_FLAG_NAMES = ("in_river", "on_log", "on_croc", "on_turtle", "double_jump", "snake_bite")


@dataclass
class GameSnapshot:
    """
    Fixed-shape view of one State.

    Lane order follows LANE_NAMES.
    """
    frog: np.ndarray              # (4,) float32: x, y, vx, vy
    frog_flags: np.ndarray        # (6,) int8, see FROG_FLAG_NAMES
    lanes: np.ndarray             # (6, 4, 4) float32
    targets_filled: np.ndarray    # (3,) int8
    jump_power: np.ndarray        # (2,) float32
    time_on_croc: int
    score: int
    high_score: int
    level: int
    game_over: bool

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to Gymnasium observation dictionary."""
        return {
            "frog": self.frog,
            "frog_flags": self.frog_flags,
            "lanes": self.lanes,
            "targets_filled": self.targets_filled,
            "jump_power": self.jump_power,
            "time_on_croc": np.array(self.time_on_croc, dtype=np.int32),
            "score": np.array(self.score, dtype=np.int64),
            "high_score": np.array(self.high_score, dtype=np.int64),
            "level": np.array(self.level, dtype=np.int32),
            "game_over": np.array(int(self.game_over), dtype=np.int8),
        }


class SnapshotBuilder:
    """Builds game state snapshots with pre-allocated arrays."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._lanes = np.zeros((len(LANE_NAMES), LANE_SIZE, LANE_FEATURES), dtype=np.float32)

    def build(self, state: State) -> GameSnapshot:
        """Build a snapshot from a state."""
        frog = state.frog

        for row, name in enumerate(LANE_NAMES):
            for col, body in enumerate(getattr(state, name)):
                self._lanes[row, col] = (
                    body.position.x,
                    body.position.y,
                    body.velocity.x,
                    body.length,
                )

        flags = (
            frog.in_river,
            frog.on_log,
            frog.on_croc,
            frog.on_turtle,
            state.double_jump,
            state.snake_bite,
        )

        return GameSnapshot(
            frog=np.array(
                [frog.position.x, frog.position.y, frog.velocity.x, frog.velocity.y],
                dtype=np.float32,
            ),
            frog_flags=np.array(flags, dtype=np.int8),
            lanes=self._lanes.copy(),
            targets_filled=np.array([t.filled for t in state.targets], dtype=np.int8),
            jump_power=np.array(
                [state.jump_power.position.x, state.jump_power.position.y],
                dtype=np.float32,
            ),
            time_on_croc=frog.time_on_croc,
            score=state.score,
            high_score=state.high_score,
            level=state.level,
            game_over=state.game_over,
        )

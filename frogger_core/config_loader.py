"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

import yaml


# Canonical lane order; State keeps one tuple per name.
LANE_NAMES: Tuple[str, ...] = ("cars", "buses", "planks", "crocs", "snakes", "turtles")

# Every lane holds exactly this many bodies for the lifetime of a game.
LANE_SIZE = 4


@dataclass(frozen=True)
class FrogConfig:
    """Player body at the start of every round."""
    id: str
    start_x: float
    start_y: float
    length: float


@dataclass(frozen=True)
class LaneConfig:
    """Base layout of one lane of moving bodies."""
    name: str
    id_prefix: str
    count: int
    spacing: float      # x distance between consecutive bodies
    y: float
    length: float       # collision half-extent
    velocity_x: float
    level_step: float   # added to velocity_x on every level won


@dataclass(frozen=True)
class TargetConfig:
    """A fixed home slot at the top of the field."""
    id: str
    x: float
    y: float
    length: float


@dataclass(frozen=True)
class JumpPowerConfig:
    """Double-jump powerup body."""
    id: str
    length: float


@dataclass(frozen=True)
class RngConfig:
    """Seed of the powerup placement generator."""
    seed: int


@dataclass(frozen=True)
class ScoringConfig:
    """Scoring parameters."""
    target_points: int
    level_bonus: int


@dataclass(frozen=True)
class RulesConfig:
    """Round and termination parameters."""
    river_top: float         # exclusive upper edge of the river band
    river_bottom: float      # inclusive lower edge of the river band
    croc_grace_ticks: int    # ticks on a croc before the frog is taken


@dataclass(frozen=True)
class ClockConfig:
    """Fixed-rate game clock."""
    tick_interval_ms: int


@dataclass(frozen=True)
class InputConfig:
    """Step magnitudes produced by the keyboard source."""
    horizontal_step: int
    vertical_step: int


@dataclass(frozen=True)
class EnvConfig:
    """Gymnasium wrapper parameters."""
    ticks_per_step: int
    max_steps: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    frog: FrogConfig
    lanes: Tuple[LaneConfig, ...]
    targets: Tuple[TargetConfig, ...]
    jump_power: JumpPowerConfig
    rng: RngConfig
    scoring: ScoringConfig
    rules: RulesConfig
    clock: ClockConfig
    input: InputConfig
    env: EnvConfig

    def get_lane(self, name: str) -> LaneConfig:
        """Get lane config by name."""
        for lane in self.lanes:
            if lane.name == name:
                return lane
        raise ValueError(f"Invalid lane name: {name}")


def _parse_lane(lane_data: dict) -> LaneConfig:
    """Parse a single lane configuration from YAML."""
    return LaneConfig(
        name=str(lane_data["name"]),
        id_prefix=str(lane_data.get("id_prefix", lane_data["name"])),
        count=int(lane_data.get("count", LANE_SIZE)),
        spacing=float(lane_data["spacing"]),
        y=float(lane_data["y"]),
        length=float(lane_data["length"]),
        velocity_x=float(lane_data["velocity_x"]),
        level_step=float(lane_data.get("level_step", 0.0))
    )


def _parse_target(target_data: dict) -> TargetConfig:
    """Parse a single target configuration from YAML."""
    return TargetConfig(
        id=str(target_data["id"]),
        x=float(target_data["x"]),
        y=float(target_data["y"]),
        length=float(target_data["length"])
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    names = tuple(lane.name for lane in config.lanes)
    if names != LANE_NAMES:
        raise ValueError(f"Lanes must be {list(LANE_NAMES)} in that order, got {list(names)}")

    for lane in config.lanes:
        if lane.count != LANE_SIZE:
            raise ValueError(
                f"Lane '{lane.name}' must hold exactly {LANE_SIZE} bodies, got {lane.count}"
            )

    if len(config.targets) != 3:
        raise ValueError(f"Exactly 3 targets are required, got {len(config.targets)}")

    if config.rules.river_top >= config.rules.river_bottom:
        raise ValueError(
            f"river_top ({config.rules.river_top}) must be above "
            f"river_bottom ({config.rules.river_bottom})"
        )

    if config.clock.tick_interval_ms <= 0:
        raise ValueError(f"tick_interval_ms must be positive, got {config.clock.tick_interval_ms}")

    if config.input.horizontal_step <= 0 or config.input.vertical_step <= 0:
        raise ValueError("Input step sizes must be positive")

    if config.env.ticks_per_step <= 0:
        raise ValueError(f"ticks_per_step must be positive, got {config.env.ticks_per_step}")


def default_config_path() -> Path:
    """Location of the game_config.yaml shipped with the package."""
    return Path(os.path.dirname(__file__)) / "game_config.yaml"


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = default_config_path()

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    frog_data = raw["frog"]
    frog = FrogConfig(
        id=str(frog_data.get("id", "frog")),
        start_x=float(frog_data["start_x"]),
        start_y=float(frog_data["start_y"]),
        length=float(frog_data["length"])
    )

    lanes = tuple(_parse_lane(lane) for lane in raw["lanes"])
    targets = tuple(_parse_target(t) for t in raw["targets"])

    jump_data = raw["jump_power"]
    jump_power = JumpPowerConfig(
        id=str(jump_data.get("id", "jumpPower")),
        length=float(jump_data["length"])
    )

    rng = RngConfig(seed=int(raw.get("rng", {}).get("seed", 1)))

    scoring_data = raw["scoring"]
    scoring = ScoringConfig(
        target_points=int(scoring_data["target_points"]),
        level_bonus=int(scoring_data["level_bonus"])
    )

    rules_data = raw["rules"]
    rules = RulesConfig(
        river_top=float(rules_data["river_top"]),
        river_bottom=float(rules_data["river_bottom"]),
        croc_grace_ticks=int(rules_data["croc_grace_ticks"])
    )

    clock = ClockConfig(
        tick_interval_ms=int(raw.get("clock", {}).get("tick_interval_ms", 10))
    )

    input_data = raw.get("input", {})
    input_config = InputConfig(
        horizontal_step=int(input_data.get("horizontal_step", 45)),
        vertical_step=int(input_data.get("vertical_step", 60))
    )

    # Optional section
    env_data = raw.get("env", {})
    env = EnvConfig(
        ticks_per_step=int(env_data.get("ticks_per_step", 10)),
        max_steps=int(env_data.get("max_steps", 2000))
    )

    config = GameConfig(
        frog=frog,
        lanes=lanes,
        targets=targets,
        jump_power=jump_power,
        rng=rng,
        scoring=scoring,
        rules=rules,
        clock=clock,
        input=input_config,
        env=env
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config

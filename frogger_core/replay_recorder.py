"""
Replay Recorder
===============

Records every event dispatched to a CoreGame so the game can be replayed
exactly. The engine is deterministic, so the event log alone reproduces
every state.

Usage:
    from frogger_core import CoreGame, ReplayRecorder

    game = CoreGame(seed=1)
    recorder = ReplayRecorder(game)
    ...play...
    recorder.save("my_replay.json")

    final = replay_file("my_replay.json")
"""

from __future__ import annotations

import hashlib
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from frogger_core.config_loader import GameConfig, get_config
from frogger_core.events import Direction, Event, Move, Restart, Tick
from frogger_core.game import CoreGame
from frogger_core.reducer import fold_events
from frogger_core.state import State, initial_state

REPLAY_VERSION = 1


def generate_replay_filename(
    name: str = "replay",
    seed: Optional[int] = None,
    directory: Optional[Union[str, Path]] = None
) -> Path:
    """
    Generate a timestamped replay filename.

    Format: {name}_{YYYYMMDD_HHMMSS}_s{seed}.json
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    if seed is not None:
        filename = f"{name}_{timestamp}_s{seed}.json"
    else:
        filename = f"{name}_{timestamp}.json"

    if directory:
        return Path(directory) / filename
    return Path(filename)


def compute_config_hash(config: GameConfig) -> str:
    """Short hash of every parameter that affects gameplay."""
    hash_data = {
        "frog": [config.frog.start_x, config.frog.start_y, config.frog.length],
        "lanes": [
            [lane.name, lane.count, lane.spacing, lane.y, lane.length,
             lane.velocity_x, lane.level_step]
            for lane in config.lanes
        ],
        "targets": [[t.x, t.y, t.length] for t in config.targets],
        "jump_power": config.jump_power.length,
        "scoring": [config.scoring.target_points, config.scoring.level_bonus],
        "rules": [config.rules.river_top, config.rules.river_bottom,
                  config.rules.croc_grace_ticks],
    }
    return hashlib.md5(json.dumps(hash_data, sort_keys=True).encode()).hexdigest()[:8]


def event_to_dict(event: Event) -> Dict[str, Any]:
    if isinstance(event, Move):
        return {"type": "move", "direction": event.direction.value, "steps": event.steps}
    if isinstance(event, Tick):
        return {"type": "tick", "elapsed": event.elapsed}
    if isinstance(event, Restart):
        return {"type": "restart"}
    raise TypeError(f"Unknown event type: {type(event).__name__}")


def event_from_dict(data: Dict[str, Any]) -> Event:
    """
    Rebuild an event from its JSON form.

    Raises:
        ValueError: If the event tag or direction is unknown.
    """
    kind = data.get("type")
    if kind == "move":
        return Move(Direction(data["direction"]), int(data["steps"]))
    if kind == "tick":
        return Tick(data["elapsed"])
    if kind == "restart":
        return Restart()
    raise ValueError(f"Unknown event tag in replay: {kind!r}")


def state_summary(state: State) -> Dict[str, Any]:
    """Fields compared when verifying a replay."""
    return {
        "frog": [state.frog.position.x, state.frog.position.y],
        "score": state.score,
        "high_score": state.high_score,
        "level": state.level,
        "rounds": state.frog_count,
        "game_over": state.game_over,
        "rng_state": state.rng.state,
    }


def replay_events(
    events: Iterable[Event],
    config: Optional[GameConfig] = None,
    seed: Optional[int] = None
) -> State:
    """Fold a recorded event log from a fresh game."""
    if config is None:
        config = get_config()
    return fold_events(events, initial_state(config, seed), config)


class ReplayRecorder:
    """
    Listener that records every event dispatched to a CoreGame.

    Attach before playing; calling reset() on the game does not clear the
    log, call clear() for that.
    """

    def __init__(self, game: CoreGame):
        self._game = game
        self._config_hash = compute_config_hash(game.config)
        self._events: List[Event] = []
        game.add_listener(self._on_event)

    def _on_event(self, event: Event, state: State) -> None:
        self._events.append(event)

    @property
    def events(self) -> List[Event]:
        return list(self._events)

    def clear(self) -> None:
        self._events = []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": REPLAY_VERSION,
            "recorded_at": datetime.now().isoformat(),
            "config_hash": self._config_hash,
            "seed": self._game.seed,
            "events": [event_to_dict(e) for e in self._events],
            "final": state_summary(self._game.state),
        }

    def save(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        return path

    @staticmethod
    def load(
        path: Union[str, Path],
        config: Optional[GameConfig] = None,
        strict: bool = True
    ) -> Dict[str, Any]:
        """
        Load a replay file.

        Returns:
            Dict with "seed", "events" (Event objects) and "final".

        Raises:
            ValueError: On an unknown version or, when strict, a replay
                recorded with a different configuration.
        """
        if config is None:
            config = get_config()

        with open(path, "r") as f:
            data = json.load(f)

        if data.get("version") != REPLAY_VERSION:
            raise ValueError(f"Unsupported replay version: {data.get('version')}")

        if strict and data.get("config_hash") != compute_config_hash(config):
            raise ValueError(
                f"Replay config hash {data.get('config_hash')} does not match "
                f"current config {compute_config_hash(config)}"
            )

        return {
            "seed": data.get("seed"),
            "events": [event_from_dict(e) for e in data["events"]],
            "final": data.get("final"),
        }


def replay_file(
    path: Union[str, Path],
    config: Optional[GameConfig] = None,
    strict: bool = True
) -> State:
    """
    Replay a saved file and check it reaches the recorded final state.

    Raises:
        ValueError: If the replayed state differs from the recorded one.
    """
    if config is None:
        config = get_config()

    replay = ReplayRecorder.load(path, config, strict)
    state = replay_events(replay["events"], config, replay["seed"])

    expected = replay["final"]
    if expected is not None and state_summary(state) != expected:
        raise ValueError(f"Replay diverged: expected {expected}, got {state_summary(state)}")
    return state

"""
Core Game
=========

Main game orchestrator holding the current state and the clock counter
around the pure reducer.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from frogger_core.config_loader import GameConfig, get_config
from frogger_core.events import Direction, Event, Move, Restart, Tick
from frogger_core.reducer import reduce_state
from frogger_core.rules import Phase, classify
from frogger_core.state import Body, State, ghost_frog_id, initial_state


class CoreGame:
    """
    Main game simulation class.

    Each call dispatches exactly one event and returns the resulting
    state. Ticks carry a monotonically increasing counter.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Powerup RNG seed. Uses config.rng.seed if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._state = initial_state(config, seed)
        self._elapsed = 0
        self._listeners: List = []

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def seed(self) -> Optional[int]:
        """Seed the current game was started with (None means config.rng.seed)."""
        return self._seed

    @property
    def state(self) -> State:
        return self._state

    @property
    def elapsed(self) -> int:
        """Ticks dispatched since the last reset."""
        return self._elapsed

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def high_score(self) -> int:
        return self._state.high_score

    @property
    def level(self) -> int:
        return self._state.level

    @property
    def is_over(self) -> bool:
        return self._state.game_over

    @property
    def phase(self) -> Phase:
        """Transition the next tick will take."""
        return classify(self._state, self._config)

    def add_listener(self, listener) -> None:
        """Register a callable(event, state) invoked after every dispatch."""
        self._listeners.append(listener)

    def reset(self, seed: Optional[int] = None) -> State:
        """
        Reset to a brand-new game (high score is not kept).

        Args:
            seed: New RNG seed. Uses previous if None.
        """
        if seed is not None:
            self._seed = seed
        self._state = initial_state(self._config, self._seed)
        self._elapsed = 0
        return self._state

    def dispatch(self, event: Event) -> State:
        """Apply one event and return the new state."""
        self._state = reduce_state(self._state, event, self._config)
        for listener in self._listeners:
            listener(event, self._state)
        return self._state

    def move(self, direction: Direction) -> State:
        return self.dispatch(Move.from_direction(direction, self._config))

    def tick(self) -> State:
        state = self.dispatch(Tick(self._elapsed))
        self._elapsed += 1
        return state

    def run_ticks(self, count: int) -> State:
        for _ in range(count):
            self.tick()
        return self._state

    def restart(self) -> State:
        return self.dispatch(Restart())

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        s = self._state
        return {
            "score": s.score,
            "high_score": s.high_score,
            "level": s.level,
            "rounds": s.frog_count,
            "targets_filled": sum(1 for t in s.targets if t.filled),
            "double_jump": s.double_jump,
            "snake_bite": s.snake_bite,
            "time_on_croc": s.frog.time_on_croc,
            "game_over": s.game_over,
            "phase": self.phase.value,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with every drawable body by lane, the cleanup ids and
            flags, and the text fields.
        """
        s = self._state

        def body_data(body: Body) -> Dict[str, Any]:
            return {
                "id": body.id,
                "x": body.position.x,
                "y": body.position.y,
                "filled": body.filled,
            }

        return {
            "frog": body_data(s.frog),
            "frog_is_snake": s.snake_bite,
            "lanes": {
                name: [body_data(b) for b in lane]
                for name, lane in s.lanes().items()
            },
            "targets": [body_data(t) for t in s.targets],
            # Powerup is hidden once collected
            "jump_power": None if s.double_jump else body_data(s.jump_power),
            "ghost_frog_id": ghost_frog_id(s.frog_count),
            "reached": s.reached,
            "removables": list(s.removables),
            "cleanup": s.restart or s.level_beaten,
            "game_over": s.game_over,
            "score": s.score,
            "high_score": s.high_score,
            "level": s.level,
        }

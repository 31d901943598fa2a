"""
Event Loop
==========

Single-threaded merge of input sources and the game clock into one ordered
channel, folded into states one event at a time.

Per scheduler turn every input source is polled before the clock, so a key
press and a tick that arrive together are applied key first.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from typing import Callable, Deque, List, Optional, Sequence

from frogger_core.config_loader import GameConfig, get_config
from frogger_core.events import Event, Tick, event_for_key
from frogger_core.game import CoreGame
from frogger_core.state import State

logger = logging.getLogger(__name__)

StateSink = Callable[[State], None]


class EventChannel:
    """Strict FIFO of pending events."""

    def __init__(self):
        self._queue: Deque[Event] = deque()

    def put(self, event: Event) -> None:
        self._queue.append(event)

    def get(self) -> Optional[Event]:
        """Oldest pending event, or None if empty."""
        if not self._queue:
            return None
        return self._queue.popleft()

    def __len__(self) -> int:
        return len(self._queue)


class KeySource:
    """
    Buffers raw key presses and turns bound ones into events.

    Unbound keys are dropped.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()
        self._config = config
        self._pending: List[str] = []

    def press(self, key: str) -> None:
        self._pending.append(key)

    def poll(self, now_ms: float) -> List[Event]:
        events = []
        for key in self._pending:
            event = event_for_key(key, self._config)
            if event is not None:
                events.append(event)
        self._pending = []
        return events


class FixedRateClock:
    """
    Emits Tick(0), Tick(1), ... one per interval.

    A late poll emits every tick that fell due since the previous one, so
    the number of ticks depends only on elapsed time.
    """

    def __init__(self, interval_ms: float, start_ms: float = 0.0):
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self._interval_ms = interval_ms
        self._start_ms = start_ms
        self._count = 0

    @property
    def count(self) -> int:
        """Ticks emitted so far."""
        return self._count

    def poll(self, now_ms: float) -> List[Event]:
        due = int((now_ms - self._start_ms) // self._interval_ms)
        ticks = [Tick(n) for n in range(self._count, due)]
        self._count = max(self._count, due)
        return ticks


class GameLoop:
    """
    Folds merged events into states.

    Args:
        sources: Input sources, polled in order before the clock.
        clock: Fixed-rate clock. Uses config.clock if None.
        sink: Called with every produced state (e.g. a renderer).
        game: Game to dispatch into. A new CoreGame if None.
        config: Game configuration. Uses the game's if None.
    """

    def __init__(
        self,
        sources: Sequence = (),
        clock: Optional[FixedRateClock] = None,
        sink: Optional[StateSink] = None,
        game: Optional[CoreGame] = None,
        config: Optional[GameConfig] = None
    ):
        if game is None:
            game = CoreGame(config=config)
        config = game.config
        if clock is None:
            clock = FixedRateClock(config.clock.tick_interval_ms)

        self._config = config
        self._sources = list(sources)
        self._clock = clock
        self._sink = sink
        self._game = game
        self._channel = EventChannel()
        self._running = False

    @property
    def state(self) -> State:
        return self._game.state

    @property
    def game(self) -> CoreGame:
        return self._game

    @property
    def channel(self) -> EventChannel:
        return self._channel

    def submit(self, event: Event) -> None:
        """Queue an event directly, behind anything already pending."""
        self._channel.put(event)

    def turn(self, now_ms: float) -> List[State]:
        """
        Run one scheduler turn.

        Polls every input source, then the clock, and applies all queued
        events in arrival order.

        Returns:
            The states produced this turn, one per event.
        """
        for source in self._sources:
            for event in source.poll(now_ms):
                self._channel.put(event)
        for event in self._clock.poll(now_ms):
            self._channel.put(event)

        produced = []
        event = self._channel.get()
        while event is not None:
            state = self._game.dispatch(event)
            produced.append(state)
            if self._sink is not None:
                self._sink(state)
            event = self._channel.get()
        return produced

    def run(
        self,
        should_stop: Optional[Callable[[State], bool]] = None,
        now: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep
    ) -> State:
        """
        Drive turns in real time until stopped.

        Args:
            should_stop: Checked after every turn with the current state.
            now: Clock in seconds.
            sleep: Pause between turns, in seconds.

        Returns:
            The last state.
        """
        start = now()
        interval_s = self._config.clock.tick_interval_ms / 1000.0
        self._running = True
        logger.debug("Game loop started")

        while self._running:
            self.turn((now() - start) * 1000.0)
            if should_stop is not None and should_stop(self.state):
                break
            sleep(interval_s)

        self._running = False
        logger.debug("Game loop stopped at level %d", self.state.level)
        return self.state

    def stop(self) -> None:
        self._running = False

"""
Tests for the merged event loop.
"""

import pytest

from frogger_core.config_loader import load_config
from frogger_core.event_loop import EventChannel, FixedRateClock, GameLoop, KeySource
from frogger_core.events import Direction, Move, Restart, Tick
from frogger_core.game import CoreGame


@pytest.fixture
def config():
    return load_config()


class TestFixedRateClock:
    """Test tick emission."""

    def test_counts_from_zero(self):
        clock = FixedRateClock(10)
        assert clock.poll(5) == []
        assert clock.poll(10) == [Tick(0)]

    def test_late_poll_catches_up(self):
        clock = FixedRateClock(10)
        assert clock.poll(35) == [Tick(0), Tick(1), Tick(2)]
        assert clock.poll(35) == []
        assert clock.poll(40) == [Tick(3)]
        assert clock.count == 4

    def test_rejects_bad_interval(self):
        with pytest.raises(ValueError):
            FixedRateClock(0)


class TestSources:
    """Test channel and key buffering."""

    def test_channel_is_fifo(self):
        channel = EventChannel()
        channel.put(Tick(0))
        channel.put(Restart())
        assert len(channel) == 2
        assert channel.get() == Tick(0)
        assert channel.get() == Restart()
        assert channel.get() is None

    def test_key_source_drops_unbound(self, config):
        keys = KeySource(config)
        for key in ("w", "x", "r"):
            keys.press(key)
        assert keys.poll(0) == [Move(Direction.UP, -60), Restart()]
        assert keys.poll(0) == []


class TestGameLoop:
    """Test merged ordering and dispatch."""

    def test_keys_before_ticks(self, config):
        keys = KeySource(config)
        loop = GameLoop(sources=[keys], clock=FixedRateClock(10), config=config)
        seen = []
        loop.game.add_listener(lambda event, state: seen.append(event))

        keys.press("w")
        produced = loop.turn(20)

        assert seen == [Move(Direction.UP, -60), Tick(0), Tick(1)]
        assert len(produced) == 3
        assert loop.state is produced[-1]

    def test_sink_sees_every_state(self, config):
        received = []
        loop = GameLoop(clock=FixedRateClock(10), sink=received.append, config=config)
        loop.turn(50)
        assert len(received) == 5
        assert received[-1].time == 4

    def test_submit_queues_behind(self, config):
        loop = GameLoop(clock=FixedRateClock(10), game=CoreGame(config=config))
        seen = []
        loop.game.add_listener(lambda event, state: seen.append(event))
        loop.submit(Restart())
        loop.turn(10)
        assert seen == [Restart(), Tick(0)]

    def test_run_until_stopped(self, config):
        now = [0.0]

        def sleep(seconds):
            now[0] += seconds

        loop = GameLoop(config=config)
        final = loop.run(
            should_stop=lambda state: state.time >= 3,
            now=lambda: now[0],
            sleep=sleep,
        )
        assert final.time >= 3

    def test_stop_ends_run(self, config):
        now = [0.0]
        sleeps = []
        loop = GameLoop(config=config)

        def sleep(seconds):
            sleeps.append(seconds)
            now[0] += seconds
            if len(sleeps) == 3:
                loop.stop()

        final = loop.run(now=lambda: now[0], sleep=sleep)
        assert len(sleeps) == 3
        assert final is loop.state

"""
Tests for the input reducer.
"""

from dataclasses import replace

import pytest

from frogger_core.config_loader import load_config
from frogger_core.events import Direction, Move, Restart, Tick, event_for_key
from frogger_core.geometry import Vector, ZERO
from frogger_core.reducer import fold_events, reduce_state, scan_states
from frogger_core.state import initial_state


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def state(config):
    return initial_state(config)


def move(direction, config):
    return Move.from_direction(direction, config)


class TestMoves:
    """Test frog steps."""

    def test_step_up(self, state, config):
        result = reduce_state(state, move(Direction.UP, config), config)
        assert result.frog.position == Vector(300, 500)
        assert result.frog.velocity == ZERO

    def test_step_left(self, state, config):
        result = reduce_state(state, move(Direction.LEFT, config), config)
        assert result.frog.position == Vector(255, 560)

    def test_step_down_wraps_to_bottom_row(self, state, config):
        result = reduce_state(state, move(Direction.DOWN, config), config)
        assert result.frog.position == Vector(300, 560)

    def test_step_right_wraps(self, state, config):
        start = replace(state, frog=replace(state.frog, position=Vector(560, 560)))
        result = reduce_state(start, move(Direction.RIGHT, config), config)
        assert result.frog.position == Vector(20, 560)

    def test_move_clears_velocity(self, state, config):
        riding = replace(state, frog=replace(state.frog, velocity=Vector(2, 0)))
        result = reduce_state(riding, move(Direction.UP, config), config)
        assert result.frog.velocity == ZERO

    def test_double_jump_doubles_vertical(self, state, config):
        start = replace(state, double_jump=True)
        result = reduce_state(start, move(Direction.UP, config), config)
        assert result.frog.position == Vector(300, 440)

    def test_double_jump_horizontal_unchanged(self, state, config):
        start = replace(state, double_jump=True)
        result = reduce_state(start, move(Direction.LEFT, config), config)
        assert result.frog.position == Vector(255, 560)

    def test_double_jump_onto_bank(self, state, config):
        start = replace(
            state, double_jump=True,
            frog=replace(state.frog, position=Vector(300, 200)),
        )
        result = reduce_state(start, move(Direction.UP, config), config)
        assert result.frog.position == Vector(300, 80)

    def test_snake_bite_freezes_frog(self, state, config):
        start = replace(
            state, snake_bite=True,
            frog=replace(state.frog, velocity=Vector(1, 0)),
        )
        result = reduce_state(start, move(Direction.UP, config), config)
        assert result.frog.position == state.frog.position
        assert result.frog.velocity == ZERO

    def test_game_over_ignores_moves(self, state, config):
        dead = replace(state, game_over=True)
        assert reduce_state(dead, move(Direction.UP, config), config) is dead


class TestRestart:
    """Test manual restart."""

    def test_restart_keeps_high_score_and_ghosts(self, state, config):
        played = replace(
            state,
            score=900,
            high_score=1500,
            frog_count=2,
            removables=("frog0", "frog1"),
            level=3,
            game_over=True,
        )
        result = reduce_state(played, Restart(), config)

        assert result.restart
        assert result.score == 0
        assert result.high_score == 1500
        assert result.level == 1
        assert result.frog_count == 2
        assert result.removables == ("frog0", "frog1")
        assert not result.game_over
        assert result.frog.position == Vector(300, 560)


class TestDispatch:
    """Test event routing and folding."""

    def test_tick_delegates(self, state, config):
        assert reduce_state(state, Tick(5), config).time == 5

    def test_unknown_event_rejected(self, state, config):
        with pytest.raises(TypeError):
            reduce_state(state, "jump", config)

    def test_scan_yields_one_state_per_event(self, state, config):
        events = [Tick(0), move(Direction.UP, config), Tick(1)]
        states = list(scan_states(events, state, config))
        assert len(states) == 3
        assert states[1].frog.position == Vector(300, 500)
        assert fold_events(events, state, config) == states[-1]

    def test_deterministic(self, config):
        events = [Tick(n) for n in range(50)] + [move(Direction.UP, config)] * 3
        assert fold_events(events, initial_state(config), config) == \
            fold_events(events, initial_state(config), config)

    def test_scores_stay_ordered(self, state, config):
        """score <= high_score and high_score never decreases."""
        events = []
        for n in range(200):
            events.append(Tick(n))
            if n % 15 == 0:
                events.append(move(Direction.UP, config))
            if n % 90 == 0:
                events.append(Restart())

        high = 0
        for result in scan_states(events, state, config):
            assert result.score <= result.high_score
            assert result.high_score >= high
            high = result.high_score


class TestKeyBindings:
    """Test key to event translation."""

    def test_move_keys(self, config):
        assert event_for_key("w", config) == Move(Direction.UP, -60)
        assert event_for_key("s", config) == Move(Direction.DOWN, 60)
        assert event_for_key("a", config) == Move(Direction.LEFT, -45)
        assert event_for_key("D", config) == Move(Direction.RIGHT, 45)

    def test_restart_key(self, config):
        assert event_for_key("r", config) == Restart()

    def test_unbound_key(self, config):
        assert event_for_key("x", config) is None

    def test_direction_from_key(self):
        assert Direction.from_key("w") is Direction.UP
        with pytest.raises(ValueError):
            Direction.from_key("q")

"""
Tests for the CoreGame orchestrator.
"""

import pytest

from frogger_core.config_loader import load_config
from frogger_core.events import Direction, Tick
from frogger_core.game import CoreGame
from frogger_core.rules import Phase


@pytest.fixture
def game():
    return CoreGame(config=load_config(), seed=1)


class TestCoreGame:
    """Test stateful wrapper behaviour."""

    def test_ticks_carry_counter(self, game):
        seen = []
        game.add_listener(lambda event, state: seen.append(event))
        game.run_ticks(3)
        assert seen == [Tick(0), Tick(1), Tick(2)]
        assert game.elapsed == 3

    def test_move(self, game):
        state = game.move(Direction.UP)
        assert state.frog.position.y == 500

    def test_reset(self, game):
        game.move(Direction.UP)
        game.run_ticks(5)
        state = game.reset()
        assert state.frog.position.y == 560
        assert game.elapsed == 0

    def test_reset_with_seed(self, game):
        state = game.reset(seed=1103527590)
        assert state.jump_power.position.as_tuple() == (105, 293)
        assert game.seed == 1103527590

    def test_phase(self, game):
        assert game.phase is Phase.PLAYING

    def test_info_keys(self, game):
        info = game.get_info()
        for key in ("score", "high_score", "level", "rounds", "targets_filled",
                    "double_jump", "snake_bite", "time_on_croc", "game_over", "phase"):
            assert key in info
        assert info["phase"] == "playing"

    def test_render_data(self, game):
        data = game.get_render_data()
        assert data["frog"]["id"] == "frog"
        assert len(data["lanes"]["cars"]) == 4
        assert data["ghost_frog_id"] == "frog0"
        assert data["jump_power"]["id"] == "jumpPower"
        assert not data["cleanup"]

    def test_restart_marks_cleanup(self, game):
        game.restart()
        assert game.get_render_data()["cleanup"]

    def test_is_over(self, game):
        assert not game.is_over
        game.move(Direction.UP)
        while not game.is_over:
            game.tick()
        assert game.state.game_over

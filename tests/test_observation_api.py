"""
Tests for the numpy state snapshot.
"""

from dataclasses import replace

import pytest
import numpy as np

from frogger_core.config_loader import LANE_NAMES, load_config
from frogger_core.state import initial_state
from frogger_core.state_snapshot import FROG_FLAG_NAMES, LANE_FEATURES, SnapshotBuilder


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def builder(config):
    return SnapshotBuilder(config)


class TestSnapshot:
    """Test snapshot shapes and contents."""

    def test_shapes(self, builder, config):
        snap = builder.build(initial_state(config))
        assert snap.frog.shape == (4,)
        assert snap.frog_flags.shape == (len(FROG_FLAG_NAMES),)
        assert snap.lanes.shape == (len(LANE_NAMES), 4, LANE_FEATURES)
        assert snap.targets_filled.shape == (3,)
        assert snap.jump_power.shape == (2,)

    def test_dtypes(self, builder, config):
        obs = builder.build(initial_state(config)).to_obs_dict()
        assert obs["frog"].dtype == np.float32
        assert obs["lanes"].dtype == np.float32
        assert obs["frog_flags"].dtype == np.int8
        assert obs["score"].dtype == np.int64
        assert obs["level"].dtype == np.int32

    def test_lane_rows(self, builder, config):
        snap = builder.build(initial_state(config))
        cars = LANE_NAMES.index("cars")
        crocs = LANE_NAMES.index("crocs")
        np.testing.assert_array_equal(snap.lanes[cars, 1], [300, 480, 3, 25])
        np.testing.assert_array_equal(snap.lanes[crocs, 2], [400, 185, -1, 50])

    def test_flags_and_targets(self, builder, config):
        state = initial_state(config)
        state = replace(
            state,
            double_jump=True,
            target_two=replace(state.target_two, filled=True),
        )
        snap = builder.build(state)
        assert snap.frog_flags[FROG_FLAG_NAMES.index("double_jump")] == 1
        assert snap.frog_flags[FROG_FLAG_NAMES.index("snake_bite")] == 0
        np.testing.assert_array_equal(snap.targets_filled, [0, 1, 0])

    def test_snapshots_are_independent(self, builder, config):
        """Reused buffers must not leak into earlier snapshots."""
        state = initial_state(config)
        first = builder.build(state)
        moved = replace(state, cars=tuple(b.moved_to(b.position.scale(0)) for b in state.cars))
        builder.build(moved)
        assert first.lanes[LANE_NAMES.index("cars"), 1, 0] == 300

"""
Tests for configuration loading and validation.
"""

import pytest
import yaml

from frogger_core.config_loader import (
    LANE_NAMES,
    default_config_path,
    get_config,
    load_config,
    reload_config,
)


@pytest.fixture
def raw():
    with open(default_config_path()) as f:
        return yaml.safe_load(f)


def write(tmp_path, data):
    path = tmp_path / "game_config.yaml"
    path.write_text(yaml.safe_dump(data))
    return str(path)


class TestLoadConfig:
    """Test the shipped configuration."""

    def test_default_values(self):
        config = load_config()
        assert config.frog.start_x == 300
        assert config.frog.start_y == 560
        assert tuple(lane.name for lane in config.lanes) == LANE_NAMES
        assert config.get_lane("crocs").velocity_x == -1
        assert config.scoring.target_points == 300
        assert config.scoring.level_bonus == 500
        assert config.rules.croc_grace_ticks == 250
        assert config.rng.seed == 1

    def test_unknown_lane(self):
        with pytest.raises(ValueError):
            load_config().get_lane("trains")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))


class TestValidation:
    """Test rejected configurations."""

    def test_lane_count(self, tmp_path, raw):
        raw["lanes"][0]["count"] = 5
        with pytest.raises(ValueError):
            load_config(write(tmp_path, raw))

    def test_lane_order(self, tmp_path, raw):
        raw["lanes"][0], raw["lanes"][1] = raw["lanes"][1], raw["lanes"][0]
        with pytest.raises(ValueError):
            load_config(write(tmp_path, raw))

    def test_target_count(self, tmp_path, raw):
        raw["targets"] = raw["targets"][:2]
        with pytest.raises(ValueError):
            load_config(write(tmp_path, raw))

    def test_river_band(self, tmp_path, raw):
        raw["rules"]["river_top"] = 300
        with pytest.raises(ValueError):
            load_config(write(tmp_path, raw))

    def test_tick_interval(self, tmp_path, raw):
        raw["clock"] = {"tick_interval_ms": 0}
        with pytest.raises(ValueError):
            load_config(write(tmp_path, raw))

    def test_optional_sections_default(self, tmp_path, raw):
        del raw["env"]
        config = load_config(write(tmp_path, raw))
        assert config.env.ticks_per_step == 10


class TestConfigCache:
    """Test the module-level configuration cache."""

    def test_reload_replaces_cache(self, tmp_path, raw):
        raw["scoring"]["target_points"] = 10
        try:
            reloaded = reload_config(write(tmp_path, raw))
            assert reloaded.scoring.target_points == 10
            assert get_config() is reloaded
        finally:
            reload_config()
        assert get_config().scoring.target_points == 300

"""
tests/test_config.py - Tests for core/config.py, core/numeric.py and core/profiler.py
"""

import inspect

import pytest

from core.activity import ActivityState
from core.config import (PRESETS, PRESET_INSTALACION, ACTIVITY_KEYS,
                         load_config, pond_height, activity_kwargs)
from core.numeric import lerp, map_range, clamp
from core.profiler import Profiler


class TestLoadConfig:
    """Presets and overrides."""

    def test_default_preset(self):
        config = load_config()
        assert config["W"] == 1920
        assert config["H"] == 1080
        assert pond_height(config) == 880

    def test_rehearsal_preset(self):
        config = load_config("ensayo")
        assert config["fullscreen"] is False
        assert config["overload_ms"] < PRESET_INSTALACION["overload_ms"]

    def test_overrides_apply_to_copy(self):
        config = load_config(show_debug=True)
        assert config["show_debug"] is True
        assert PRESETS["instalacion"]["show_debug"] is False

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            load_config("concierto")

    def test_unknown_key(self):
        with pytest.raises(ValueError):
            load_config(volumen=1.0)

    def test_panel_taller_than_screen(self):
        with pytest.raises(ValueError):
            load_config(UI_PANEL_H=1080)

    def test_activity_kwargs_match_constructor(self):
        params = inspect.signature(ActivityState).parameters
        for key in ACTIVITY_KEYS:
            assert key in params
        state = ActivityState(**activity_kwargs(load_config("ensayo")))
        assert state.recover_ms == 1500.0


class TestNumeric:
    """lerp / map_range / clamp."""

    def test_lerp(self):
        assert lerp(0, 10, 0.25) == 2.5
        assert lerp(255, 0, 0.5) == 127.5

    def test_map_range(self):
        assert map_range(0.5, 0, 1, 0.3, 1.5) == pytest.approx(0.9)

    def test_map_range_extrapolates_without_clamp(self):
        assert map_range(2.0, 0, 1, 0, 10) == 20

    def test_map_range_clamps_inverted_output(self):
        assert map_range(2.0, 0, 1, 10, 0, clamp=True) == 0
        assert map_range(-1.0, 0, 1, 10, 0, clamp=True) == 10

    def test_map_range_zero_width(self):
        with pytest.raises(ValueError):
            map_range(1, 2, 2, 0, 1)

    def test_clamp(self):
        assert clamp(5, 0, 3) == 3
        assert clamp(-1, 0, 3) == 0


class TestProfiler:
    """Smoothed timings for the periodic console report."""

    def test_region_records(self):
        profiler = Profiler()
        with profiler.region("motor") as region:
            assert region.name == "motor"
        assert "motor" in profiler.averages
        assert profiler.records["motor"] >= 0.0

    def test_moving_average(self):
        profiler = Profiler(smoothing=0.5)
        profiler.record("render", 10.0)
        profiler.record("render", 20.0)
        assert profiler.averages["render"] == pytest.approx(15.0)
        assert profiler.records["render"] == 20.0

    def test_report(self):
        profiler = Profiler()
        profiler.record("render", 1.0)
        assert "render" in profiler.report()

"""Tests for the environment state."""

import pytest

from core.environment import (
    EnvironmentState,
    Mode,
    Tool,
    ViewPreset,
    Weather,
    format_time,
    sun_for_hour,
)


@pytest.fixture
def env():
    """Create a default environment."""
    return EnvironmentState()


class TestDefaults:
    """Test the initial state."""

    def test_initial_values(self, env):
        assert env.hour_of_day == 12.0
        assert env.weather == Weather.SUNNY
        assert env.shadow_intensity == 0.5
        assert env.mode == Mode.MODELING
        assert env.active_tool == Tool.WALL
        assert env.active_view == ViewPreset.PERSPECTIVE

    def test_loose_constructor_input(self):
        env = EnvironmentState(weather="FOGGY", mode="bogus", active_view="top")
        assert env.weather == Weather.FOGGY
        assert env.mode == Mode.MODELING
        assert env.active_view == ViewPreset.TOP


class TestSun:
    """Test the time-of-day sun descriptor."""

    @pytest.mark.parametrize(
        "hour,color,intensity",
        [
            (0, "#4444ff", 0.5),
            (5.9, "#4444ff", 0.5),
            (6, "#ffaa66", 0.8),
            (7.5, "#ffaa66", 0.8),
            (8, "#ffffff", 1.2),
            (12, "#ffffff", 1.2),
            (16, "#ffffff", 1.2),
            (17, "#ffaa66", 0.8),
            (18, "#ffaa66", 0.8),
            (19, "#4444ff", 0.5),
        ],
    )
    def test_bands(self, env, hour, color, intensity):
        sun = env.set_hour_of_day(hour)
        assert sun.color_hex == color
        assert sun.intensity == pytest.approx(intensity)

    def test_noon_position(self):
        """At noon the angle is pi: the sun sits at x=-20, y=10."""
        sun = sun_for_hour(12)
        x, y, z = sun.position
        assert x == pytest.approx(-20.0)
        assert y == pytest.approx(10.0)
        assert z == pytest.approx(0.0, abs=1e-9)

    def test_six_am_position(self):
        sun = sun_for_hour(6)
        assert sun.position == pytest.approx((0.0, 20.0, 20.0), abs=1e-9)
        assert sun.elevation == pytest.approx(45.0)

    def test_idempotent(self, env):
        """Setting the same hour twice yields the same descriptor."""
        assert env.set_hour_of_day(9.25) == env.set_hour_of_day(9.25)

    def test_hour_wraps(self, env):
        env.set_hour_of_day(25)
        assert env.hour_of_day == pytest.approx(1.0)
        env.set_hour_of_day(-1)
        assert env.hour_of_day == pytest.approx(23.0)
        env.set_hour_of_day(-1e-20)
        assert 0.0 <= env.hour_of_day < 24.0
        assert env.hour_of_day == 0.0

    @pytest.mark.parametrize("value", [None, "noon", float("nan")])
    def test_invalid_hour_resets_to_noon(self, env, value):
        env.set_hour_of_day(value)
        assert env.hour_of_day == 12.0

    def test_format_time(self):
        assert format_time(12) == "12:00"
        assert format_time(6.5) == "06:30"
        assert format_time(9.9999) == "10:00"


class TestWeather:
    """Test weather presets."""

    @pytest.mark.parametrize(
        "weather,background",
        [
            ("sunny", "#87ceeb"),
            ("cloudy", "#b0c4de"),
            ("overcast", "#778899"),
            ("foggy", "#d3d3d3"),
        ],
    )
    def test_backgrounds(self, env, weather, background):
        assert env.set_weather(weather) == background

    def test_fog_only_when_foggy(self, env):
        env.set_weather("foggy")
        fog = env.fog
        assert fog is not None
        assert (fog.near, fog.far) == (10.0, 50.0)
        env.set_weather("cloudy")
        assert env.fog is None

    def test_unknown_weather_is_sunny(self, env):
        env.set_weather("foggy")
        env.set_weather("hail")
        assert env.weather == Weather.SUNNY


class TestMode:
    """Test mode switching and its lighting side effects."""

    def test_toggle(self, env):
        assert env.toggle_mode() == Mode.VISUALIZATION
        assert env.toggle_mode() == Mode.MODELING

    def test_visualization_boosts_sun(self, env):
        base = env.sun.intensity
        env.set_mode("visualization")
        assert env.sun.intensity == pytest.approx(base * 1.5)
        env.set_mode("modeling")
        assert env.sun.intensity == pytest.approx(base)

    def test_tone_mapping(self, env):
        assert env.tone_mapping.enabled is False
        env.set_mode(Mode.VISUALIZATION)
        mapping = env.tone_mapping
        assert mapping.enabled is True
        assert mapping.operator == "aces_filmic"
        assert mapping.exposure == pytest.approx(1.2)


class TestShadowsAndViews:
    """Test shadow intensity and camera presets."""

    @pytest.mark.parametrize("value,expected", [(-1, 0.0), (0.3, 0.3), (2, 1.0), ("x", 0.5)])
    def test_shadow_clamp(self, env, value, expected):
        assert env.set_shadow_intensity(value) == pytest.approx(expected)

    def test_shadow_darkness(self, env):
        env.set_shadow_intensity(0.25)
        assert env.shadow_darkness == pytest.approx(0.75)

    def test_view_presets(self, env):
        assert env.set_view("top").position == (0.0, 20.0, 0.1)
        front = env.set_view("front")
        assert front.position == (0.0, 5.0, 20.0)
        assert front.look_at == (0.0, 5.0, 0.0)
        assert env.set_view("isometric").position == (10.0, 10.0, 10.0)

    def test_lighting_summary(self, env):
        summary = env.lighting_summary()
        assert summary["ambient"] == 0.5
        assert len(summary["sun"]) == 3
        assert summary["sun_intensity"] == pytest.approx(1.2)

"""Environment state: time of day, weather, shadows, mode, tool and view."""

from .state import (
    CAMERA_PRESETS,
    WEATHER_BACKGROUNDS,
    CameraPose,
    EnvironmentState,
    Fog,
    Mode,
    SunLight,
    ToneMapping,
    Tool,
    ViewPreset,
    Weather,
    format_time,
    sun_for_hour,
)

__all__ = [
    "EnvironmentState",
    "Weather",
    "Mode",
    "Tool",
    "ViewPreset",
    "SunLight",
    "Fog",
    "ToneMapping",
    "CameraPose",
    "WEATHER_BACKGROUNDS",
    "CAMERA_PRESETS",
    "sun_for_hour",
    "format_time",
]

"""Non-geometric scene parameters and the light descriptors derived from them."""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

Vector3 = Tuple[float, float, float]


class Weather(str, Enum):
    """Weather presets."""

    SUNNY = "sunny"
    CLOUDY = "cloudy"
    OVERCAST = "overcast"
    FOGGY = "foggy"


class Mode(str, Enum):
    """Editor modes."""

    MODELING = "modeling"
    VISUALIZATION = "visualization"


class Tool(str, Enum):
    """Creation tools."""

    WALL = "wall"
    WINDOW = "window"
    DOOR = "door"
    FURNITURE = "furniture"


class ViewPreset(str, Enum):
    """Camera presets."""

    PERSPECTIVE = "perspective"
    TOP = "top"
    FRONT = "front"


WEATHER_BACKGROUNDS = {
    Weather.SUNNY: "#87ceeb",
    Weather.CLOUDY: "#b0c4de",
    Weather.OVERCAST: "#778899",
    Weather.FOGGY: "#d3d3d3",
}

# position, look_at
CAMERA_PRESETS = {
    ViewPreset.PERSPECTIVE: ((10.0, 10.0, 10.0), (0.0, 0.0, 0.0)),
    ViewPreset.TOP: ((0.0, 20.0, 0.1), (0.0, 0.0, 0.0)),
    ViewPreset.FRONT: ((0.0, 5.0, 20.0), (0.0, 5.0, 0.0)),
}

DEFAULT_HOUR = 12.0
AMBIENT_INTENSITY = 0.5
VISUALIZATION_SUN_BOOST = 1.5
VISUALIZATION_EXPOSURE = 1.2


@dataclass(frozen=True)
class SunLight:
    """Directional light descriptor handed to the rendering collaborator."""

    position: Vector3
    azimuth: float  # degrees
    elevation: float  # degrees
    color_hex: str
    intensity: float

    def to_dict(self) -> dict:
        return {
            "position": list(self.position),
            "azimuth": self.azimuth,
            "elevation": self.elevation,
            "color_hex": self.color_hex,
            "intensity": self.intensity,
        }


@dataclass(frozen=True)
class Fog:
    """Linear fog descriptor."""

    color_hex: str
    near: float = 10.0
    far: float = 50.0

    def to_dict(self) -> dict:
        return {"color_hex": self.color_hex, "near": self.near, "far": self.far}


@dataclass(frozen=True)
class ToneMapping:
    """Tone mapping request for the renderer."""

    enabled: bool = False
    operator: str = "none"
    exposure: float = 1.0


@dataclass(frozen=True)
class CameraPose:
    """Camera placement for a view preset."""

    position: Vector3
    look_at: Vector3


def _band(hour: float) -> Tuple[str, float]:
    """Light color and intensity for an hour of day."""
    if hour < 6 or hour > 18:
        return "#4444ff", 0.5  # night
    if hour < 8 or hour > 16:
        return "#ffaa66", 0.8  # morning / evening
    return "#ffffff", 1.2


def sun_for_hour(hour: float) -> SunLight:
    """Compute the sun descriptor for an hour in [0, 24)."""
    angle = hour / 24 * math.pi * 2
    x = math.cos(angle) * 20
    y = math.sin(angle) * 10 + 10
    z = math.sin(angle) * 20
    color_hex, intensity = _band(hour)
    return SunLight(
        position=(x, y, z),
        azimuth=math.degrees(math.atan2(z, x)),
        elevation=math.degrees(math.atan2(y, math.hypot(x, z))),
        color_hex=color_hex,
        intensity=intensity,
    )


def format_time(hour: float) -> str:
    """Format a fractional hour as HH:MM."""
    hours = int(math.floor(hour))
    minutes = int(round((hour - hours) * 60))
    if minutes == 60:
        hours, minutes = hours + 1, 0
    return f"{hours:02d}:{minutes:02d}"


def _coerce(enum_cls, value, fallback):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        logger.debug(f"Unknown {enum_cls.__name__} {value!r}, using {fallback.value}")
        return fallback


@dataclass
class EnvironmentState:
    """Session-wide presentation state.

    Every setter accepts loose input and normalizes it; nothing here raises.
    The derived descriptors (``sun``, ``background_hex``, ``fog``,
    ``tone_mapping``, ``camera``) are what the renderer reads each frame.
    """

    hour_of_day: float = DEFAULT_HOUR
    weather: Weather = Weather.SUNNY
    shadow_intensity: float = 0.5
    mode: Mode = Mode.MODELING
    active_tool: Tool = Tool.WALL
    active_view: ViewPreset = ViewPreset.PERSPECTIVE
    ambient_intensity: float = AMBIENT_INTENSITY
    _base_sun: SunLight = field(init=False, repr=False)

    def __post_init__(self):
        self.set_hour_of_day(self.hour_of_day)
        self.weather = _coerce(Weather, self.weather, Weather.SUNNY)
        self.mode = _coerce(Mode, self.mode, Mode.MODELING)
        self.active_tool = _coerce(Tool, self.active_tool, Tool.WALL)
        self.active_view = _coerce(ViewPreset, self.active_view, ViewPreset.PERSPECTIVE)
        self.set_shadow_intensity(self.shadow_intensity)

    # Transitions

    def set_hour_of_day(self, hour) -> SunLight:
        """Set the time of day and return the resulting sun descriptor."""
        try:
            hour = float(hour)
        except (TypeError, ValueError):
            hour = DEFAULT_HOUR
        if not math.isfinite(hour):
            hour = DEFAULT_HOUR
        self.hour_of_day = hour % 24.0
        # tiny negatives round up to 24.0
        if self.hour_of_day >= 24.0:
            self.hour_of_day = 0.0
        self._base_sun = sun_for_hour(self.hour_of_day)
        return self.sun

    def set_weather(self, weather) -> str:
        """Set the weather and return the background color."""
        self.weather = _coerce(Weather, weather, Weather.SUNNY)
        return self.background_hex

    def set_mode(self, mode) -> Mode:
        self.mode = _coerce(Mode, mode, Mode.MODELING)
        return self.mode

    def toggle_mode(self) -> Mode:
        """Switch between modeling and visualization."""
        if self.mode == Mode.MODELING:
            return self.set_mode(Mode.VISUALIZATION)
        return self.set_mode(Mode.MODELING)

    def set_shadow_intensity(self, intensity) -> float:
        """Store the shadow intensity clamped into [0, 1]."""
        try:
            value = float(intensity)
        except (TypeError, ValueError):
            value = 0.5
        if not math.isfinite(value):
            value = 0.5
        self.shadow_intensity = min(max(value, 0.0), 1.0)
        return self.shadow_intensity

    def set_view(self, view) -> CameraPose:
        self.active_view = _coerce(ViewPreset, view, ViewPreset.PERSPECTIVE)
        return self.camera

    # Derived descriptors

    @property
    def sun(self) -> SunLight:
        """Sun descriptor including the visualization-mode boost."""
        if self.mode == Mode.VISUALIZATION:
            base = self._base_sun
            return SunLight(
                position=base.position,
                azimuth=base.azimuth,
                elevation=base.elevation,
                color_hex=base.color_hex,
                intensity=base.intensity * VISUALIZATION_SUN_BOOST,
            )
        return self._base_sun

    @property
    def background_hex(self) -> str:
        return WEATHER_BACKGROUNDS[self.weather]

    @property
    def fog(self) -> Optional[Fog]:
        if self.weather == Weather.FOGGY:
            return Fog(color_hex=WEATHER_BACKGROUNDS[Weather.FOGGY], near=10.0, far=50.0)
        return None

    @property
    def shadow_darkness(self) -> float:
        return 1.0 - self.shadow_intensity

    @property
    def tone_mapping(self) -> ToneMapping:
        if self.mode == Mode.VISUALIZATION:
            return ToneMapping(enabled=True, operator="aces_filmic", exposure=VISUALIZATION_EXPOSURE)
        return ToneMapping()

    @property
    def camera(self) -> CameraPose:
        position, look_at = CAMERA_PRESETS[self.active_view]
        return CameraPose(position=position, look_at=look_at)

    def lighting_summary(self) -> dict:
        """Lighting subset recorded in snapshots and exports."""
        sun = self.sun
        return {
            "ambient": self.ambient_intensity,
            "sun": list(sun.position),
            "sun_intensity": sun.intensity,
            "sun_color": sun.color_hex,
            "hour_of_day": self.hour_of_day,
            "weather": self.weather.value,
            "mode": self.mode.value,
        }

    def to_dict(self) -> dict:
        return {
            "hour_of_day": self.hour_of_day,
            "weather": self.weather.value,
            "shadow_intensity": self.shadow_intensity,
            "mode": self.mode.value,
            "active_tool": self.active_tool.value,
            "active_view": self.active_view.value,
        }

"""Creation tools and pointer-ray placement."""

import logging
from dataclasses import dataclass
from typing import Optional

from core.environment.state import EnvironmentState, Mode, Tool
from core.notify import Level, LoggingNotifier, Notifier
from core.scene.materials import DEFAULT_COLOR, normalize_color, normalize_family
from core.scene.registry import DEFAULT_WALL_HEIGHT, SceneObjectRegistry, normalize_height
from core.scene.types import AssetSubtype, ElementKind, MaterialFamily, SceneElement, Transform
from core.viewport.types import Ray
from core.viewport.view import SceneView

logger = logging.getLogger(__name__)

# Lift above the hit surface to avoid z-fighting
SURFACE_OFFSET = 0.01

SHORTCUTS = {
    "1": Tool.WALL,
    "2": Tool.WINDOW,
    "3": Tool.DOOR,
}


@dataclass
class ToolDefaults:
    """Current values of the property controls read by the tools."""

    height: float = DEFAULT_WALL_HEIGHT
    color_hex: str = DEFAULT_COLOR
    material: MaterialFamily = MaterialFamily.DEFAULT
    asset_subtype: Optional[AssetSubtype] = None

    def set_height(self, value) -> float:
        self.height = normalize_height(value)
        return self.height

    def set_color(self, value) -> str:
        self.color_hex = normalize_color(value, fallback=self.color_hex)
        return self.color_hex

    def set_material(self, value) -> MaterialFamily:
        self.material = normalize_family(value)
        return self.material

    def set_asset_subtype(self, value) -> Optional[AssetSubtype]:
        """Select the furniture placed by the furniture tool; unknown clears it."""
        try:
            self.asset_subtype = AssetSubtype(str(value).strip().lower())
        except ValueError:
            self.asset_subtype = None
        return self.asset_subtype


class ToolController:
    """
    State machine over the creation tools.

    The active tool lives on the shared EnvironmentState. Placing an element
    never changes it.
    """

    def __init__(
        self,
        environment: EnvironmentState,
        registry: SceneObjectRegistry,
        view: SceneView,
        defaults: Optional[ToolDefaults] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.environment = environment
        self.registry = registry
        self.view = view
        self.defaults = defaults or ToolDefaults()
        self.notifier = notifier or LoggingNotifier()

    @property
    def active_tool(self) -> Tool:
        return self.environment.active_tool

    def select_tool(self, tool) -> Tool:
        """
        Make a tool active.

        Unknown tool names are ignored and the current tool is kept.

        Returns:
            The active tool after the call
        """
        try:
            selected = tool if isinstance(tool, Tool) else Tool(str(tool).strip().lower())
        except ValueError:
            logger.warning(f"Ignoring unknown tool {tool!r}")
            return self.active_tool

        self.environment.active_tool = selected
        self.notifier.notify(f"Tool {selected.value} selected", Level.INFO)
        return selected

    def handle_shortcut(self, key: str) -> bool:
        """Select a tool from a numeric shortcut. Returns True if handled."""
        tool = SHORTCUTS.get(key)
        if tool is None:
            return False
        self.select_tool(tool)
        return True

    def place(self, ray: Ray) -> Optional[SceneElement]:
        """
        Handle a placement click.

        Args:
            ray: World-space ray under the pointer

        Returns:
            The created element, or None if nothing was placed
        """
        if self.environment.mode != Mode.MODELING:
            return None

        hit = self.view.hit_test(ray)
        tool = self.active_tool

        if hit is not None:
            x, y, z = hit.point
            return self._create(tool, (x, y + SURFACE_OFFSET, z))

        if tool == Tool.FURNITURE:
            point = ray.intersect_ground(0.0)
            if point is not None:
                return self._create(tool, point)

        logger.debug(f"Placement ray missed with tool {tool.value}")
        return None

    def _create(self, tool: Tool, position) -> Optional[SceneElement]:
        transform = Transform(position=position)
        defaults = self.defaults

        if tool == Tool.WALL:
            element = self.registry.create(
                ElementKind.WALL,
                transform,
                height=defaults.height,
                color=defaults.color_hex,
                material=defaults.material,
            )
            message = "Wall added"
        elif tool == Tool.WINDOW:
            element = self.registry.create(ElementKind.WINDOW, transform)
            message = "Window added"
        elif tool == Tool.DOOR:
            element = self.registry.create(ElementKind.DOOR, transform)
            message = "Door added"
        else:
            if defaults.asset_subtype is None:
                self.notifier.notify("Select a furniture type", Level.INFO)
                return None
            element = self.registry.create(
                ElementKind.ASSET, transform, asset_subtype=defaults.asset_subtype
            )
            message = f"{defaults.asset_subtype.value.capitalize()} added"

        self.view.add(element)
        self.notifier.notify(message, Level.SUCCESS)
        return element

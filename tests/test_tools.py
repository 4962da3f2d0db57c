"""Tests for the creation tools and placement."""

import pytest

from core.environment import EnvironmentState, Mode, Tool
from core.notify import Level, RecordingNotifier
from core.scene import AssetSubtype, ElementKind, MaterialFamily, SceneObjectRegistry
from core.tools import SURFACE_OFFSET, ToolController, ToolDefaults
from core.viewport import Ray, SceneView

DOWN = (0, -1, 0)


@pytest.fixture
def env():
    return EnvironmentState()


@pytest.fixture
def registry():
    return SceneObjectRegistry()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def controller(env, registry, notifier):
    """Create a tool controller over an empty scene."""
    view = SceneView(env, width=64, height=48)
    return ToolController(env, registry, view, notifier=notifier)


class TestToolSelection:
    """Test tool state transitions."""

    def test_default_tool_is_wall(self, controller):
        assert controller.active_tool == Tool.WALL

    def test_select_tool(self, controller, env, notifier):
        assert controller.select_tool("door") == Tool.DOOR
        assert env.active_tool == Tool.DOOR
        assert notifier.last() == (Level.INFO, "Tool door selected")

    def test_unknown_tool_is_ignored(self, controller, notifier):
        controller.select_tool("window")
        assert controller.select_tool("chainsaw") == Tool.WINDOW
        assert len(notifier.messages) == 1

    @pytest.mark.parametrize("key,tool", [("1", Tool.WALL), ("2", Tool.WINDOW), ("3", Tool.DOOR)])
    def test_shortcuts(self, controller, key, tool):
        controller.select_tool("furniture")
        assert controller.handle_shortcut(key) is True
        assert controller.active_tool == tool

    def test_unmapped_shortcut(self, controller):
        assert controller.handle_shortcut("9") is False
        assert controller.active_tool == Tool.WALL


class TestPlacement:
    """Test pointer-ray placement."""

    def test_miss_does_not_mutate(self, controller, registry):
        """A ray that misses everything with the wall tool places nothing."""
        before = registry.count()
        assert controller.place(Ray(origin=(0, 10, 0), direction=(0, 1, 0))) is None
        assert registry.count() == before

    def test_wall_on_ground(self, controller, registry, notifier):
        wall = controller.place(Ray(origin=(7.3, 10, -4.6), direction=DOWN))
        assert wall.kind == ElementKind.WALL
        assert wall.transform.position == pytest.approx((7.3, SURFACE_OFFSET, -4.6))
        assert registry.count() == 1
        assert wall.id in controller.view.handles
        assert notifier.last() == (Level.SUCCESS, "Wall added")

    def test_wall_uses_property_defaults(self, env, registry, notifier):
        defaults = ToolDefaults()
        defaults.set_height(4.5)
        defaults.set_color("#112233")
        defaults.set_material("brick")
        controller = ToolController(
            env, registry, SceneView(env), defaults=defaults, notifier=notifier
        )
        wall = controller.place(Ray(origin=(3.3, 10, 1.1), direction=DOWN))
        assert wall.height_meters == 4.5
        assert wall.color_hex == "#112233"
        assert wall.material.family == MaterialFamily.BRICK

    def test_window_on_wall(self, controller, registry):
        """Placing on top of an existing element stacks onto its surface."""
        wall = controller.place(Ray(origin=(0.9, 10, 0.12), direction=DOWN))
        controller.select_tool("window")
        window = controller.place(Ray(origin=(0.9, 10, 0.12), direction=DOWN))
        assert window.kind == ElementKind.WINDOW
        top = wall.transform.position[1] + wall.dimensions[1] / 2
        assert window.transform.position[1] == pytest.approx(top + SURFACE_OFFSET)
        assert registry.count() == 2

    def test_door_tool(self, controller):
        controller.handle_shortcut("3")
        door = controller.place(Ray(origin=(2.2, 5, 2.9), direction=DOWN))
        assert door.kind == ElementKind.DOOR
        assert door.material.family == MaterialFamily.WOOD

    def test_placement_keeps_active_tool(self, controller):
        controller.select_tool("window")
        controller.place(Ray(origin=(2.2, 5, 2.9), direction=DOWN))
        assert controller.active_tool == Tool.WINDOW

    def test_visualization_mode_places_nothing(self, controller, env, registry):
        env.set_mode(Mode.VISUALIZATION)
        assert controller.place(Ray(origin=(2.2, 5, 2.9), direction=DOWN)) is None
        assert registry.count() == 0


class TestFurniture:
    """Test the furniture tool."""

    def test_requires_subtype(self, controller, registry, notifier):
        controller.select_tool("furniture")
        assert controller.place(Ray(origin=(2.2, 5, 2.9), direction=DOWN)) is None
        assert registry.count() == 0
        assert notifier.last() == (Level.INFO, "Select a furniture type")

    def test_places_selected_subtype(self, controller):
        controller.defaults.set_asset_subtype("car")
        controller.select_tool("furniture")
        car = controller.place(Ray(origin=(2.2, 5, 2.9), direction=DOWN))
        assert car.kind == ElementKind.ASSET
        assert car.asset_subtype == AssetSubtype.CAR

    def test_falls_back_to_ground_plane(self, controller, registry):
        """Outside the ground mesh, furniture still lands on y = 0."""
        controller.defaults.set_asset_subtype("tree")
        controller.select_tool("furniture")
        tree = controller.place(Ray(origin=(100, 10, 0), direction=DOWN))
        assert tree.transform.position == pytest.approx((100.0, 0.0, 0.0))
        assert registry.count() == 1

    def test_wall_does_not_fall_back(self, controller, registry):
        assert controller.place(Ray(origin=(100, 10, 0), direction=DOWN)) is None
        assert registry.count() == 0

    def test_unknown_subtype_clears_selection(self, controller):
        controller.defaults.set_asset_subtype("plant")
        assert controller.defaults.set_asset_subtype("unicorn") is None


class TestToolDefaults:
    """Test property control normalization."""

    def test_invalid_values(self):
        defaults = ToolDefaults()
        assert defaults.set_height(-1) == 3.0
        assert defaults.set_color("not-a-color") == "#cccccc"
        assert defaults.set_material("marble") == MaterialFamily.DEFAULT

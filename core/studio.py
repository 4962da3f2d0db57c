"""Coordinating component: owns the application state and wires the core together."""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from core.config import StudioConfig
from core.environment.state import EnvironmentState
from core.export.engine import DirectorySink, DownloadSink, ExportEngine, ExportFormat, ExportResult
from core.export.native import to_native_document
from core.export.snapshot import ExportSnapshot
from core.notify import Level, LoggingNotifier, Notifier
from core.persistence.client import PersistenceClient
from core.scene.demo import seed_demo_building
from core.scene.registry import SceneObjectRegistry
from core.scene.types import AssetSubtype, ElementKind, SceneElement, Transform
from core.stats.collector import SceneStats, StatsCollector
from core.tools.controller import ToolController, ToolDefaults
from core.viewport.types import Ray
from core.viewport.view import SceneView

logger = logging.getLogger(__name__)

TREE_SWAY_PER_FRAME = 0.001  # radians around y
ASSET_DROP_DISTANCE = 5.0  # meters in front of the camera


@dataclass
class StudioState:
    """Explicit application state shared by the core components."""

    registry: SceneObjectRegistry = field(default_factory=SceneObjectRegistry)
    environment: EnvironmentState = field(default_factory=EnvironmentState)
    defaults: ToolDefaults = field(default_factory=ToolDefaults)
    panels_visible: bool = True
    export_dialog_open: bool = False
    current_project_id: Optional[str] = None


class Studio:
    """
    The editor session.

    Owns a StudioState and hands it to the tool controller, the export
    engine and the stats collector. All mutation happens through the
    methods here or through those components.
    """

    def __init__(
        self,
        config: Optional[StudioConfig] = None,
        state: Optional[StudioState] = None,
        notifier: Optional[Notifier] = None,
        persistence: Optional[PersistenceClient] = None,
        sink: Optional[DownloadSink] = None,
    ):
        self.config = config or StudioConfig()
        self.state = state or StudioState()
        self.notifier = notifier or LoggingNotifier()
        self.persistence = persistence or PersistenceClient(
            self.config.api_base_url, timeout=self.config.api_timeout
        )
        self.sink = sink or DirectorySink(self.config.export_dir)

        self.view = SceneView(
            self.state.environment,
            width=self.config.viewport_width,
            height=self.config.viewport_height,
            fov_degrees=self.config.fov_degrees,
        )
        self.tools = ToolController(
            self.state.environment,
            self.state.registry,
            self.view,
            defaults=self.state.defaults,
            notifier=self.notifier,
        )
        self.exporter = ExportEngine(self.view)
        self.stats = StatsCollector(self.state.registry, self.view)

    @property
    def registry(self) -> SceneObjectRegistry:
        return self.state.registry

    @property
    def environment(self) -> EnvironmentState:
        return self.state.environment

    # Lifecycle

    async def start(self) -> None:
        """Check the API, seed the default scene and report readiness."""
        await self.persistence.check_health()
        logger.info(self.persistence.status_label)
        self.seed_default_scene()
        self.notifier.notify("Application loaded", Level.SUCCESS)

    def seed_default_scene(self) -> None:
        seed_demo_building(self.registry)
        self._after_scene_change()

    async def run_stats(self) -> None:
        """Keep the stats panel fresh until cancelled."""
        await self.stats.run(self.config.stats_interval)

    def _after_scene_change(self) -> SceneStats:
        self.view.sync(self.registry.all())
        return self.stats.refresh()

    # Input

    def handle_key(self, key: str) -> bool:
        """
        Dispatch a keyboard shortcut.

        Returns:
            True if the key was handled
        """
        key = key.lower()
        if self.tools.handle_shortcut(key):
            return True
        if key in (" ", "space"):
            self.set_mode(self.environment.toggle_mode())
            return True
        if key == "h":
            self.state.panels_visible = not self.state.panels_visible
            return True
        if key == "escape":
            self.state.export_dialog_open = False
            return True
        return False

    def set_mode(self, mode) -> None:
        mode = self.environment.set_mode(mode)
        self.notifier.notify(f"{mode.value.capitalize()} mode enabled", Level.SUCCESS)

    def click(self, ray: Ray) -> Optional[SceneElement]:
        """Place with the active tool along a picking ray."""
        element = self.tools.place(ray)
        if element is not None:
            self._after_scene_change()
        return element

    def click_at(self, ndc_x: float, ndc_y: float) -> Optional[SceneElement]:
        """Place under a pointer given in normalized device coordinates."""
        return self.click(self.view.ray_from_pointer(ndc_x, ndc_y))

    def add_asset(self, subtype, position=None) -> Optional[SceneElement]:
        """
        Drop an asset from the palette.

        Without a position the asset lands on the ground in front of the
        camera. Unknown subtypes are ignored.
        """
        try:
            subtype = AssetSubtype(str(subtype).strip().lower())
        except ValueError:
            logger.warning(f"Ignoring unknown asset {subtype!r}")
            return None

        if position is None:
            camera = self.environment.camera
            eye = np.asarray(camera.position, dtype=float)
            direction = np.asarray(camera.look_at, dtype=float) - eye
            direction /= np.linalg.norm(direction)
            x, _, z = eye + direction * ASSET_DROP_DISTANCE
            position = (float(x), 0.0, float(z))

        element = self.registry.create(
            ElementKind.ASSET, Transform(position=position), asset_subtype=subtype
        )
        self._after_scene_change()
        self.notifier.notify(f"{subtype.value.capitalize()} added", Level.SUCCESS)
        return element

    def clear_scene(self) -> int:
        """Remove every element and re-seed the demo building."""
        removed = self.registry.remove_all()
        self.view.clear()
        self.seed_default_scene()
        self.notifier.notify("Scene reset", Level.SUCCESS)
        return removed

    # Per-frame callback

    def tick(self, frames: int = 1) -> None:
        """Advance animations by a number of frames."""
        for element in self.registry.all():
            if element.kind == ElementKind.ASSET and element.asset_subtype == AssetSubtype.TREE:
                rx, ry, rz = element.transform.rotation
                ry = (ry + TREE_SWAY_PER_FRAME * frames) % (2 * math.pi)
                self.registry.update_transform(
                    element.id,
                    Transform(
                        position=element.transform.position,
                        rotation=(rx, ry, rz),
                        scale=element.transform.scale,
                    ),
                )
        self.view.sync(self.registry.all())

    # Export

    def snapshot(self) -> ExportSnapshot:
        return ExportSnapshot.capture(
            self.registry, self.environment, self.view.triangle_count()
        )

    def open_export_dialog(self) -> SceneStats:
        """Open the export dialog and return the stats shown in its preview."""
        self.state.export_dialog_open = True
        return self.stats.refresh()

    async def export_project(self, format="native") -> Optional[ExportResult]:
        """
        Export the scene and deliver the file.

        Failures are reported through the notifier and leave the scene
        untouched.
        """
        self.notifier.notify(f"Exporting {format}...", Level.INFO)
        try:
            result = self.exporter.export(
                self.snapshot(), format, quality=self.config.render_quality
            )
            self.sink.deliver(result)
        except Exception as e:
            logger.error(f"Export failed: {e}")
            self.notifier.notify("Export failed", Level.ERROR)
            return None

        if result.format == ExportFormat.IMAGE:
            await self._upload_render(result)
        self.notifier.notify(f"Project exported as {result.format.value}", Level.SUCCESS)
        self.state.export_dialog_open = False
        return result

    async def render_image(self, quality: Optional[str] = None) -> Optional[ExportResult]:
        """Render a PNG at the given quality and deliver it."""
        self.notifier.notify("Rendering...", Level.INFO)
        try:
            result = self.exporter.render_image(quality or self.config.render_quality)
            self.sink.deliver(result)
        except Exception as e:
            logger.error(f"Render failed: {e}")
            self.notifier.notify("Render failed", Level.ERROR)
            return None

        self.notifier.notify("Render exported", Level.SUCCESS)
        await self._upload_render(result)
        return result

    async def _upload_render(self, result: ExportResult) -> None:
        if not self.persistence.online:
            return
        response = await self.persistence.upload_render(
            result.data_url(),
            project_id=self.state.current_project_id or "demo",
            timestamp=result.timestamp_ms,
        )
        if response:
            logger.info(f"Render stored remotely as {response.get('filename')}")

    async def save_project(self) -> Optional[str]:
        """Send the native document to the persistence endpoint."""
        if not self.persistence.online:
            self.notifier.notify("Offline: project not saved remotely", Level.WARNING)
            return None

        project_id = await self.persistence.save_project(to_native_document(self.snapshot()))
        if project_id is None:
            self.notifier.notify("Project could not be saved", Level.ERROR)
            return None

        self.state.current_project_id = project_id
        self.notifier.notify(f"Project saved ({project_id})", Level.SUCCESS)
        return project_id

"""Read-only scene statistics for the stats panel."""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from core.scene.registry import SceneObjectRegistry
from core.viewport.view import SceneView

logger = logging.getLogger(__name__)

REFRESH_INTERVAL = 1.0  # seconds


@dataclass(frozen=True)
class SceneStats:
    """Derived counts shown to the user."""

    object_count: int = 0
    triangle_count: int = 0
    surface_area: float = 0.0  # m², walls only
    fps: int = 0

    def to_dict(self) -> dict:
        return {
            "object_count": self.object_count,
            "triangle_count": self.triangle_count,
            "surface_area": round(self.surface_area, 1),
            "fps": self.fps,
        }


class StatsCollector:
    """Recomputes SceneStats from the registry and the viewport."""

    def __init__(
        self,
        registry: SceneObjectRegistry,
        view: Optional[SceneView] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.registry = registry
        self.view = view
        self.clock = clock
        self.latest = SceneStats()
        self._last_refresh: Optional[float] = None

    def refresh(self) -> SceneStats:
        """Recompute all metrics and remember the result."""
        now = self.clock()
        fps = 0
        if self._last_refresh is not None and now > self._last_refresh:
            fps = round(1.0 / (now - self._last_refresh))
        self._last_refresh = now

        self.latest = SceneStats(
            object_count=self.registry.count(),
            triangle_count=self.view.triangle_count() if self.view else 0,
            surface_area=self.registry.total_height_weighted_area(),
            fps=fps,
        )
        return self.latest

    async def run(self, interval: float = REFRESH_INTERVAL) -> None:
        """Refresh on a fixed cadence until cancelled."""
        logger.info(f"Stats refresh every {interval}s")
        while True:
            self.refresh()
            await asyncio.sleep(interval)

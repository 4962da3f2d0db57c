"""Headless rendering collaborator backed by trimesh."""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

import numpy as np
import trimesh

from core.environment.state import EnvironmentState
from core.scene.types import SceneElement

from .geometry import element_mesh, ground_plane
from .raster import pointer_ray, rasterize
from .types import Hit, Ray, RenderHandle

logger = logging.getLogger(__name__)


class SceneView:
    """
    Render-side mirror of the registry.

    Holds one render handle per element id. The mapping can always be
    rebuilt from the registry with ``sync``; the view never owns elements.
    The ground plane is hit-testable geometry. The grid and axes are
    overlays that are neither hit-tested nor counted.
    """

    def __init__(
        self,
        environment: EnvironmentState,
        width: int = 800,
        height: int = 600,
        fov_degrees: float = 75.0,
    ):
        self.environment = environment
        self.width = width
        self.height = height
        self.fov_degrees = fov_degrees
        self.handles: Dict[str, RenderHandle] = {}
        self.ground = ground_plane()
        self.grid_visible = True
        self.axes_visible = True

    # Handle management

    def add(self, element: SceneElement) -> RenderHandle:
        """Build (or rebuild) the handle for an element."""
        handle = RenderHandle(
            element_id=element.id,
            mesh=element_mesh(element),
            transform=replace(element.transform),
        )
        self.handles[element.id] = handle
        return handle

    def remove(self, element_id: str) -> bool:
        return self.handles.pop(element_id, None) is not None

    def clear(self) -> None:
        self.handles.clear()

    def sync(self, elements: Iterable[SceneElement]) -> None:
        """Make the handles match ``elements`` exactly."""
        elements = list(elements)
        live_ids = {e.id for e in elements}
        for stale in set(self.handles) - live_ids:
            del self.handles[stale]

        for element in elements:
            handle = self.handles.get(element.id)
            if handle is None or handle.transform != element.transform:
                self.add(element)

    def meshes(self) -> List[trimesh.Trimesh]:
        """All live meshes, ground first."""
        return [self.ground] + [h.mesh for h in self.handles.values()]

    # Queries

    def hit_test(self, ray: Ray) -> Optional[Hit]:
        """
        Closest intersection of a ray with scene geometry.

        Args:
            ray: World-space ray

        Returns:
            Hit, or None if the ray misses everything
        """
        origin = np.array([ray.origin])
        direction = np.array([ray.direction])
        best: Optional[Hit] = None

        candidates = [(None, self.ground)] + [
            (element_id, h.mesh) for element_id, h in self.handles.items()
        ]
        for element_id, mesh in candidates:
            locations, _, index_tri = mesh.ray.intersects_location(
                ray_origins=origin, ray_directions=direction
            )
            for location, tri in zip(locations, index_tri):
                offset = location - origin[0]
                distance = float(np.dot(offset, direction[0]))
                if distance < 0:
                    continue
                if best is None or distance < best.distance:
                    best = Hit(
                        point=tuple(float(v) for v in location),
                        distance=distance,
                        normal=tuple(float(v) for v in mesh.face_normals[tri]),
                        element_id=element_id,
                    )
        return best

    def ray_from_pointer(self, ndc_x: float, ndc_y: float) -> Ray:
        """Translate a pointer position in [-1, 1]² into a world-space ray."""
        origin, direction = pointer_ray(
            self.environment.camera,
            ndc_x,
            ndc_y,
            aspect=self.width / self.height,
            fov_degrees=self.fov_degrees,
        )
        return Ray(origin=tuple(origin), direction=tuple(direction))

    def triangle_count(self) -> int:
        """Face count over all live meshes."""
        return sum(int(len(mesh.faces)) for mesh in self.meshes())

    # Overlays

    def toggle_grid(self) -> bool:
        self.grid_visible = not self.grid_visible
        return self.grid_visible

    def toggle_axes(self) -> bool:
        self.axes_visible = not self.axes_visible
        return self.axes_visible

    # Rasterization

    def rasterize(self, multiplier: int = 1) -> bytes:
        """
        Render the current scene to PNG.

        Args:
            multiplier: Resolution multiplier applied to the viewport size

        Returns:
            PNG bytes
        """
        env = self.environment
        size = (self.width * multiplier, self.height * multiplier)
        logger.info(f"Rendering snapshot at {size[0]}x{size[1]}")
        return rasterize(
            self.meshes(),
            camera=env.camera,
            sun=env.sun,
            background_hex=env.background_hex,
            size=size,
            ambient=env.ambient_intensity,
            fog=env.fog,
            fov_degrees=self.fov_degrees,
        )

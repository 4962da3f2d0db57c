"""Headless viewport: the rendering collaborator of the editor.

Builds trimesh geometry for scene elements, answers ray hit-tests, counts
triangles and rasterizes PNG snapshots with Pillow.
"""

from .geometry import element_mesh, ground_plane, transform_matrix
from .raster import look_at_matrix, rasterize
from .types import Hit, Ray, RenderHandle
from .view import SceneView

__all__ = [
    "SceneView",
    "Ray",
    "Hit",
    "RenderHandle",
    "element_mesh",
    "ground_plane",
    "transform_matrix",
    "look_at_matrix",
    "rasterize",
]

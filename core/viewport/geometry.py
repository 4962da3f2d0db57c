"""Build trimesh geometry for scene elements.

Meshes are Y-up to match the editor's world frame: y is height and the
ground is the plane y = 0.
"""

import math
from typing import List, Tuple

import numpy as np
import trimesh

from core.scene.types import AssetSubtype, ElementKind, SceneElement, Transform

# trimesh primitives are built along +Z; this turns +Z into +Y
Y_UP = trimesh.transformations.rotation_matrix(-math.pi / 2, [1, 0, 0])

GROUND_SIZE = 50.0
GROUND_COLOR = "#334155"

TRUNK_COLOR = "#8b4513"
LEAVES_COLOR = "#228b22"
PERSON_COLOR = "#3498db"
CAR_COLOR = "#e74c3c"
PLANT_COLOR = "#27ae60"
FALLBACK_COLOR = "#cccccc"


def hex_to_rgba(color_hex: str, opacity: float = 1.0) -> Tuple[int, int, int, int]:
    """Convert ``#rrggbb`` to an RGBA byte tuple."""
    value = color_hex.lstrip("#")
    if len(value) != 6:
        value = FALLBACK_COLOR.lstrip("#")
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return (r, g, b, int(round(max(0.0, min(opacity, 1.0)) * 255)))


def _painted(mesh: trimesh.Trimesh, color_hex: str, opacity: float = 1.0) -> trimesh.Trimesh:
    mesh.visual.face_colors = hex_to_rgba(color_hex, opacity)
    return mesh


def transform_matrix(transform: Transform) -> np.ndarray:
    """4x4 matrix for translate * rotate(XYZ) * scale."""
    rx, ry, rz = transform.rotation
    matrix = trimesh.transformations.euler_matrix(rx, ry, rz, axes="rxyz")
    matrix = matrix @ np.diag([*transform.scale, 1.0])
    matrix[:3, 3] = transform.position
    return matrix


def _y_up_cylinder(radius: float, height: float, sections: int = 16) -> trimesh.Trimesh:
    mesh = trimesh.creation.cylinder(radius=radius, height=height, sections=sections)
    mesh.apply_transform(Y_UP)
    return mesh


def _tree() -> trimesh.Trimesh:
    trunk = _painted(_y_up_cylinder(0.25, 3.0, sections=8), TRUNK_COLOR)
    # Cone base sits at z=0; centre it on y=4 like the leaves of the palette tree
    leaves = trimesh.creation.cone(radius=2.0, height=4.0, sections=8)
    leaves.apply_transform(Y_UP)
    leaves.apply_translation([0.0, 2.0, 0.0])
    leaves = _painted(leaves, LEAVES_COLOR)
    return trimesh.util.concatenate([trunk, leaves])


def _asset_mesh(subtype: AssetSubtype) -> trimesh.Trimesh:
    if subtype == AssetSubtype.TREE:
        return _tree()
    if subtype == AssetSubtype.PERSON:
        return _painted(_y_up_cylinder(0.3, 1.8), PERSON_COLOR)
    if subtype == AssetSubtype.CAR:
        return _painted(trimesh.creation.box(extents=(2.0, 0.8, 4.0)), CAR_COLOR)
    return _painted(trimesh.creation.uv_sphere(radius=0.5, count=[16, 16]), PLANT_COLOR)


def element_mesh(element: SceneElement) -> trimesh.Trimesh:
    """
    Build the world-space mesh for an element.

    Walls, windows and doors are boxes of ``element.dimensions``; assets use
    fixed placeholder shapes.
    """
    if element.kind == ElementKind.ASSET:
        mesh = _asset_mesh(element.asset_subtype)
    else:
        mesh = trimesh.creation.box(extents=element.dimensions)
        material = element.material
        if material is not None:
            _painted(mesh, material.color_hex, material.opacity)
        else:
            _painted(mesh, FALLBACK_COLOR)

    mesh.apply_transform(transform_matrix(element.transform))
    mesh.metadata["element_id"] = element.id
    mesh.metadata["element_type"] = element.kind.value
    return mesh


def ground_plane(size: float = GROUND_SIZE) -> trimesh.Trimesh:
    """Two-triangle ground quad at y = 0 facing up."""
    half = size / 2
    vertices = np.array(
        [
            [-half, 0.0, -half],
            [half, 0.0, -half],
            [half, 0.0, half],
            [-half, 0.0, half],
        ]
    )
    faces = np.array([[0, 2, 1], [0, 3, 2]])
    mesh = trimesh.Trimesh(vertices=vertices, faces=faces, process=False)
    mesh.metadata["element_type"] = "ground"
    return _painted(mesh, GROUND_COLOR)


def face_colors(meshes: List[trimesh.Trimesh]) -> np.ndarray:
    """Stack per-face RGBA colors of several meshes."""
    if not meshes:
        return np.zeros((0, 4), dtype=np.uint8)
    return np.vstack([np.asarray(m.visual.face_colors, dtype=np.uint8) for m in meshes])

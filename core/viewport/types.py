"""Data types for the headless viewport."""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import trimesh

from core.scene.types import Transform

Point3D = Tuple[float, float, float]


@dataclass(frozen=True)
class Ray:
    """World-space picking ray. ``direction`` is normalized on construction."""

    origin: Point3D
    direction: Point3D

    def __post_init__(self):
        direction = np.asarray(self.direction, dtype=float)
        length = float(np.linalg.norm(direction))
        if length < 1e-12:
            raise ValueError("Ray direction must be non-zero")
        object.__setattr__(self, "origin", tuple(float(v) for v in self.origin))
        object.__setattr__(self, "direction", tuple(float(v) for v in direction / length))

    def at(self, distance: float) -> Point3D:
        o, d = self.origin, self.direction
        return (o[0] + d[0] * distance, o[1] + d[1] * distance, o[2] + d[2] * distance)

    def intersect_ground(self, height: float = 0.0) -> Optional[Point3D]:
        """Intersect with the horizontal plane y = height, in front of the origin."""
        dy = self.direction[1]
        if abs(dy) < 1e-12:
            return None
        distance = (height - self.origin[1]) / dy
        if distance < 0:
            return None
        return self.at(distance)


@dataclass(frozen=True)
class Hit:
    """Closest intersection of a ray with scene geometry."""

    point: Point3D
    distance: float
    normal: Point3D
    element_id: Optional[str] = None  # None for the ground plane


@dataclass
class RenderHandle:
    """Non-owning render representation of one scene element."""

    element_id: str
    mesh: trimesh.Trimesh
    transform: Transform

    @property
    def triangle_count(self) -> int:
        return int(len(self.mesh.faces))

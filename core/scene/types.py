"""Data types for the scene object model."""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

Vector3 = Tuple[float, float, float]


class ElementKind(str, Enum):
    """Kinds of user-authored scene elements."""

    WALL = "wall"
    WINDOW = "window"
    DOOR = "door"
    ASSET = "asset"


class AssetSubtype(str, Enum):
    """Placeable props for asset elements."""

    TREE = "tree"
    PERSON = "person"
    CAR = "car"
    PLANT = "plant"


class MaterialFamily(str, Enum):
    """Material families offered by the material dropdown."""

    DEFAULT = "default"
    BRICK = "brick"
    CONCRETE = "concrete"
    WOOD = "wood"
    GLASS = "glass"


def _vec3(value, fallback: Vector3) -> Vector3:
    """Coerce a 3-sequence to a float tuple, falling back on bad input."""
    try:
        x, y, z = value
        return (float(x), float(y), float(z))
    except (TypeError, ValueError):
        return fallback


@dataclass
class Transform:
    """Placement of an element: position, XYZ Euler rotation (radians), scale."""

    position: Vector3 = (0.0, 0.0, 0.0)
    rotation: Vector3 = (0.0, 0.0, 0.0)
    scale: Vector3 = (1.0, 1.0, 1.0)

    def __post_init__(self):
        self.position = _vec3(self.position, (0.0, 0.0, 0.0))
        self.rotation = _vec3(self.rotation, (0.0, 0.0, 0.0))
        self.scale = _vec3(self.scale, (1.0, 1.0, 1.0))

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "position": list(self.position),
            "rotation": list(self.rotation),
            "scale": list(self.scale),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transform":
        """Create Transform from dictionary."""
        return cls(
            position=data.get("position", (0.0, 0.0, 0.0)),
            rotation=data.get("rotation", (0.0, 0.0, 0.0)),
            scale=data.get("scale", (1.0, 1.0, 1.0)),
        )


@dataclass
class MaterialParams:
    """Surface parameters of a wall, window or door."""

    family: MaterialFamily = MaterialFamily.DEFAULT
    color_hex: str = "#cccccc"
    roughness: float = 1.0  # 0 = glossy, 1 = rough
    metalness: float = 0.0
    opacity: float = 1.0
    transparent: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "family": self.family.value,
            "color_hex": self.color_hex,
            "roughness": self.roughness,
            "metalness": self.metalness,
            "opacity": self.opacity,
            "transparent": self.transparent,
        }


@dataclass
class SceneElement:
    """A user-placed architectural element or prop.

    The element is pure data. Render handles for it live in the viewport,
    keyed by ``id``.
    """

    id: str
    kind: ElementKind
    transform: Transform = field(default_factory=Transform)
    dimensions: Vector3 = (1.0, 1.0, 1.0)  # width, height, depth in meters
    asset_subtype: Optional[AssetSubtype] = None
    material: Optional[MaterialParams] = None
    height_meters: Optional[float] = None
    is_demo: bool = False

    @property
    def color_hex(self) -> Optional[str]:
        return self.material.color_hex if self.material else None

    def copy(self) -> "SceneElement":
        """Deep copy, used for snapshots."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "asset_subtype": self.asset_subtype.value if self.asset_subtype else None,
            "transform": self.transform.to_dict(),
            "dimensions": list(self.dimensions),
            "material": self.material.to_dict() if self.material else None,
            "height_meters": self.height_meters,
            "is_demo": self.is_demo,
        }

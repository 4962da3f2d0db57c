"""Scene object model for Massing Studio.

This module holds the pure data side of the editor: scene elements, their
material presets, and the registry that owns them.

Usage:
    from core.scene import SceneObjectRegistry, ElementKind

    registry = SceneObjectRegistry()
    wall = registry.create(ElementKind.WALL, height=4.0, material="brick")
    registry.total_height_weighted_area()  # 12.0
"""

from .demo import DEMO_ELEMENT_COUNT, seed_demo_building
from .materials import FAMILY_PRESETS, build_material, normalize_family
from .registry import DEFAULT_WALL_HEIGHT, WALL_WIDTH, SceneObjectRegistry
from .types import (
    AssetSubtype,
    ElementKind,
    MaterialFamily,
    MaterialParams,
    SceneElement,
    Transform,
)

__all__ = [
    # Registry
    "SceneObjectRegistry",
    "seed_demo_building",
    "DEMO_ELEMENT_COUNT",
    "DEFAULT_WALL_HEIGHT",
    "WALL_WIDTH",
    # Types
    "SceneElement",
    "Transform",
    "ElementKind",
    "AssetSubtype",
    "MaterialFamily",
    "MaterialParams",
    # Materials
    "FAMILY_PRESETS",
    "build_material",
    "normalize_family",
]

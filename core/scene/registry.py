"""Authoritative store of user-authored scene elements."""

import logging
import math
import threading
import uuid
from typing import Dict, Iterator, List, Optional, Set

from .materials import build_material
from .types import (
    AssetSubtype,
    ElementKind,
    MaterialFamily,
    SceneElement,
    Transform,
    Vector3,
)

logger = logging.getLogger(__name__)

# Canonical wall width used for both geometry and area accounting (meters)
WALL_WIDTH = 3.0
WALL_DEPTH = 0.3
DEFAULT_WALL_HEIGHT = 3.0

WINDOW_DIMENSIONS: Vector3 = (1.5, 1.2, 0.1)
DOOR_DIMENSIONS: Vector3 = (1.2, 2.2, 0.2)

# Bounding boxes of the asset placeholders (width, height, depth)
ASSET_DIMENSIONS: Dict[AssetSubtype, Vector3] = {
    AssetSubtype.TREE: (4.0, 6.0, 4.0),
    AssetSubtype.PERSON: (0.6, 1.8, 0.6),
    AssetSubtype.CAR: (2.0, 0.8, 4.0),
    AssetSubtype.PLANT: (1.0, 1.0, 1.0),
}

# Where an element lands when created without a transform
RESTING_POSITIONS: Dict[ElementKind, Vector3] = {
    ElementKind.WINDOW: (2.0, 1.5, 0.0),
    ElementKind.DOOR: (-2.0, 1.1, 0.0),
    ElementKind.ASSET: (0.0, 0.0, 0.0),
}

# Materials used by the window and door tools
WINDOW_MATERIAL = (MaterialFamily.GLASS, "#87ceeb")
DOOR_MATERIAL = (MaterialFamily.WOOD, "#8b4513")

_KNOWN_PARAMS = {"height", "material", "color", "asset_subtype", "dimensions", "is_demo"}


def normalize_height(value) -> float:
    """Return a positive finite wall height, or the default."""
    try:
        height = float(value)
    except (TypeError, ValueError):
        return DEFAULT_WALL_HEIGHT
    if not math.isfinite(height) or height <= 0:
        return DEFAULT_WALL_HEIGHT
    return height


def _normalize_kind(kind) -> ElementKind:
    if isinstance(kind, ElementKind):
        return kind
    try:
        return ElementKind(str(kind).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown element kind: {kind!r}") from None


def _normalize_subtype(subtype) -> AssetSubtype:
    if isinstance(subtype, AssetSubtype):
        return subtype
    try:
        return AssetSubtype(str(subtype).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown asset subtype: {subtype!r}") from None


class SceneObjectRegistry:
    """Owns the lifecycle of every scene element.

    Elements are kept in insertion order. Ids are never reused, not even
    after ``remove_all``.
    """

    def __init__(self):
        self._elements: Dict[str, SceneElement] = {}
        self._issued_ids: Set[str] = set()
        self._lock = threading.Lock()

    def _allocate_id(self, kind: ElementKind) -> str:
        while True:
            element_id = f"{kind.value}_{uuid.uuid4().hex[:8]}"
            if element_id not in self._issued_ids:
                self._issued_ids.add(element_id)
                return element_id

    def create(
        self,
        kind,
        transform: Optional[Transform] = None,
        **params,
    ) -> SceneElement:
        """
        Create and register a new element.

        Args:
            kind: Element kind (``ElementKind`` or its string value)
            transform: Placement; defaults to the kind's resting position
            **params: ``height`` (walls), ``material`` and ``color``
                (walls, windows, doors), ``asset_subtype`` (assets),
                ``dimensions`` override and ``is_demo``

        Returns:
            The registered SceneElement

        Raises:
            ValueError: If kind or asset subtype is not recognised
        """
        kind = _normalize_kind(kind)
        unknown = set(params) - _KNOWN_PARAMS
        if unknown:
            logger.debug(f"Ignoring unknown element params: {sorted(unknown)}")

        element = self._build(kind, transform, params)

        with self._lock:
            element.id = self._allocate_id(kind)
            self._elements[element.id] = element

        logger.debug(f"Created {kind.value} element {element.id}")
        return element

    def _build(self, kind: ElementKind, transform: Optional[Transform], params: dict) -> SceneElement:
        """Apply kind-specific defaults."""
        element = SceneElement(id="", kind=kind, is_demo=bool(params.get("is_demo", False)))

        if kind == ElementKind.WALL:
            height = normalize_height(params.get("height", DEFAULT_WALL_HEIGHT))
            element.height_meters = height
            element.dimensions = (WALL_WIDTH, height, WALL_DEPTH)
            element.material = build_material(params.get("material"), params.get("color"))
            default_position = (0.0, height / 2, 0.0)
        elif kind == ElementKind.WINDOW:
            element.dimensions = WINDOW_DIMENSIONS
            family, color = WINDOW_MATERIAL
            element.material = build_material(
                params.get("material", family), params.get("color", color)
            )
            default_position = RESTING_POSITIONS[kind]
        elif kind == ElementKind.DOOR:
            element.dimensions = DOOR_DIMENSIONS
            family, color = DOOR_MATERIAL
            element.material = build_material(
                params.get("material", family), params.get("color", color)
            )
            default_position = RESTING_POSITIONS[kind]
        else:
            subtype = _normalize_subtype(params.get("asset_subtype"))
            element.asset_subtype = subtype
            element.dimensions = ASSET_DIMENSIONS[subtype]
            default_position = RESTING_POSITIONS[kind]

        override = params.get("dimensions")
        if override is not None:
            element.dimensions = tuple(float(v) for v in override)

        element.transform = transform if transform is not None else Transform(position=default_position)
        return element

    def get(self, element_id: str) -> Optional[SceneElement]:
        """Get an element by ID."""
        with self._lock:
            return self._elements.get(element_id)

    def update_transform(self, element_id: str, transform: Transform) -> bool:
        """
        Replace an element's transform.

        Returns:
            True if updated, False if the element is unknown
        """
        with self._lock:
            element = self._elements.get(element_id)
            if element is None:
                return False
            element.transform = transform
            return True

    def remove_all(self) -> int:
        """
        Remove every element.

        Re-seeding the demo building is up to the caller.

        Returns:
            Number of elements removed
        """
        with self._lock:
            removed = len(self._elements)
            self._elements.clear()
        logger.info(f"Removed {removed} scene elements")
        return removed

    def all(self) -> List[SceneElement]:
        """All elements in insertion order, as a fresh list."""
        with self._lock:
            return list(self._elements.values())

    def count(self) -> int:
        """Number of registered elements."""
        with self._lock:
            return len(self._elements)

    def total_height_weighted_area(self) -> float:
        """Approximate wall surface: canonical width times height, summed over walls.

        The demo massing block is a building volume, not a wall, so demo
        elements are left out.
        """
        return sum(
            WALL_WIDTH * element.height_meters
            for element in self.all()
            if element.kind == ElementKind.WALL
            and element.height_meters
            and not element.is_demo
        )

    def __iter__(self) -> Iterator[SceneElement]:
        return iter(self.all())

    def __len__(self) -> int:
        return self.count()

"""Immutable point-in-time read of the scene used for export."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping, Tuple

from core.environment.state import EnvironmentState
from core.scene.registry import SceneObjectRegistry
from core.scene.types import SceneElement


@dataclass(frozen=True)
class ExportSnapshot:
    """Deep-copied elements plus the lighting subset of the environment."""

    elements: Tuple[SceneElement, ...]
    lighting: Mapping[str, object]
    environment: Mapping[str, object]
    triangle_count: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def capture(
        cls,
        registry: SceneObjectRegistry,
        environment: EnvironmentState,
        triangle_count: int = 0,
    ) -> "ExportSnapshot":
        """Take a consistent snapshot of registry and environment."""
        return cls(
            elements=tuple(element.copy() for element in registry.all()),
            lighting=MappingProxyType(environment.lighting_summary()),
            environment=MappingProxyType(environment.to_dict()),
            triangle_count=int(triangle_count),
        )

    @property
    def object_count(self) -> int:
        return len(self.elements)

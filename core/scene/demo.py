"""Fixed demonstration building seeded into every fresh scene."""

import math
from typing import List

from .registry import DOOR_DIMENSIONS, SceneObjectRegistry
from .types import ElementKind, MaterialFamily, SceneElement, Transform

BLOCK_DIMENSIONS = (8.0, 6.0, 8.0)
DEMO_WINDOW_DIMENSIONS = (1.0, 1.5, 0.1)
FACADE_OFFSET = 4.1  # half the block width plus clearance

# Massing block, four facade windows and the entrance door
DEMO_ELEMENT_COUNT = 6


def seed_demo_building(registry: SceneObjectRegistry) -> List[SceneElement]:
    """
    Add the demonstration house to the registry.

    The house has no roof: no element kind models a cone, so it is six
    elements rather than seven. The massing block is stored as a tall
    wall but does not count toward wall area.

    Args:
        registry: Registry to seed

    Returns:
        The created elements
    """
    created = [
        registry.create(
            ElementKind.WALL,
            Transform(position=(0.0, BLOCK_DIMENSIONS[1] / 2, 0.0)),
            height=BLOCK_DIMENSIONS[1],
            material=MaterialFamily.DEFAULT,
            color="#f0f0f0",
            dimensions=BLOCK_DIMENSIONS,
            is_demo=True,
        )
    ]

    for i in range(4):
        angle = i * math.pi / 2
        created.append(
            registry.create(
                ElementKind.WINDOW,
                Transform(
                    position=(
                        math.cos(angle) * FACADE_OFFSET,
                        3.0,
                        math.sin(angle) * FACADE_OFFSET,
                    )
                ),
                dimensions=DEMO_WINDOW_DIMENSIONS,
                is_demo=True,
            )
        )

    created.append(
        registry.create(
            ElementKind.DOOR,
            Transform(position=(0.0, 1.0, FACADE_OFFSET)),
            dimensions=DOOR_DIMENSIONS,
            is_demo=True,
        )
    )
    return created

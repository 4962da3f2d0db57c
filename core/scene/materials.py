"""Material family presets for walls, windows and doors."""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional

from .types import MaterialFamily, MaterialParams

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#cccccc"
HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


@dataclass(frozen=True)
class FamilyPreset:
    """Surface response shared by every element of a material family."""

    roughness: float
    metalness: float = 0.0
    opacity: float = 1.0

    @property
    def transparent(self) -> bool:
        return self.opacity < 1.0


# Built-in family presets
FAMILY_PRESETS: Dict[MaterialFamily, FamilyPreset] = {
    MaterialFamily.DEFAULT: FamilyPreset(roughness=1.0),
    MaterialFamily.BRICK: FamilyPreset(roughness=0.8),
    MaterialFamily.CONCRETE: FamilyPreset(roughness=0.9, metalness=0.1),
    MaterialFamily.WOOD: FamilyPreset(roughness=0.7),
    MaterialFamily.GLASS: FamilyPreset(roughness=0.1, opacity=0.7),
}


def normalize_family(value) -> MaterialFamily:
    """Map arbitrary input to a material family, falling back to default."""
    if isinstance(value, MaterialFamily):
        return value
    try:
        return MaterialFamily(str(value).strip().lower())
    except ValueError:
        logger.debug(f"Unknown material family {value!r}, using default")
        return MaterialFamily.DEFAULT


def normalize_color(value: Optional[str], fallback: str = DEFAULT_COLOR) -> str:
    """Return a lowercase ``#rrggbb`` string, or the fallback."""
    if isinstance(value, str) and HEX_COLOR.match(value.strip()):
        return value.strip().lower()
    return fallback


def build_material(family, color_hex: Optional[str] = None) -> MaterialParams:
    """Build material parameters for a family and a user-chosen color."""
    family = normalize_family(family)
    preset = FAMILY_PRESETS[family]
    return MaterialParams(
        family=family,
        color_hex=normalize_color(color_hex),
        roughness=preset.roughness,
        metalness=preset.metalness,
        opacity=preset.opacity,
        transparent=preset.transparent,
    )

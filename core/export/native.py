"""Native JSON project document: export and re-import."""

import json
import logging
from typing import List, Union

from core.scene.registry import SceneObjectRegistry
from core.scene.types import ElementKind, SceneElement, Transform

from .snapshot import ExportSnapshot

logger = logging.getLogger(__name__)

NATIVE_VERSION = "1.0"
APPLICATION = "Massing Studio"


def _serialize_element(element: SceneElement) -> dict:
    material = element.material
    return {
        "id": element.id,
        "type": element.kind.value,
        "assetType": element.asset_subtype.value if element.asset_subtype else None,
        "position": list(element.transform.position),
        "rotation": list(element.transform.rotation),
        "scale": list(element.transform.scale),
        "material": material.family.value if material else None,
        "color": material.color_hex if material else None,
        "height": element.height_meters,
        "dimensions": list(element.dimensions),
        "materialParams": material.to_dict() if material else None,
        "demo": element.is_demo,
    }


def to_native_document(snapshot: ExportSnapshot) -> dict:
    """
    Build the native project document.

    Args:
        snapshot: Scene snapshot

    Returns:
        Document dict with metadata, scene objects, lights, environment and stats
    """
    return {
        "metadata": {
            "version": NATIVE_VERSION,
            "created": snapshot.created_at.isoformat(),
            "application": APPLICATION,
        },
        "scene": {
            "objects": [_serialize_element(e) for e in snapshot.elements],
            "lights": {
                "ambient": snapshot.lighting.get("ambient"),
                "sun": snapshot.lighting.get("sun"),
            },
        },
        "environment": dict(snapshot.environment),
        "stats": {
            "objectCount": snapshot.object_count,
            "triangleCount": snapshot.triangle_count,
        },
    }


def dumps(snapshot: ExportSnapshot) -> str:
    """Serialize the native document as indented JSON."""
    return json.dumps(to_native_document(snapshot), indent=2)


def import_native(document: Union[dict, str], registry: SceneObjectRegistry) -> List[SceneElement]:
    """
    Re-create the elements of a native document in a registry.

    Objects with an unknown type or asset subtype are skipped. Fresh ids are
    allocated; transforms, dimensions and materials are preserved.

    Args:
        document: Parsed document or its JSON text
        registry: Registry to populate

    Returns:
        The created elements in document order
    """
    if isinstance(document, str):
        document = json.loads(document)

    objects = document.get("scene", {}).get("objects", [])
    created = []
    for obj in objects:
        params = {
            "height": obj.get("height"),
            "material": obj.get("material"),
            "color": obj.get("color"),
            "asset_subtype": obj.get("assetType"),
            "dimensions": obj.get("dimensions"),
            "is_demo": obj.get("demo", False),
        }
        params = {key: value for key, value in params.items() if value is not None}
        try:
            kind = ElementKind(obj.get("type"))
            element = registry.create(kind, Transform.from_dict(obj), **params)
        except ValueError as e:
            logger.warning(f"Skipping object {obj.get('id')!r}: {e}")
            continue
        created.append(element)

    logger.info(f"Imported {len(created)} of {len(objects)} objects")
    return created

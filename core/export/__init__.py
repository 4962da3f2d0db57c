"""Export pipeline for Massing Studio.

Usage:
    from core.export import ExportEngine, ExportSnapshot

    snapshot = ExportSnapshot.capture(registry, environment, view.triangle_count())
    result = ExportEngine(view).export(snapshot, "native")
    DirectorySink("exports").deliver(result)
"""

from .engine import (
    QUALITY_MULTIPLIERS,
    DirectorySink,
    DownloadSink,
    ExportEngine,
    ExportFormat,
    ExportResult,
    RenderQuality,
    normalize_format,
    normalize_quality,
)
from .native import import_native, to_native_document
from .placeholders import gltf_document, ifc_text
from .snapshot import ExportSnapshot

__all__ = [
    # Main API
    "ExportEngine",
    "ExportSnapshot",
    "ExportResult",
    "ExportFormat",
    "RenderQuality",
    "QUALITY_MULTIPLIERS",
    "normalize_format",
    "normalize_quality",
    # Delivery
    "DownloadSink",
    "DirectorySink",
    # Documents
    "to_native_document",
    "import_native",
    "gltf_document",
    "ifc_text",
]

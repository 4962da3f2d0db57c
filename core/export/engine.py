"""Export engine: snapshot to file payloads."""

import base64
import logging
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Protocol

from core.viewport.view import SceneView

from . import native
from .placeholders import gltf_text, ifc_text
from .snapshot import ExportSnapshot

logger = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    """Supported export formats."""

    NATIVE = "native"
    INTERCHANGE_MESH = "interchange-mesh"
    BUILDING_EXCHANGE = "building-exchange"
    IMAGE = "image"


class RenderQuality(str, Enum):
    """Image export quality presets."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


FORMAT_ALIASES = {
    "json": ExportFormat.NATIVE,
    "gltf": ExportFormat.INTERCHANGE_MESH,
    "ifc": ExportFormat.BUILDING_EXCHANGE,
    "png": ExportFormat.IMAGE,
}

QUALITY_MULTIPLIERS = {
    RenderQuality.LOW: 1,
    RenderQuality.MEDIUM: 2,
    RenderQuality.HIGH: 4,
}

# extension, mime type
FORMAT_FILES = {
    ExportFormat.NATIVE: ("json", "application/json"),
    ExportFormat.INTERCHANGE_MESH: ("gltf", "model/gltf+json"),
    ExportFormat.BUILDING_EXCHANGE: ("ifc", "application/ifc"),
    ExportFormat.IMAGE: ("png", "image/png"),
}


def normalize_format(value) -> ExportFormat:
    """Resolve a format name or alias; unknown values fall back to native."""
    if isinstance(value, ExportFormat):
        return value
    key = str(value).strip().lower()
    if key in FORMAT_ALIASES:
        return FORMAT_ALIASES[key]
    try:
        return ExportFormat(key)
    except ValueError:
        logger.warning(f"Unknown export format {value!r}, using native")
        return ExportFormat.NATIVE


def normalize_quality(value) -> RenderQuality:
    """Resolve a quality name; unknown values fall back to medium."""
    if isinstance(value, RenderQuality):
        return value
    try:
        return RenderQuality(str(value).strip().lower())
    except ValueError:
        return RenderQuality.MEDIUM


@dataclass(frozen=True)
class ExportResult:
    """A produced file, ready for download or upload."""

    format: ExportFormat
    filename: str
    mime_type: str
    payload: bytes
    timestamp_ms: int

    @property
    def text(self) -> str:
        return self.payload.decode("utf-8")

    def data_url(self) -> str:
        """Base64 data URL of the payload."""
        encoded = base64.b64encode(self.payload).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class DownloadSink(Protocol):
    """Receives finished exports (the client-side download)."""

    def deliver(self, result: ExportResult) -> Path: ...


class DirectorySink:
    """Writes exports into a local directory."""

    def __init__(self, output_dir):
        self.output_dir = Path(output_dir)

    def deliver(self, result: ExportResult) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / result.filename
        path.write_bytes(result.payload)
        logger.info(f"Saved export: {path}")
        return path


class ExportEngine:
    """
    Produces export payloads from snapshots.

    Image exports are delegated to the viewport's rasterizer.
    """

    def __init__(
        self,
        view: Optional[SceneView] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.view = view
        self.clock = clock

    def _timestamp_ms(self) -> int:
        return int(self.clock() * 1000)

    def export(
        self,
        snapshot: ExportSnapshot,
        format="native",
        quality="medium",
    ) -> ExportResult:
        """
        Export a snapshot.

        Args:
            snapshot: Scene snapshot
            format: Export format name or alias
            quality: Render quality, used by image exports only

        Returns:
            ExportResult with a timestamped filename
        """
        fmt = normalize_format(format)
        if fmt == ExportFormat.IMAGE:
            return self.render_image(quality)

        timestamp = self._timestamp_ms()
        if fmt == ExportFormat.NATIVE:
            text = native.dumps(snapshot)
        elif fmt == ExportFormat.INTERCHANGE_MESH:
            text = gltf_text()
        else:
            text = ifc_text(snapshot.created_at)

        ext, mime_type = FORMAT_FILES[fmt]
        logger.info(f"Exported {snapshot.object_count} objects as {fmt.value}")
        return ExportResult(
            format=fmt,
            filename=f"massing-project-{timestamp}.{ext}",
            mime_type=mime_type,
            payload=text.encode("utf-8"),
            timestamp_ms=timestamp,
        )

    def render_image(self, quality="medium") -> ExportResult:
        """
        Rasterize the viewport at the quality's resolution multiplier.

        Raises:
            RuntimeError: If no viewport is attached
        """
        if self.view is None:
            raise RuntimeError("Image export needs a viewport")

        multiplier = QUALITY_MULTIPLIERS[normalize_quality(quality)]
        payload = self.view.rasterize(multiplier)
        timestamp = self._timestamp_ms()
        return ExportResult(
            format=ExportFormat.IMAGE,
            filename=f"massing-render-{timestamp}.png",
            mime_type="image/png",
            payload=payload,
            timestamp_ms=timestamp,
        )

"""Flat-file storage behind the persistence API."""

import base64
import binascii
import json
import logging
import os
import re
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = re.compile(r"^data:image/[a-zA-Z0-9.+-]+;base64,")


def sanitize_filename(filename: str) -> str:
    """Sanitize filename to prevent path traversal and other security issues.

    - Removes path separators and parent directory references
    - Removes null bytes
    - Limits length
    - Keeps only the basename
    """
    # Remove null bytes
    filename = filename.replace("\x00", "")

    # Get only the basename (removes any path components)
    filename = Path(filename).name

    # Remove any remaining path traversal attempts
    filename = filename.replace("..", "").replace("/", "").replace("\\", "")

    # Remove any control characters
    filename = re.sub(r'[\x00-\x1f\x7f-\x9f]', '', filename)

    # Limit length
    if len(filename) > 255:
        # Preserve extension
        name, ext = Path(filename).stem, Path(filename).suffix
        filename = name[:255 - len(ext)] + ext

    # If filename is empty after sanitization, use a default
    if not filename or filename == ".":
        filename = "unknown_file"

    return filename


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class StorageConfig:
    """Where the API keeps its files."""

    data_dir: str = "data"

    @classmethod
    def from_env(cls) -> "StorageConfig":
        """Load configuration from environment variables."""
        return cls(data_dir=os.getenv("MASSING_DATA_DIR", "data"))


class FileStore:
    """One JSON document per project, one PNG per render, exports beside projects."""

    def __init__(self, root):
        self.root = Path(root)
        self.projects_dir = self.root / "projects"
        self.renders_dir = self.root / "renders"

    def ensure_directories(self) -> None:
        self.projects_dir.mkdir(parents=True, exist_ok=True)
        self.renders_dir.mkdir(parents=True, exist_ok=True)

    def save_project(self, document: Any) -> str:
        """Store a project document and return its id."""
        self.ensure_directories()
        project_id = f"project_{_now_ms()}_{uuid.uuid4().hex[:6]}"
        path = self.projects_dir / f"{project_id}.json"
        path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        logger.info(f"Saved project: {project_id}")
        return project_id

    def load_project(self, project_id: str) -> Any:
        """
        Load a stored project document.

        Raises:
            FileNotFoundError: If the id is unknown or not a valid name
        """
        if sanitize_filename(project_id) != project_id:
            raise FileNotFoundError(project_id)
        path = self.projects_dir / f"{project_id}.json"
        return json.loads(path.read_text(encoding="utf-8"))

    def save_export(self, format: str, data: Any, project_id: str) -> str:
        """Store an exported payload; JSON data is pretty-printed."""
        self.ensure_directories()
        filename = sanitize_filename(f"export_{project_id}_{_now_ms()}.{format}")
        path = self.projects_dir / filename
        if format == "json":
            path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        else:
            text = data if isinstance(data, str) else json.dumps(data)
            path.write_text(text, encoding="utf-8")
        logger.info(f"Saved export: {filename}")
        return filename

    def save_render(self, image: str, project_id: str, timestamp: int) -> str:
        """
        Decode a base64 PNG (optionally a data URL) and store it.

        Raises:
            ValueError: If the payload is not valid base64
        """
        self.ensure_directories()
        encoded = DATA_URL_PREFIX.sub("", image.strip())
        try:
            payload = base64.b64decode(encoded, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 image: {e}") from e

        filename = sanitize_filename(f"render_{project_id}_{timestamp}.png")
        (self.renders_dir / filename).write_bytes(payload)
        logger.info(f"Saved render: {filename} ({len(payload)} bytes)")
        return filename

    def export_path(self, filename: str) -> Path:
        return self.projects_dir / sanitize_filename(filename)

    def render_path(self, filename: str) -> Path:
        return self.renders_dir / sanitize_filename(filename)


def get_store() -> FileStore:
    """FastAPI dependency returning the configured store."""
    return FileStore(StorageConfig.from_env().data_dir)

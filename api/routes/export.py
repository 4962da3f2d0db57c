"""Export storage and download routes."""

import logging
import re
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel, field_validator

from ..storage import FileStore, get_store, sanitize_filename

logger = logging.getLogger(__name__)

router = APIRouter()

FORMAT_PATTERN = re.compile(r"^[a-z0-9-]{1,24}$")


class ExportRequest(BaseModel):
    """Exported payload to keep on the server."""

    format: str
    data: Any
    projectId: str = "demo"

    @field_validator("format")
    @classmethod
    def format_must_be_simple(cls, v: str) -> str:
        """Validate that format is usable as a file extension."""
        v = v.strip().lower()
        if not FORMAT_PATTERN.match(v):
            raise ValueError("Format must be a short lowercase extension")
        return v

    @field_validator("projectId")
    @classmethod
    def project_id_must_be_safe(cls, v: str) -> str:
        return sanitize_filename(v)


@router.post("/export")
async def store_export(request: ExportRequest, store: FileStore = Depends(get_store)):
    """Store an exported file."""
    try:
        filename = store.save_export(request.format, request.data, request.projectId)
    except OSError as e:
        logger.error(f"Failed to store export: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to store export: {str(e)}")

    return {
        "success": True,
        "filename": filename,
        "downloadUrl": f"/api/download/{filename}",
    }


@router.get("/download/{filename}")
async def download_export(filename: str, store: FileStore = Depends(get_store)):
    """Download a stored export."""
    path = store.export_path(filename)
    if not path.is_file():
        raise HTTPException(status_code=404, detail="File not found")
    return FileResponse(path, filename=path.name)

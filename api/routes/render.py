"""Render image storage routes."""

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel, field_validator

from ..storage import FileStore, get_store, sanitize_filename

logger = logging.getLogger(__name__)

router = APIRouter()


class RenderUpload(BaseModel):
    """Base64 PNG render sent by the editor."""

    image: str
    timestamp: Optional[int] = None
    projectId: str = "demo"

    @field_validator("image")
    @classmethod
    def image_must_not_be_empty(cls, v: str) -> str:
        """Validate that the image payload is present."""
        if not v or not v.strip():
            raise ValueError("Image payload cannot be empty")
        return v

    @field_validator("projectId")
    @classmethod
    def project_id_must_be_safe(cls, v: str) -> str:
        return sanitize_filename(v)


@router.post("/render")
async def store_render(upload: RenderUpload, store: FileStore = Depends(get_store)):
    """Store a rendered image."""
    timestamp = upload.timestamp if upload.timestamp is not None else int(time.time() * 1000)
    try:
        filename = store.save_render(upload.image, upload.projectId, timestamp)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except OSError as e:
        logger.error(f"Failed to store render: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to store render: {str(e)}")

    return {
        "success": True,
        "filename": filename,
        "previewUrl": f"/api/renders/{filename}",
    }


@router.get("/renders/{filename}")
async def get_render(filename: str, store: FileStore = Depends(get_store)):
    """Serve a stored render."""
    path = store.render_path(filename)
    if not path.is_file():
        raise HTTPException(status_code=404, detail="Render not found")
    return FileResponse(path, media_type="image/png")

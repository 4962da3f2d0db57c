"""Project storage routes."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from ..storage import FileStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
async def create_project(document: Any = Body(...), store: FileStore = Depends(get_store)):
    """Store a native project document."""
    try:
        project_id = store.save_project(document)
    except OSError as e:
        logger.error(f"Failed to save project: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to save project: {str(e)}")

    return {
        "success": True,
        "projectId": project_id,
        "message": "Project saved successfully",
    }


@router.get("/{project_id}")
async def get_project(project_id: str, store: FileStore = Depends(get_store)):
    """Get a stored project document."""
    try:
        return store.load_project(project_id)
    except (FileNotFoundError, ValueError):
        raise HTTPException(status_code=404, detail="Project not found")

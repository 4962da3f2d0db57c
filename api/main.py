"""Massing Studio persistence API"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routes import assets, export, health, projects, render
from .storage import get_store

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Create the data directories before serving."""
    store = get_store()
    store.ensure_directories()
    logger.info(f"Massing Studio API storing files under {store.root}")
    yield
    logger.info("Massing Studio API stopped")


app = FastAPI(
    title="Massing Studio",
    description="Persistence API for the Massing Studio scene editor",
    version=API_VERSION,
    lifespan=lifespan,
)

# The editor is served from its own origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(projects.router, prefix="/api/projects", tags=["Projects"])
app.include_router(export.router, prefix="/api", tags=["Export"])
app.include_router(render.router, prefix="/api", tags=["Render"])
app.include_router(assets.router, prefix="/api", tags=["Assets"])


@app.get("/")
async def root():
    return {
        "name": "Massing Studio",
        "version": API_VERSION,
        "status": "running",
        "docs": "/docs",
    }

"""API Routes"""

from . import assets, export, health, projects, render

__all__ = ["assets", "export", "health", "projects", "render"]

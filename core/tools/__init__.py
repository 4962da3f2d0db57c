"""Creation tools: tool selection and pointer-ray placement."""

from .controller import SHORTCUTS, SURFACE_OFFSET, ToolController, ToolDefaults

__all__ = ["ToolController", "ToolDefaults", "SHORTCUTS", "SURFACE_OFFSET"]

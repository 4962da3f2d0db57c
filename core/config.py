"""Studio configuration management."""

import os
from dataclasses import dataclass


@dataclass
class StudioConfig:
    """Editor configuration."""

    # Remote persistence endpoint
    api_base_url: str = "http://localhost:3000/api"
    api_timeout: float = 5.0

    # Exports
    export_dir: str = "exports"
    render_quality: str = "medium"  # "low", "medium", "high"

    # Viewport
    viewport_width: int = 800
    viewport_height: int = 600
    fov_degrees: float = 75.0

    # Stats panel refresh
    stats_interval: float = 1.0

    @classmethod
    def from_env(cls) -> "StudioConfig":
        """Load configuration from environment variables."""
        return cls(
            api_base_url=os.getenv("MASSING_API_URL", "http://localhost:3000/api"),
            api_timeout=float(os.getenv("MASSING_API_TIMEOUT", "5.0")),
            export_dir=os.getenv("MASSING_EXPORT_DIR", "exports"),
            render_quality=os.getenv("MASSING_RENDER_QUALITY", "medium"),
            viewport_width=int(os.getenv("MASSING_VIEWPORT_WIDTH", "800")),
            viewport_height=int(os.getenv("MASSING_VIEWPORT_HEIGHT", "600")),
            fov_degrees=float(os.getenv("MASSING_FOV", "75.0")),
            stats_interval=float(os.getenv("MASSING_STATS_INTERVAL", "1.0")),
        )

    def is_api_configured(self) -> bool:
        """Check if a persistence endpoint is set."""
        return bool(self.api_base_url)

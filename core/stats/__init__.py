"""Scene statistics."""

from .collector import REFRESH_INTERVAL, SceneStats, StatsCollector

__all__ = ["StatsCollector", "SceneStats", "REFRESH_INTERVAL"]

"""Notification collaborator: transient toast/status messages."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Protocol

logger = logging.getLogger(__name__)


class Level(str, Enum):
    """Toast levels."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Notifier(Protocol):
    """Anything that can show a message to the user."""

    def notify(self, message: str, level: Level = Level.INFO) -> None: ...


_LOG_LEVELS = {
    Level.INFO: logging.INFO,
    Level.SUCCESS: logging.INFO,
    Level.WARNING: logging.WARNING,
    Level.ERROR: logging.ERROR,
}


class LoggingNotifier:
    """Routes notifications to the log when no UI is attached."""

    def notify(self, message: str, level: Level = Level.INFO) -> None:
        logger.log(_LOG_LEVELS.get(level, logging.INFO), f"[{level.value}] {message}")


@dataclass
class RecordingNotifier:
    """Keeps every notification in memory."""

    messages: List[tuple] = field(default_factory=list)

    def notify(self, message: str, level: Level = Level.INFO) -> None:
        self.messages.append((level, message))

    def levels(self) -> List[Level]:
        return [level for level, _ in self.messages]

    def last(self) -> tuple:
        return self.messages[-1] if self.messages else (None, None)

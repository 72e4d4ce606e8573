"""Per-run context threaded through every pipeline stage."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List

from .verification_run import LogEntry

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    "info": (logging.INFO, "ℹ️"),
    "success": (logging.INFO, "✅"),
    "result": (logging.INFO, "📊"),
    "warn": (logging.WARNING, "⚠️"),
    "error": (logging.ERROR, "❌"),
}


@dataclass
class RunContext:
    """Reference time and ordered log sink for one verification run."""

    reference_time: datetime
    logs: List[LogEntry] = field(default_factory=list)

    @classmethod
    def start(cls) -> "RunContext":
        """Create a context pinned to the current time."""
        return cls(reference_time=datetime.now(timezone.utc))

    @property
    def reference_timestamp(self) -> str:
        """Reference time as an ISO-8601 string."""
        return self.reference_time.isoformat()

    def log(self, type: str, message: str) -> str:
        """Append a log entry and mirror it to the module logger."""
        self.logs.append(
            LogEntry(
                type=type,
                message=message,
                timestamp=datetime.now(timezone.utc).isoformat(),
            )
        )
        level, emoji = _LOG_LEVELS.get(type, (logging.INFO, "🔹"))
        logger.log(level, f"{emoji} {message}")
        return message

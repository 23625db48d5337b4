"""Keeps recent gameday log records in memory for the /api/logs endpoint."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import asdict, dataclass
from datetime import datetime, timezone

PACKAGE_LOGGER = "gameday"


@dataclass(frozen=True)
class LogEntry:
    timestamp: str
    level: str
    levelno: int
    logger: str
    message: str


class RecentLogHandler(logging.Handler):
    def __init__(self, capacity: int = 500) -> None:
        super().__init__()
        self._records: deque[LogEntry] = deque(maxlen=capacity)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._records.append(
                LogEntry(
                    timestamp=datetime.fromtimestamp(
                        record.created, tz=timezone.utc
                    ).isoformat(timespec="seconds"),
                    level=record.levelname,
                    levelno=record.levelno,
                    logger=record.name,
                    message=self.format(record),
                )
            )
        except Exception:
            self.handleError(record)

    def entries(self, limit: int = 100, min_level: str | None = None) -> list[dict]:
        """Newest first, optionally only records at or above ``min_level``."""
        threshold = logging.getLevelName(min_level.upper()) if min_level else 0
        if not isinstance(threshold, int):
            raise ValueError(f"Unknown log level: {min_level}")
        if limit <= 0:
            return []
        selected = [entry for entry in self._records if entry.levelno >= threshold]
        return [asdict(entry) for entry in reversed(selected[-limit:])]

    def clear(self) -> None:
        self._records.clear()


_handler: RecentLogHandler | None = None


def get_log_handler() -> RecentLogHandler:
    global _handler
    if _handler is None:
        _handler = RecentLogHandler()
        _handler.setFormatter(logging.Formatter("%(message)s"))
    return _handler


def configure_logging(level: str = "INFO") -> RecentLogHandler:
    """Set up console logging and attach the in-memory handler to the package logger."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    handler = get_log_handler()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if handler not in package_logger.handlers:
        package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler

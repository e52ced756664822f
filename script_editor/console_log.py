"""
Console Log - bounded audit log for the script editor.

Every editor component reports through this sink instead of raising, so the
console is the single place where rejected edits and diagnostics show up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Tuple


_log = logging.getLogger(__name__)


class LogLevel:
    """Console log levels."""
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    SUCCESS = "success"


_STDLIB_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.SUCCESS: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}

_LEVEL_STYLES = {
    LogLevel.SUCCESS: "text-success",
    LogLevel.ERROR: "text-error",
    LogLevel.WARN: "text-warning",
}

DEFAULT_MAX_LOGS = 500
BOTTOM_TOLERANCE = 5

# (scroll_top, scroll_height, client_height)
ViewportReader = Callable[[], Optional[Tuple[float, float, float]]]


@dataclass
class LogEntry:
    """
    A single console line.

    `should_autoscroll` records whether the viewport was pinned to the bottom
    right before this entry was appended.
    """
    message: str
    level: str = LogLevel.INFO
    timestamp: datetime = field(default_factory=datetime.now)
    should_autoscroll: bool = True

    @property
    def time(self) -> str:
        return self.timestamp.strftime("%H:%M:%S")

    def __str__(self) -> str:
        return f"[{self.time}] {self.level.upper()}: {self.message}"


class ConsoleLog:
    """
    Keeps the most recent console entries in insertion order.

    The viewport reader and scroll callback are supplied by whatever widget
    displays the log; without them every append counts as "at the bottom".
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_LOGS, initial_message: Optional[str] = None):
        """
        Initialize the console.

        Args:
            max_entries: Maximum number of log entries to keep in memory
            initial_message: Optional INFO line to seed the console with
        """
        if max_entries < 1:
            raise ValueError("Console capacity must be at least 1")
        self._entries: List[LogEntry] = []
        self._max_entries = max_entries
        self._read_viewport: Optional[ViewportReader] = None
        self._scroll_to_bottom: Optional[Callable[[], None]] = None
        if initial_message:
            self.add(initial_message)

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @property
    def entries(self) -> List[LogEntry]:
        """Read-only snapshot of the current entries."""
        return self._entries.copy()

    def __len__(self) -> int:
        return len(self._entries)

    def attach_viewport(
        self,
        read_viewport: ViewportReader,
        scroll_to_bottom: Optional[Callable[[], None]] = None,
    ) -> None:
        """Connect the widget that displays the console."""
        self._read_viewport = read_viewport
        self._scroll_to_bottom = scroll_to_bottom

    def detach_viewport(self) -> None:
        self._read_viewport = None
        self._scroll_to_bottom = None

    def add(self, message: str, level: str = LogLevel.INFO) -> LogEntry:
        """Append an entry, evicting the oldest ones beyond capacity."""
        at_bottom = self._is_at_bottom()
        entry = LogEntry(message=message, level=level, should_autoscroll=at_bottom)

        self._entries.append(entry)
        if len(self._entries) > self._max_entries:
            self._entries = self._entries[-self._max_entries:]

        _log.log(_STDLIB_LEVELS.get(level, logging.INFO), message)

        if at_bottom and self._scroll_to_bottom is not None:
            self._scroll_to_bottom()
        return entry

    def info(self, message: str) -> LogEntry:
        return self.add(message, LogLevel.INFO)

    def warn(self, message: str) -> LogEntry:
        return self.add(message, LogLevel.WARN)

    def error(self, message: str) -> LogEntry:
        return self.add(message, LogLevel.ERROR)

    def success(self, message: str) -> LogEntry:
        return self.add(message, LogLevel.SUCCESS)

    def recent(self, count: int = 10) -> List[LogEntry]:
        """
        Get the most recent log entries.

        Args:
            count: Number of recent entries to return
        """
        if count <= 0:
            return []
        return self._entries[-count:]

    def clear(self) -> None:
        """Drop every entry."""
        self._entries = []

    @staticmethod
    def level_style(level: str) -> str:
        """Style class the console widget uses for a level."""
        return _LEVEL_STYLES.get(level, "text-info")

    def export(self, filepath: str) -> bool:
        """
        Export all entries to a text file.

        Returns:
            bool: True if export was successful
        """
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                f.write("Script Editor - Console Export\n")
                f.write(f"Generated: {datetime.now()}\n")
                f.write("=" * 50 + "\n\n")

                for entry in self._entries:
                    time_str = entry.timestamp.strftime("%Y-%m-%d %H:%M:%S")
                    f.write(f"[{time_str}] {entry.level.upper()}: {entry.message}\n")

            return True
        except OSError as e:
            _log.error("Failed to export console log: %s", e)
            return False

    def _is_at_bottom(self) -> bool:
        if self._read_viewport is None:
            return True
        metrics = self._read_viewport()
        if metrics is None:
            return True
        scroll_top, scroll_height, client_height = metrics
        return abs(scroll_height - scroll_top - client_height) < BOTTOM_TOLERANCE

"""Bounded history of tool calls"""

import logging
import threading
from collections import deque

from toolbridge.models.tools import CallLogEntry

logger = logging.getLogger(__name__)


class CallLog:
    """Ring buffer of call log entries; the oldest entry is evicted first.

    When disabled, appends are dropped and reads return nothing.
    """

    def __init__(self, max_logs: int = 1000, enabled: bool = True):
        if max_logs <= 0:
            raise ValueError(f"max_logs must be positive, got {max_logs}")

        self.max_logs = max_logs
        self.enabled = enabled
        self._entries: deque[CallLogEntry] = deque(maxlen=max_logs)
        self._lock = threading.Lock()

    def append(self, entry: CallLogEntry) -> None:
        if not self.enabled:
            return

        with self._lock:
            self._entries.append(entry)

        status = "✓" if entry.result.success else "✗"
        logger.debug(f"{status} {entry.tool_name} ({entry.duration:.1f}ms)")

    def get_logs(self, tool_name: str | None = None) -> list[CallLogEntry]:
        """Get a copy of the logged calls, optionally for one tool"""
        with self._lock:
            entries = list(self._entries)

        if tool_name:
            return [entry for entry in entries if entry.tool_name == tool_name]
        return entries

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

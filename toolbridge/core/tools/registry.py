"""Registry of tools and their call statistics"""

import logging
import threading
from datetime import datetime

from toolbridge.models.tools import Tool, ToolCategory, ToolMetadata

logger = logging.getLogger(__name__)


class ToolEntry:
    """A registered tool plus the counters the registry owns for it"""

    __slots__ = ("tool", "timeout", "call_count", "last_called_at")

    def __init__(self, tool: Tool, timeout: int):
        self.tool = tool
        self.timeout = timeout
        self.call_count = 0
        self.last_called_at: datetime | None = None

    def snapshot(self) -> ToolMetadata:
        return ToolMetadata(
            name=self.tool.name,
            description=self.tool.description,
            category=self.tool.category,
            timeout=self.timeout,
            call_count=self.call_count,
            last_called_at=self.last_called_at,
        )


class ToolRegistry:
    """Name-keyed store of tools; one live entry per name"""

    def __init__(self, default_timeout: int):
        self.default_timeout = default_timeout
        self._entries: dict[str, ToolEntry] = {}
        self._lock = threading.Lock()

    def register(self, tool: Tool) -> None:
        """Register a tool, replacing any tool of the same name"""
        entry = ToolEntry(tool, tool.timeout or self.default_timeout)

        with self._lock:
            replaced = tool.name in self._entries
            self._entries[tool.name] = entry

        if replaced:
            logger.warning(f"Overriding existing tool: {tool.name}")
        logger.debug(f"Registered tool: {tool.name}")

    def unregister(self, name: str) -> bool:
        with self._lock:
            removed = self._entries.pop(name, None) is not None

        if removed:
            logger.debug(f"Unregistered tool: {name}")
        else:
            logger.debug(f"Cannot unregister unknown tool: {name}")
        return removed

    def has(self, name: str) -> bool:
        return name in self._entries

    def get(self, name: str) -> Tool | None:
        entry = self._entries.get(name)
        return entry.tool if entry else None

    def get_entry(self, name: str) -> ToolEntry | None:
        """Get the live entry for dispatching; not for external mutation"""
        return self._entries.get(name)

    def record_call(self, entry: ToolEntry, called_at: datetime) -> None:
        """Count one dispatch attempt against an entry"""
        with self._lock:
            entry.call_count += 1
            entry.last_called_at = called_at

    def tools(self) -> list[Tool]:
        with self._lock:
            return [entry.tool for entry in self._entries.values()]

    def list(self, category: ToolCategory | str | None = None) -> list[ToolMetadata]:
        """Get metadata snapshots in registration order"""
        with self._lock:
            entries = list(self._entries.values())

        if category is not None:
            try:
                category = ToolCategory(category)
            except ValueError:
                return []
            entries = [e for e in entries if e.tool.category == category]

        return [entry.snapshot() for entry in entries]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.debug("Cleared all tools")

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

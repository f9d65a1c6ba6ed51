"""Tool bridge: registry, dispatcher, call log and stats behind one object"""

import logging
from collections.abc import Callable
from typing import Any

from toolbridge.core.call_log import CallLog
from toolbridge.core.stats import compute_stats
from toolbridge.core.tools.dispatcher import ToolDispatcher
from toolbridge.core.tools.registry import ToolRegistry
from toolbridge.models.config import BridgeConfig
from toolbridge.models.tools import (
    BridgeStats,
    CallLogEntry,
    Tool,
    ToolCategory,
    ToolMetadata,
    ToolResult,
)

logger = logging.getLogger(__name__)


class ToolBridge:
    """In-process bridge letting packages expose and call each other's tools.

    Bridges are independent: each owns its registry and call log, so several
    can coexist in one process. Construct one and pass it to whatever needs it.

    Example:
        bridge = ToolBridge(BridgeConfig(default_timeout=2000))
        bridge.register_tool(Tool(name="echo", handler=lambda p: p))
        result = await bridge.call_tool("echo", {"text": "hi"})
    """

    def __init__(self, config: BridgeConfig | None = None):
        self.config = config or BridgeConfig()
        self.registry = ToolRegistry(self.config.default_timeout)
        self.call_log = CallLog(self.config.max_logs, self.config.enable_logging)
        self.dispatcher = ToolDispatcher(self.registry, self.call_log, self.config)

    def register_tool(self, tool: Tool) -> None:
        self.registry.register(tool)

    def register_function(
        self,
        name: str,
        handler: Callable,
        description: str = "",
        category: ToolCategory | str | None = None,
        timeout: int | None = None,
    ) -> Tool:
        """Build a Tool from a callable and register it"""
        tool = Tool(
            name=name,
            description=description,
            category=category,
            timeout=timeout,
            handler=handler,
        )
        self.registry.register(tool)
        return tool

    def unregister_tool(self, tool_name: str) -> bool:
        return self.registry.unregister(tool_name)

    async def call_tool(
        self,
        tool_name: str,
        params: dict[str, Any] | None = None,
        caller: str | None = None,
    ) -> ToolResult:
        """Call a tool; always resolves to a ToolResult"""
        return await self.dispatcher.call_tool(tool_name, params, caller)

    def has_tool(self, tool_name: str) -> bool:
        return self.registry.has(tool_name)

    def get_tool(self, tool_name: str) -> Tool | None:
        return self.registry.get(tool_name)

    def list_tools(self, category: ToolCategory | str | None = None) -> list[ToolMetadata]:
        return self.registry.list(category)

    def get_call_logs(self, tool_name: str | None = None) -> list[CallLogEntry]:
        return self.call_log.get_logs(tool_name)

    def clear_logs(self) -> None:
        self.call_log.clear()

    def clear_tools(self) -> None:
        self.registry.clear()

    def get_stats(self) -> BridgeStats:
        return compute_stats(self.registry, self.call_log)

    def __repr__(self) -> str:
        return f"ToolBridge(tools={len(self.registry)}, logs={len(self.call_log)})"

"""Stateful wrapper around calls to a single named tool"""

from typing import Any

from toolbridge.core.bridge import ToolBridge
from toolbridge.models.tools import ToolResult


class ToolCaller:
    """Tracks loading, error and data for calls to one tool.

    Mirrors what a UI binding needs: `loading` is true while a call is in
    flight, `error` holds the last failure message and `data` the last
    successful payload.
    """

    def __init__(self, bridge: ToolBridge, tool_name: str, caller: str | None = None):
        self.bridge = bridge
        self.tool_name = tool_name
        self.caller = caller
        self.loading = False
        self.error: str | None = None
        self.data: Any | None = None

    async def call(self, params: dict[str, Any] | None = None) -> ToolResult:
        self.loading = True
        self.error = None

        try:
            result = await self.bridge.call_tool(self.tool_name, params, self.caller)
        finally:
            self.loading = False

        if not result.success:
            self.error = result.error or "Unknown error"
            return result

        self.data = result.data
        return result

    def reset(self) -> None:
        self.loading = False
        self.error = None
        self.data = None

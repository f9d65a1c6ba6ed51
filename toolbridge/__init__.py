"""Toolbridge - in-process tool registry and dispatcher

Lets independently built packages expose named tools and call each other's
tools through a shared ToolBridge, without importing one another.
"""

from toolbridge.core.bridge import ToolBridge
from toolbridge.core.caller import ToolCaller
from toolbridge.core.context import (
    get_global_bridge,
    reset_global_bridge,
    set_global_bridge,
    use_bridge,
)
from toolbridge.core.tools.handler import CallContext, CancellationToken, ToolHandler
from toolbridge.models.config import BridgeConfig
from toolbridge.models.tools import (
    BridgeStats,
    CallLogEntry,
    ErrorCode,
    Tool,
    ToolCategory,
    ToolMetadata,
    ToolResult,
)

__version__ = "0.1.0"

__all__ = [
    "BridgeConfig",
    "BridgeStats",
    "CallContext",
    "CallLogEntry",
    "CancellationToken",
    "ErrorCode",
    "Tool",
    "ToolBridge",
    "ToolCaller",
    "ToolCategory",
    "ToolHandler",
    "ToolMetadata",
    "ToolResult",
    "get_global_bridge",
    "reset_global_bridge",
    "set_global_bridge",
    "use_bridge",
]

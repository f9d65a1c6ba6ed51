"""Tool registry and dispatch"""

from .dispatcher import ToolDispatcher
from .handler import CallContext, CancellationToken, ToolHandler
from .registry import ToolRegistry

__all__ = [
    "CallContext",
    "CancellationToken",
    "ToolDispatcher",
    "ToolHandler",
    "ToolRegistry",
]

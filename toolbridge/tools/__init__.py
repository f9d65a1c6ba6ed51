"""Toolbridge Tools Package

Decorator-based tool authoring and module discovery. Functions marked with
@tool carry a ready-made Tool definition that any bridge can register.
"""

from .decorators import get_tool_definition, is_tool_function, tool
from .discovery import (
    ToolDiscovery,
    discover_built_in_tools,
    register_discovered_tools,
)

__all__ = [
    "tool",
    "get_tool_definition",
    "is_tool_function",
    "ToolDiscovery",
    "discover_built_in_tools",
    "register_discovered_tools",
]

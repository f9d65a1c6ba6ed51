"""Tool auto-discovery and registration"""

import importlib
import inspect
import logging
import pkgutil

from toolbridge.core.bridge import ToolBridge
from toolbridge.models.tools import Tool

from .decorators import get_tool_definition, is_tool_function

logger = logging.getLogger(__name__)

BUILT_IN_MODULE = "toolbridge.tools.built_in"


class ToolDiscovery:
    """Finds @tool functions in modules and packages"""

    def __init__(self):
        self.discovered_tools: dict[str, Tool] = {}
        self._discovery_paths: list[str] = []

    def add_discovery_path(self, module_path: str) -> None:
        """Add a module path for tool discovery"""
        if module_path not in self._discovery_paths:
            self._discovery_paths.append(module_path)
            logger.debug(f"Added discovery path: {module_path}")

    def discover_tools(self, module_paths: list[str] | None = None) -> dict[str, Tool]:
        """
        Discover all tools from specified module paths.

        Args:
            module_paths: List of module paths to scan. If None, uses registered paths.

        Returns:
            Dictionary mapping tool names to Tool definitions
        """
        paths_to_scan = module_paths if module_paths else self._discovery_paths

        self.discovered_tools.clear()

        for module_path in paths_to_scan:
            self._discover_in_module(module_path)

        logger.info(
            f"Discovered {len(self.discovered_tools)} tools from {len(paths_to_scan)} modules"
        )
        return self.discovered_tools.copy()

    def _discover_in_module(self, module_path: str) -> None:
        """Discover tools in a module, or in each submodule of a package"""
        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            logger.warning(f"Could not import module {module_path}: {e}")
            return

        if hasattr(module, "__path__"):
            for _importer, modname, _ispkg in pkgutil.iter_modules(module.__path__):
                self._scan_module_for_tools(f"{module_path}.{modname}")
        else:
            self._scan_module_for_tools(module_path)

    def _scan_module_for_tools(self, module_path: str) -> None:
        """Scan a specific module for decorated tool functions"""
        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            logger.warning(f"Could not import module {module_path}: {e}")
            return

        for _name, obj in inspect.getmembers(module, inspect.isfunction):
            if not is_tool_function(obj):
                continue

            tool_def = get_tool_definition(obj)
            if tool_def.name in self.discovered_tools:
                logger.warning(
                    f"Duplicate tool name '{tool_def.name}' found in {module_path}"
                )
                continue

            self.discovered_tools[tool_def.name] = tool_def
            logger.debug(f"Discovered tool '{tool_def.name}' in {module_path}")


def discover_built_in_tools() -> dict[str, Tool]:
    """Discover all built-in tools"""
    return ToolDiscovery().discover_tools([BUILT_IN_MODULE])


def register_discovered_tools(
    bridge: ToolBridge, module_paths: list[str] | None = None
) -> int:
    """Register discovered tools on a bridge; returns how many were registered.

    Does nothing when the bridge was configured with enable_tool_discovery off.
    """
    if not bridge.config.enable_tool_discovery:
        logger.info("Tool discovery disabled; no tools registered")
        return 0

    tools = ToolDiscovery().discover_tools(module_paths or [BUILT_IN_MODULE])
    for tool_def in tools.values():
        bridge.register_tool(tool_def)

    logger.info(f"Registered {len(tools)} discovered tools")
    return len(tools)

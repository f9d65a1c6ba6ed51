"""Optional process-wide bridge accessor.

Core components never read this; it exists for code that cannot have a
bridge passed in. Tests reset it with reset_global_bridge().
"""

import logging
import threading

from toolbridge.core.bridge import ToolBridge
from toolbridge.models.config import BridgeConfig

logger = logging.getLogger(__name__)

_global_bridge: ToolBridge | None = None
_global_lock = threading.Lock()


def get_global_bridge() -> ToolBridge | None:
    """Get the shared bridge, if one has been set"""
    return _global_bridge


def set_global_bridge(bridge: ToolBridge) -> None:
    global _global_bridge
    with _global_lock:
        _global_bridge = bridge


def reset_global_bridge() -> None:
    global _global_bridge
    with _global_lock:
        _global_bridge = None


def use_bridge(config: BridgeConfig | None = None, singleton: bool = True) -> ToolBridge:
    """Get the shared bridge, creating it on first use.

    With singleton=False a fresh, unshared bridge is returned every time.
    The config only applies when a bridge is created; an existing shared
    bridge keeps its own.
    """
    global _global_bridge

    if not singleton:
        return ToolBridge(config)

    with _global_lock:
        if _global_bridge is None:
            _global_bridge = ToolBridge(config)
            logger.debug("Created shared tool bridge")
        elif config is not None and config != _global_bridge.config:
            logger.warning("Shared tool bridge already exists; ignoring new config")
        return _global_bridge

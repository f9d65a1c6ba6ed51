"""Default configuration values and code tables"""

BRIDGE_DEFAULTS = {
    "enable_logging": True,
    "max_logs": 1000,
    "default_timeout": 5000,  # milliseconds
    "enable_tool_discovery": True,
    "cancel_on_timeout": True,
}

# Stats
MOST_CALLED_LIMIT = 10

LOG_LEVELS = {
    "INFO": "info",
    "WARN": "warn",
    "ERROR": "error",
    "DEBUG": "debug",
}

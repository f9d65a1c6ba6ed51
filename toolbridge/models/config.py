"""Configuration models and schemas"""

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

from toolbridge.core.constants import BRIDGE_DEFAULTS, LOG_LEVELS


class BridgeConfig(BaseModel):
    """Settings fixed when a bridge is constructed"""

    model_config = ConfigDict(frozen=True, extra="forbid")

    enable_logging: bool = Field(
        default=BRIDGE_DEFAULTS["enable_logging"], description="Record call history"
    )
    max_logs: int = Field(
        default=BRIDGE_DEFAULTS["max_logs"],
        description="Capacity of the call log",
        gt=0,
    )
    default_timeout: int = Field(
        default=BRIDGE_DEFAULTS["default_timeout"],
        description="Timeout for tools that declare none (milliseconds)",
        gt=0,
    )
    enable_tool_discovery: bool = Field(
        default=BRIDGE_DEFAULTS["enable_tool_discovery"],
        description="Allow registering tools found by module discovery",
    )
    cancel_on_timeout: bool = Field(
        default=BRIDGE_DEFAULTS["cancel_on_timeout"],
        description="Cancel the handler task when its call times out",
    )


class LoggingConfig(BaseModel):
    """Diagnostic logging configuration"""

    level: str = Field(default="WARNING", description="Log level for toolbridge")
    file: str | None = Field(default=None, description="Optional log file path")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        levels = logging.getLevelNamesMapping()
        level = v.upper()
        if level not in levels:
            raise ValueError(
                f"Unknown log level: {v}. Use one of: {', '.join(LOG_LEVELS.values())}"
            )
        # Aliases such as WARN resolve to their canonical name
        return logging.getLevelName(levels[level])


class DiscoveryConfig(BaseModel):
    """Tool discovery configuration"""

    modules: list[str] = Field(
        default_factory=lambda: ["toolbridge.tools.built_in"],
        description="Module paths scanned for @tool functions",
    )


class ToolBridgeSettings(BaseModel):
    """Main configuration model"""

    model_config = ConfigDict(extra="forbid")

    bridge: BridgeConfig = Field(default_factory=BridgeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)

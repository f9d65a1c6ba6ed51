"""Options and helpers shared by the CLI sub-commands"""

from pathlib import Path

import typer
from pydantic import BaseModel

from toolbridge.core.bridge import ToolBridge
from toolbridge.core.config import config_manager
from toolbridge.models.config import ToolBridgeSettings
from toolbridge.tools.discovery import register_discovered_tools
from toolbridge.utils.log import configure_logging


class CLIOptions(BaseModel):
    """Global options given before the sub-command, kept on the typer context"""

    config_file: Path | None = None
    verbose: bool = False


def get_options(ctx: typer.Context) -> CLIOptions:
    return ctx.find_object(CLIOptions) or CLIOptions()


def load_settings(
    ctx: typer.Context, config_file: Path | None = None, setup_logging: bool = True
) -> ToolBridgeSettings:
    """Load settings for a command.

    A command's own --file wins over the global --config. With setup_logging
    the toolbridge logger is configured from the settings, or at DEBUG when
    --verbose was given. Raises ConfigError for unreadable configuration.
    """
    options = get_options(ctx)
    settings = config_manager.load_config(config_file or options.config_file)

    if setup_logging:
        level = "DEBUG" if options.verbose else settings.logging.level
        configure_logging(level, settings.logging.file)
    return settings


def create_bridge(settings: ToolBridgeSettings) -> ToolBridge:
    """Build a bridge from settings and register discovered tools"""
    bridge = ToolBridge(settings.bridge)
    register_discovered_tools(bridge, settings.discovery.modules)
    return bridge

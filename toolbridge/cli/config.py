"""Configuration command handlers"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from toolbridge.cli.common import load_settings
from toolbridge.core.config import ConfigError, config_manager
from toolbridge.utils.formatting import format_duration, print_error, print_info, print_success

config_app = typer.Typer()
console = Console()


@config_app.command("show")
def show_config(
    ctx: typer.Context,
    config_file: Path | None = typer.Option(
        None, "--file", "-f", help="Configuration file to show"
    ),
):
    """Show current configuration"""
    try:
        settings = load_settings(ctx, config_file, setup_logging=False)

        print_info("Current Configuration:")

        table = Table()
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="white")

        bridge = settings.bridge
        table.add_row("Logging Enabled", str(bridge.enable_logging))
        table.add_row("Max Logs", str(bridge.max_logs))
        table.add_row("Default Timeout", format_duration(bridge.default_timeout))
        table.add_row("Tool Discovery", str(bridge.enable_tool_discovery))
        table.add_row("Cancel On Timeout", str(bridge.cancel_on_timeout))
        table.add_row("Log Level", settings.logging.level)
        table.add_row("Log File", settings.logging.file or "None")
        table.add_row("Discovery Modules", ", ".join(settings.discovery.modules) or "None")

        console.print(table)

    except ConfigError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(1)


@config_app.command("init")
def init_config(
    output_path: Path = typer.Option(
        Path("toolbridge.yaml"), "--output", "-o", help="Output path for configuration file"
    ),
):
    """Initialize a new configuration file"""
    try:
        settings = config_manager._load_default_config()
        config_manager.save_config(settings, output_path)

        print_success(f"Configuration file created: {output_path}")
        print_info("Edit the file to customize your settings")

    except ConfigError as e:
        print_error(f"Failed to create configuration: {e}")
        raise typer.Exit(1)


@config_app.callback(invoke_without_command=True)
def config_callback(ctx: typer.Context):
    """Configuration management commands"""
    # If no command was provided, show help
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()

"""Tools command handlers"""

import asyncio
import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from toolbridge.cli.common import create_bridge, load_settings
from toolbridge.core.config import ConfigError
from toolbridge.models.tools import ToolCategory
from toolbridge.utils.formatting import (
    build_stats_table,
    build_tools_table,
    format_duration,
    print_error,
    print_info,
    print_tool_result,
    print_warning,
)

tools_app = typer.Typer()
console = Console()


def parse_params(param: list[str] | None, json_params: str | None) -> dict[str, Any]:
    """Combine --json and key=value params; values are parsed as JSON when possible"""
    params: dict[str, Any] = {}

    if json_params:
        try:
            loaded = json.loads(json_params)
        except json.JSONDecodeError as e:
            raise typer.BadParameter(f"Invalid JSON params: {e}")
        if not isinstance(loaded, dict):
            raise typer.BadParameter("JSON params must be an object")
        params.update(loaded)

    for item in param or []:
        if "=" not in item:
            raise typer.BadParameter(f"Expected key=value, got '{item}'")
        key, raw_value = item.split("=", 1)
        try:
            params[key] = json.loads(raw_value)
        except json.JSONDecodeError:
            params[key] = raw_value

    return params


@tools_app.command("list")
def list_tools(
    ctx: typer.Context,
    category: str = typer.Option(None, "--category", help="Filter by category"),
    config_file: Path | None = typer.Option(
        None, "--file", "-f", help="Configuration file to use"
    ),
):
    """List discovered tools"""
    try:
        settings = load_settings(ctx, config_file)
        bridge = create_bridge(settings)

        if category and category not in {c.value for c in ToolCategory}:
            valid = ", ".join(c.value for c in ToolCategory)
            print_error(f"Unknown category '{category}'. Use one of: {valid}")
            raise typer.Exit(1)

        tools = bridge.list_tools(category)
        if not tools:
            if not settings.bridge.enable_tool_discovery:
                print_warning("Tool discovery is disabled in the configuration")
            print_warning("No tools found matching the specified filters")
            return

        print_info("Available Tools")
        console.print(build_tools_table(tools))

    except ConfigError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(1)


@tools_app.command("info")
def tool_info(
    ctx: typer.Context,
    tool_name: str = typer.Argument(help="Name of the tool to show information for"),
    config_file: Path | None = typer.Option(
        None, "--file", "-f", help="Configuration file to use"
    ),
):
    """Show detailed information about a specific tool"""
    try:
        settings = load_settings(ctx, config_file)
        bridge = create_bridge(settings)

        if not bridge.has_tool(tool_name):
            print_error(f"Tool '{tool_name}' not found")
            available = [metadata.name for metadata in bridge.list_tools()]
            if available:
                console.print("\n[yellow]Available tools:[/yellow]")
                for name in sorted(available)[:10]:  # Show first 10
                    console.print(f"  • {name}")
                if len(available) > 10:
                    console.print(f"  ... and {len(available) - 10} more")
            raise typer.Exit(1)

        metadata = next(m for m in bridge.list_tools() if m.name == tool_name)
        tool = bridge.get_tool(tool_name)

        console.print(f"\n[bold blue]Tool: {tool_name}[/bold blue]")
        console.print(f"[white]{metadata.description}[/white]")

        info_table = Table(show_header=False, box=None, padding=(0, 2))
        info_table.add_column("Key", style="cyan", no_wrap=True)
        info_table.add_column("Value", style="white")

        info_table.add_row(
            "Category:", metadata.category.value if metadata.category else "uncategorized"
        )
        info_table.add_row("Timeout:", format_duration(metadata.timeout))
        info_table.add_row("Handler:", repr(tool.handler))

        console.print(info_table)

    except ConfigError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(1)


@tools_app.command("call")
def call_tool(
    ctx: typer.Context,
    tool_name: str = typer.Argument(help="Name of the tool to call"),
    param: list[str] | None = typer.Option(
        None, "--param", "-p", help="Tool parameter as key=value (repeatable)"
    ),
    json_params: str | None = typer.Option(
        None, "--json", "-j", help="Tool parameters as a JSON object"
    ),
    caller: str | None = typer.Option(None, "--caller", help="Caller identity to log"),
    repeat: int = typer.Option(1, "--repeat", "-n", min=1, help="Number of calls"),
    show_stats: bool = typer.Option(False, "--stats", help="Show bridge statistics"),
    config_file: Path | None = typer.Option(
        None, "--file", "-f", help="Configuration file to use"
    ),
):
    """Call a tool through a freshly built bridge"""
    try:
        settings = load_settings(ctx, config_file)
        params = parse_params(param, json_params)
        bridge = create_bridge(settings)

        async def _run():
            results = []
            for _ in range(repeat):
                results.append(await bridge.call_tool(tool_name, params, caller))
            return results

        results = asyncio.run(_run())

        logs = bridge.get_call_logs()
        for i, result in enumerate(results):
            duration = logs[i - len(results)].duration if len(logs) >= len(results) else None
            print_tool_result(tool_name, result, duration)

        if show_stats:
            console.print()
            print_info("Bridge Statistics")
            console.print(build_stats_table(bridge.get_stats()))

        if not results[-1].success:
            raise typer.Exit(1)

    except ConfigError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(1)


@tools_app.callback(invoke_without_command=True)
def tools_callback(ctx: typer.Context):
    """Tool inspection and call commands"""
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()

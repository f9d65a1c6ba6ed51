"""Rich formatting utilities for terminal output"""

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from toolbridge.models.tools import BridgeStats, ToolMetadata, ToolResult

console = Console()


def print_error(message: str):
    """Print an error message"""
    console.print(f"[red bold]Error:[/red bold] {message}")


def print_success(message: str):
    """Print a success message"""
    console.print(f"[green]✓[/green] {message}")


def print_warning(message: str):
    """Print a warning message"""
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_info(message: str):
    """Print an info message"""
    console.print(f"[blue]ℹ[/blue] {message}")


def format_duration(duration_ms: float) -> str:
    """Format a duration in milliseconds for display"""
    if duration_ms >= 1000:
        return f"{duration_ms / 1000:.2f}s"
    return f"{duration_ms:.1f}ms"


def format_data(data: Any) -> str:
    """Render tool output as text, pretty-printing JSON-compatible values"""
    if isinstance(data, str):
        return data
    try:
        return json.dumps(data, indent=2, default=str)
    except (TypeError, ValueError):
        return repr(data)


def print_tool_result(tool_name: str, result: ToolResult, duration_ms: float | None = None):
    """Print a tool result panel"""
    title = f"{tool_name}"
    if duration_ms is not None:
        title += f" ({format_duration(duration_ms)})"

    if result.success:
        if result.data is not None:
            body = Text(format_data(result.data))
        else:
            body = Text("No data", style="dim")
        panel = Panel(body, title=f"✓ {title}", title_align="left", border_style="green")
    else:
        body = Text(result.error or "Unknown error")
        if result.code:
            body = Text.assemble((f"{result.code.value}\n", "bold"), body)
        panel = Panel(
            body,
            title=f"✗ {title}",
            title_align="left",
            border_style="red",
        )

    console.print(panel)


def build_tools_table(tools: list[ToolMetadata]) -> Table:
    """Build a table of registered tools"""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Tool Name", style="cyan", no_wrap=True)
    table.add_column("Description", style="white")
    table.add_column("Category", style="green", no_wrap=True)
    table.add_column("Timeout", style="yellow", no_wrap=True)
    table.add_column("Calls", style="blue", no_wrap=True)

    for metadata in tools:
        description = metadata.description
        if len(description) > 60:
            description = description[:60] + "..."

        table.add_row(
            metadata.name,
            description,
            metadata.category.value if metadata.category else "uncategorized",
            format_duration(metadata.timeout),
            str(metadata.call_count),
        )

    return table


def build_stats_table(stats: BridgeStats) -> Table:
    """Build a table summarising bridge statistics"""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("Total tools:", str(stats.total_tools))
    table.add_row("Total calls:", str(stats.total_calls))
    table.add_row("Average duration:", format_duration(stats.average_call_duration))

    categories = ", ".join(
        f"{category} ({count})" for category, count in stats.tools_by_category.items()
    )
    table.add_row("Categories:", categories or "None")

    most_called = ", ".join(
        f"{item.tool_name} ({item.calls})" for item in stats.most_called_tools
    )
    table.add_row("Most called:", most_called or "None")

    return table

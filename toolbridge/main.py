"""toolbridge command line: global options and sub-command wiring"""

from pathlib import Path

import typer
from rich.console import Console

from toolbridge import __version__
from toolbridge.cli.common import CLIOptions
from toolbridge.cli.config import config_app
from toolbridge.cli.tools import tools_app

app = typer.Typer(
    name="toolbridge",
    help="Toolbridge - in-process tool registry and dispatcher",
    add_completion=False,
)
app.add_typer(config_app, name="config", help="Configuration commands")
app.add_typer(tools_app, name="tools", help="Tool inspection and call commands")

console = Console()


@app.command()
def version():
    """Show toolbridge version"""
    console.print(f"toolbridge v{__version__}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_file: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file used by every sub-command",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log at DEBUG level regardless of configuration"
    ),
):
    """Inspect discovered tools and call them through a bridge."""
    ctx.obj = CLIOptions(config_file=config_file, verbose=verbose)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()


if __name__ == "__main__":
    app()

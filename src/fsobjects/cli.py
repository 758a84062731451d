"""CLI commands using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from fsobjects.context import AppContext

import typer
import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from fsobjects import __version__
from fsobjects.context import create_context
from fsobjects.errors import FileSystemObjectError
from fsobjects.objects import ConfiguredDirectory, FreeformConfiguration

app = typer.Typer(
    name="fsobjects",
    help="Inspect and initialize directories holding a YAML configuration file",
    no_args_is_help=True,
)

console = Console()

ConfigFileOption = Annotated[
    str | None,
    typer.Option(
        "--config-file",
        "-c",
        help="Configuration file name (default: $FSOBJECTS_CONFIG_FILE or config.yaml)",
    ),
]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"fsobjects v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Inspect and initialize directories holding a YAML configuration file."""
    pass


def show_success(message: str) -> None:
    """Show success message."""
    console.print(f"[green]✓[/green] {message}")


def show_error(message: str) -> None:
    """Show error message."""
    console.print(f"[red]✗[/red] {message}")


def _resolve_context(config_file: str | None, context: AppContext | None) -> AppContext:
    """Get the injected context or build one, applying the file name override."""
    ctx = context or create_context()
    if config_file:
        ctx.config_file_name = config_file
    return ctx


def _open(ctx: AppContext, path: Path, auto_init: bool) -> ConfiguredDirectory:
    """Open a configured directory with a schema-less configuration.

    Raises:
        typer.Exit: If the directory cannot be opened.
    """
    try:
        return ConfiguredDirectory(
            ctx.filesystem,
            path,
            ctx.config_file_name,
            auto_init=auto_init,
            config_type=FreeformConfiguration,
        )
    except FileSystemObjectError as e:
        show_error(str(e))
        raise typer.Exit(1) from e


@app.command()
def check(
    path: Annotated[Path, typer.Argument(help="Directory to check")],
    config_file: ConfigFileOption = None,
    _context=None,
) -> None:
    """Check whether a directory holds a configuration file."""
    ctx = _resolve_context(config_file, _context)

    if ConfiguredDirectory.is_path_to_such_object(ctx.filesystem, path, ctx.config_file_name):
        show_success(f"{path} is a configured directory")
    else:
        show_error(f"{path} is not a configured directory (missing {ctx.config_file_name})")
        raise typer.Exit(1)


@app.command()
def scan(
    parent: Annotated[Path, typer.Argument(help="Directory to scan")],
    config_file: ConfigFileOption = None,
    _context=None,
) -> None:
    """List the configured directories under a parent directory."""
    ctx = _resolve_context(config_file, _context)

    try:
        found = ConfiguredDirectory.find_in(ctx.filesystem, parent, ctx.config_file_name)
    except FileSystemObjectError as e:
        show_error(str(e))
        raise typer.Exit(1) from e

    if not found:
        console.print(f"[yellow]No configured directories in {parent}[/yellow]")
        return

    table = Table(title=f"Configured directories in {parent}")
    table.add_column("Name", style="cyan")
    table.add_column("Path")
    for path in found:
        table.add_row(path.name, str(path))
    console.print(table)


@app.command()
def init(
    path: Annotated[Path, typer.Argument(help="Directory to initialize")],
    config_file: ConfigFileOption = None,
    _context=None,
) -> None:
    """Create a directory and an empty configuration file if missing."""
    ctx = _resolve_context(config_file, _context)
    directory = _open(ctx, path, auto_init=True)
    show_success(f"Initialized {directory.configuration_path}")


@app.command()
def show(
    path: Annotated[Path, typer.Argument(help="Configured directory")],
    config_file: ConfigFileOption = None,
    _context=None,
) -> None:
    """Print the configuration of a configured directory."""
    ctx = _resolve_context(config_file, _context)
    directory = _open(ctx, path, auto_init=False)

    content = yaml.safe_dump(directory.configuration.as_dict(), sort_keys=False)
    console.print(f"[bold]{directory.configuration_path}[/bold]")
    console.print(Syntax(content or "{}\n", "yaml"))


if __name__ == "__main__":
    app()

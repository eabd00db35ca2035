"""
file-provider CLI - drive File resources through their lifecycle locally.
"""

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .engine import Action, ReconcileResult, Reconciler
from .errors import ValidationFailedError
from .lifecycle import build_provider
from .settings import get_settings
from .state import StateStore

# Setup
app = typer.Typer(
    name="file-provider",
    help="Manage files as declarative resources",
    add_completion=False,
)
console = Console()


def configure_logging():
    """Configure logging based on settings."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# Configure logging on module import
configure_logging()


_SYMBOLS = {
    Action.CREATE: ("+", "green"),
    Action.UPDATE: ("~", "yellow"),
    Action.REPLACE: ("+-", "magenta"),
    Action.DELETE: ("-", "red"),
    Action.REFRESH: ("~", "cyan"),
    Action.SAME: (" ", "dim"),
}


def _reconciler(state_file: Path | None) -> Reconciler:
    store = StateStore(state_file or get_settings().state_file)
    return Reconciler(store, build_provider())


def _raw_inputs(
    content: str | None,
    content_file: Path | None,
    path: str | None,
    force: bool,
) -> dict:
    """Assemble raw inputs from command line options.

    Raises:
        typer.BadParameter: If neither or both content sources are given
    """
    if (content is None) == (content_file is None):
        raise typer.BadParameter("pass exactly one of --content or --content-file")
    if content_file is not None:
        content = content_file.read_text(encoding="utf-8")

    raw = {"content": content, "force": force}
    if path is not None:
        raw["path"] = path
    return raw


def _print_result(result: ReconcileResult) -> None:
    symbol, color = _SYMBOLS[result.action]
    verb = "will" if result.dry_run else "did"
    console.print(
        f"[{color}]{symbol} {result.name}[/{color}] "
        f"[dim]({verb} {result.action.value}: {result.id})[/dim]"
    )
    if result.diff is not None:
        for field, change in result.diff.detailed_diff.items():
            console.print(f"    [cyan]{field}[/cyan]: {change.kind.value}")


def _handle_command_error(e: Exception, command_type: str) -> None:
    """Print a command failure and exit.

    Raises:
        typer.Exit: Always exits with code 1
    """
    if isinstance(e, ValidationFailedError):
        console.print(f"\n[bold red]✗ {command_type.capitalize()} failed:[/bold red] invalid inputs")
        for failure in e.failures:
            console.print(f"  [dim]{failure.property}: {failure.reason}[/dim]")
    else:
        console.print(f"\n[bold red]✗ {command_type.capitalize()} failed:[/bold red] {e}")
    raise typer.Exit(code=1)


_STATE_FILE_OPTION = typer.Option(
    None, "--state-file", help="State file (overrides FP_STATE_FILE)"
)


def _up(name, content, content_file, path, force, state_file, dry_run, command):
    raw = _raw_inputs(content, content_file, path, force)
    try:
        result = _reconciler(state_file).up(name, raw, dry_run=dry_run)
    except Exception as e:
        _handle_command_error(e, command)
    _print_result(result)


@app.command()
def apply(
    name: str = typer.Argument(..., help="Resource name (default file path)"),
    content: str = typer.Option(None, "--content", help="File content"),
    content_file: Path = typer.Option(
        None, "--content-file", help="Read file content from this file"
    ),
    path: str = typer.Option(None, "--path", help="File path (default: NAME)"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
    state_file: Path = _STATE_FILE_OPTION,
):
    """Create or update a file resource."""
    _up(name, content, content_file, path, force, state_file, False, "apply")


@app.command()
def plan(
    name: str = typer.Argument(..., help="Resource name (default file path)"),
    content: str = typer.Option(None, "--content", help="File content"),
    content_file: Path = typer.Option(
        None, "--content-file", help="Read file content from this file"
    ),
    path: str = typer.Option(None, "--path", help="File path (default: NAME)"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
    state_file: Path = _STATE_FILE_OPTION,
):
    """Preview changes without touching the filesystem."""
    _up(name, content, content_file, path, force, state_file, True, "plan")


@app.command()
def refresh(
    name: str = typer.Argument(..., help="Resource name"),
    state_file: Path = _STATE_FILE_OPTION,
):
    """Re-read a recorded file from disk."""
    try:
        result = _reconciler(state_file).refresh(name)
    except Exception as e:
        _handle_command_error(e, "refresh")
    _print_result(result)


@app.command()
def destroy(
    name: str = typer.Argument(..., help="Resource name"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Only show what would be deleted"),
    state_file: Path = _STATE_FILE_OPTION,
):
    """Delete a recorded file and forget it."""
    try:
        result = _reconciler(state_file).destroy(name, dry_run=dry_run)
    except Exception as e:
        _handle_command_error(e, "destroy")
    _print_result(result)


@app.command()
def state(state_file: Path = _STATE_FILE_OPTION):
    """List recorded resources."""
    try:
        store = StateStore(state_file or get_settings().state_file)
    except Exception as e:
        _handle_command_error(e, "state")

    rows = store.items()
    if not rows:
        console.print("[dim]No resources recorded[/dim]")
        return

    table = Table(title="Recorded resources")
    table.add_column("Name", style="bright_white")
    table.add_column("ID", style="cyan")
    table.add_column("Force")
    table.add_column("Bytes", justify="right")
    for name, id_, recorded in rows:
        table.add_row(
            name,
            id_,
            str(recorded.force).lower(),
            str(len(recorded.content.encode(get_settings().encoding))),
        )
    console.print(table)


@app.command()
def schema():
    """Print the provider schema as JSON."""
    typer.echo(json.dumps(build_provider().schema(), indent=2))


def main():
    """Entry point for the console script."""
    app()


if __name__ == "__main__":
    main()

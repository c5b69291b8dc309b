"""CLI commands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="keymenu",
    help="Keyboard-driven terminal menus.",
    no_args_is_help=True,
)
console = Console()


def _parse_mode(mode: str):
    from keymenu.models import SelectionMode

    try:
        return SelectionMode.parse(mode)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _setup_logging(log_file: Path | None) -> None:
    """Menus own the screen, so log records only ever go to a file."""
    if log_file is None:
        return
    logging.basicConfig(
        filename=str(log_file),
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def demo(
    mode: Annotated[
        str, typer.Option("--mode", "-m", help="Selection mode: arrow or key-string")
    ] = "arrow",
    log_file: Annotated[
        Path | None, typer.Option("--log-file", help="Write debug logs to this file")
    ] = None,
):
    """Run the national parks sample menus."""
    from keymenu.demo import run_demo
    from keymenu.models import MenuExit

    selection_mode = _parse_mode(mode)
    _setup_logging(log_file)

    result = run_demo(selection_mode)
    if result is MenuExit.EXIT_ALL:
        console.print("[dim]Exited all menus.[/dim]")


@app.command()
def config(
    config_file: Annotated[
        Path | None, typer.Option("--file", "-f", help="Settings file to read")
    ] = None,
):
    """Show the effective default menu settings."""
    from keymenu.config import ConfigMeta, MenuConfig
    from keymenu.models import SelectionMode

    cfg = MenuConfig.load(config_file=config_file)

    table = Table(title="keymenu settings", border_style="blue")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_column("Description", style="dim")
    for name, value in cfg.as_dict().items():
        if isinstance(value, SelectionMode):
            value = value.value
        table.add_row(name, repr(value), ConfigMeta.SETTINGS.get(name, ""))
    console.print(table)

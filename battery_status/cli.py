from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .display import detail_rows, display_state, is_critical, status_line
from .errors import AcquisitionError
from .notify import send_notification
from .snapshot import BatterySnapshot, acquire
from .sysfs import DEFAULT_SYSFS_ROOT

log = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()

DEFAULT_DEVICE = "BAT0"
LEFT_CLICK = 1
RIGHT_CLICK = 3
# i3blocks paints the block as urgent on this exit status.
CRITICAL_EXIT_CODE = 33
UNAVAILABLE_LINE = '<span font_desc="Font Awesome"> ? </span>--%'


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO, format="%(message)s"
    )


def _env(key: str) -> Optional[str]:
    value = os.environ.get(key)
    return value or None


def resolve_device(device: Optional[str]) -> str:
    if device:
        return device
    return _env("BLOCK_INSTANCE") or DEFAULT_DEVICE


def resolve_button() -> int:
    raw = _env("BLOCK_BUTTON")
    if raw is None:
        return 0
    try:
        return int(raw.strip())
    except ValueError:
        log.debug("Ignoring unparsable BLOCK_BUTTON=%r", raw)
        return 0


def _print_block(line: str) -> None:
    # full_text, then short_text
    typer.echo(line)
    typer.echo(line)


def _acquire_or_exit(device: str, sysfs_root: Path) -> BatterySnapshot:
    try:
        return acquire(device, sysfs_root=sysfs_root)
    except AcquisitionError as exc:
        log.error("Battery data unavailable: %s", exc)
        raise typer.Exit(code=1)


def handle_button(button: int, snapshot: BatterySnapshot) -> None:
    if button == LEFT_CLICK:
        send_notification("Time Remaining", snapshot.time_remaining())
    elif button == RIGHT_CLICK:
        body = "\n".join(f"{label}: {value}" for label, value in detail_rows(snapshot))
        send_notification("Battery Stats", body)


@app.command("status")
def status_command(
    device: Optional[str] = typer.Option(
        None, "--device", "-d", help="Power supply name (or set BLOCK_INSTANCE)"
    ),
    sysfs_root: Path = typer.Option(
        DEFAULT_SYSFS_ROOT, help="Directory holding the power supply devices"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Print the i3blocks status line for one battery."""
    configure_logging(verbose)
    name = resolve_device(device)
    try:
        snapshot = acquire(name, sysfs_root=sysfs_root)
    except AcquisitionError as exc:
        log.error("Battery data unavailable: %s", exc)
        _print_block(UNAVAILABLE_LINE)
        raise typer.Exit(code=1)

    handle_button(resolve_button(), snapshot)

    try:
        state = display_state(snapshot)
        # Raw percent: a Full battery can still report a critical charge.
        percent = snapshot.percent_remaining()
    except ValueError as exc:
        log.error("Cannot compute charge for %s: %s", name, exc)
        _print_block(UNAVAILABLE_LINE)
        raise typer.Exit(code=1)

    _print_block(status_line(state))

    if is_critical(percent):
        raise typer.Exit(code=CRITICAL_EXIT_CODE)


@app.command("details")
def details_command(
    device: Optional[str] = typer.Option(
        None, "--device", "-d", help="Power supply name (or set BLOCK_INSTANCE)"
    ),
    sysfs_root: Path = typer.Option(
        DEFAULT_SYSFS_ROOT, help="Directory holding the power supply devices"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Show every attribute and derived metric of one battery."""
    configure_logging(verbose)
    snapshot = _acquire_or_exit(resolve_device(device), sysfs_root)
    console.print(_details_table(snapshot))


def _details_table(snapshot: BatterySnapshot) -> Table:
    table = Table(
        title="Battery Stats",
        show_lines=False,
        box=box.SIMPLE,
        header_style="bold",
    )
    table.add_column("Field")
    table.add_column("Value")
    for label, value in detail_rows(snapshot):
        table.add_row(label, value)
    return table


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()


def main_status() -> None:  # pragma: no cover - thin Typer wrapper
    typer.run(status_command)

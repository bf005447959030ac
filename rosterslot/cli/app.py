"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import List, Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from ..adapters.roster_file import RosterFile
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import RosterSlotError
from ..domain.predicates import TagsContainKeywords
from ..domain.roster import Roster
from ..services.slot_booking import SlotBookingService

app = typer.Typer(
    name="rosterslot",
    help="Keep a student roster and find the next free lesson slot",
    add_completion=False
)

console = Console()


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """Roster and lesson slot tools."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    return AppConfig.load_from_yaml(config_path)


def _load_roster(config: AppConfig, roster_file: Optional[Path]) -> Roster:
    return RosterFile(roster_file or config.roster_file).load()


def _parse_clock(value: Optional[str], label: str):
    if value is None:
        return None
    try:
        return pendulum.from_format(value, "H:mm").time()
    except ValueError as e:
        console.print(f"[red]Could not parse {label} '{value}' (expected HH:MM): {e}[/red]")
        raise typer.Exit(1)


def _resolve_now(at: Optional[str]):
    """Return (today, now) from ``--at`` or the local wall clock."""
    if at is None:
        current = pendulum.now()
    else:
        try:
            current = pendulum.from_format(at, "YYYY-MM-DD HH:mm")
        except ValueError as e:
            console.print(f"[red]Could not parse --at '{at}' (expected YYYY-MM-DD HH:MM): {e}[/red]")
            raise typer.Exit(1)
    return current.date(), current.time()


@app.command("next-slot")
def next_slot(
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    roster_file: Annotated[Optional[Path], typer.Option("--roster", "-r", help="Roster file. Defaults to the one in the config.")] = None,
    start: Annotated[Optional[str], typer.Option("--start", help="Window start (HH:MM)")] = None,
    end: Annotated[Optional[str], typer.Option("--end", help="Window end (HH:MM)")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", min=1, help="Lesson duration in minutes")] = None,
    at: Annotated[Optional[str], typer.Option("--at", help="Pretend the current time is 'YYYY-MM-DD HH:MM'")] = None,
):
    """
    Find the next free lesson slot.

    Examples:

        rosterslot next-slot
        rosterslot next-slot --start 10:00 --end 14:00 --duration 60
        rosterslot next-slot --at "2026-10-19 08:00"
    """
    try:
        config = _load_config(config_file)
        roster = _load_roster(config, roster_file)

        window = config.defaults.get_time_window(
            start_time=_parse_clock(start, "--start"),
            end_time=_parse_clock(end, "--end"),
            duration_minutes=duration,
        )
        today, now = _resolve_now(at)

        service = SlotBookingService(roster=roster, window=window)
        slot = service.find_next_slot(today=today, now=now)

        console.print(f"[bold green]Next free slot:[/bold green] {slot.format_display()}")

    except (FileNotFoundError, ValueError, RosterSlotError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command("list")
def list_students(
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file")] = None,
    roster_file: Annotated[Optional[Path], typer.Option("--roster", "-r", help="Roster file")] = None,
    sort: Annotated[Optional[str], typer.Option("--sort", help="Sort by 'name' or '-name' (descending)")] = None,
    tags: Annotated[Optional[List[str]], typer.Option("--tag", "-t", help="Only students tagged with this word. Repeat to require several.")] = None,
):
    """
    List the students in the roster with their lessons.

    Examples:

        rosterslot list --sort name
        rosterslot list --tag math --tag sec3
    """
    try:
        config = _load_config(config_file)
        roster = _load_roster(config, roster_file)
        matches = TagsContainKeywords(tuple(tags)) if tags else None
    except (FileNotFoundError, ValueError, RosterSlotError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if sort is not None:
        if sort.lstrip("-") != "name":
            console.print(f"[red]Unknown sort key '{sort}'. Use 'name' or '-name'.[/red]")
            raise typer.Exit(1)
        roster.sort(key=lambda student: student.name.casefold(), reverse=sort.startswith("-"))

    if not len(roster):
        console.print("[yellow]The roster is empty.[/yellow]")
        return

    students = roster.filtered(matches) if matches is not None else roster.snapshot()
    if not students:
        console.print(f"[yellow]No students tagged with: {', '.join(matches.keywords)}[/yellow]")
        return

    table = Table(
        title="Roster",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name", style="bold yellow")
    table.add_column("Tags", style="dim")
    table.add_column("Lesson")

    for student in students:
        table.add_row(
            student.name,
            ", ".join(sorted(student.tags)),
            str(student.lesson) if student.lesson else "-"
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]rosterslot[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()

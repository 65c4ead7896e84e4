"""
Main CLI application using Typer.
"""

import logging
from datetime import date
from pathlib import Path
from typing import List, Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from ..adapters.yaml_store import YamlProviderStore
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import SchedulingError
from ..domain.formatting import (
    describe_booking_period,
    format_date_fr,
    format_hours_fr,
    format_interval_fr,
    summarize_schedule,
    weekday_from_name,
    weekday_name,
)
from ..domain.hours import HoursSummary
from ..domain.models import BookingSlot, WeekDay
from ..domain.overlap import OccupancyLevel
from ..domain.schedule import expand_to_week
from ..domain.timeutils import parse_calendar_date, parse_interval
from ..services.booking_form import BookingFormService, WeekdayState, first_occurrence
from ..services.provider_search import ProviderSearchService, compute_availability

app = typer.Typer(
    name="carebook",
    help="Availability and slot booking for childcare providers",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./carebook.yaml")]
TodayOption = Annotated[Optional[str], typer.Option("--today", help="Reference date (YYYY-MM-DD). Defaults to today.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logs.")]

LEVEL_STYLES = {
    OccupancyLevel.FREE: "green",
    OccupancyLevel.LOW: "cyan",
    OccupancyLevel.MEDIUM: "blue",
    OccupancyLevel.HIGH: "magenta",
    OccupancyLevel.FULL: "bold red",
}


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load_store(config_file: Optional[Path]) -> YamlProviderStore:
    config_path = config_file or get_default_config_path()
    config = AppConfig.load_from_yaml(config_path)
    return YamlProviderStore(config)


def _resolve_today(today: Optional[str]) -> date:
    """The system clock is only read here, at the edge."""
    if today:
        return parse_calendar_date(today)
    return pendulum.today().date()


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Erreur:[/bold red] {error}")
    raise typer.Exit(1)


@app.command()
def availability(
    provider: Annotated[Optional[str], typer.Argument(help="Provider id or name. Without it every provider is listed.")] = None,
    config_file: ConfigOption = None,
    today: TodayOption = None,
    verbose: VerboseOption = False,
):
    """
    Show the earliest availability per weekday.

    Examples:

        carebook availability
        carebook availability marie --today 2026-01-10
    """
    _setup_logging(verbose)
    try:
        store = _load_store(config_file)
        reference = _resolve_today(today)
        providers = [store.get_provider(provider)] if provider else store.list_providers()

        for item in providers:
            result = compute_availability(item, reference)

            table = Table(
                title=f"{item.name} - {item.capacity.max_concurrent} place(s)",
                show_header=True,
                header_style="bold cyan"
            )
            table.add_column("Jour", style="bold yellow")
            table.add_column("CDI", justify="right")
            table.add_column("CDD", justify="right")
            table.add_column("Disponibilité")

            for weekday, info in sorted(result.per_weekday.items()):
                if info.saturated_indefinitely:
                    status = "[red]Complet (CDI)[/red]"
                elif info.available_from <= reference:
                    status = "[green]Disponible[/green]"
                else:
                    status = f"[yellow]À partir du {format_date_fr(info.available_from)}[/yellow]"
                table.add_row(
                    weekday_name(weekday),
                    str(info.indefinite_count),
                    str(info.dated_count),
                    status,
                )

            console.print()
            console.print(table)

            if not result.has_schedule:
                console.print("[yellow]⚠ Aucun horaire configuré.[/yellow]")
            elif result.is_fully_booked:
                console.print("[red]✗ Complet, aucune disponibilité prévisible.[/red]")
            elif result.fully_available_now:
                console.print("[green]✓ Disponible dès maintenant sur tous les jours travaillés.[/green]")
            else:
                days = ", ".join(weekday_name(w) for w in sorted(result.earliest_weekdays))
                console.print(
                    f"Première disponibilité: [bold]{format_date_fr(result.earliest_date)}[/bold] ({days})"
                )
        console.print()

    except (FileNotFoundError, SchedulingError, ValueError) as e:
        _fail(e)


@app.command()
def search(
    days: Annotated[Optional[List[str]], typer.Option("--day", "-d", help="Weekday the provider must work (lundi, mar, ...). Repeatable.")] = None,
    start: Annotated[Optional[str], typer.Option("--start", help="Requested start date (YYYY-MM-DD)")] = None,
    available: Annotated[bool, typer.Option("--available", help="Only providers with open capacity.")] = False,
    now: Annotated[bool, typer.Option("--now", help="Only providers fully available today.")] = False,
    config_file: ConfigOption = None,
    today: TodayOption = None,
    verbose: VerboseOption = False,
):
    """
    Search providers by worked weekdays and availability.

    Examples:

        carebook search --day lundi --day mardi
        carebook search --available --start 2026-03-02
        carebook search --now
    """
    _setup_logging(verbose)
    try:
        store = _load_store(config_file)
        reference = _resolve_today(today)
        weekdays = [weekday_from_name(day) for day in days or []]
        start_date = parse_calendar_date(start) if start else None

        hits = ProviderSearchService(store).search(
            today=reference,
            weekdays=weekdays,
            start_date=start_date,
            only_available=available,
            only_fully_available_now=now,
        )

        console.print()
        if not hits:
            console.print("[yellow]⚠ Aucune assistante trouvée avec ces critères.[/yellow]\n")
            return

        table = Table(
            title=f"{len(hits)} assistante(s) trouvée(s)",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Nom", style="bold yellow")
        table.add_column("Horaires")
        table.add_column("Première disponibilité")

        for hit in hits:
            result = hit.availability
            if not result.has_schedule:
                first = "[dim]Aucun horaire[/dim]"
            elif result.is_fully_booked:
                first = "[red]Complet[/red]"
            elif result.fully_available_now:
                first = "[green]Maintenant[/green]"
            else:
                first = format_date_fr(result.earliest_date)
            table.add_row(hit.provider.name, summarize_schedule(hit.provider.schedule), first)

        console.print(table)
        console.print()

    except (FileNotFoundError, SchedulingError, ValueError) as e:
        _fail(e)


@app.command()
def schedule(
    provider: Annotated[str, typer.Argument(help="Provider id or name")],
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Show a provider's weekly schedule and hours summary.
    """
    _setup_logging(verbose)
    try:
        item = _load_store(config_file).get_provider(provider)
        week = expand_to_week(item.schedule)

        table = Table(title=item.name, show_header=True, header_style="bold cyan")
        table.add_column("Jour", style="bold yellow")
        table.add_column("Horaires")

        for weekday in WeekDay:
            interval = week[weekday]
            table.add_row(
                weekday_name(weekday),
                format_interval_fr(interval) if interval else "[dim]Non travaillé[/dim]",
            )

        summary = HoursSummary.from_schedule(item.schedule, item.vacation_weeks)

        console.print()
        console.print(table)
        console.print(Panel.fit(
            f"[bold]{summarize_schedule(item.schedule)}[/bold]\n\n"
            f"Heures / semaine: {format_hours_fr(summary.weekly_hours)}\n"
            f"Heures / mois: ~{format_hours_fr(summary.monthly_hours)} "
            f"({summary.vacation_weeks} semaines de congés)",
            title="Résumé"
        ))
        console.print()

    except (FileNotFoundError, SchedulingError, ValueError) as e:
        _fail(e)


@app.command()
def occupancy(
    provider: Annotated[str, typer.Argument(help="Provider id or name")],
    day: Annotated[str, typer.Option("--date", help="Calendar date (YYYY-MM-DD)")],
    step: Annotated[Optional[int], typer.Option("--step", help="Slot length in minutes")] = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Show slot occupancy of a provider on a given date.
    """
    _setup_logging(verbose)
    try:
        store = _load_store(config_file)
        item = store.get_provider(provider)
        target = parse_calendar_date(day)
        form = BookingFormService.for_provider(item)

        grid = form.occupancy_grid(target, step or store.config.defaults.slot_minutes)

        console.print()
        if not grid:
            console.print(f"[yellow]⚠ {weekday_name(WeekDay.of(target)).capitalize()} n'est pas travaillé.[/yellow]\n")
            return

        table = Table(
            title=f"{item.name} - {weekday_name(WeekDay.of(target))} {format_date_fr(target)}",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Créneau", style="bold yellow")
        table.add_column("Réservées", justify="right")
        table.add_column("Places libres", justify="right")

        for cell in grid:
            style = LEVEL_STYLES[cell.level]
            table.add_row(
                format_interval_fr(cell.interval),
                f"[{style}]{cell.occupied}/{item.capacity.max_concurrent}[/{style}]",
                str(cell.remaining),
            )

        console.print(table)

        active = [b for b in item.confirmed_bookings() if b.is_active_on(target) and b.occupies(WeekDay.of(target))]
        for booking in active:
            console.print(f"  • {booking.id}: {describe_booking_period(booking)}")

        waiting = [b for b in item.pending_bookings() if b.is_active_on(target) and b.occupies(WeekDay.of(target))]
        for booking in waiting:
            console.print(f"  • {booking.id}: {describe_booking_period(booking)} [dim](en attente)[/dim]")
        console.print()

    except (FileNotFoundError, SchedulingError, ValueError) as e:
        _fail(e)


@app.command()
def check(
    provider: Annotated[str, typer.Argument(help="Provider id or name")],
    day: Annotated[str, typer.Option("--day", help="Weekday (lundi, mar, ...)")],
    start_time: Annotated[str, typer.Option("--from", help="Slot start (HH:MM)")],
    end_time: Annotated[str, typer.Option("--to", help="Slot end (HH:MM)")],
    start: Annotated[str, typer.Option("--start", help="Booking start date (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
    today: TodayOption = None,
    verbose: VerboseOption = False,
):
    """
    Check whether a booking request could be accepted.

    Example:

        carebook check marie --day lundi --from 08:00 --to 17:00 --start 2026-03-02
    """
    _setup_logging(verbose)
    try:
        item = _load_store(config_file).get_provider(provider)
        reference = _resolve_today(today)
        slot = BookingSlot(weekday=weekday_from_name(day), interval=parse_interval(start_time, end_time))
        form = BookingFormService.for_provider(item)

        states = form.weekday_states(reference)
        console.print()
        for weekday, status in states.items():
            style = "green" if status.state is WeekdayState.OPEN else "dim"
            console.print(f"  [{style}]{weekday_name(weekday):<9} {status.label}[/{style}]")
        console.print()

        start_date = parse_calendar_date(start)
        form.validate_request(start_date, [slot], reference)
        console.print(
            f"[bold green]✓ Créneau {weekday_name(slot.weekday)} {format_interval_fr(slot.interval)} "
            f"accepté.[/bold green]"
        )
        console.print(f"Première séance: {format_date_fr(first_occurrence(slot.weekday, start_date))}\n")

    except SchedulingError as e:
        console.print(f"[bold red]✗ Demande refusée:[/bold red] {e}\n")
        raise typer.Exit(1)

    except (FileNotFoundError, ValueError) as e:
        _fail(e)


@app.command()
def list_providers(
    config_file: ConfigOption = None,
):
    """
    List all configured providers.
    """
    try:
        store = _load_store(config_file)

        if not store.config.providers:
            console.print("[yellow]Aucune assistante dans la config.[/yellow]")
            return

        table = Table(
            title="Assistantes configurées",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Id", style="dim")
        table.add_column("Nom", style="bold yellow")
        table.add_column("Places", justify="right")
        table.add_column("Horaires")

        for item in store.list_providers():
            table.add_row(
                item.id,
                item.name,
                str(item.capacity.max_concurrent),
                summarize_schedule(item.schedule),
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, SchedulingError, ValueError) as e:
        _fail(e)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]carebook[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()

"""Rich terminal rendering for events, registrations and the dashboard."""

from typing import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from modules.events.models import DashboardStats, Event
from modules.registrations.models import Participant, RegisteredEvent

console = Console()


def format_when(event: Event) -> str:
    """Date plus the display time when there is one, e.g. "2026-11-02 09:00 AM"."""
    when = event.date.isoformat()
    return f"{when} {event.time}" if event.time else when


def events_table(events: Sequence[Event], title: str = "Events") -> Table:
    table = Table(title=title, show_lines=False)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("When")
    table.add_column("Location")
    for event in events:
        table.add_row(event.id, event.title, format_when(event), event.location)
    return table


def event_panel(event: Event, participant_count: int, registered: bool | None = None) -> Panel:
    """Detail view of one event.

    registered is None when nobody is signed in.
    """
    lines = [
        f"[bold]When:[/bold] {format_when(event)}",
        f"[bold]Where:[/bold] {event.location}",
        f"[bold]Participants:[/bold] {participant_count}",
        f"[bold]Image:[/bold] {event.image_url}",
        "",
        event.description,
    ]
    if registered is not None:
        status = "[green]You are registered[/green]" if registered else "[dim]Not registered[/dim]"
        lines.insert(3, f"[bold]Status:[/bold] {status}")
    return Panel("\n".join(lines), title=event.title, subtitle=event.id)


def registrations_table(entries: Sequence[RegisteredEvent]) -> Table:
    table = Table(title="My events")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("When")
    table.add_column("Registered at")
    for entry in entries:
        table.add_row(
            entry.event.id,
            entry.event.title,
            format_when(entry.event),
            entry.registered_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


def participants_table(event: Event, participants: Sequence[Participant]) -> Table:
    table = Table(title=f"Participants: {event.title}")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Registered at")
    for participant in participants:
        table.add_row(
            participant.name or "[dim]unknown[/dim]",
            participant.email or "[dim]unknown[/dim]",
            participant.registered_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


def stats_panel(stats: DashboardStats) -> Panel:
    return Panel(
        f"Total events: [bold]{stats.total_events}[/bold]\n"
        f"Total participants: [bold]{stats.total_participants}[/bold]\n"
        f"Upcoming events: [bold]{stats.upcoming_events}[/bold]",
        title="Dashboard",
    )

"""
Club Events - terminal shell.

Browse events, register for them, and run the organizer dashboard
against the same Supabase backend as the API. Commands that need an
account take --email/--password; organizer commands sign in through
the admin portal.
"""

import argparse
import asyncio
import datetime as dt
import logging
import sys
from pathlib import Path

from rich.logging import RichHandler

from modules.auth.models import Portal
from modules.events.models import EventFields
from shared.exceptions import AuthenticationError, ClubEventsError
from terminal.display import (
    console,
    event_panel,
    events_table,
    participants_table,
    registrations_table,
    stats_panel,
)
from terminal.shell import Shell

USER_COMMANDS = {"register", "cancel", "my-events"}


async def run(args: argparse.Namespace) -> None:
    """Dispatch one command against a fresh shell."""
    with Shell() as shell:
        if args.command == "signup":
            account = await shell.sign_up(args.name, args.email, args.password, args.confirm_password)
            console.print(f"[green]Account created for {account.email}.[/green] Please login.")
            return

        portal = Portal.ADMIN if args.command == "admin" else Portal.USER
        if args.email:
            session = await shell.sign_in(args.email, args.password or "", portal)
            console.print(f"[dim]Signed in as {session.display_name or session.email}[/dim]")

        if args.command == "events":
            if args.featured:
                console.print(events_table(await shell.featured_events(), title="Featured events"))
                return
            page = await shell.list_events(args.search or "", args.sort, args.page, args.page_size)
            if page.message:
                console.print(f"[bold]{page.message}[/bold]")
            if not page.events:
                console.print("[dim]No events found.[/dim]")
                return
            console.print(events_table(page.events))
            if page.has_more:
                console.print(f"[dim]Page {page.page}; more with --page {page.page + 1}[/dim]")

        elif args.command == "show":
            event, count, registered = await shell.show_event(args.event_id)
            console.print(event_panel(event, count, registered))

        elif args.command == "register":
            result = await shell.register(args.event_id)
            console.print(f"[green]{result.message}[/green]")

        elif args.command == "cancel":
            result = await shell.cancel(args.event_id)
            console.print(f"[green]{result.message}[/green]")

        elif args.command == "my-events":
            entries = await shell.my_events()
            if not entries:
                console.print("[dim]You have not registered for any events yet.[/dim]")
                return
            console.print(registrations_table(entries))

        elif args.command == "admin":
            await run_admin(shell, args)


async def run_admin(shell: Shell, args: argparse.Namespace) -> None:
    if args.admin_command == "stats":
        console.print(stats_panel(await shell.dashboard()))

    elif args.admin_command == "create":
        fields = EventFields(
            title=args.title,
            description=args.description,
            date=args.date,
            time=args.time,
            location=args.location,
        )
        event = await shell.create_event(fields, args.image)
        console.print(f"[green]Event created successfully![/green] [dim]{event.id}[/dim]")

    elif args.admin_command == "update":
        supplied = {
            name: value
            for name, value in (
                ("title", args.title),
                ("description", args.description),
                ("date", args.date),
                ("time", args.time),
                ("location", args.location),
            )
            if value is not None
        }
        event = await shell.update_event(args.event_id, EventFields(**supplied), args.image)
        console.print(f"[green]Event updated successfully![/green] [dim]{event.id}[/dim]")

    elif args.admin_command == "delete":
        await shell.delete_event(args.event_id)
        console.print("[green]Event deleted successfully![/green]")

    elif args.admin_command == "participants":
        event, participants = await shell.participants(args.event_id)
        if not participants:
            console.print("[dim]No participants yet.[/dim]")
            return
        console.print(participants_table(event, participants))


def _iso_date(value: str) -> dt.date:
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value}")


def _event_field_args(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument("--title", required=required)
    parser.add_argument("--description", required=required)
    parser.add_argument("--date", type=_iso_date, required=required, help="YYYY-MM-DD")
    parser.add_argument("--time", help='Display time, e.g. "09:00 AM"')
    parser.add_argument("--location", required=required)
    parser.add_argument("--image", type=Path, help="Image file to upload")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Club events terminal shell")
    parser.add_argument("--email", help="Account email for commands that need a login")
    parser.add_argument("--password", help="Account password")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    signup = commands.add_parser("signup", help="Create an account")
    signup.add_argument("--name", required=True)
    signup.add_argument("--confirm-password", required=True)

    events = commands.add_parser("events", help="List events")
    events.add_argument("--search", "-s", help="Match title, description or location")
    events.add_argument("--sort", choices=["date-asc", "date-desc", "title-asc", "title-desc"])
    events.add_argument("--page", type=int, default=1)
    events.add_argument("--page-size", type=int, default=20)
    events.add_argument("--featured", action="store_true", help="Only the next three events")

    show = commands.add_parser("show", help="Show one event")
    show.add_argument("event_id")

    for name, help_text in (
        ("register", "Register for an event"),
        ("cancel", "Cancel a registration"),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("event_id")

    commands.add_parser("my-events", help="List your registered events")

    admin = commands.add_parser("admin", help="Organizer commands")
    admin_commands = admin.add_subparsers(dest="admin_command", required=True)
    admin_commands.add_parser("stats", help="Dashboard counters")
    _event_field_args(admin_commands.add_parser("create", help="Create an event"), required=True)
    update = admin_commands.add_parser("update", help="Edit an event")
    update.add_argument("event_id")
    _event_field_args(update, required=False)
    delete = admin_commands.add_parser("delete", help="Delete an event and its registrations")
    delete.add_argument("event_id")
    participants = admin_commands.add_parser("participants", help="List an event's participants")
    participants.add_argument("event_id")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    if args.command == "signup" and not (args.email and args.password):
        parser.error("signup needs --email and --password")
    if (args.command in USER_COMMANDS or args.command == "admin") and not args.email:
        parser.error(f"{args.command} needs --email and --password")

    try:
        asyncio.run(run(args))
    except AuthenticationError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        console.print("[dim]Sign in with --email and --password.[/dim]")
        return 1
    except ClubEventsError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

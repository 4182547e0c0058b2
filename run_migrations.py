#!/usr/bin/env python3
"""
Apply the SQL files in migrations/ to the Supabase Postgres database.

Usage:
    python run_migrations.py              # Apply pending migrations
    python run_migrations.py --status     # Show what is applied and pending
    python run_migrations.py --dry-run    # List pending migrations only

Set SUPABASE_DB_URL (Dashboard > Settings > Database > Connection string)
in the environment or .env file.
"""

import argparse
import hashlib
import sys
from dataclasses import dataclass
from pathlib import Path

import psycopg2
from psycopg2 import sql
from rich.console import Console
from rich.table import Table

from shared.config import get_settings

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
LEDGER_TABLE = "_migrations"


@dataclass(frozen=True)
class Migration:
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "Migration":
        digest = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(name=path.name, path=path, checksum=digest)


def discover(directory: Path = MIGRATIONS_DIR) -> list[Migration]:
    """Migration files in name order."""
    return [Migration.from_file(path) for path in sorted(directory.glob("*.sql"))]


def connect():
    db_url = get_settings().supabase_db_url
    if not db_url:
        console.print("[red]Error:[/red] SUPABASE_DB_URL is not set.")
        sys.exit(1)
    try:
        return psycopg2.connect(db_url)
    except psycopg2.Error as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        sys.exit(1)


def applied_checksums(conn) -> dict[str, str]:
    """Create the ledger if needed and return name -> checksum."""
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL(
                "CREATE TABLE IF NOT EXISTS {} ("
                " name TEXT PRIMARY KEY,"
                " checksum TEXT NOT NULL,"
                " applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW())"
            ).format(sql.Identifier(LEDGER_TABLE))
        )
        cur.execute(sql.SQL("SELECT name, checksum FROM {}").format(sql.Identifier(LEDGER_TABLE)))
        rows = cur.fetchall()
    conn.commit()
    return dict(rows)


def pending(migrations: list[Migration], applied: dict[str, str]) -> list[Migration]:
    result = []
    for migration in migrations:
        if migration.name not in applied:
            result.append(migration)
        elif applied[migration.name] != migration.checksum:
            console.print(f"[yellow]Warning:[/yellow] {migration.name} changed after it was applied")
    return result


def apply(conn, migration: Migration) -> None:
    """Run one file and record it, in a single transaction."""
    console.print(f"[blue]Applying[/blue] {migration.name}...")
    try:
        with conn.cursor() as cur:
            cur.execute(migration.path.read_text())
            cur.execute(
                sql.SQL("INSERT INTO {} (name, checksum) VALUES (%s, %s)").format(
                    sql.Identifier(LEDGER_TABLE)
                ),
                (migration.name, migration.checksum),
            )
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        console.print(f"[red]Failed[/red] {migration.name}: {e}")
        raise
    console.print(f"[green]Applied[/green] {migration.name}")


def print_status(migrations: list[Migration], applied: dict[str, str]) -> None:
    if not migrations:
        console.print("[dim]No migrations found.[/dim]")
        return
    table = Table(title="Migrations")
    table.add_column("Migration", style="cyan")
    table.add_column("Status")
    table.add_column("Checksum", style="dim")
    for migration in migrations:
        status = "[green]applied[/green]" if migration.name in applied else "[yellow]pending[/yellow]"
        table.add_row(migration.name, status, migration.checksum)
    console.print(table)


def main() -> None:
    parser = argparse.ArgumentParser(description="Apply Club Events database migrations")
    parser.add_argument("--status", action="store_true", help="Show migration status and exit")
    parser.add_argument("--dry-run", action="store_true", help="List pending migrations without applying")
    args = parser.parse_args()

    migrations = discover()
    conn = connect()
    try:
        applied = applied_checksums(conn)
        if args.status:
            print_status(migrations, applied)
            return

        todo = pending(migrations, applied)
        if not todo:
            console.print("[green]Database is up to date.[/green]")
            return
        for migration in todo:
            if args.dry_run:
                console.print(f"[cyan]Would apply[/cyan] {migration.name}")
            else:
                apply(conn, migration)
    finally:
        conn.close()


if __name__ == "__main__":
    main()

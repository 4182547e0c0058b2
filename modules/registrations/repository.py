"""
Registration repository for database access.

Encapsulates all Supabase queries and data mapping for the
registrations table.
"""

from collections import Counter
from datetime import datetime, timezone

from shared.repository import BaseRepository, Row, malformed_key_returns
from .models import Registration

REGISTRATIONS_TABLE = "registrations"

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


def is_unique_violation(error: Exception) -> bool:
    """Check whether a backend error is a unique-constraint violation."""
    return str(getattr(error, "code", "")) == UNIQUE_VIOLATION


class RegistrationRepository(BaseRepository[Registration]):
    """
    Repository for registration data access.

    Note: This repository does NOT enforce the one-registration-per-user
    rule; the service and the table's unique constraint do.
    """

    table = REGISTRATIONS_TABLE

    @malformed_key_returns(list)
    def find(self, user_id: str, event_id: str) -> list[Registration]:
        """Registrations of one user for one event."""
        result = (
            self._query()
            .select("*")
            .eq("user_id", user_id)
            .eq("event_id", event_id)
            .execute()
        )
        return self._all(result)

    def create(self, user_id: str, event_id: str) -> Registration:
        """Insert a registration stamped with the current time."""
        data = {
            "user_id": user_id,
            "event_id": event_id,
            "registered_at": datetime.now(timezone.utc).isoformat(),
        }
        return self._one(self._query().insert(data).execute())

    def delete_by_id(self, registration_id: str) -> None:
        """Delete one registration."""
        self._query().delete().eq("id", registration_id).execute()

    @malformed_key_returns(list)
    def list_for_event(self, event_id: str) -> list[Registration]:
        """All registrations for an event, oldest first."""
        result = (
            self._query()
            .select("*")
            .eq("event_id", event_id)
            .order("registered_at")
            .execute()
        )
        return self._all(result)

    def list_for_user(self, user_id: str) -> list[Registration]:
        """All registrations of a user, most recent first."""
        result = (
            self._query()
            .select("*")
            .eq("user_id", user_id)
            .order("registered_at", desc=True)
            .execute()
        )
        return self._all(result)

    @malformed_key_returns(lambda: 0)
    def count_for_event(self, event_id: str) -> int:
        """Number of registrations for an event."""
        result = (
            self._query()
            .select("id", count="exact")
            .eq("event_id", event_id)
            .execute()
        )
        return result.count or 0

    def count_by_event(self) -> dict[str, int]:
        """Number of registrations per event ID."""
        result = self._query().select("event_id").execute()
        return dict(Counter(str(row["event_id"]) for row in result.data))

    def _map(self, row: Row) -> Registration:
        return Registration(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            event_id=str(row["event_id"]),
            registered_at=row["registered_at"],
        )

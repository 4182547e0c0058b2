"""
Event repository for database access.

Encapsulates all Supabase queries and data mapping for the events table.
"""

from typing import Any, Optional

from shared.repository import BaseRepository, Row, malformed_key_returns
from .models import Event

EVENTS_TABLE = "events"


class EventRepository(BaseRepository[Event]):
    """
    Repository for event data access.

    All methods return Pydantic models mapped from database rows.

    Note: This repository does NOT perform validation or authorization.
    Backend errors propagate to the service layer.
    """

    table = EVENTS_TABLE

    def list_all(self, order_by: str = "date", desc: bool = False) -> list[Event]:
        return self._all(self._query().select("*").order(order_by, desc=desc).execute())

    @malformed_key_returns(lambda: None)
    def get_by_id(self, event_id: str) -> Optional[Event]:
        return self._one(self._query().select("*").eq("id", event_id).execute())

    def get_many(self, event_ids: list[str]) -> dict[str, Event]:
        if not event_ids:
            return {}
        events = self._all(self._query().select("*").in_("id", event_ids).execute())
        return {event.id: event for event in events}

    def create(self, data: dict[str, Any]) -> Event:
        """
        Insert an event row.

        Returns:
            Created Event with the backend-assigned ID.
        """
        return self._one(self._query().insert(data).execute())

    @malformed_key_returns(lambda: None)
    def update(self, event_id: str, data: dict[str, Any]) -> Optional[Event]:
        """
        Merge fields into an event row.

        Returns:
            The updated Event, or None if no row matched.
        """
        data = {key: value for key, value in data.items() if key != "id"}
        return self._one(self._query().update(data).eq("id", event_id).execute())

    def delete(self, event_id: str) -> None:
        self._query().delete().eq("id", event_id).execute()

    def _map(self, row: Row) -> Event:
        return Event(
            id=str(row["id"]),
            title=row["title"],
            description=row["description"],
            date=row["date"],
            time=row.get("time"),
            location=row["location"],
            image_url=row.get("image_url") or "",
            created_by=row.get("created_by"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

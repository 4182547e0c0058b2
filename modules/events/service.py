"""
Event service implementation with Supabase.

Validates organizer input, uploads images, and keeps registrations
consistent with the events they belong to.
"""

import datetime as dt
import logging
from typing import Any, Optional

from shared.config import Settings, get_settings
from shared.exceptions import CascadeIncompleteError, RemoteUnavailableError
from shared.models import Session

from modules.registrations.repository import RegistrationRepository

from .assets import AssetStore, build_storage_key
from .exceptions import EventNotFoundError, EventValidationError
from .interfaces import IEventService
from .models import (
    REQUIRED_EVENT_FIELDS,
    DashboardStats,
    Event,
    EventFields,
    ImageUpload,
)
from .repository import EventRepository

logger = logging.getLogger(__name__)

ORDERABLE_COLUMNS = {"date", "title", "created_at"}


def validate_event_fields(fields: EventFields, partial: bool = False) -> None:
    """
    Check the required fields before any backend call.

    With partial=True only the fields that were supplied are checked,
    as an edit merges nothing else.

    Raises:
        EventValidationError: Naming every missing or blank field
    """
    supplied = fields.model_fields_set
    missing = []
    for name in REQUIRED_EVENT_FIELDS:
        if partial and name not in supplied:
            continue
        value = getattr(fields, name)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(name)

    if missing:
        raise EventValidationError(missing)


def _fields_to_row(fields: EventFields, partial: bool) -> dict[str, Any]:
    row: dict[str, Any] = {}
    for name, value in fields.model_dump(exclude_unset=partial).items():
        if isinstance(value, str):
            value = value.strip() or None
        elif isinstance(value, dt.date):
            value = value.isoformat()
        row[name] = value
    return row


class EventService(IEventService):
    """
    Event service with Supabase backend.

    Implements IEventService with real database and storage operations.
    """

    def __init__(
        self,
        repository: EventRepository,
        registrations: RegistrationRepository,
        assets: AssetStore,
        settings: Optional[Settings] = None,
    ):
        self._repository = repository
        self._registrations = registrations
        self._assets = assets
        self._settings = settings or get_settings()

    async def list_events(self, order_by: str = "date") -> list[Event]:
        """List every event ordered by a column."""
        if order_by not in ORDERABLE_COLUMNS:
            order_by = "date"
        try:
            return self._repository.list_all(order_by=order_by)
        except Exception as e:
            logger.warning(f"Loading events failed: {e}")
            raise RemoteUnavailableError("load events") from e

    async def get_event(self, event_id: str) -> Event:
        """Get one event or raise EventNotFoundError."""
        try:
            event = self._repository.get_by_id(event_id)
        except Exception as e:
            raise RemoteUnavailableError("load the event") from e
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    async def create_event(
        self,
        fields: EventFields,
        session: Session,
        image: Optional[ImageUpload] = None,
    ) -> Event:
        """Create an event; the image is uploaded before the row is written."""
        validate_event_fields(fields)

        data = _fields_to_row(fields, partial=False)
        data["image_url"] = (
            self._upload_image(image) if image else self._settings.placeholder_image_url
        )
        data["created_by"] = session.subject_id
        data["created_at"] = dt.datetime.now(dt.timezone.utc).isoformat()

        try:
            event = self._repository.create(data)
        except Exception as e:
            raise RemoteUnavailableError("create the event") from e

        logger.info(f"Event {event.id} created by {session.subject_id}")
        return event

    async def update_event(
        self,
        event_id: str,
        fields: EventFields,
        image: Optional[ImageUpload] = None,
    ) -> Event:
        """Merge only the supplied fields; a new image replaces the old URL."""
        validate_event_fields(fields, partial=True)
        await self.get_event(event_id)

        data = _fields_to_row(fields, partial=True)
        if image:
            data["image_url"] = self._upload_image(image)
        data["updated_at"] = dt.datetime.now(dt.timezone.utc).isoformat()

        try:
            event = self._repository.update(event_id, data)
        except Exception as e:
            raise RemoteUnavailableError("update the event") from e

        if event is None:
            raise EventNotFoundError(event_id)
        return event

    async def delete_event(self, event_id: str) -> None:
        """
        Delete the event, then every registration that references it.

        Once the event row is gone any failure is reported as
        CascadeIncompleteError with the registrations left behind.
        """
        await self.get_event(event_id)

        try:
            self._repository.delete(event_id)
        except Exception as e:
            raise RemoteUnavailableError("delete the event") from e

        try:
            registrations = self._registrations.list_for_event(event_id)
        except Exception as e:
            logger.warning(f"Event {event_id} deleted but its registrations could not be listed: {e}")
            raise CascadeIncompleteError(event_id) from e

        remaining = []
        for registration in registrations:
            try:
                self._registrations.delete_by_id(registration.id)
            except Exception as e:
                logger.warning(f"Could not delete registration {registration.id}: {e}")
                remaining.append(registration.id)

        if remaining:
            raise CascadeIncompleteError(event_id, remaining)

        logger.info(f"Event {event_id} deleted with {len(registrations)} registration(s)")

    async def get_dashboard_stats(self) -> DashboardStats:
        """Count events, participants and upcoming events."""
        events = await self.list_events()
        try:
            counts = self._registrations.count_by_event()
        except Exception as e:
            raise RemoteUnavailableError("load participant counts") from e

        today = dt.date.today()
        return DashboardStats(
            total_events=len(events),
            total_participants=sum(counts.get(event.id, 0) for event in events),
            upcoming_events=sum(1 for event in events if event.date > today),
        )

    def _upload_image(self, image: ImageUpload) -> str:
        path = build_storage_key(image.filename)
        try:
            return self._assets.put(path, image.content, image.content_type)
        except Exception as e:
            raise RemoteUnavailableError("upload the image", service="supabase-storage") from e

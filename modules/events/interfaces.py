"""
Events module interface.

The API layer and the terminal shell depend on IEventService for all
event operations.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import Session

from .models import DashboardStats, Event, EventFields, ImageUpload


@runtime_checkable
class IEventService(Protocol):
    """
    Interface for event operations.

    Callers gate the write operations with the authorization guard;
    the service itself validates input and translates backend failures.
    """

    async def list_events(self, order_by: str = "date") -> list[Event]:
        """
        List every event ordered by a column (ascending).

        Raises:
            RemoteUnavailableError: If the backend call fails
        """
        ...

    async def get_event(self, event_id: str) -> Event:
        """
        Get one event.

        Raises:
            EventNotFoundError: If there is no such event
            RemoteUnavailableError: If the backend call fails
        """
        ...

    async def create_event(
        self,
        fields: EventFields,
        session: Session,
        image: Optional[ImageUpload] = None,
    ) -> Event:
        """
        Create an event, uploading its image first when one is given.

        Raises:
            EventValidationError: If a required field is missing (no backend call)
            RemoteUnavailableError: If the upload or the insert fails
        """
        ...

    async def update_event(
        self,
        event_id: str,
        fields: EventFields,
        image: Optional[ImageUpload] = None,
    ) -> Event:
        """
        Merge the supplied fields into an event.

        Raises:
            EventValidationError: If a supplied required field is blank
            EventNotFoundError: If there is no such event
            RemoteUnavailableError: If the upload or the update fails
        """
        ...

    async def delete_event(self, event_id: str) -> None:
        """
        Delete an event and every registration for it.

        Raises:
            EventNotFoundError: If there is no such event
            RemoteUnavailableError: If the event itself could not be deleted
            CascadeIncompleteError: If registrations were left behind
        """
        ...

    async def get_dashboard_stats(self) -> DashboardStats:
        """Totals for the organizer dashboard."""
        ...

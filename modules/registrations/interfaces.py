"""
Registrations module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import Session

from .models import (
    CancelResult,
    Participant,
    RegisteredEvent,
    RegistrationResult,
)


@runtime_checkable
class IRegistrationService(Protocol):
    """
    Interface for the registration workflow.

    A user holds at most one registration per event. Participant counts
    are derived from the registrations on every request.
    """

    async def register(self, session: Optional[Session], event_id: str) -> RegistrationResult:
        """
        Register the session's user for an event.

        Returns:
            REGISTERED, or ALREADY_REGISTERED without writing anything

        Raises:
            NotAuthenticatedError: If there is no session
            EventNotFoundError: If there is no such event
            RemoteUnavailableError: If a backend call fails
        """
        ...

    async def cancel(self, session: Optional[Session], event_id: str) -> CancelResult:
        """
        Cancel the session's registration for an event.

        Raises:
            NotAuthenticatedError: If there is no session
            RegistrationNotFoundError: If the user is not registered
            RemoteUnavailableError: If a backend call fails
        """
        ...

    async def is_registered(self, session: Optional[Session], event_id: str) -> bool:
        """Whether the session's user is registered; False when signed out."""
        ...

    async def participant_count(self, event_id: str) -> int:
        """Number of registrations for an event."""
        ...

    async def list_user_registrations(self, session: Optional[Session]) -> list[RegisteredEvent]:
        """Events the session's user is registered for."""
        ...

    async def list_participants(self, event_id: str) -> list[Participant]:
        """Participants of an event with their profile name and email."""
        ...

"""
Registration service implementation with Supabase.

The one-registration-per-user-per-event rule is a check-then-write
sequence. Three layers keep it from producing duplicates:
- register and cancel calls for the same (user, event) are serialized
  with an asyncio.Lock, so a double submit sees the first write;
- the registrations table has a UNIQUE (user_id, event_id) constraint;
- a unique violation on insert is reported as ALREADY_REGISTERED.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Callable, Optional, TypeVar

from shared.exceptions import RemoteUnavailableError
from shared.models import Session

from modules.auth.exceptions import NotAuthenticatedError
from modules.auth.models import EntryPage
from modules.auth.repository import ProfileRepository
from modules.events.exceptions import EventNotFoundError
from modules.events.repository import EventRepository

from .exceptions import RegistrationNotFoundError
from .interfaces import IRegistrationService
from .models import (
    CancelResult,
    Participant,
    RegisteredEvent,
    RegistrationOutcome,
    RegistrationResult,
)
from .repository import RegistrationRepository, is_unique_violation

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _KeyedLock:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    holders: int = 0


def _require_session(session: Optional[Session]) -> Session:
    if session is None:
        raise NotAuthenticatedError(
            "Please login to register for events.",
            redirect_to=EntryPage.LOGIN.value,
        )
    return session


class RegistrationService(IRegistrationService):
    """
    Registration service with Supabase backend.

    Implements IRegistrationService with real database operations.
    """

    def __init__(
        self,
        repository: RegistrationRepository,
        events: EventRepository,
        profiles: ProfileRepository,
    ):
        self._repository = repository
        self._events = events
        self._profiles = profiles
        self._locks: dict[tuple[str, str], _KeyedLock] = {}

    async def register(self, session: Optional[Session], event_id: str) -> RegistrationResult:
        """Register the user unless a registration already exists."""
        session = _require_session(session)

        async with self._serialized(session.subject_id, event_id):
            self._ensure_event_exists(event_id)

            existing = self._remote(
                "check your registration",
                lambda: self._repository.find(session.subject_id, event_id),
            )
            if existing:
                return self._already_registered(event_id)

            try:
                registration = self._repository.create(session.subject_id, event_id)
            except Exception as e:
                if is_unique_violation(e):
                    logger.debug(f"Duplicate registration rejected by the backend for {event_id}")
                    return self._already_registered(event_id)
                raise RemoteUnavailableError("register for the event") from e

        logger.info(f"User {session.subject_id} registered for event {event_id}")
        return RegistrationResult(
            outcome=RegistrationOutcome.REGISTERED,
            event_id=event_id,
            registration=registration,
            message="Successfully registered for the event!",
        )

    async def cancel(self, session: Optional[Session], event_id: str) -> CancelResult:
        """Delete the user's registration for the event."""
        session = _require_session(session)

        async with self._serialized(session.subject_id, event_id):
            existing = self._remote(
                "check your registration",
                lambda: self._repository.find(session.subject_id, event_id),
            )
            if not existing:
                raise RegistrationNotFoundError(session.subject_id, event_id)

            if len(existing) > 1:
                logger.warning(
                    f"User {session.subject_id} had {len(existing)} registrations "
                    f"for event {event_id}; removing all"
                )
            for registration in existing:
                self._remote(
                    "cancel the registration",
                    lambda: self._repository.delete_by_id(registration.id),
                )

        logger.info(f"User {session.subject_id} cancelled registration for event {event_id}")
        return CancelResult(event_id=event_id)

    async def is_registered(self, session: Optional[Session], event_id: str) -> bool:
        if session is None:
            return False
        existing = self._remote(
            "check your registration",
            lambda: self._repository.find(session.subject_id, event_id),
        )
        return bool(existing)

    async def participant_count(self, event_id: str) -> int:
        """Count registrations for the event on every call."""
        return self._remote(
            "count participants",
            lambda: self._repository.count_for_event(event_id),
        )

    async def list_user_registrations(self, session: Optional[Session]) -> list[RegisteredEvent]:
        """
        Events the user is registered for, most recent registration first.

        Registrations whose event no longer exists are skipped.
        """
        session = _require_session(session)
        registrations = self._remote(
            "load your registrations",
            lambda: self._repository.list_for_user(session.subject_id),
        )
        events = self._remote(
            "load your registered events",
            lambda: self._events.get_many([r.event_id for r in registrations]),
        )

        return [
            RegisteredEvent(
                event=events[registration.event_id],
                registration_id=registration.id,
                registered_at=registration.registered_at,
            )
            for registration in registrations
            if registration.event_id in events
        ]

    async def list_participants(self, event_id: str) -> list[Participant]:
        """Participants in registration order, with profile name and email."""
        self._ensure_event_exists(event_id)
        registrations = self._remote(
            "load participants",
            lambda: self._repository.list_for_event(event_id),
        )
        profiles = self._remote(
            "load participant profiles",
            lambda: self._profiles.get_many(sorted({r.user_id for r in registrations})),
        )

        participants = []
        for registration in registrations:
            profile = profiles.get(registration.user_id)
            participants.append(
                Participant(
                    registration_id=registration.id,
                    user_id=registration.user_id,
                    name=(profile.name or "") if profile else "",
                    email=profile.email if profile else "",
                    registered_at=registration.registered_at,
                )
            )
        return participants

    def _ensure_event_exists(self, event_id: str) -> None:
        event = self._remote("load the event", lambda: self._events.get_by_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)

    def _already_registered(self, event_id: str) -> RegistrationResult:
        return RegistrationResult(
            outcome=RegistrationOutcome.ALREADY_REGISTERED,
            event_id=event_id,
            message="You are already registered for this event.",
        )

    def _remote(self, operation: str, call: Callable[[], T]) -> T:
        try:
            return call()
        except Exception as e:
            logger.warning(f"Backend call failed while trying to {operation}: {e}")
            raise RemoteUnavailableError(operation) from e

    @asynccontextmanager
    async def _serialized(self, user_id: str, event_id: str) -> AsyncIterator[None]:
        key = (user_id, event_id)
        entry = self._locks.setdefault(key, _KeyedLock())
        entry.holders += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.holders -= 1
            if entry.holders == 0:
                del self._locks[key]

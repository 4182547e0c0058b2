"""
Terminal shell wiring.

One Shell owns one signed-in auth provider, the SessionStore that
tracks it, and the services. Gated commands ask the guard first and act
on its decision: a forbidden session is signed out, a missing one is
told which login to use.
"""

import logging
from pathlib import Path
from typing import Optional

from modules.auth.exceptions import ForbiddenError
from modules.auth.guard import AuthorizationGuard
from modules.auth.interfaces import IAuthProvider
from modules.auth.models import Portal, SignInRequest, SignUpRequest, SignUpResponse
from modules.auth.providers import SupabaseAuthProvider
from modules.auth.repository import ProfileRepository
from modules.auth.service import AuthService
from modules.auth.session import SessionStore
from modules.events.assets import AssetStore
from modules.events.models import DashboardStats, Event, EventFields, EventPage, ImageUpload
from modules.events.repository import EventRepository
from modules.events.search import describe_results, filter_events, paginate, sort_events
from modules.events.service import EventService
from modules.registrations.models import (
    CancelResult,
    Participant,
    RegisteredEvent,
    RegistrationResult,
)
from modules.registrations.repository import RegistrationRepository
from modules.registrations.service import RegistrationService
from shared.config import Settings, get_settings
from shared.database import get_supabase_anon_client, get_supabase_client
from shared.models import Role, Session

logger = logging.getLogger(__name__)


class Shell:
    """
    Command surface for the terminal.

    Usage:
        with Shell() as shell:
            await shell.sign_in(email, password, Portal.ADMIN)
            await shell.dashboard()
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        db=None,
        provider: Optional[IAuthProvider] = None,
    ):
        self._settings = settings or get_settings()
        db = db if db is not None else get_supabase_client()
        self._provider = provider or SupabaseAuthProvider(get_supabase_anon_client())

        profiles = ProfileRepository(db)
        events = EventRepository(db)
        registrations = RegistrationRepository(db)

        self.guard = AuthorizationGuard(self._settings.admin_emails)
        self.store = SessionStore(self._provider, profiles)
        self.auth = AuthService(
            profiles=profiles,
            guard=self.guard,
            settings=self._settings,
            provider_factory=lambda: self._provider,
        )
        self.events = EventService(
            repository=events,
            registrations=registrations,
            assets=AssetStore(db, self._settings.storage_bucket),
            settings=self._settings,
        )
        self.registrations = RegistrationService(
            repository=registrations,
            events=events,
            profiles=profiles,
        )

    def __enter__(self) -> "Shell":
        self.store.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.store.close()

    @property
    def session(self) -> Optional[Session]:
        return self.store.current_session()

    async def sign_up(self, name: str, email: str, password: str, confirm_password: str) -> SignUpResponse:
        return await self.auth.sign_up(
            SignUpRequest(name=name, email=email, password=password, confirm_password=confirm_password)
        )

    async def sign_in(self, email: str, password: str, portal: Portal = Portal.USER) -> Session:
        response = await self.auth.sign_in(SignInRequest(email=email, password=password), portal)
        # Provider notifications may land after sign_in returns.
        return self.session or response.session

    def require(self, role: Role = Role.USER) -> Session:
        """
        Run the guard for a gated command.

        A forbidden session is signed out before the error propagates.
        """
        try:
            return self.guard.require(self.session, role)
        except ForbiddenError:
            self.store.sign_out()
            raise

    async def list_events(
        self,
        term: str = "",
        sort: Optional[str] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> EventPage:
        events = await self.events.list_events()
        matches = filter_events(events, term)
        if sort:
            matches = sort_events(matches, sort)
        result = paginate(matches, page, page_size)
        result.message = describe_results(term, len(matches)) or None
        return result

    async def featured_events(self, count: int = 3) -> list[Event]:
        """First events of the date-ordered listing, as on the landing page."""
        return list((await self.events.list_events())[:count])

    async def show_event(self, event_id: str) -> tuple[Event, int, Optional[bool]]:
        event = await self.events.get_event(event_id)
        count = await self.registrations.participant_count(event_id)
        registered = None
        if self.session is not None:
            registered = await self.registrations.is_registered(self.session, event_id)
        return event, count, registered

    async def register(self, event_id: str) -> RegistrationResult:
        return await self.registrations.register(self.require(), event_id)

    async def cancel(self, event_id: str) -> CancelResult:
        return await self.registrations.cancel(self.require(), event_id)

    async def my_events(self) -> list[RegisteredEvent]:
        return await self.registrations.list_user_registrations(self.require())

    async def dashboard(self) -> DashboardStats:
        self.require(Role.ADMIN)
        return await self.events.get_dashboard_stats()

    async def create_event(self, fields: EventFields, image_path: Optional[Path] = None) -> Event:
        session = self.require(Role.ADMIN)
        return await self.events.create_event(fields, session, _load_image(image_path))

    async def update_event(self, event_id: str, fields: EventFields, image_path: Optional[Path] = None) -> Event:
        self.require(Role.ADMIN)
        return await self.events.update_event(event_id, fields, _load_image(image_path))

    async def delete_event(self, event_id: str) -> None:
        self.require(Role.ADMIN)
        await self.events.delete_event(event_id)

    async def participants(self, event_id: str) -> tuple[Event, list[Participant]]:
        self.require(Role.ADMIN)
        event = await self.events.get_event(event_id)
        return event, await self.registrations.list_participants(event_id)


def _load_image(path: Optional[Path]) -> Optional[ImageUpload]:
    if path is None:
        return None
    return ImageUpload(filename=path.name, content=path.read_bytes())

"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

from typing import TYPE_CHECKING

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.auth.guard import AuthorizationGuard
    from modules.auth.interfaces import IAuthService
    from modules.auth.repository import ProfileRepository
    from modules.events.assets import AssetStore
    from modules.events.interfaces import IEventService
    from modules.events.repository import EventRepository
    from modules.registrations.interfaces import IRegistrationService
    from modules.registrations.repository import RegistrationRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Settings | None = None, db: "Client | None" = None) -> None:
        self._settings = settings
        self._db = db
        self._guard: "AuthorizationGuard | None" = None
        self._auth_service: "IAuthService | None" = None
        self._event_service: "IEventService | None" = None
        self._registration_service: "IRegistrationService | None" = None
        self._profile_repository: "ProfileRepository | None" = None
        self._event_repository: "EventRepository | None" = None
        self._registration_repository: "RegistrationRepository | None" = None
        self._asset_store: "AssetStore | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def db(self) -> "Client":
        """Get the service-role Supabase client."""
        if self._db is None:
            from shared.database import get_supabase_client
            self._db = get_supabase_client()
        return self._db

    @property
    def guard(self) -> "AuthorizationGuard":
        """Get the authorization guard."""
        if self._guard is None:
            from modules.auth.guard import AuthorizationGuard
            self._guard = AuthorizationGuard(self.settings.admin_emails)
        return self._guard

    @property
    def profile_repository(self) -> "ProfileRepository":
        if self._profile_repository is None:
            from modules.auth.repository import ProfileRepository
            self._profile_repository = ProfileRepository(self.db)
        return self._profile_repository

    @property
    def event_repository(self) -> "EventRepository":
        if self._event_repository is None:
            from modules.events.repository import EventRepository
            self._event_repository = EventRepository(self.db)
        return self._event_repository

    @property
    def registration_repository(self) -> "RegistrationRepository":
        if self._registration_repository is None:
            from modules.registrations.repository import RegistrationRepository
            self._registration_repository = RegistrationRepository(self.db)
        return self._registration_repository

    @property
    def asset_store(self) -> "AssetStore":
        if self._asset_store is None:
            from modules.events.assets import AssetStore
            self._asset_store = AssetStore(self.db, self.settings.storage_bucket)
        return self._asset_store

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                profiles=self.profile_repository,
                guard=self.guard,
                settings=self.settings,
            )
        return self._auth_service

    @property
    def events(self) -> "IEventService":
        """Get the event service instance."""
        if self._event_service is None:
            from modules.events.service import EventService
            self._event_service = EventService(
                repository=self.event_repository,
                registrations=self.registration_repository,
                assets=self.asset_store,
                settings=self.settings,
            )
        return self._event_service

    @property
    def registrations(self) -> "IRegistrationService":
        """Get the registration service instance."""
        if self._registration_service is None:
            from modules.registrations.service import RegistrationService
            self._registration_service = RegistrationService(
                repository=self.registration_repository,
                events=self.event_repository,
                profiles=self.profile_repository,
            )
        return self._registration_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._guard = None
        self._auth_service = None
        self._event_service = None
        self._registration_service = None
        self._profile_repository = None
        self._event_repository = None
        self._registration_repository = None
        self._asset_store = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_guard() -> "AuthorizationGuard":
    """FastAPI dependency for the authorization guard."""
    return get_container().guard


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_event_service() -> "IEventService":
    """FastAPI dependency for event service."""
    return get_container().events


def get_registration_service() -> "IRegistrationService":
    """FastAPI dependency for registration service."""
    return get_container().registrations

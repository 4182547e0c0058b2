"""
Session store.

Caches the current Session for a long-lived shell (the terminal client).
The cached value is only ever replaced by the auth-state subscription
callback; everything else reads it.
"""

import logging
from typing import Optional

from shared.models import Session

from .interfaces import IAuthProvider, Unsubscribe
from .models import AuthIdentity, UserProfile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


def session_from_identity(identity: AuthIdentity, profile: Optional[UserProfile]) -> Session:
    """
    Merge a provider identity with its profile row.

    Without a profile the session keeps its identity fields and has no
    role, which authorization treats as "not an admin".
    """
    return Session(
        subject_id=identity.subject_id,
        email=identity.email,
        display_name=profile.name if profile else None,
        role=profile.role if profile else None,
    )


class SessionStore:
    """
    Last-known session, kept in sync with the auth provider.

    Lifecycle: start() subscribes to auth-state changes, close()
    unsubscribes. Notifications that arrive after close() are ignored.

    Usage:
        with SessionStore(provider, profiles) as store:
            provider.sign_in(email, password)
            store.current_session()
    """

    def __init__(self, provider: IAuthProvider, profiles: ProfileRepository):
        self._provider = provider
        self._profiles = profiles
        self._session: Optional[Session] = None
        self._unsubscribe: Optional[Unsubscribe] = None
        self._closed = False

    def start(self) -> "SessionStore":
        """Subscribe to auth-state changes. Calling it twice is a no-op."""
        if self._unsubscribe is None:
            self._closed = False
            self._unsubscribe = self._provider.subscribe(self._on_auth_change)
        return self

    def close(self) -> None:
        """Unsubscribe and drop the cached session."""
        self._closed = True
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._session = None

    def __enter__(self) -> "SessionStore":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def current_session(self) -> Optional[Session]:
        """Last known session, or None when signed out."""
        return self._session

    def is_authenticated(self) -> bool:
        return self._session is not None

    def sign_out(self) -> None:
        """Sign out through the provider; the notification clears the cache."""
        self._provider.sign_out()

    def _on_auth_change(self, identity: Optional[AuthIdentity]) -> None:
        if self._closed:
            return

        if identity is None:
            logger.debug("Auth state changed: signed out")
            self._session = None
            return

        self._session = session_from_identity(identity, self._load_profile(identity.subject_id))
        logger.debug(f"Auth state changed: signed in as {identity.subject_id}")

    def _load_profile(self, user_id: str) -> Optional[UserProfile]:
        try:
            return self._profiles.get_by_id(user_id)
        except Exception as e:
            logger.warning(f"Could not load profile for {user_id}, role unknown: {e}")
            return None

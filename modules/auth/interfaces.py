"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with fakes and swapping the
hosted auth provider.
"""

from typing import Callable, Optional, Protocol, runtime_checkable

from shared.models import Role, Session

from .models import (
    AuthDecision,
    AuthIdentity,
    Portal,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
)

AuthStateListener = Callable[[Optional[AuthIdentity]], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class IAuthProvider(Protocol):
    """
    The hosted authentication provider.

    Implementations notify subscribers with the signed-in identity on
    every auth-state change, and with None on sign-out.
    """

    def sign_in(self, email: str, password: str) -> AuthIdentity:
        """
        Sign in with email and password.

        Raises:
            AuthenticationError: If the credentials are rejected
            RemoteUnavailableError: If the provider cannot be reached
        """
        ...

    def sign_up(self, email: str, password: str) -> AuthIdentity:
        """
        Create an account.

        Raises:
            ValidationError: If the email or password is rejected
            RemoteUnavailableError: If the provider cannot be reached
        """
        ...

    def sign_out(self) -> None:
        """End the current sign-in session."""
        ...

    def subscribe(self, listener: AuthStateListener) -> Unsubscribe:
        """
        Register an auth-state listener.

        Returns:
            Callable that removes the listener
        """
        ...


@runtime_checkable
class IAuthorizationGuard(Protocol):
    """Decides whether a session may use an entry point."""

    def authorize(self, session: Optional[Session], required_role: Role) -> AuthDecision:
        """
        Decide access for the session.

        Must be deterministic and free of side effects.
        """
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations used by the HTTP shell.
    """

    async def validate_token(self, token: str) -> AuthIdentity:
        """
        Validate a JWT token and return the identity it carries.

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        ...

    async def resolve_session(self, token: str) -> Session:
        """
        Validate a token and merge the users profile into a Session.

        A profile that cannot be loaded leaves role as None.
        """
        ...

    async def sign_up(self, request: SignUpRequest) -> SignUpResponse:
        """
        Create an account and its profile with the default role.

        Raises:
            AccountValidationError: If input is incomplete or inconsistent
            ValidationError: If the provider rejects the email or password
        """
        ...

    async def sign_in(self, request: SignInRequest, portal: Portal) -> SignInResponse:
        """
        Sign in through the given portal.

        Raises:
            InvalidCredentialsError: If the provider rejects the credentials
            WrongPortalError: If an organizer uses the member portal
            ForbiddenError: If a non-organizer uses the organizer portal
        """
        ...

"""
Authentication service implementation.

Validates Supabase JWT tokens, resolves sessions from profile rows, and
runs the account workflows (sign-up, user and organizer sign-in).
"""

import logging
from typing import Callable, Optional
import jwt

from shared.config import Settings, get_settings
from shared.database import get_supabase_anon_client, get_supabase_client
from shared.exceptions import RemoteUnavailableError
from shared.models import Role, Session

from .exceptions import (
    AccountValidationError,
    ExpiredTokenError,
    ForbiddenError,
    InvalidTokenError,
    MissingTokenError,
    ProfileNotFoundError,
    WrongPortalError,
)
from .guard import AuthorizationGuard
from .interfaces import IAuthProvider, IAuthService
from .models import (
    AuthIdentity,
    JWTPayload,
    Portal,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
)
from .providers import SupabaseAuthProvider
from .repository import ProfileRepository
from .session import session_from_identity

logger = logging.getLogger(__name__)


def _default_provider() -> IAuthProvider:
    return SupabaseAuthProvider(get_supabase_anon_client())


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses Supabase JWT tokens for request authentication and the users
    table for roles. Account workflows run against a provider obtained
    from provider_factory, so a shell can share one signed-in provider
    with its SessionStore.
    """

    def __init__(
        self,
        profiles: Optional[ProfileRepository] = None,
        guard: Optional[AuthorizationGuard] = None,
        settings: Optional[Settings] = None,
        provider_factory: Optional[Callable[[], IAuthProvider]] = None,
    ):
        self._settings = settings or get_settings()
        self._profiles = profiles or ProfileRepository(get_supabase_client())
        self._guard = guard or AuthorizationGuard(self._settings.admin_emails)
        self._provider_factory = provider_factory or _default_provider

    @property
    def guard(self) -> AuthorizationGuard:
        return self._guard

    async def validate_token(self, token: str) -> AuthIdentity:
        """
        Validate a JWT token and return the identity it carries.

        This implementation validates Supabase JWTs using the JWT secret.
        """
        if not token:
            raise MissingTokenError()

        if not self._settings.supabase_jwt_secret:
            raise InvalidTokenError("Server authentication not configured")

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        jwt_payload = JWTPayload(**payload)
        return AuthIdentity(
            subject_id=jwt_payload.sub,
            email=jwt_payload.email or "",
            access_token=token,
        )

    async def resolve_session(self, token: str) -> Session:
        """
        Validate a token and merge the users profile into a Session.

        Profile lookup failures are logged and leave role unset.
        """
        identity = await self.validate_token(token)
        try:
            profile = self._profiles.get_by_id(identity.subject_id)
        except Exception as e:
            logger.warning(f"Profile lookup failed for {identity.subject_id}: {e}")
            profile = None
        return session_from_identity(identity, profile)

    async def sign_up(self, request: SignUpRequest) -> SignUpResponse:
        """
        Create an account and its users profile with the default role.

        Input is validated locally before the provider is called.
        """
        if not all(
            value.strip()
            for value in (request.name, request.email, request.password, request.confirm_password)
        ):
            raise AccountValidationError("Please fill in all fields.")
        if request.password != request.confirm_password:
            raise AccountValidationError("Passwords do not match.")
        min_length = self._settings.min_password_length
        if len(request.password) < min_length:
            raise AccountValidationError(
                f"Password must be at least {min_length} characters long."
            )

        provider = self._provider_factory()
        identity = provider.sign_up(request.email.strip(), request.password)

        try:
            profile = self._profiles.create(
                identity.subject_id,
                request.name.strip(),
                identity.email or request.email.strip(),
                Role.USER,
            )
        except Exception as e:
            raise RemoteUnavailableError("save the user profile") from e

        logger.info(f"Created account {profile.id}")
        return SignUpResponse(
            id=profile.id,
            name=profile.name or "",
            email=profile.email,
            role=profile.role or Role.USER,
        )

    async def sign_in(
        self,
        request: SignInRequest,
        portal: Portal = Portal.USER,
    ) -> SignInResponse:
        """
        Sign in through the user or organizer login page.

        The user portal turns organizers away; the organizer portal runs
        the admin authorization check. Any rejection after the provider
        accepted the credentials signs the session out again.
        """
        if not request.email.strip() or not request.password:
            raise AccountValidationError("Please fill in all fields.")

        provider = self._provider_factory()
        identity = provider.sign_in(request.email.strip(), request.password)

        try:
            profile = self._profiles.get_by_id(identity.subject_id)
        except Exception as e:
            self._sign_out_after_rejection(provider)
            raise RemoteUnavailableError("load the user profile") from e

        if profile is None:
            self._sign_out_after_rejection(provider)
            raise ProfileNotFoundError(identity.subject_id)

        session = session_from_identity(identity, profile)

        if portal == Portal.USER and session.role == Role.ADMIN:
            self._sign_out_after_rejection(provider)
            raise WrongPortalError()

        if portal == Portal.ADMIN:
            try:
                self._guard.require(session, Role.ADMIN)
            except ForbiddenError:
                self._sign_out_after_rejection(provider)
                raise

        logger.info(f"Signed in {session.subject_id} through the {portal.value} portal")
        return SignInResponse(access_token=identity.access_token, session=session)

    def _sign_out_after_rejection(self, provider: IAuthProvider) -> None:
        try:
            provider.sign_out()
        except Exception as e:
            logger.warning(f"Sign-out after rejected login failed: {e}")


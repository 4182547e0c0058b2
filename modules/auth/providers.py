"""
Supabase Auth provider.

Wraps the supabase client's auth component behind IAuthProvider and
translates provider error codes into the auth module's exceptions.
"""

import logging
from typing import Any, Optional

from supabase import Client

from shared.exceptions import RemoteUnavailableError

from .exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidEmailError,
    TooManyAttemptsError,
    WeakPasswordError,
)
from .interfaces import AuthStateListener, IAuthProvider, Unsubscribe
from .models import AuthIdentity

logger = logging.getLogger(__name__)

SERVICE_NAME = "supabase-auth"

_INVALID_CREDENTIALS_CODES = {"invalid_credentials", "user_not_found", "invalid_grant"}
_INVALID_EMAIL_CODES = {"email_address_invalid", "validation_failed"}
_RATE_LIMIT_CODES = {"over_request_rate_limit", "over_email_send_rate_limit"}
_EMAIL_EXISTS_CODES = {"email_exists", "user_already_exists"}


def translate_auth_error(error: Exception, operation: str) -> Exception:
    """
    Map a provider error to the auth module's taxonomy.

    Unknown errors become RemoteUnavailableError so raw provider codes
    never reach callers.
    """
    code = getattr(error, "code", None) or ""
    message = str(getattr(error, "message", "") or error).lower()

    if code in _INVALID_CREDENTIALS_CODES or "invalid login credentials" in message:
        return InvalidCredentialsError()
    if code in _RATE_LIMIT_CODES or getattr(error, "status", None) == 429:
        return TooManyAttemptsError()
    if code in _EMAIL_EXISTS_CODES or "already registered" in message:
        return EmailAlreadyRegisteredError()
    if code == "weak_password" or "password should be" in message:
        return WeakPasswordError()
    if code in _INVALID_EMAIL_CODES or "invalid format" in message:
        return InvalidEmailError()

    logger.warning(f"Unrecognized auth provider error during {operation}: {code or message}")
    return RemoteUnavailableError(operation, service=SERVICE_NAME)


def _identity_from(user: Any, session: Any = None) -> AuthIdentity:
    return AuthIdentity(
        subject_id=str(user.id),
        email=user.email or "",
        access_token=getattr(session, "access_token", None),
    )


class SupabaseAuthProvider(IAuthProvider):
    """
    IAuthProvider backed by Supabase Auth.

    Use one provider per signed-in user: the underlying client keeps the
    sign-in state.
    """

    def __init__(self, client: Client):
        self._client = client

    def sign_in(self, email: str, password: str) -> AuthIdentity:
        try:
            response = self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            raise translate_auth_error(e, "sign in") from e

        if response.user is None:
            raise InvalidCredentialsError()
        return _identity_from(response.user, response.session)

    def sign_up(self, email: str, password: str) -> AuthIdentity:
        try:
            response = self._client.auth.sign_up({"email": email, "password": password})
        except Exception as e:
            raise translate_auth_error(e, "sign up") from e

        if response.user is None:
            raise RemoteUnavailableError("sign up", service=SERVICE_NAME)
        return _identity_from(response.user, response.session)

    def sign_out(self) -> None:
        try:
            self._client.auth.sign_out()
        except Exception as e:
            raise translate_auth_error(e, "sign out") from e

    def subscribe(self, listener: AuthStateListener) -> Unsubscribe:
        def on_change(event: Any, session: Optional[Any]) -> None:
            if session is None or getattr(session, "user", None) is None:
                listener(None)
                return
            listener(_identity_from(session.user, session))

        subscription = self._client.auth.on_auth_state_change(on_change)
        return subscription.unsubscribe

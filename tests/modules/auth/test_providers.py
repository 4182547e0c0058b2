"""Tests for the Supabase auth provider and its error translation."""

import pytest
from unittest.mock import MagicMock

from modules.auth.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidEmailError,
    TooManyAttemptsError,
    WeakPasswordError,
)
from modules.auth.providers import SupabaseAuthProvider, translate_auth_error
from shared.exceptions import RemoteUnavailableError


class ProviderError(Exception):
    """Shaped like gotrue's AuthApiError."""

    def __init__(self, message, code=None, status=400):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status


class TestTranslateAuthError:
    @pytest.mark.parametrize(
        "error, expected",
        [
            (ProviderError("Invalid login credentials", code="invalid_credentials"), InvalidCredentialsError),
            (ProviderError("Invalid login credentials"), InvalidCredentialsError),
            (ProviderError("Too many requests", code="over_request_rate_limit", status=429), TooManyAttemptsError),
            (ProviderError("slow down", status=429), TooManyAttemptsError),
            (ProviderError("User already registered", code="user_already_exists"), EmailAlreadyRegisteredError),
            (ProviderError("Password should be at least 6 characters", code="weak_password"), WeakPasswordError),
            (ProviderError("Unable to validate email address: invalid format"), InvalidEmailError),
        ],
    )
    def test_known_errors(self, error, expected):
        assert isinstance(translate_auth_error(error, "sign in"), expected)

    def test_unknown_error_is_remote_unavailable(self):
        """Raw provider codes never reach callers."""
        translated = translate_auth_error(ProviderError("boom", code="unexpected_failure"), "sign in")
        assert isinstance(translated, RemoteUnavailableError)
        assert translated.details["service"] == "supabase-auth"
        assert "unexpected_failure" not in str(translated.to_dict())


class TestSupabaseAuthProvider:
    @pytest.fixture
    def client(self):
        client = MagicMock()
        user = MagicMock(id="user-123", email="test@example.com")
        session = MagicMock(access_token="access-abc", user=user)
        client.auth.sign_in_with_password.return_value = MagicMock(user=user, session=session)
        client.auth.sign_up.return_value = MagicMock(user=user, session=session)
        return client

    def test_sign_in(self, client):
        identity = SupabaseAuthProvider(client).sign_in("test@example.com", "pw")

        client.auth.sign_in_with_password.assert_called_once_with(
            {"email": "test@example.com", "password": "pw"}
        )
        assert identity.subject_id == "user-123"
        assert identity.access_token == "access-abc"

    def test_sign_in_translates_errors(self, client):
        client.auth.sign_in_with_password.side_effect = ProviderError(
            "Invalid login credentials", code="invalid_credentials"
        )
        with pytest.raises(InvalidCredentialsError):
            SupabaseAuthProvider(client).sign_in("test@example.com", "bad")

    def test_sign_in_without_user(self, client):
        client.auth.sign_in_with_password.return_value = MagicMock(user=None, session=None)
        with pytest.raises(InvalidCredentialsError):
            SupabaseAuthProvider(client).sign_in("test@example.com", "pw")

    def test_sign_up(self, client):
        identity = SupabaseAuthProvider(client).sign_up("test@example.com", "secret")
        client.auth.sign_up.assert_called_once_with({"email": "test@example.com", "password": "secret"})
        assert identity.email == "test@example.com"

    def test_sign_up_without_user(self, client):
        client.auth.sign_up.return_value = MagicMock(user=None, session=None)
        with pytest.raises(RemoteUnavailableError):
            SupabaseAuthProvider(client).sign_up("test@example.com", "secret")

    def test_sign_out(self, client):
        SupabaseAuthProvider(client).sign_out()
        client.auth.sign_out.assert_called_once()

    def test_subscribe_translates_sessions(self, client):
        """Provider callbacks become identities, or None when signed out."""
        received = []
        unsubscribe = SupabaseAuthProvider(client).subscribe(received.append)

        callback = client.auth.on_auth_state_change.call_args.args[0]
        user = MagicMock(id="user-123", email="test@example.com")
        callback("SIGNED_IN", MagicMock(user=user, access_token="tok"))
        callback("SIGNED_OUT", None)

        assert received[0].subject_id == "user-123"
        assert received[1] is None
        assert unsubscribe is client.auth.on_auth_state_change.return_value.unsubscribe

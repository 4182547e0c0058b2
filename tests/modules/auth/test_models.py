import pytest

from modules.auth.models import (
    AuthDecision,
    AuthIdentity,
    DenialReason,
    EntryPage,
    JWTPayload,
    SignUpRequest,
    UserProfile,
)
from shared.models import Role


class TestAuthIdentity:
    def test_identity_is_immutable(self):
        """AuthIdentity should be immutable."""
        identity = AuthIdentity(subject_id="user-123", email="test@example.com")
        with pytest.raises(Exception):  # Pydantic ValidationError
            identity.subject_id = "different-id"

    def test_identity_carries_no_role(self):
        assert "role" not in AuthIdentity.model_fields


class TestJWTPayload:
    def test_parse_jwt_payload(self):
        """Should parse JWT payload from dict."""
        payload = JWTPayload(
            sub="user-123",
            email="test@example.com",
            exp=1704067200,
            iat=1704063600,
        )
        assert payload.sub == "user-123"
        assert payload.aud == "authenticated"
        assert payload.app_metadata == {}


class TestUserProfile:
    def test_role_optional(self):
        """Legacy rows without a role should still parse."""
        profile = UserProfile(id="u1", email="a@club.example")
        assert profile.role is None

    def test_role_from_string(self):
        assert UserProfile(id="u1", email="a@club.example", role="admin").role == Role.ADMIN


class TestAuthDecision:
    def test_allow(self):
        decision = AuthDecision.allow()
        assert decision.authorized is True
        assert decision.sign_out is False
        assert decision.redirect_to is None

    def test_forbidden_denial_signs_out(self):
        """A forbidden session must be signed out."""
        decision = AuthDecision.deny(DenialReason.FORBIDDEN, EntryPage.ADMIN_LOGIN)
        assert decision.authorized is False
        assert decision.sign_out is True
        assert decision.redirect_to == EntryPage.ADMIN_LOGIN

    def test_unauthenticated_denial_keeps_session(self):
        decision = AuthDecision.deny(DenialReason.NOT_AUTHENTICATED, EntryPage.LOGIN)
        assert decision.sign_out is False


class TestSignUpRequest:
    def test_fields_default_to_blank(self):
        """Missing fields reach the service as blanks so one message covers them."""
        request = SignUpRequest()
        assert request.name == request.email == request.password == request.confirm_password == ""

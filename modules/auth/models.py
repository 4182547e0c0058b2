"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import Role, Session


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="Postgres role claim")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)


class AuthIdentity(BaseModel):
    """
    Identity reported by the auth provider.

    Carries no role: roles only come from the users profile row.
    """

    subject_id: str = Field(..., description="User ID (UUID from Supabase Auth)")
    email: str = Field(..., description="User's email address")
    access_token: Optional[str] = Field(None, description="Access token, when signed in")

    model_config = {"frozen": True}


class UserProfile(BaseModel):
    """Row of the users table."""

    id: str = Field(..., description="User ID (UUID)")
    name: Optional[str] = Field(None, description="Display name")
    email: str = Field(..., description="Email address")
    role: Optional[Role] = Field(None, description="Role, absent on legacy rows")
    created_at: Optional[datetime] = Field(None, description="Profile creation time")


class Portal(str, Enum):
    """Login entry point the user came through."""

    USER = "user"
    ADMIN = "admin"


class EntryPage(str, Enum):
    """Page a denied caller should be sent to."""

    LOGIN = "login"
    ADMIN_LOGIN = "admin-login"


class DenialReason(str, Enum):
    """Why the guard refused access."""

    NOT_AUTHENTICATED = "not_authenticated"
    FORBIDDEN = "forbidden"


class AuthDecision(BaseModel):
    """
    Outcome of an authorization check.

    Denials carry hints for the shell: whether the half-privileged
    session must be signed out, and where to navigate next.
    """

    authorized: bool
    reason: Optional[DenialReason] = None
    sign_out: bool = False
    redirect_to: Optional[EntryPage] = None

    model_config = {"frozen": True}

    @classmethod
    def allow(cls) -> "AuthDecision":
        return cls(authorized=True)

    @classmethod
    def deny(cls, reason: DenialReason, redirect_to: EntryPage) -> "AuthDecision":
        return cls(
            authorized=False,
            reason=reason,
            sign_out=reason == DenialReason.FORBIDDEN,
            redirect_to=redirect_to,
        )


class SignUpRequest(BaseModel):
    """Request to create a new account."""

    name: str = Field(default="", description="Display name")
    email: str = Field(default="", description="Email address")
    password: str = Field(default="", description="Password")
    confirm_password: str = Field(default="", description="Password confirmation")


class SignInRequest(BaseModel):
    """Request to sign in with email and password."""

    email: str = Field(default="", description="Email address")
    password: str = Field(default="", description="Password")


class SignInResponse(BaseModel):
    """Result of a successful sign-in."""

    access_token: Optional[str] = Field(None, description="Supabase access token")
    session: Session = Field(..., description="Resolved session")


class SignUpResponse(BaseModel):
    """Result of a successful sign-up."""

    id: str
    name: str
    email: str
    role: Role = Role.USER

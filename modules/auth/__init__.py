"""
Authentication module.

Handles session resolution, the authorization guard, and account
workflows on top of Supabase Auth.

Public API:
- IAuthService, IAuthProvider, IAuthorizationGuard: Interfaces
- AuthorizationGuard: Role and allow-list decisions
- SessionStore: Cached session for long-lived shells
- AuthDecision, AuthIdentity, UserProfile: Models
- Auth exceptions: NotAuthenticatedError, ForbiddenError, etc.
"""

from .interfaces import IAuthService, IAuthProvider, IAuthorizationGuard
from .guard import AuthorizationGuard
from .session import SessionStore, session_from_identity
from .models import (
    AuthDecision,
    AuthIdentity,
    DenialReason,
    EntryPage,
    JWTPayload,
    Portal,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
    UserProfile,
)
from .exceptions import (
    AccountValidationError,
    EmailAlreadyRegisteredError,
    ExpiredTokenError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidEmailError,
    InvalidTokenError,
    MissingTokenError,
    NotAuthenticatedError,
    ProfileNotFoundError,
    TooManyAttemptsError,
    WeakPasswordError,
    WrongPortalError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IAuthProvider",
    "IAuthorizationGuard",
    # Implementations
    "AuthorizationGuard",
    "SessionStore",
    "session_from_identity",
    # Models
    "AuthDecision",
    "AuthIdentity",
    "DenialReason",
    "EntryPage",
    "JWTPayload",
    "Portal",
    "SignInRequest",
    "SignInResponse",
    "SignUpRequest",
    "SignUpResponse",
    "UserProfile",
    # Exceptions
    "AccountValidationError",
    "EmailAlreadyRegisteredError",
    "ExpiredTokenError",
    "ForbiddenError",
    "InvalidCredentialsError",
    "InvalidEmailError",
    "InvalidTokenError",
    "MissingTokenError",
    "NotAuthenticatedError",
    "ProfileNotFoundError",
    "TooManyAttemptsError",
    "WeakPasswordError",
    "WrongPortalError",
]

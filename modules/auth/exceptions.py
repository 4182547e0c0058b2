"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
Provider error codes are translated into these classes and never
leave the module.
"""

from typing import Optional

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class NotAuthenticatedError(AuthenticationError):
    """Raised when an operation needs a signed-in session and there is none."""

    def __init__(
        self,
        message: str = "Please login to continue.",
        redirect_to: Optional[str] = None,
    ):
        super().__init__(
            message,
            code="NOT_AUTHENTICATED",
            details={"sign_out": False, "redirect_to": redirect_to},
        )


class ForbiddenError(AuthorizationError):
    """Raised when the session lacks the required role."""

    def __init__(
        self,
        required_role: str,
        user_role: Optional[str],
        redirect_to: Optional[str] = None,
    ):
        super().__init__(
            "Access denied. This page is for organizers only.",
            code="FORBIDDEN",
            details={
                "required_role": required_role,
                "user_role": user_role,
                "sign_out": True,
                "redirect_to": redirect_to,
            },
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised when the email/password pair is rejected."""

    def __init__(self):
        super().__init__("Invalid email or password.", code="INVALID_CREDENTIALS")


class TooManyAttemptsError(AuthenticationError):
    """Raised when the provider rate-limits sign-in attempts."""

    def __init__(self):
        super().__init__(
            "Too many failed login attempts. Please try again later.",
            code="TOO_MANY_ATTEMPTS",
        )


class WrongPortalError(AuthorizationError):
    """Raised when an organizer signs in through the user login page."""

    def __init__(self):
        super().__init__(
            "Admin users should login through the Admin Login page.",
            code="WRONG_PORTAL",
            details={"sign_out": True, "redirect_to": "admin-login"},
        )


class AccountValidationError(ValidationError):
    """Raised when sign-up or sign-in input is rejected before reaching the provider."""

    def __init__(self, message: str):
        super().__init__(message, code="ACCOUNT_INPUT_INVALID")


class InvalidEmailError(ValidationError):
    """Raised when the provider rejects the email format."""

    def __init__(self):
        super().__init__("Invalid email format.", code="INVALID_EMAIL")


class EmailAlreadyRegisteredError(ValidationError):
    """Raised when signing up with an email that already has an account."""

    def __init__(self):
        super().__init__(
            "Email is already registered. Please login instead.",
            code="EMAIL_ALREADY_REGISTERED",
        )


class WeakPasswordError(ValidationError):
    """Raised when the provider rejects the password strength."""

    def __init__(self, min_length: int = 6):
        super().__init__(
            f"Password is too weak. Use at least {min_length} characters.",
            code="WEAK_PASSWORD",
        )


class ProfileNotFoundError(NotFoundError):
    """Raised when the authenticated user has no users profile row."""

    def __init__(self, user_id: str):
        super().__init__(
            "User profile not found. Please contact support.",
            code="PROFILE_NOT_FOUND",
            details={"user_id": user_id},
        )

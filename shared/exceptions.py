"""
Base exception classes for the Club Events backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class ClubEventsError(Exception):
    """
    Base exception for all Club Events errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(ClubEventsError):
    """Resource not found."""

    pass


class ValidationError(ClubEventsError):
    """Input validation failed."""

    pass


class AuthenticationError(ClubEventsError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(ClubEventsError):
    """Authorization failed (insufficient permissions)."""

    pass


class ExternalServiceError(ClubEventsError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class RemoteUnavailableError(ExternalServiceError):
    """
    A backend call failed (network, timeout, permission).

    The original backend error is chained as __cause__ and never
    exposed through to_dict().
    """

    def __init__(self, operation: str, service: str = "supabase"):
        super().__init__(
            f"Could not {operation}. Please try again.",
            service=service,
            code="REMOTE_UNAVAILABLE",
            details={"operation": operation},
        )


class CascadeIncompleteError(ClubEventsError):
    """
    A multi-step delete was only partially applied.

    remaining_registration_ids is None when the dependent records could
    not even be enumerated.
    """

    def __init__(self, event_id: str, remaining_registration_ids: Optional[list[str]] = None):
        if remaining_registration_ids is None:
            message = (
                f"Event {event_id} was deleted but its registrations could not be listed for removal"
            )
        else:
            message = (
                f"Event {event_id} was deleted but "
                f"{len(remaining_registration_ids)} registration(s) could not be removed"
            )
        super().__init__(
            message,
            code="CASCADE_INCOMPLETE",
            details={
                "event_id": event_id,
                "remaining_registration_ids": remaining_registration_ids,
            },
        )

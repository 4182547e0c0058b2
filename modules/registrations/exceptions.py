"""
Registrations module exceptions.
"""

from shared.exceptions import NotFoundError


class RegistrationNotFoundError(NotFoundError):
    """Raised when cancelling a registration that does not exist."""

    def __init__(self, user_id: str, event_id: str):
        super().__init__(
            "Registration not found.",
            code="REGISTRATION_NOT_FOUND",
            details={"user_id": user_id, "event_id": event_id},
        )

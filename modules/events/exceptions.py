"""
Events module exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str):
        super().__init__(
            "Event not found.",
            code="EVENT_NOT_FOUND",
            details={"event_id": event_id},
        )


class EventValidationError(ValidationError):
    """Raised when required event fields are missing or blank."""

    def __init__(self, missing_fields: list[str]):
        super().__init__(
            "Please fill in all required fields.",
            code="EVENT_INVALID",
            details={"missing_fields": missing_fields},
        )


class InvalidSortKeyError(ValidationError):
    """Raised when the listing is asked for an unknown ordering."""

    def __init__(self, key: str):
        super().__init__(
            f"Unknown sort order: {key}",
            code="INVALID_SORT_KEY",
            details={"sort": key},
        )

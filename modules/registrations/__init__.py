"""
Registrations module.

Handles registering for events, cancelling, and derived participant
counts.

Public API:
- IRegistrationService: Interface for the registration workflow
- Registration, RegistrationOutcome, RegistrationResult: Models
- RegistrationNotFoundError: Raised when cancelling nothing
"""

from .interfaces import IRegistrationService
from .models import (
    CancelOutcome,
    CancelResult,
    Participant,
    ParticipantCount,
    RegisteredEvent,
    Registration,
    RegistrationOutcome,
    RegistrationResult,
    RegistrationStatus,
)
from .exceptions import RegistrationNotFoundError

__all__ = [
    # Interface
    "IRegistrationService",
    # Models
    "CancelOutcome",
    "CancelResult",
    "Participant",
    "ParticipantCount",
    "RegisteredEvent",
    "Registration",
    "RegistrationOutcome",
    "RegistrationResult",
    "RegistrationStatus",
    # Exceptions
    "RegistrationNotFoundError",
]

"""
Registrations module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from modules.events.models import Event


class RegistrationOutcome(str, Enum):
    """Result of a register request. Neither value is an error."""

    REGISTERED = "registered"
    ALREADY_REGISTERED = "already_registered"


class CancelOutcome(str, Enum):
    """Result of a successful cancel request."""

    CANCELLED = "cancelled"


class Registration(BaseModel):
    """A user's registration for an event."""

    id: str = Field(..., description="Registration ID")
    user_id: str = Field(..., description="Registered user")
    event_id: str = Field(..., description="Event registered for")
    registered_at: datetime = Field(..., description="When the user registered")


class RegistrationResult(BaseModel):
    """Response to a register request."""

    outcome: RegistrationOutcome
    event_id: str
    registration: Optional[Registration] = None
    message: str


class CancelResult(BaseModel):
    """Response to a cancel request."""

    outcome: CancelOutcome = CancelOutcome.CANCELLED
    event_id: str
    message: str = "Registration cancelled successfully."


class RegistrationStatus(BaseModel):
    """Whether the current user is registered, as shown on the details page."""

    event_id: str
    registered: bool


class ParticipantCount(BaseModel):
    """Participants registered for an event, counted on request."""

    event_id: str
    count: int = Field(..., ge=0)
    registered: Optional[bool] = Field(
        None, description="Whether the caller is registered, None when signed out"
    )


class RegisteredEvent(BaseModel):
    """An event on the user dashboard, with the registration behind it."""

    event: Event
    registration_id: str
    registered_at: datetime


class Participant(BaseModel):
    """A registered participant on the organizer's participant list."""

    registration_id: str
    user_id: str
    name: str = ""
    email: str = ""
    registered_at: datetime

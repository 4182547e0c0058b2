"""
Events module data models.

These models define the event records published by the club and the
inputs organizers use to create and edit them.
"""

import datetime as dt
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator

REQUIRED_EVENT_FIELDS = ("title", "description", "date", "location")


class EventSortKey(str, Enum):
    """Orderings offered by the public listing page."""

    DATE_ASC = "date-asc"
    DATE_DESC = "date-desc"
    TITLE_ASC = "title-asc"
    TITLE_DESC = "title-desc"


class Event(BaseModel):
    """A published event."""

    id: str = Field(..., description="Event ID, assigned by the backend")
    title: str = Field(..., description="Event title")
    description: str = Field(..., description="Event description")
    date: dt.date = Field(..., description="Calendar day of the event")
    time: Optional[str] = Field(None, description="Display time, e.g. '09:00 AM'")
    location: str = Field(..., description="Venue")
    image_url: str = Field(..., description="Image URL or placeholder path")
    created_by: Optional[str] = Field(None, description="Organizer who created it")
    created_at: Optional[dt.datetime] = Field(None, description="Creation time")
    updated_at: Optional[dt.datetime] = Field(None, description="Last edit time")


class EventFields(BaseModel):
    """
    Editable event fields.

    Every field is optional at the model level so that missing values
    reach the service's validation and are reported together, before
    any backend call. On update only the fields actually supplied are
    merged into the stored record.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    location: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _blank_date_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ImageUpload(BaseModel):
    """An image file attached to a create or edit request."""

    filename: str = Field(..., description="Original file name")
    content: bytes = Field(..., description="File bytes")
    content_type: Optional[str] = Field(None, description="MIME type")


class EventPage(BaseModel):
    """A page of events from the listing engine."""

    events: list[Event] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="Events matching before paging")
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    has_more: bool = False
    message: Optional[str] = Field(None, description="Search summary for display")


class DashboardStats(BaseModel):
    """Figures shown on the organizer dashboard."""

    total_events: int = 0
    total_participants: int = 0
    upcoming_events: int = 0

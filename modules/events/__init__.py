"""
Events module.

Handles event CRUD, image upload, and the public listing engine.

Public API:
- IEventService: Interface for event operations
- Event, EventFields, ImageUpload: Event records and organizer input
- filter_events, sort_events, paginate: Listing/search engine
"""

from .interfaces import IEventService
from .models import (
    DashboardStats,
    Event,
    EventFields,
    EventPage,
    EventSortKey,
    ImageUpload,
)
from .search import describe_results, filter_events, paginate, sort_events
from .exceptions import EventNotFoundError, EventValidationError, InvalidSortKeyError

__all__ = [
    # Interface
    "IEventService",
    # Models
    "DashboardStats",
    "Event",
    "EventFields",
    "EventPage",
    "EventSortKey",
    "ImageUpload",
    # Listing engine
    "describe_results",
    "filter_events",
    "paginate",
    "sort_events",
    # Exceptions
    "EventNotFoundError",
    "EventValidationError",
    "InvalidSortKeyError",
]

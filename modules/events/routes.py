"""
Event API endpoints.

Public listing and detail pages, plus the organizer's create, edit,
delete and dashboard endpoints. Create and edit take multipart forms so
an image can ride along with the fields.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from pydantic import ValidationError as PydanticValidationError

from api.dependencies import get_event_service
from api.middleware.auth import require_admin
from shared.exceptions import ValidationError
from shared.models import Session

from .interfaces import IEventService
from .models import DashboardStats, Event, EventFields, EventPage, ImageUpload
from .search import describe_results, filter_events, paginate, sort_events

logger = logging.getLogger(__name__)

router = APIRouter()


def _build_fields(**supplied: Optional[str]) -> EventFields:
    # Only fields present in the form count as supplied for a partial edit.
    values = {name: value for name, value in supplied.items() if value is not None}
    try:
        return EventFields(**values)
    except PydanticValidationError as e:
        invalid = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise ValidationError(
            "Please check the event details.",
            code="INVALID_EVENT_FIELDS",
            details={"invalid_fields": invalid},
        ) from e


async def _read_image(image: Optional[UploadFile]) -> Optional[ImageUpload]:
    if image is None or not image.filename:
        return None
    content = await image.read()
    if not content:
        return None
    return ImageUpload(filename=image.filename, content=content, content_type=image.content_type)


@router.get("", response_model=EventPage)
async def list_events(
    q: str = Query(default="", description="Search term for title, description or location"),
    sort: Optional[str] = Query(default=None, description="date-asc, date-desc, title-asc or title-desc"),
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(default=20, ge=1, le=100, description="Items per page"),
    limit: Optional[int] = Query(default=None, ge=1, le=100, description="Return only the first N events"),
    service: IEventService = Depends(get_event_service),
) -> EventPage:
    """
    List events, soonest first.

    The search term and sort order are applied to the fetched list.
    With limit set (the landing page's featured events) paging is
    skipped and the first N events are returned.
    """
    events = await service.list_events()
    matches = filter_events(events, q)
    if sort:
        matches = sort_events(matches, sort)

    if limit is not None:
        result = EventPage(
            events=list(matches[:limit]),
            total=len(matches),
            page=1,
            page_size=limit,
            has_more=len(matches) > limit,
        )
    else:
        result = paginate(matches, page, page_size)

    result.message = describe_results(q, len(matches)) or None
    return result


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    session: Session = Depends(require_admin),
    service: IEventService = Depends(get_event_service),
) -> DashboardStats:
    """Organizer dashboard counters."""
    return await service.get_dashboard_stats()


@router.get("/{event_id}", response_model=Event)
async def get_event(
    event_id: str,
    service: IEventService = Depends(get_event_service),
) -> Event:
    """Get a single event for its detail page."""
    return await service.get_event(event_id)


@router.post("", response_model=Event, status_code=201)
async def create_event(
    title: str = Form(default=""),
    description: str = Form(default=""),
    date: str = Form(default=""),
    time: Optional[str] = Form(default=None),
    location: str = Form(default=""),
    image: Optional[UploadFile] = File(default=None),
    session: Session = Depends(require_admin),
    service: IEventService = Depends(get_event_service),
) -> Event:
    """
    Create an event.

    Without an image the placeholder image URL is stored.
    """
    fields = _build_fields(
        title=title, description=description, date=date, time=time, location=location
    )
    return await service.create_event(fields, session, await _read_image(image))


@router.put("/{event_id}", response_model=Event)
async def update_event(
    event_id: str,
    title: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    date: Optional[str] = Form(default=None),
    time: Optional[str] = Form(default=None),
    location: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None),
    session: Session = Depends(require_admin),
    service: IEventService = Depends(get_event_service),
) -> Event:
    """Edit an event; fields left out of the form keep their stored values."""
    fields = _build_fields(
        title=title, description=description, date=date, time=time, location=location
    )
    logger.debug(f"Event {event_id} edited by {session.subject_id}")
    return await service.update_event(event_id, fields, await _read_image(image))


@router.delete("/{event_id}", status_code=204)
async def delete_event(
    event_id: str,
    session: Session = Depends(require_admin),
    service: IEventService = Depends(get_event_service),
) -> None:
    """
    Delete an event and its registrations.

    A 500 with code CASCADE_INCOMPLETE means the event is gone but some
    registrations could not be removed.
    """
    logger.info(f"Event {event_id} deletion requested by {session.subject_id}")
    await service.delete_event(event_id)

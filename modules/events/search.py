"""
Listing and search engine.

Pure functions over events that were already fetched; nothing here
touches the backend.
"""

from typing import Sequence, Union

from .exceptions import InvalidSortKeyError
from .models import Event, EventPage, EventSortKey


def filter_events(events: Sequence[Event], term: str) -> Sequence[Event]:
    """
    Keep events whose title, description or location contains the term.

    Matching is case-insensitive. A blank term returns the input as is.
    """
    needle = (term or "").strip().lower()
    if not needle:
        return events

    return [
        event
        for event in events
        if needle in event.title.lower()
        or needle in event.description.lower()
        or needle in event.location.lower()
    ]


def sort_events(events: Sequence[Event], key: Union[EventSortKey, str]) -> list[Event]:
    """
    Order events by date or title, ascending or descending.

    Titles compare case-insensitively. The sort is stable, so events
    with equal keys keep their relative order in both directions.
    """
    try:
        sort_key = EventSortKey(key)
    except ValueError:
        raise InvalidSortKeyError(str(key))

    descending = sort_key in (EventSortKey.DATE_DESC, EventSortKey.TITLE_DESC)
    if sort_key in (EventSortKey.DATE_ASC, EventSortKey.DATE_DESC):
        return sorted(events, key=lambda event: event.date, reverse=descending)
    return sorted(events, key=lambda event: event.title.casefold(), reverse=descending)


def paginate(events: Sequence[Event], page: int = 1, page_size: int = 20) -> EventPage:
    """Slice one 1-indexed page out of the events."""
    page = max(page, 1)
    page_size = max(page_size, 1)
    offset = (page - 1) * page_size
    total = len(events)

    return EventPage(
        events=list(events[offset:offset + page_size]),
        total=total,
        page=page,
        page_size=page_size,
        has_more=(offset + page_size) < total,
    )


def describe_results(term: str, count: int) -> str:
    """Search summary shown above the listing; empty when not searching."""
    term = (term or "").strip()
    if not term:
        return ""
    if count == 0:
        return f'No events found for "{term}"'
    if count == 1:
        return f'Found 1 event matching "{term}"'
    return f'Found {count} events matching "{term}"'

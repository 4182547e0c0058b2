"""
Base repository for Supabase table access.

Repositories map rows to Pydantic models and let backend errors
propagate; services translate them at their boundary.
"""

import functools
from typing import Any, Callable, Generic, Optional, TypeVar
from supabase import Client


T = TypeVar("T")

Row = dict[str, Any]

# Postgres SQLSTATE for a value the column type cannot parse, e.g. "abc" as a UUID
INVALID_TEXT_REPRESENTATION = "22P02"


def is_malformed_key(error: Exception) -> bool:
    """Check whether a backend error means a lookup key was not a valid column value."""
    return str(getattr(error, "code", "")) == INVALID_TEXT_REPRESENTATION


def malformed_key_returns(empty: Callable[[], Any]):
    """
    Make a lookup answer as if nothing matched when its key is malformed.

    No row can have a key that the column type cannot represent, so the
    method returns empty() instead of raising. Other errors propagate.

    Example:
        @malformed_key_returns(lambda: None)
        def get_by_id(self, event_id): ...
    """

    def decorator(method):
        @functools.wraps(method)
        def wrapper(*args, **kwargs):
            try:
                return method(*args, **kwargs)
            except Exception as e:
                if is_malformed_key(e):
                    return empty()
                raise

        return wrapper

    return decorator


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Subclasses set table and implement _map, then build queries on
    self._db and hand results to _all/_one.

    Example:
        class EventRepository(BaseRepository[Event]):
            table = "events"

            def get_by_id(self, event_id: str) -> Optional[Event]:
                return self._one(self._query().select("*").eq("id", event_id).execute())
    """

    table: str = ""

    def __init__(self, db: Client) -> None:
        self._db = db

    def _query(self):
        return self._db.table(self.table)

    def _map(self, row: Row) -> T:
        raise NotImplementedError

    def _all(self, result: Any) -> list[T]:
        return [self._map(row) for row in (result.data or [])]

    def _one(self, result: Any) -> Optional[T]:
        """First mapped row, or None when the query matched nothing."""
        rows = self._all(result)
        return rows[0] if rows else None

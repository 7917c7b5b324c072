"""Helpers shared by the Supabase repositories."""

from datetime import datetime
from typing import Any

from supabase import PostgrestAPIError

from shoot_coordinator.errors import BackendError


def execute(query: Any) -> Any:  # noqa: ANN401
    """Execute a PostgREST query, wrapping API errors as BackendError."""
    try:
        return query.execute()
    except PostgrestAPIError as exc:
        raise BackendError(exc.message or "Supabase request failed") from exc


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO timestamp column, returning None for empty values."""
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def first_row(response: Any, error: str) -> dict[str, Any]:  # noqa: ANN401
    """Return the first row of a write response or raise BackendError."""
    if not response.data:
        raise BackendError(error)
    return response.data[0]

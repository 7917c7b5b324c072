"""Domain models for photographer availability."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class AvailabilityEntry:
    """A single (photographer, date) availability fact."""

    id: UUID
    user_id: UUID
    available_date: date
    created_at: datetime | None = None

"""Domain models for data change events."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class ChangeAction(StrEnum):
    """Kind of write that produced a change event."""

    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    """A committed write on one of the tracked tables."""

    sequence: int
    table: str
    action: ChangeAction
    record_id: UUID
    occurred_at: datetime

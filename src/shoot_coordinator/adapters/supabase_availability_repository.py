"""Supabase-backed availability repository."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from shoot_coordinator.adapters.supabase_support import (
    execute,
    first_row,
    parse_timestamp,
)
from shoot_coordinator.domain.availability import AvailabilityEntry
from shoot_coordinator.services.availability import AvailabilityRepository


@dataclass
class SupabaseAvailabilityRepository(AvailabilityRepository):
    """Supabase implementation for availability rows."""

    client: Client

    def get_entry(self, user_id: UUID, day: date) -> AvailabilityEntry | None:
        """Return the availability row for (user, day), if present."""
        response = execute(
            self.client.table("availability")
            .select("id, user_id, available_date, created_at")
            .eq("user_id", str(user_id))
            .eq("available_date", day.isoformat())
            .limit(1)
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def add_entry(self, user_id: UUID, day: date) -> AvailabilityEntry:
        """Insert the row for (user, day), keeping an existing one."""
        response = execute(
            self.client.table("availability").upsert(
                {"user_id": str(user_id), "available_date": day.isoformat()},
                on_conflict="user_id,available_date",
            )
        )
        return _parse_entry(first_row(response, "Failed to save availability"))

    def remove_entry(self, user_id: UUID, day: date) -> None:
        """Delete the row for (user, day)."""
        execute(
            self.client.table("availability")
            .delete()
            .eq("user_id", str(user_id))
            .eq("available_date", day.isoformat())
        )

    def list_dates(self, user_id: UUID, start: date, end: date) -> list[date]:
        """Return available dates for a user within [start, end]."""
        response = execute(
            self.client.table("availability")
            .select("available_date")
            .eq("user_id", str(user_id))
            .gte("available_date", start.isoformat())
            .lte("available_date", end.isoformat())
            .order("available_date", desc=False)
        )
        return [
            date.fromisoformat(str(row["available_date"]))
            for row in response.data or []
        ]

    def list_user_ids(self, day: date) -> list[UUID]:
        """Return user ids available on a date."""
        response = execute(
            self.client.table("availability")
            .select("user_id")
            .eq("available_date", day.isoformat())
        )
        return [UUID(str(row["user_id"])) for row in response.data or []]


def _parse_entry(row: dict[str, object]) -> AvailabilityEntry:
    return AvailabilityEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        available_date=date.fromisoformat(str(row["available_date"])),
        created_at=parse_timestamp(row.get("created_at")),
    )

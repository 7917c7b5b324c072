"""Supabase-backed shoot repository."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from uuid import UUID

from supabase import Client

from shoot_coordinator.adapters.supabase_support import (
    execute,
    first_row,
    parse_timestamp,
)
from shoot_coordinator.domain.shoots import Shoot, ShootDraft, ShootStatus
from shoot_coordinator.services.workflow import ShootRepository

_COLUMNS = (
    "id, merchant_name, location, shoot_date, shoot_time, photographer_id, "
    "status, qc_link, raw_link, payout, created_at, updated_at"
)


@dataclass
class SupabaseShootRepository(ShootRepository):
    """Supabase implementation for shoot persistence."""

    client: Client

    def create_shoot(self, draft: ShootDraft, status: ShootStatus) -> Shoot:
        """Insert a shoot row and return it."""
        response = execute(
            self.client.table("shoots").insert(
                {
                    "merchant_name": draft.merchant_name,
                    "location": draft.location,
                    "shoot_date": draft.shoot_date.isoformat(),
                    "shoot_time": draft.shoot_time.isoformat(timespec="minutes"),
                    "photographer_id": str(draft.photographer_id)
                    if draft.photographer_id
                    else None,
                    "status": str(status),
                }
            )
        )
        return _parse_shoot(first_row(response, "Failed to create shoot"))

    def get_shoot(self, shoot_id: UUID) -> Shoot | None:
        """Return a shoot by id, if present."""
        response = execute(
            self.client.table("shoots")
            .select(_COLUMNS)
            .eq("id", str(shoot_id))
            .limit(1)
        )
        if not response.data:
            return None
        return _parse_shoot(response.data[0])

    def update_shoot(self, shoot_id: UUID, changes: dict[str, object]) -> Shoot:
        """Apply column changes and return the updated row."""
        payload = dict(changes)
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = execute(
            self.client.table("shoots").update(payload).eq("id", str(shoot_id))
        )
        return _parse_shoot(first_row(response, "Failed to update shoot"))

    def list_shoots(self) -> list[Shoot]:
        """Return every shoot ordered by shoot date."""
        response = execute(
            self.client.table("shoots")
            .select(_COLUMNS)
            .order("shoot_date", desc=False)
        )
        return [_parse_shoot(row) for row in response.data or []]

    def list_for_photographer(self, photographer_id: UUID) -> list[Shoot]:
        """Return shoots assigned to a photographer ordered by shoot date."""
        response = execute(
            self.client.table("shoots")
            .select(_COLUMNS)
            .eq("photographer_id", str(photographer_id))
            .order("shoot_date", desc=False)
        )
        return [_parse_shoot(row) for row in response.data or []]

    def list_in_period(
        self, start: date, end: date, statuses: frozenset[ShootStatus]
    ) -> list[Shoot]:
        """Return shoots within [start, end] having one of the statuses."""
        response = execute(
            self.client.table("shoots")
            .select(_COLUMNS)
            .in_("status", sorted(str(status) for status in statuses))
            .gte("shoot_date", start.isoformat())
            .lte("shoot_date", end.isoformat())
            .order("photographer_id", desc=False)
        )
        return [_parse_shoot(row) for row in response.data or []]


def _parse_shoot(row: dict[str, object]) -> Shoot:
    photographer_id = row.get("photographer_id")
    payout = row.get("payout")
    return Shoot(
        id=UUID(str(row["id"])),
        merchant_name=str(row["merchant_name"]),
        location=str(row["location"]),
        shoot_date=date.fromisoformat(str(row["shoot_date"])),
        shoot_time=time.fromisoformat(str(row["shoot_time"])),
        photographer_id=UUID(str(photographer_id)) if photographer_id else None,
        status=ShootStatus(str(row["status"])),
        qc_link=_optional_str(row.get("qc_link")),
        raw_link=_optional_str(row.get("raw_link")),
        payout=float(payout) if payout is not None else None,
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )


def _optional_str(value: object) -> str | None:
    return str(value) if value else None

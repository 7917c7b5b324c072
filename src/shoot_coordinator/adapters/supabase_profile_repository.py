"""Supabase-backed profile repository."""

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from shoot_coordinator.adapters.supabase_support import (
    execute,
    first_row,
    parse_timestamp,
)
from shoot_coordinator.domain.models import Profile, Role
from shoot_coordinator.services.profiles import ProfileRepository

_COLUMNS = "id, name, phone, role, created_at, updated_at"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the profile for a user id, if present."""
        response = execute(
            self.client.table("profiles")
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
        )
        if response.data:
            return _parse_profile(response.data[0])
        return None

    def create_profile(
        self, user_id: UUID, name: str, phone: str | None, role: Role
    ) -> Profile:
        """Insert a profile row and return it."""
        response = execute(
            self.client.table("profiles").insert(
                {"id": str(user_id), "name": name, "phone": phone, "role": str(role)}
            )
        )
        return _parse_profile(first_row(response, "Failed to create profile"))

    def list_by_role(self, role: Role) -> list[Profile]:
        """Return profiles with a role ordered by name."""
        response = execute(
            self.client.table("profiles")
            .select(_COLUMNS)
            .eq("role", str(role))
            .order("name", desc=False)
        )
        return [_parse_profile(row) for row in response.data or []]

    def list_by_ids(self, user_ids: Iterable[UUID]) -> list[Profile]:
        """Return the profiles for the given ids."""
        ids = [str(user_id) for user_id in user_ids]
        if not ids:
            return []
        response = execute(
            self.client.table("profiles").select(_COLUMNS).in_("id", ids)
        )
        return [_parse_profile(row) for row in response.data or []]


def _parse_profile(row: dict[str, object]) -> Profile:
    phone = row.get("phone")
    return Profile(
        id=UUID(str(row["id"])),
        name=str(row["name"]),
        phone=str(phone) if phone else None,
        role=Role(str(row.get("role") or Role.PHOTOGRAPHER)),
        created_at=parse_timestamp(row.get("created_at")),
        updated_at=parse_timestamp(row.get("updated_at")),
    )

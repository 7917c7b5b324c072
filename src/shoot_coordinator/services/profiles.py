"""Profile lookups."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from shoot_coordinator.domain.models import Profile, Role


class ProfileRepository(Protocol):
    """Persistence interface for profiles."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return a profile by id, if present."""

    def create_profile(
        self, user_id: UUID, name: str, phone: str | None, role: Role
    ) -> Profile:
        """Create a profile for a new identity and return it."""

    def list_by_role(self, role: Role) -> list[Profile]:
        """Return every profile with the given role."""

    def list_by_ids(self, user_ids: Iterable[UUID]) -> list[Profile]:
        """Return the profiles matching the ids."""


@dataclass
class ProfileService:
    """Application service for profile reads."""

    repository: ProfileRepository

    def get(self, user_id: UUID) -> Profile | None:
        """Return a profile by id."""
        return self.repository.get_profile(user_id)

    def photographers(self) -> list[Profile]:
        """Return all photographer profiles."""
        return self.repository.list_by_role(Role.PHOTOGRAPHER)

    def by_ids(self, user_ids: Iterable[UUID]) -> dict[UUID, Profile]:
        """Return profiles keyed by id, skipping unknown ids."""
        ids = set(user_ids)
        if not ids:
            return {}
        return {profile.id: profile for profile in self.repository.list_by_ids(ids)}

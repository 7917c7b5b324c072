"""Domain models for signed-in sessions."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from shoot_coordinator.domain.models import Profile, Role


@dataclass
class UserSession:
    """An authenticated identity resolved to its profile.

    Created at sign-in (or when a bearer token is resolved) and invalidated
    at sign-out. Services receive it explicitly for every operation.
    """

    access_token: str
    profile: Profile
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    invalidated_at: datetime | None = None

    @property
    def user_id(self) -> UUID:
        return self.profile.id

    @property
    def role(self) -> Role:
        return self.profile.role

    @property
    def is_active(self) -> bool:
        return self.invalidated_at is None

    def invalidate(self) -> None:
        """Mark the session as ended."""
        if self.invalidated_at is None:
            self.invalidated_at = datetime.now(tz=UTC)

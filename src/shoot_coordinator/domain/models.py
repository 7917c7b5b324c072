"""Domain models for identities."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Role(StrEnum):
    """Authorization class of a signed-in profile."""

    ADMIN = "admin"
    PHOTOGRAPHER = "photographer"


@dataclass(frozen=True)
class Profile:
    """Represents a profile row linked to an identity."""

    id: UUID
    name: str
    phone: str | None
    role: Role
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def first_name(self) -> str:
        """Return the first word of the name for greetings."""
        parts = self.name.split()
        return parts[0] if parts else self.name

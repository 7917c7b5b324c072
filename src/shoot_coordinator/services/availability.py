"""Availability ledger for photographers."""

import calendar
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol
from uuid import UUID

from shoot_coordinator.domain.availability import AvailabilityEntry
from shoot_coordinator.domain.changes import ChangeAction
from shoot_coordinator.domain.models import Profile, Role
from shoot_coordinator.domain.sessions import UserSession
from shoot_coordinator.errors import ValidationError
from shoot_coordinator.services.auth import require_role
from shoot_coordinator.services.changes import ChangeFeed
from shoot_coordinator.services.profiles import ProfileService

logger = logging.getLogger(__name__)


class AvailabilityRepository(Protocol):
    """Persistence interface for availability rows."""

    def get_entry(self, user_id: UUID, day: date) -> AvailabilityEntry | None:
        """Return the row for (user, day), if present."""

    def add_entry(self, user_id: UUID, day: date) -> AvailabilityEntry:
        """Insert a row for (user, day) and return it."""

    def remove_entry(self, user_id: UUID, day: date) -> None:
        """Delete the row for (user, day)."""

    def list_dates(self, user_id: UUID, start: date, end: date) -> list[date]:
        """Return available dates for a user within [start, end]."""

    def list_user_ids(self, day: date) -> list[UUID]:
        """Return every user id available on ``day``."""


@dataclass
class AvailabilityLedger:
    """Per-photographer set of available dates."""

    repository: AvailabilityRepository
    profile_service: ProfileService
    change_feed: ChangeFeed
    today: Callable[[], date] = field(default=date.today)

    def is_available(self, photographer_id: UUID, day: date) -> bool:
        """Return True when the photographer marked ``day`` available."""
        return self.repository.get_entry(photographer_id, day) is not None

    def set_available(self, photographer_id: UUID, day: date) -> None:
        """Mark ``day`` available; no-op when already marked."""
        self._ensure_editable(day)
        if self.is_available(photographer_id, day):
            return
        entry = self.repository.add_entry(photographer_id, day)
        self.change_feed.publish("availability", ChangeAction.INSERT, entry.id)
        logger.info("Marked available", extra={"user_id": str(photographer_id)})

    def set_unavailable(self, photographer_id: UUID, day: date) -> None:
        """Clear ``day``; no-op when not marked."""
        self._ensure_editable(day)
        entry = self.repository.get_entry(photographer_id, day)
        if entry is None:
            return
        self.repository.remove_entry(photographer_id, day)
        self.change_feed.publish("availability", ChangeAction.DELETE, entry.id)
        logger.info("Marked unavailable", extra={"user_id": str(photographer_id)})

    def toggle(self, photographer_id: UUID, day: date) -> bool:
        """Flip membership for ``day`` and return the new state."""
        if self.is_available(photographer_id, day):
            self.set_unavailable(photographer_id, day)
            return False
        self.set_available(photographer_id, day)
        return True

    def list_month(self, photographer_id: UUID, year: int, month: int) -> set[date]:
        """Return the photographer's available dates in a calendar month."""
        last_day = calendar.monthrange(year, month)[1]
        return set(
            self.repository.list_dates(
                photographer_id, date(year, month, 1), date(year, month, last_day)
            )
        )

    def eligible_photographers(self, day: date) -> list[Profile]:
        """Return photographers available on ``day``, ordered by name."""
        available_ids = set(self.repository.list_user_ids(day))
        if not available_ids:
            return []
        return sorted(
            (
                profile
                for profile in self.profile_service.photographers()
                if profile.id in available_ids
            ),
            key=lambda profile: profile.name.lower(),
        )

    def set_own_availability(
        self, session: UserSession, day: date, available: bool
    ) -> None:
        """Set availability for the signed-in photographer."""
        require_role(session, Role.PHOTOGRAPHER)
        if available:
            self.set_available(session.user_id, day)
        else:
            self.set_unavailable(session.user_id, day)

    def toggle_own(self, session: UserSession, day: date) -> bool:
        """Toggle availability for the signed-in photographer."""
        require_role(session, Role.PHOTOGRAPHER)
        return self.toggle(session.user_id, day)

    def own_month(self, session: UserSession, year: int, month: int) -> set[date]:
        """Return the signed-in photographer's dates for a month."""
        require_role(session, Role.PHOTOGRAPHER)
        return self.list_month(session.user_id, year, month)

    def _ensure_editable(self, day: date) -> None:
        if day < self.today():
            raise ValidationError("Past dates cannot be changed.")

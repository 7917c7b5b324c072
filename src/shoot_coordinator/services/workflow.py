"""Shoot workflow engine.

Owns the shoot status field and its forward-only transition graph:

    Assigned -> Accepted -> Reached -> Started -> Completed
             -> QC_Uploaded -> Approved

The assigned photographer advances the first four steps one at a time and
submits deliverables from Completed. Admins create shoots and approve them
from QC_Uploaded. Every write is committed before any SMS is attempted, and
a failed SMS never undoes a committed transition.
"""

import logging
import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from shoot_coordinator.domain.changes import ChangeAction
from shoot_coordinator.domain.models import Role
from shoot_coordinator.domain.notifications import (
    SmsCategory,
    photographer_reached_message,
    qc_uploaded_message,
    shoot_assigned_message,
)
from shoot_coordinator.domain.sessions import UserSession
from shoot_coordinator.domain.shoots import (
    ADVANCEABLE_STATUSES,
    DELIVERED_STATUSES,
    DashboardStats,
    PhotographerShoots,
    Shoot,
    ShootDraft,
    ShootListing,
    ShootStatus,
    next_status,
)
from shoot_coordinator.errors import (
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from shoot_coordinator.services.auth import require_role
from shoot_coordinator.services.availability import AvailabilityLedger
from shoot_coordinator.services.changes import ChangeFeed
from shoot_coordinator.services.notifications import NotificationService
from shoot_coordinator.services.profiles import ProfileService

logger = logging.getLogger(__name__)


class ShootRepository(Protocol):
    """Persistence interface for shoots."""

    def create_shoot(self, draft: ShootDraft, status: ShootStatus) -> Shoot:
        """Insert a shoot and return it."""

    def get_shoot(self, shoot_id: UUID) -> Shoot | None:
        """Return a shoot by id, if present."""

    def update_shoot(self, shoot_id: UUID, changes: dict[str, object]) -> Shoot:
        """Apply column changes to a shoot and return the updated row."""

    def list_shoots(self) -> list[Shoot]:
        """Return every shoot ordered by shoot date."""

    def list_for_photographer(self, photographer_id: UUID) -> list[Shoot]:
        """Return shoots assigned to a photographer ordered by shoot date."""

    def list_in_period(
        self, start: date, end: date, statuses: frozenset[ShootStatus]
    ) -> list[Shoot]:
        """Return shoots dated within [start, end] with one of the statuses."""


@dataclass
class ShootWorkflowService:
    """Application service for shoot scheduling and status transitions."""

    repository: ShootRepository
    profile_service: ProfileService
    availability_ledger: AvailabilityLedger
    notification_service: NotificationService
    change_feed: ChangeFeed
    admin_phone: str | None = None

    async def create_shoot(self, session: UserSession, draft: ShootDraft) -> Shoot:
        """Schedule a shoot, optionally pre-assigned to an available photographer."""
        require_role(session, Role.ADMIN)
        merchant_name = draft.merchant_name.strip()
        location = draft.location.strip()
        if not merchant_name:
            raise ValidationError("Merchant name is required.")
        if not location:
            raise ValidationError("Location is required.")

        photographer = None
        if draft.photographer_id is not None:
            eligible = {
                profile.id: profile
                for profile in self.availability_ledger.eligible_photographers(
                    draft.shoot_date
                )
            }
            photographer = eligible.get(draft.photographer_id)
            if photographer is None:
                raise ValidationError(
                    "Selected photographer is not available on this date."
                )

        shoot = self.repository.create_shoot(
            ShootDraft(
                merchant_name=merchant_name,
                location=location,
                shoot_date=draft.shoot_date,
                shoot_time=draft.shoot_time,
                photographer_id=draft.photographer_id,
            ),
            status=ShootStatus.ASSIGNED,
        )
        self.change_feed.publish("shoots", ChangeAction.INSERT, shoot.id)
        logger.info("Shoot created", extra={"shoot_id": str(shoot.id)})

        if photographer is not None and photographer.phone:
            message = shoot_assigned_message(
                shoot.location, format_long_date(shoot.shoot_date)
            )
            await self._notify(
                photographer.phone, message, SmsCategory.SHOOT_ASSIGNED
            )
        return shoot

    async def advance(self, session: UserSession, shoot_id: UUID) -> Shoot:
        """Move the assigned photographer's shoot to the next status."""
        shoot = self._get_assigned_shoot(session, shoot_id)
        target = next_status(shoot.status)
        if shoot.status not in ADVANCEABLE_STATUSES or target is None:
            raise ValidationError(f"Shoot cannot be advanced from {shoot.status}.")

        updated = self.repository.update_shoot(shoot.id, {"status": str(target)})
        self.change_feed.publish("shoots", ChangeAction.UPDATE, updated.id)
        logger.info(
            "Shoot advanced",
            extra={"shoot_id": str(shoot.id), "status": str(target)},
        )

        if target is ShootStatus.REACHED:
            message = photographer_reached_message(
                shoot.merchant_name, session.profile.name
            )
            await self._notify_admin(message, SmsCategory.PHOTOGRAPHER_REACHED)
        return updated

    async def submit_deliverables(
        self,
        session: UserSession,
        shoot_id: UUID,
        qc_link: str | None,
        raw_link: str | None,
    ) -> Shoot:
        """Attach deliverable links and move the shoot to QC_Uploaded."""
        shoot = self._get_assigned_shoot(session, shoot_id)
        if shoot.status is not ShootStatus.COMPLETED:
            raise ValidationError("Deliverables can only be submitted once completed.")
        qc = _clean_link(qc_link)
        raw = _clean_link(raw_link)
        if qc is None and raw is None:
            raise ValidationError("Please provide at least one link.")

        updated = self.repository.update_shoot(
            shoot.id,
            {
                "qc_link": qc,
                "raw_link": raw,
                "status": str(ShootStatus.QC_UPLOADED),
            },
        )
        self.change_feed.publish("shoots", ChangeAction.UPDATE, updated.id)
        logger.info("Deliverables submitted", extra={"shoot_id": str(shoot.id)})

        if qc is not None:
            await self._notify_admin(
                qc_uploaded_message(shoot.merchant_name, qc),
                SmsCategory.QC_UPLOADED,
            )
        return updated

    def approve(self, session: UserSession, shoot_id: UUID, payout: object) -> Shoot:
        """Record the approved payout and move the shoot to Approved."""
        require_role(session, Role.ADMIN)
        shoot = self._get_shoot(shoot_id)
        if shoot.status is not ShootStatus.QC_UPLOADED:
            raise ValidationError("Only shoots with uploaded QC can be approved.")
        amount = parse_payout(payout)

        updated = self.repository.update_shoot(
            shoot.id,
            {"payout": amount, "status": str(ShootStatus.APPROVED)},
        )
        self.change_feed.publish("shoots", ChangeAction.UPDATE, updated.id)
        logger.info("Shoot approved", extra={"shoot_id": str(shoot.id)})
        return updated

    def list_all(self, session: UserSession) -> list[ShootListing]:
        """Return every shoot with its photographer for the admin table."""
        require_role(session, Role.ADMIN)
        shoots = self.repository.list_shoots()
        profiles = self.profile_service.by_ids(
            shoot.photographer_id for shoot in shoots if shoot.photographer_id
        )
        return [
            ShootListing(
                shoot=shoot,
                photographer=profiles.get(shoot.photographer_id)
                if shoot.photographer_id
                else None,
            )
            for shoot in shoots
        ]

    def list_for_photographer(self, session: UserSession) -> PhotographerShoots:
        """Return the signed-in photographer's shoots split by progress."""
        require_role(session, Role.PHOTOGRAPHER)
        shoots = self.repository.list_for_photographer(session.user_id)
        return PhotographerShoots(
            active=[shoot for shoot in shoots if shoot.is_active],
            delivered=[shoot for shoot in shoots if shoot.is_delivered],
        )

    def dashboard_stats(self, session: UserSession) -> DashboardStats:
        """Return counters for the admin dashboard."""
        require_role(session, Role.ADMIN)
        shoots = self.repository.list_shoots()
        return DashboardStats(
            total_shoots=len(shoots),
            completed_shoots=sum(
                1 for shoot in shoots if shoot.status in DELIVERED_STATUSES
            ),
            pending_shoots=sum(
                1 for shoot in shoots if shoot.status in ADVANCEABLE_STATUSES
            ),
            photographers=len(self.profile_service.photographers()),
        )

    def _get_shoot(self, shoot_id: UUID) -> Shoot:
        shoot = self.repository.get_shoot(shoot_id)
        if shoot is None:
            raise NotFoundError(f"Shoot {shoot_id} not found")
        return shoot

    def _get_assigned_shoot(self, session: UserSession, shoot_id: UUID) -> Shoot:
        require_role(session, Role.PHOTOGRAPHER)
        shoot = self._get_shoot(shoot_id)
        if shoot.photographer_id != session.user_id:
            raise AuthorizationError("Shoot is not assigned to you.")
        return shoot

    async def _notify_admin(self, message: str, category: SmsCategory) -> None:
        if not self.admin_phone:
            logger.info("No admin phone configured; SMS skipped: %s", message)
            return
        await self._notify(self.admin_phone, message, category)

    async def _notify(self, phone: str, message: str, category: SmsCategory) -> None:
        try:
            result = await self.notification_service.send(phone, message, category)
        except Exception:
            logger.exception("SMS dispatch raised", extra={"category": str(category)})
            return
        if not result.success:
            logger.warning(
                "SMS not delivered: %s",
                result.error,
                extra={"category": str(category)},
            )


def parse_payout(raw: object) -> float:
    """Return a finite, positive payout amount or raise ValidationError."""
    if isinstance(raw, bool):
        raise ValidationError("Please enter a valid payout amount.")
    if isinstance(raw, int | float | Decimal):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            raise ValidationError("Please enter a valid payout amount.") from None
    else:
        raise ValidationError("Please enter a valid payout amount.")
    if not math.isfinite(value) or value <= 0:
        raise ValidationError("Please enter a valid payout amount.")
    return value


def format_long_date(value: date) -> str:
    """Render a date as e.g. ``June 10, 2024``."""
    return f"{value:%B} {value.day}, {value.year}"


def _clean_link(link: str | None) -> str | None:
    if link is None:
        return None
    cleaned = link.strip()
    return cleaned or None

"""Domain models for shoots and their status sequence."""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import StrEnum
from typing import assert_never
from uuid import UUID

from shoot_coordinator.domain.models import Profile


class ShootStatus(StrEnum):
    """Shoot status values, declared in workflow order."""

    ASSIGNED = "Assigned"
    ACCEPTED = "Accepted"
    REACHED = "Reached"
    STARTED = "Started"
    COMPLETED = "Completed"
    QC_UPLOADED = "QC_Uploaded"
    APPROVED = "Approved"


STATUS_SEQUENCE: tuple[ShootStatus, ...] = tuple(ShootStatus)

# Statuses a photographer moves forward one step at a time.
ADVANCEABLE_STATUSES = frozenset(
    {
        ShootStatus.ASSIGNED,
        ShootStatus.ACCEPTED,
        ShootStatus.REACHED,
        ShootStatus.STARTED,
    }
)

# Statuses counted as delivered work for invoicing and dashboards.
DELIVERED_STATUSES = frozenset(
    {
        ShootStatus.COMPLETED,
        ShootStatus.QC_UPLOADED,
        ShootStatus.APPROVED,
    }
)


def next_status(status: ShootStatus) -> ShootStatus | None:
    """Return the status directly after ``status``, or None at the end."""
    index = STATUS_SEQUENCE.index(status)
    if index + 1 >= len(STATUS_SEQUENCE):
        return None
    return STATUS_SEQUENCE[index + 1]


def status_label(status: ShootStatus) -> str:
    """Return the display label for a status."""
    match status:
        case ShootStatus.ASSIGNED:
            return "Assigned"
        case ShootStatus.ACCEPTED:
            return "Accepted"
        case ShootStatus.REACHED:
            return "Reached"
        case ShootStatus.STARTED:
            return "Started"
        case ShootStatus.COMPLETED:
            return "Completed"
        case ShootStatus.QC_UPLOADED:
            return "QC Uploaded"
        case ShootStatus.APPROVED:
            return "Approved"
        case _:
            assert_never(status)


def action_label(status: ShootStatus) -> str | None:
    """Return the button label for the step that leads into ``status``."""
    match status:
        case ShootStatus.ACCEPTED:
            return "Accept Shoot"
        case ShootStatus.REACHED:
            return "Reached Location"
        case ShootStatus.STARTED:
            return "Shoot Started"
        case ShootStatus.COMPLETED:
            return "Shoot Completed"
        case ShootStatus.QC_UPLOADED:
            return "Submit Deliverables"
        case ShootStatus.APPROVED:
            return "Approve"
        case ShootStatus.ASSIGNED:
            return None
        case _:
            assert_never(status)


@dataclass(frozen=True)
class ShootDraft:
    """Admin input for scheduling a new shoot."""

    merchant_name: str
    location: str
    shoot_date: date
    shoot_time: time
    photographer_id: UUID | None = None


@dataclass(frozen=True)
class Shoot:
    """Represents a persisted shoot."""

    id: UUID
    merchant_name: str
    location: str
    shoot_date: date
    shoot_time: time
    photographer_id: UUID | None
    status: ShootStatus
    qc_link: str | None = None
    raw_link: str | None = None
    payout: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        """Return True while the photographer still has steps to take."""
        return self.status in ADVANCEABLE_STATUSES

    @property
    def is_delivered(self) -> bool:
        """Return True once the shoot itself is finished."""
        return self.status in DELIVERED_STATUSES


@dataclass(frozen=True)
class ShootListing:
    """Shoot joined with its assigned photographer profile."""

    shoot: Shoot
    photographer: Profile | None


@dataclass(frozen=True)
class PhotographerShoots:
    """A photographer's shoots split by progress."""

    active: list[Shoot]
    delivered: list[Shoot]


@dataclass(frozen=True)
class DashboardStats:
    """Counters shown on the admin dashboard."""

    total_shoots: int
    completed_shoots: int
    pending_shoots: int
    photographers: int

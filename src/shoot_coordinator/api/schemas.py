"""Request bodies and response views for the HTTP API."""

from datetime import date, time
from uuid import UUID

from pydantic import BaseModel, StrictFloat, StrictInt, StrictStr

from shoot_coordinator.domain.invoices import InvoiceSummary
from shoot_coordinator.domain.models import Profile, Role
from shoot_coordinator.domain.sessions import UserSession
from shoot_coordinator.domain.shoots import (
    Shoot,
    ShootDraft,
    ShootStatus,
    action_label,
    next_status,
    status_label,
)
from shoot_coordinator.services.invoices import month_label


class CreateShootRequest(BaseModel):
    """Admin form for scheduling a shoot."""

    merchant_name: str
    location: str
    shoot_date: date
    shoot_time: time
    photographer_id: UUID | None = None

    def to_draft(self) -> ShootDraft:
        return ShootDraft(
            merchant_name=self.merchant_name,
            location=self.location,
            shoot_date=self.shoot_date,
            shoot_time=self.shoot_time,
            photographer_id=self.photographer_id,
        )


class ApproveShootRequest(BaseModel):
    """Payout entered by the admin when approving."""

    # Strict so JSON booleans are not coerced to 1.0 or 0.0.
    payout: StrictInt | StrictFloat | StrictStr


class DeliverablesRequest(BaseModel):
    """Links submitted by the photographer after the shoot."""

    qc_link: str | None = None
    raw_link: str | None = None


class SubscribeRequest(BaseModel):
    """Tables a view wants change events for."""

    tables: list[str] | None = None


def profile_view(profile: Profile) -> dict[str, object]:
    return {
        "id": str(profile.id),
        "name": profile.name,
        "phone": profile.phone,
        "role": str(profile.role),
    }


def session_view(session: UserSession) -> dict[str, object]:
    return {
        "access_token": session.access_token,
        "token_type": "bearer",
        "profile": profile_view(session.profile),
    }


def next_action(shoot: Shoot, viewer: Role) -> str | None:
    """Return the button label for the step ``viewer`` may take next."""
    target = next_status(shoot.status)
    if target is None:
        return None
    # Approval is the only admin step; photographers drive the rest.
    admin_step = target is ShootStatus.APPROVED
    if admin_step != (viewer is Role.ADMIN):
        return None
    return action_label(target)


def shoot_view(
    shoot: Shoot,
    photographer: Profile | None = None,
    viewer: Role = Role.PHOTOGRAPHER,
) -> dict[str, object]:
    """Serialize a shoot with its display labels and next action."""
    view: dict[str, object] = {
        "id": str(shoot.id),
        "merchant_name": shoot.merchant_name,
        "location": shoot.location,
        "shoot_date": shoot.shoot_date.isoformat(),
        "shoot_time": shoot.shoot_time.isoformat(timespec="minutes"),
        "photographer_id": str(shoot.photographer_id)
        if shoot.photographer_id
        else None,
        "status": str(shoot.status),
        "status_label": status_label(shoot.status),
        "next_action": next_action(shoot, viewer),
        "qc_link": shoot.qc_link,
        "raw_link": shoot.raw_link,
        "payout": shoot.payout,
    }
    if photographer is not None:
        view["photographer"] = profile_view(photographer)
    return view


def invoice_view(summary: InvoiceSummary) -> dict[str, object]:
    return {
        "period_start": summary.period_start.isoformat(),
        "period_end": summary.period_end.isoformat(),
        "month_label": month_label(
            summary.period_start.year, summary.period_start.month
        ),
        "rate_per_shoot": summary.rate_per_shoot,
        "lines": [
            {
                "photographer": profile_view(line.photographer),
                "shoot_count": line.shoot_count,
                "total_payout": line.total_payout,
            }
            for line in summary.lines
        ],
        "photographer_count": summary.photographer_count,
        "total_shoots": summary.total_shoots,
        "total_payout": summary.total_payout,
        "approved_payout_total": summary.approved_payout_total,
    }

"""Admin dashboard endpoints."""

from dataclasses import asdict
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from shoot_coordinator.api.dependencies import (
    get_container,
    optional_session,
    require_admin,
    require_session,
)
from shoot_coordinator.api.schemas import (
    ApproveShootRequest,
    CreateShootRequest,
    invoice_view,
    profile_view,
    shoot_view,
)
from shoot_coordinator.containers import AppContainer
from shoot_coordinator.domain.models import Role
from shoot_coordinator.domain.sessions import UserSession
from shoot_coordinator.services.auth import SIGN_IN_PATH, dashboard_redirect
from shoot_coordinator.services.invoices import month_label, parse_month, recent_months

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("", response_model=None)
async def admin_dashboard(
    session: UserSession | None = Depends(optional_session),
    container: AppContainer = Depends(get_container),
) -> RedirectResponse | dict[str, object]:
    """Dashboard counters and shoot table, or a redirect for non-admins."""
    redirect = dashboard_redirect(session, Role.ADMIN)
    if redirect is not None or session is None:
        return RedirectResponse(
            redirect or SIGN_IN_PATH, status_code=status.HTTP_303_SEE_OTHER
        )
    stats = container.workflow_service.dashboard_stats(session)
    listings = container.workflow_service.list_all(session)
    return {
        "greeting": f"Hi, {session.profile.first_name}",
        "stats": asdict(stats),
        "shoots": [
            shoot_view(listing.shoot, listing.photographer, Role.ADMIN)
            for listing in listings
        ],
    }


@router.get("/shoots")
async def list_shoots(
    session: UserSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return every shoot with its photographer."""
    listings = container.workflow_service.list_all(session)
    return {
        "shoots": [
            shoot_view(listing.shoot, listing.photographer, Role.ADMIN)
            for listing in listings
        ]
    }


@router.post("/shoots", status_code=status.HTTP_201_CREATED)
async def create_shoot(
    request: CreateShootRequest,
    session: UserSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Schedule a new shoot."""
    shoot = await container.workflow_service.create_shoot(session, request.to_draft())
    return shoot_view(shoot, viewer=Role.ADMIN)


@router.get("/photographers/eligible")
async def eligible_photographers(
    day: date,
    _: UserSession = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return photographers available on a date."""
    profiles = container.availability_ledger.eligible_photographers(day)
    return {
        "day": day.isoformat(),
        "photographers": [profile_view(profile) for profile in profiles],
    }


@router.post("/shoots/{shoot_id}/approve")
async def approve_shoot(
    shoot_id: UUID,
    request: ApproveShootRequest,
    session: UserSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Approve a shoot with uploaded QC and record its payout."""
    shoot = container.workflow_service.approve(session, shoot_id, request.payout)
    return shoot_view(shoot, viewer=Role.ADMIN)


@router.get("/invoices")
async def monthly_invoice(
    month: str | None = None,
    _: UserSession = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the flat-rate invoice for a ``YYYY-MM`` month (default: current)."""
    if month is None:
        today = date.today()
        year, month_number = today.year, today.month
    else:
        year, month_number = parse_month(month)
    summary = container.payout_aggregator.monthly_invoice(year, month_number)
    return invoice_view(summary)


@router.get("/invoices/months")
async def invoice_months(_: UserSession = Depends(require_admin)) -> dict[str, object]:
    """Return the month selector options, newest first."""
    return {
        "months": [
            {"value": f"{year:04d}-{month:02d}", "label": month_label(year, month)}
            for year, month in recent_months(date.today())
        ]
    }

"""Photographer dashboard endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from shoot_coordinator.api.dependencies import (
    get_container,
    optional_session,
    require_session,
)
from shoot_coordinator.api.schemas import DeliverablesRequest, shoot_view
from shoot_coordinator.containers import AppContainer
from shoot_coordinator.domain.models import Role
from shoot_coordinator.domain.sessions import UserSession
from shoot_coordinator.services.auth import SIGN_IN_PATH, dashboard_redirect
from shoot_coordinator.services.invoices import month_label, parse_month

router = APIRouter(prefix="/photographer", tags=["photographer"])


@router.get("", response_model=None)
async def photographer_dashboard(
    session: UserSession | None = Depends(optional_session),
    container: AppContainer = Depends(get_container),
) -> RedirectResponse | dict[str, object]:
    """Own shoots split by progress, or a redirect for non-photographers."""
    redirect = dashboard_redirect(session, Role.PHOTOGRAPHER)
    if redirect is not None or session is None:
        return RedirectResponse(
            redirect or SIGN_IN_PATH, status_code=status.HTTP_303_SEE_OTHER
        )
    shoots = container.workflow_service.list_for_photographer(session)
    return {
        "greeting": f"Hi, {session.profile.first_name}",
        "active": [shoot_view(shoot) for shoot in shoots.active],
        "delivered": [shoot_view(shoot) for shoot in shoots.delivered],
    }


@router.post("/shoots/{shoot_id}/advance")
async def advance_shoot(
    shoot_id: UUID,
    session: UserSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Move an assigned shoot to its next status."""
    shoot = await container.workflow_service.advance(session, shoot_id)
    return shoot_view(shoot)


@router.post("/shoots/{shoot_id}/deliverables")
async def submit_deliverables(
    shoot_id: UUID,
    request: DeliverablesRequest,
    session: UserSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Attach QC and raw links to a completed shoot."""
    shoot = await container.workflow_service.submit_deliverables(
        session, shoot_id, request.qc_link, request.raw_link
    )
    return shoot_view(shoot)


@router.get("/availability")
async def month_availability(
    month: str | None = None,
    session: UserSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's available dates for a ``YYYY-MM`` month."""
    if month is None:
        today = container.availability_ledger.today()
        year, month_number = today.year, today.month
    else:
        year, month_number = parse_month(month)
    dates = container.availability_ledger.own_month(session, year, month_number)
    return {
        "month": f"{year:04d}-{month_number:02d}",
        "label": month_label(year, month_number),
        "dates": [day.isoformat() for day in sorted(dates)],
    }


@router.put("/availability/{day}")
async def mark_available(
    day: date,
    session: UserSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Mark a date available."""
    container.availability_ledger.set_own_availability(session, day, available=True)
    return {"day": day.isoformat(), "available": True}


@router.delete("/availability/{day}")
async def mark_unavailable(
    day: date,
    session: UserSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Clear a date."""
    container.availability_ledger.set_own_availability(session, day, available=False)
    return {"day": day.isoformat(), "available": False}


@router.post("/availability/{day}/toggle")
async def toggle_availability(
    day: date,
    session: UserSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Flip a date and return its new state."""
    available = container.availability_ledger.toggle_own(session, day)
    return {"day": day.isoformat(), "available": available}

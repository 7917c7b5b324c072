"""Sign-up, sign-in and password endpoints."""

from fastapi import APIRouter, Depends, status

from shoot_coordinator.api.dependencies import get_container, require_session
from shoot_coordinator.api.schemas import profile_view, session_view
from shoot_coordinator.containers import AppContainer
from shoot_coordinator.domain.auth import (
    PasswordResetRequest,
    PasswordUpdateForm,
    SignInForm,
    SignUpForm,
)
from shoot_coordinator.domain.sessions import UserSession
from shoot_coordinator.services.auth import SIGN_IN_PATH, dashboard_path, home_path

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/sign-up", status_code=status.HTTP_201_CREATED)
async def sign_up(
    form: SignUpForm, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Create a photographer account."""
    profile = container.session_service.sign_up(form)
    return {
        "profile": profile_view(profile),
        "message": "Account created. Please check your email to verify.",
    }


@router.post("/sign-in")
async def sign_in(
    form: SignInForm, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Verify credentials and return a bearer token."""
    session = container.session_service.sign_in(form)
    return {**session_view(session), "redirect_to": home_path(session)}


@router.post("/sign-out")
async def sign_out(
    session: UserSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """End the caller's session."""
    container.session_service.sign_out(session)
    return {"status": "signed_out", "redirect_to": SIGN_IN_PATH}


@router.post("/password-reset", status_code=status.HTTP_202_ACCEPTED)
async def password_reset(
    request: PasswordResetRequest, container: AppContainer = Depends(get_container)
) -> dict[str, str]:
    """Email a password reset link."""
    container.session_service.request_password_reset(request.email)
    return {"status": "sent"}


@router.post("/password-update")
async def password_update(
    form: PasswordUpdateForm,
    session: UserSession = Depends(require_session),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Set a new password for the signed-in user."""
    container.session_service.reset_password(session, form)
    return {"status": "updated", "redirect_to": dashboard_path(session.role)}


@router.get("/me")
async def me(session: UserSession = Depends(require_session)) -> dict[str, object]:
    """Return the caller's profile and dashboard."""
    return {
        "profile": profile_view(session.profile),
        "dashboard": dashboard_path(session.role),
    }

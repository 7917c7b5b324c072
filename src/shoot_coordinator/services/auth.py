"""Session resolution and role gating."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol, assert_never
from uuid import UUID

from shoot_coordinator.domain.auth import (
    AuthenticatedIdentity,
    PasswordUpdateForm,
    SignInForm,
    SignUpForm,
)
from shoot_coordinator.domain.models import Profile, Role
from shoot_coordinator.domain.sessions import UserSession
from shoot_coordinator.errors import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    ValidationError,
)
from shoot_coordinator.services.profiles import ProfileRepository

logger = logging.getLogger(__name__)

SIGN_IN_PATH = "/auth"
DUPLICATE_EMAIL_MESSAGE = "This email is already registered. Please sign in instead."
# Supabase issues access tokens valid for one hour by default.
ACCESS_TOKEN_LIFETIME = timedelta(hours=1)


class IdentityProvider(Protocol):
    """External identity provider operations."""

    def sign_up(self, email: str, password: str, metadata: dict[str, object]) -> UUID:
        """Register credentials and return the new user id."""

    def sign_in(self, email: str, password: str) -> AuthenticatedIdentity:
        """Verify credentials and return the identity with an access token."""

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""

    def send_password_reset(self, email: str, redirect_to: str | None) -> None:
        """Send a password recovery email."""

    def update_password(self, user_id: UUID, password: str) -> None:
        """Set a new password for a user."""

    def get_user_id(self, access_token: str) -> UUID | None:
        """Return the user id for a valid access token."""


def dashboard_path(role: Role) -> str:
    """Return the dashboard path for a role."""
    match role:
        case Role.ADMIN:
            return "/admin"
        case Role.PHOTOGRAPHER:
            return "/photographer"
        case _:
            assert_never(role)


def dashboard_redirect(session: UserSession | None, requested: Role) -> str | None:
    """Return where to send a visitor of ``requested``'s dashboard, if elsewhere."""
    if session is None or not session.is_active:
        return SIGN_IN_PATH
    if session.role is not requested:
        return dashboard_path(session.role)
    return None


def home_path(session: UserSession | None) -> str:
    """Return the landing path for a visitor."""
    if session is None or not session.is_active:
        return SIGN_IN_PATH
    return dashboard_path(session.role)


def require_role(session: UserSession, role: Role) -> None:
    """Raise AuthorizationError unless the session carries ``role``."""
    if not session.is_active or session.role is not role:
        raise AuthorizationError(f"Only {role} users may perform this action.")


@dataclass
class SessionService:
    """Bridge between the identity provider and profile-backed sessions."""

    identity_provider: IdentityProvider
    profile_repository: ProfileRepository
    password_reset_redirect_url: str | None = None
    token_lifetime: timedelta = ACCESS_TOKEN_LIFETIME
    clock: Callable[[], datetime] = field(default=lambda: datetime.now(tz=UTC))
    _revoked_tokens: dict[str, datetime] = field(default_factory=dict)

    def sign_up(self, form: SignUpForm) -> Profile:
        """Create an identity and its photographer profile."""
        try:
            user_id = self.identity_provider.sign_up(
                form.email,
                form.password,
                {"name": form.name, "phone": form.phone},
            )
        except BackendError as exc:
            if "already registered" in str(exc).lower():
                raise ValidationError(DUPLICATE_EMAIL_MESSAGE) from exc
            raise
        profile = self.profile_repository.get_profile(user_id)
        if profile is not None:
            return profile
        logger.info("Creating profile", extra={"user_id": str(user_id)})
        return self.profile_repository.create_profile(
            user_id, form.name, form.phone, Role.PHOTOGRAPHER
        )

    def sign_in(self, form: SignInForm) -> UserSession:
        """Verify credentials and open a session."""
        identity = self.identity_provider.sign_in(form.email, form.password)
        profile = self.profile_repository.get_profile(identity.user_id)
        if profile is None:
            raise AuthenticationError("No profile found for this account.")
        self._revoked_tokens.pop(identity.access_token, None)
        return UserSession(access_token=identity.access_token, profile=profile)

    def sign_out(self, session: UserSession) -> None:
        """Invalidate the session locally and at the provider."""
        session.invalidate()
        now = self.clock()
        self._forget_expired_revocations(now)
        self._revoked_tokens[session.access_token] = now + self.token_lifetime
        try:
            self.identity_provider.sign_out(session.access_token)
        except BackendError:
            logger.exception(
                "Provider sign-out failed", extra={"user_id": str(session.user_id)}
            )

    def resolve(self, access_token: str | None) -> UserSession | None:
        """Return the session for a bearer token, or None when it is invalid."""
        if not access_token:
            return None
        self._forget_expired_revocations(self.clock())
        if access_token in self._revoked_tokens:
            return None
        user_id = self.identity_provider.get_user_id(access_token)
        if user_id is None:
            return None
        profile = self.profile_repository.get_profile(user_id)
        if profile is None:
            return None
        return UserSession(access_token=access_token, profile=profile)

    def request_password_reset(self, email: str) -> None:
        """Send a recovery email pointing back at the reset page."""
        self.identity_provider.send_password_reset(
            email, self.password_reset_redirect_url
        )

    def reset_password(self, session: UserSession, form: PasswordUpdateForm) -> None:
        """Set a new password for the signed-in user."""
        if not session.is_active:
            raise AuthenticationError("Session has ended.")
        self.identity_provider.update_password(session.user_id, form.password)

    def _forget_expired_revocations(self, now: datetime) -> None:
        # Past its lifetime the provider rejects the token on its own.
        expired = [
            token for token, until in self._revoked_tokens.items() if until <= now
        ]
        for token in expired:
            del self._revoked_tokens[token]

"""Supabase Auth identity provider."""

from dataclasses import dataclass
from uuid import UUID

from supabase import AuthApiError, AuthError, Client

from shoot_coordinator.domain.auth import AuthenticatedIdentity
from shoot_coordinator.errors import AuthenticationError, BackendError
from shoot_coordinator.services.auth import IdentityProvider

_UNAUTHORIZED_STATUSES = {400, 401, 403}


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Identity operations delegated to Supabase Auth.

    The client should be dedicated to auth calls: signing in stores a user
    session on the client it is called on.
    """

    client: Client

    def sign_up(self, email: str, password: str, metadata: dict[str, object]) -> UUID:
        """Register a user and return the new id."""
        try:
            response = self.client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": metadata},
                }
            )
        except AuthError as exc:
            raise BackendError(exc.message) from exc
        if response.user is None:
            raise BackendError("Failed to create user in Supabase")
        return UUID(response.user.id)

    def sign_in(self, email: str, password: str) -> AuthenticatedIdentity:
        """Verify credentials and return the identity and access token."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthApiError as exc:
            if exc.status in _UNAUTHORIZED_STATUSES:
                raise AuthenticationError(exc.message) from exc
            raise BackendError(exc.message) from exc
        except AuthError as exc:
            raise BackendError(exc.message) from exc
        if response.user is None or response.session is None:
            raise AuthenticationError("Invalid login credentials")
        return AuthenticatedIdentity(
            user_id=UUID(response.user.id),
            access_token=response.session.access_token,
        )

    def sign_out(self, access_token: str) -> None:
        """Revoke the refresh tokens behind an access token."""
        try:
            self.client.auth.admin.sign_out(access_token)
        except AuthError as exc:
            raise BackendError(exc.message) from exc

    def send_password_reset(self, email: str, redirect_to: str | None) -> None:
        """Send a recovery email."""
        options = {"redirect_to": redirect_to} if redirect_to else {}
        try:
            self.client.auth.reset_password_for_email(email, options)
        except AuthError as exc:
            raise BackendError(exc.message) from exc

    def update_password(self, user_id: UUID, password: str) -> None:
        """Set a new password through the admin API."""
        try:
            self.client.auth.admin.update_user_by_id(
                str(user_id), {"password": password}
            )
        except AuthError as exc:
            raise BackendError(exc.message) from exc

    def get_user_id(self, access_token: str) -> UUID | None:
        """Return the user id for a valid access token."""
        try:
            response = self.client.auth.get_user(access_token)
        except AuthApiError as exc:
            if exc.status in _UNAUTHORIZED_STATUSES:
                return None
            raise BackendError(exc.message) from exc
        except AuthError as exc:
            raise BackendError(exc.message) from exc
        if response is None or response.user is None:
            return None
        return UUID(response.user.id)

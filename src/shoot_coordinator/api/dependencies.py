"""Request-scoped dependencies: container access and bearer sessions."""

from fastapi import Depends, Header, HTTPException, Request, status

from shoot_coordinator.containers import AppContainer
from shoot_coordinator.domain.models import Role
from shoot_coordinator.domain.sessions import UserSession
from shoot_coordinator.services.auth import require_role


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def optional_session(
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> UserSession | None:
    """Resolve the caller's session, or None when signed out."""
    return container.session_service.resolve(bearer_token(authorization))


async def require_session(
    session: UserSession | None = Depends(optional_session),
) -> UserSession:
    """Require a valid bearer session."""
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


async def require_admin(
    session: UserSession = Depends(require_session),
) -> UserSession:
    require_role(session, Role.ADMIN)
    return session


async def require_photographer(
    session: UserSession = Depends(require_session),
) -> UserSession:
    require_role(session, Role.PHOTOGRAPHER)
    return session

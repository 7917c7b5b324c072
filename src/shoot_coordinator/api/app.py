"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from shoot_coordinator.api.admin import router as admin_router
from shoot_coordinator.api.auth import router as auth_router
from shoot_coordinator.api.changes import router as changes_router
from shoot_coordinator.api.dependencies import optional_session
from shoot_coordinator.api.photographer import router as photographer_router
from shoot_coordinator.app_logging import configure_logging
from shoot_coordinator.containers import AppContainer
from shoot_coordinator.domain.sessions import UserSession
from shoot_coordinator.errors import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    NotFoundError,
    ValidationError,
)
from shoot_coordinator.services.auth import home_path


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(auth_router)
    app.include_router(admin_router)
    app.include_router(photographer_router)
    app.include_router(changes_router)

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(AuthenticationError)
    async def authentication_error(
        request: Request, exc: AuthenticationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": str(exc)},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(AuthorizationError)
    async def authorization_error(
        request: Request, exc: AuthorizationError
    ) -> JSONResponse:
        logger.warning("Forbidden request to %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)}
        )

    @app.exception_handler(NotFoundError)
    async def not_found_error(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(BackendError)
    async def backend_error(request: Request, exc: BackendError) -> JSONResponse:
        logger.error("Backend failure on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/")
    async def home(
        session: UserSession | None = Depends(optional_session),
    ) -> RedirectResponse:
        """Send visitors to their dashboard or to sign-in."""
        return RedirectResponse(
            home_path(session), status_code=status.HTTP_303_SEE_OTHER
        )

    return app

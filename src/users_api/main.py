"""Main FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from users_api.config import Settings, get_settings
from users_api.middleware import setup_middleware
from users_api.routes import api_router
from users_api.services import DEMO_USERS, UserStore

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure the root logger once, at the given level name."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Handle application lifespan events."""
    settings: Settings = app.state.settings
    logger.info("%s v%s started", settings.app_name, settings.app_version)
    logger.info("Environment: %s", settings.environment)
    logger.info("Users in store: %d", len(app.state.user_store.list_users()))

    yield

    logger.info("%s shutting down", settings.app_name)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed input with 400 and the field-level errors."""
    logger.warning("Invalid request data for %s %s: %d error(s)", request.method, request.url.path, len(exc.errors()))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception: %s", exc, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app(settings: Settings | None = None, store: UserStore | None = None) -> FastAPI:
    """Build the application and the user store it owns.

    Args:
        settings: Application settings, read from the environment when omitted
        store: User store to serve, a new one is created when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    if store is None:
        store = UserStore(DEMO_USERS if settings.seed_demo_users else ())

    app = FastAPI(
        title=settings.app_name,
        description="In-memory user management API",
        version=settings.app_version,
        lifespan=lifespan,
        redirect_slashes=False,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url="/redoc" if settings.docs_enabled else None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
    )
    app.state.settings = settings
    app.state.user_store = store

    setup_middleware(app, ui_url=settings.ui_url, environment=settings.environment)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(api_router)

    return app


configure_logging(get_settings().log_level)
app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "users_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()

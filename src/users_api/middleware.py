"""Middleware setup for the FastAPI application."""

import logging
import time

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

logger = logging.getLogger(__name__)

DEV_ENVIRONMENTS = {"development", "dev", "local"}


def get_allowed_origins(ui_url: str | None = None, environment: str = "development") -> list[str]:
    """Get list of allowed CORS origins based on configuration.

    Args:
        ui_url: URL of a browser client allowed to call the API
        environment: Environment name (development, production, etc.)

    Returns:
        List of allowed origin URLs
    """
    allowed_origins: list[str] = []

    if ui_url:
        base = ui_url.rstrip("/")
        allowed_origins.append(base)
        for scheme, other in (("http://", "https://"), ("https://", "http://")):
            if base.startswith(scheme):
                allowed_origins.append(base.replace(scheme, other, 1))

    if environment.lower() in DEV_ENVIRONMENTS:
        allowed_origins.extend(["http://localhost:3000", "http://127.0.0.1:3000"])

    # Deduplicate while preserving order
    return list(dict.fromkeys(allowed_origins))


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request on the way in and its status code on the way out."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        method, path = request.method, request.url.path
        logger.info("Request: %s %s", method, path)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # The 500 itself is rendered by the outer server error handler
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.exception("Response: %s %s -> 500 (%.1f ms)", method, path, elapsed_ms)
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("Response: %s %s -> %d (%.1f ms)", method, path, response.status_code, elapsed_ms)
        return response


def setup_middleware(app: FastAPI, ui_url: str | None = None, environment: str = "development") -> None:
    """Setup middleware for the FastAPI application.

    Request logging is added last so it wraps everything else and sees the
    final status code.

    Args:
        app: FastAPI application instance
        ui_url: URL of a browser client for CORS
        environment: Environment name (development, production, etc.)
    """
    allowed_origins = get_allowed_origins(ui_url, environment)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Location"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    logger.info("CORS enabled for origins: %s (environment=%s)", allowed_origins, environment)

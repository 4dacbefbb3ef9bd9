"""
FastAPI application entry point (standalone server).
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from contact_relay.config import Settings, get_settings
from contact_relay.contact.factory import build_contact_handler
from contact_relay.contact.router import build_contact_router
from contact_relay.contact.service import ContactSubmissionHandler
from contact_relay.shared.exceptions import ContactRelayError
from contact_relay.shared.logging import get_logger, setup_logging
from contact_relay.shared.middleware import CorrelationIdMiddleware, PreflightCORSMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    setup_logging()
    settings = get_settings()

    logger.info("Application starting", extra={"env": settings.app_env})

    owns_handler = getattr(app.state, "contact_handler", None) is None
    if owns_handler:
        try:
            app.state.contact_handler = build_contact_handler()
        except ContactRelayError as e:
            logger.critical(
                "Refusing to start: email provider misconfigured",
                extra={"detail": getattr(e, "detail", e.message)},
            )
            raise

    yield

    logger.info("Shutting down application")

    if owns_handler:
        handler: ContactSubmissionHandler = app.state.contact_handler
        handler.provider.close()
        if handler.store is not None:
            await handler.store.close()
        app.state.contact_handler = None

    logger.info("Application shutdown complete")


def create_app(
    settings: Settings | None = None,
    handler: ContactSubmissionHandler | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``handler`` is injected by tests and embedders; when omitted it is built
    from the environment at startup.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Contact Relay API",
        description="Contact-form submission relay",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )
    app.state.contact_handler = handler
    # Exact path match: no 307 from /api/contact/ to /api/contact.
    app.router.redirect_slashes = False

    # Map domain exceptions to HTTP responses
    @app.exception_handler(ContactRelayError)
    async def _contact_error(_: Request, exc: ContactRelayError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    # Unknown routes and wrong methods both read as "Not found"
    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code in (404, 405):
            return PlainTextResponse("Not found", status_code=404)
        return await http_exception_handler(request, exc)

    # Last added runs first: correlation id wraps the CORS layer.
    app.add_middleware(PreflightCORSMiddleware, allow_origin=settings.cors_allow_origin)
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(build_contact_router(settings.contact_path))

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "contact_relay.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )

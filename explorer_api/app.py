"""
FastAPI application for the Explorer API.

This module creates the application, sets up middleware, registers the
routers and manages the lifecycle of the shared clients.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from explorer_api import __version__
from explorer_api.config import AppConfig, get_app_config
from explorer_api.dependencies import ServiceContainer, build_container
from explorer_api.logging_config import RequestIdMiddleware, get_logger
from explorer_api.routes import health, solana, wallet
from explorer_api.utils.error_logger import log_error
from explorer_api.utils.errors import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

logger = get_logger(__name__)

API_TITLE = "Explorer API"


def describe_validation_error(exc: RequestValidationError) -> str:
    """One line summary of the first request validation failure."""
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = first.get("msg", "invalid value")
    return f"Invalid request body: {location}: {detail}" if location else f"Invalid request body: {detail}"


def create_application(
    config: Optional[AppConfig] = None,
    container: Optional[ServiceContainer] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application configuration, read from the environment when omitted
        container: Pre-built services. When given, the application neither
            builds nor closes them.

    Returns:
        The configured FastAPI application
    """
    config = config or (container.config if container else get_app_config())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = container is None
        services = build_container(config) if owned else container
        if owned and config.redis.enabled:
            await services.cache.connect()
        app.state.container = services
        logger.info("Application initialized successfully")

        yield

        logger.info("Application shutting down...")
        if owned:
            await services.close()
        logger.info("Shutdown complete")

    app = FastAPI(
        title=API_TITLE,
        description="Wallet, transaction and connection health endpoints for the explorer.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    if container is not None:
        app.state.container = container

    # Public explorer API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    app.include_router(health.router)
    app.include_router(solana.router)
    app.include_router(wallet.router)

    @app.get("/health", tags=["system"])
    async def health_check():
        """Liveness check."""
        return {"status": "healthy"}

    @app.get("/version", tags=["system"])
    async def version():
        """Get API version information."""
        return {"version": __version__, "name": API_TITLE}

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies as 400 ``{"error"}`` instead of 422."""
        message = describe_validation_error(exc)
        log_error(exc, context="Rejected request", exc_info=False, level="warning", path=request.url.path)
        return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content={"error": message})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions."""
        log_error(exc, context="Unhandled exception", path=request.url.path)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "message": str(exc)},
        )

    return app

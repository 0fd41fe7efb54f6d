"""Sample API — FastAPI application wired for automatic model validation.

Validators in ``sample_api.validators`` are discovered at startup; every
argument bound to a ModelValidationRoute endpoint is validated before the
handler runs.
"""

import logging
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from model_validation import ServiceCollection, add_model_validators_from_module, use_automatic_model_validation
from model_validation.config import get_settings
from sample_api import validators
from sample_api.api.router import api_router

# Configure structured logging
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if get_settings().DEBUG else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(get_settings().LOG_LEVEL.upper())
    ),
)

logger = structlog.get_logger()


async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all error handler for unhandled exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again.",
        },
    )


def create_app(services: Optional[ServiceCollection] = None) -> FastAPI:
    """Build the application.

    Args:
        services: Pre-populated collection; defaults to scanning sample_api.validators
    """
    app = FastAPI(
        title="Sample API",
        description="Sample endpoints guarded by per-type model validators.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ── Validation ──
    if services is None:
        services = add_model_validators_from_module(ServiceCollection(), validators)
    use_automatic_model_validation(app, services)

    # ── Global Exception Handlers ──
    app.add_exception_handler(Exception, global_exception_handler)

    # ── Routes ──
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    async def root():
        """Root endpoint — API info."""
        return {
            "name": "Sample API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/api/v1/health",
        }

    logger.info("app_created", services=len(services))
    return app


app = create_app()

"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
error handling and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cognitive_sync.api.assets import router as assets_router
from cognitive_sync.api.chat import router as chat_router
from cognitive_sync.errors import BadRequest, CognitiveSyncError, format_validation_errors
from cognitive_sync.models.schemas import ErrorResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info("Starting Cognitive Sync API...")
    yield
    logger.info("Shutting down Cognitive Sync API...")


async def handle_cognitive_sync_error(request: Request, exc: CognitiveSyncError) -> JSONResponse:
    """Convert a handled error into an ErrorResponse body."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {type(exc).__name__}")
    else:
        logger.warning(
            f"{request.method} {request.url.path} rejected: {type(exc).__name__}: {exc.message}"
        )
    body = ErrorResponse(error=exc.message, details=exc.details)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report missing or malformed request parts as a 400 ErrorResponse."""
    error = BadRequest("Invalid request", details=format_validation_errors(exc.errors()))
    return await handle_cognitive_sync_error(request, error)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Cognitive Sync API",
        description=(
            "Turns vague requests into structured instruction documents through a "
            "streamed conversation with a hosted language model. Accepts context "
            "assets (PDF, TXT, MD) as background knowledge."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.add_exception_handler(CognitiveSyncError, handle_cognitive_sync_error)
    application.add_exception_handler(RequestValidationError, handle_request_validation_error)

    application.include_router(chat_router)
    application.include_router(assets_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "cognitive-sync"}

    return application


app = create_app()

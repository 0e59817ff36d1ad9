"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from foliogen.config import settings
from foliogen.api.v1.router import api_router
from foliogen.exceptions import FolioGenError
from foliogen.repositories.feedback_repo import InMemoryFeedbackRepository
from foliogen.repositories.share_repo import InMemoryShareStore

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer() if settings.is_production else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info(
        "Starting FolioGen API",
        version=settings.app_version,
        environment=settings.environment,
        ai_configured=settings.has_ai_credentials,
    )
    if not settings.has_ai_credentials:
        logger.warning("GEMINI_API_KEY not set, AI features will use fallbacks")
    yield
    # Shutdown
    logger.info("Shutting down FolioGen API", shared_profiles=len(app.state.share_store))


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="AI portfolio generator - GitHub/LinkedIn ingestion, profile generation, and sharing",
        openapi_url=f"{settings.api_v1_prefix}/openapi.json" if settings.debug else None,
        docs_url=f"{settings.api_v1_prefix}/docs" if settings.debug else None,
        redoc_url=f"{settings.api_v1_prefix}/redoc" if settings.debug else None,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    # Process-wide in-memory stores
    app.state.share_store = InMemoryShareStore(ttl=timedelta(days=settings.share_ttl_days))
    app.state.feedback_repo = InMemoryFeedbackRepository()

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Include API router
    app.include_router(api_router, prefix=settings.api_v1_prefix)

    # Health check endpoint (outside of versioned API)
    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.app_version,
            "environment": settings.environment,
        }

    # Root endpoint
    @app.get("/", tags=["Root"])
    async def root() -> dict:
        """Root endpoint with API info."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": f"{settings.api_v1_prefix}/docs" if settings.debug else None,
            "health": "/health",
        }

    @app.exception_handler(FolioGenError)
    async def folio_error_handler(request: Request, exc: FolioGenError) -> ORJSONResponse:
        """Translate service errors into their HTTP status."""
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "Request failed",
            path=request.url.path,
            method=request.method,
            error_type=type(exc).__name__,
            status=exc.status_code,
            error=exc.message,
        )
        return ORJSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message},
        )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error",
                "error": str(exc) if settings.debug else "An unexpected error occurred",
            },
        )

    return app


# Create app instance
app = create_app()


def run() -> None:
    """Run the application with uvicorn (for development)."""
    import uvicorn

    uvicorn.run(
        "foliogen.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    run()

"""
Opus Automations site backend
FastAPI application entry point.
"""
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.security import NoCacheStaticFiles, SecurityHeadersMiddleware
from app.routers import site, submissions
from app.services.rate_limiter import RateLimiter, RateLimitMiddleware

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events."""
    settings: Settings = app.state.settings

    # Startup
    logger.info(f"Starting {settings.app_name} server...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Static directory: {settings.static_dir}")
    if settings.n8n_webhook_url:
        logger.info(f"n8n webhook: {settings.n8n_webhook_url}")
    else:
        logger.warning("n8n webhook not configured - submissions will be logged only")
    logger.info(f"{settings.app_name} {settings.app_version} is ready on port {settings.port}")

    yield

    # Shutdown
    logger.info("Shutting down gracefully...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Overrides the environment-derived settings (used by tests)
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description=(
            "Marketing site backend: contact and ROI assessment relay to n8n, "
            "lead scoring, analytics logging."
        ),
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/swagger",
        redoc_url="/api/redoc",
    )
    app.dependency_overrides[get_settings] = lambda: settings
    app.state.settings = settings
    app.state.started_at = time.monotonic()
    app.state.contact_limiter = RateLimiter(
        limit=settings.contact_rate_limit_requests,
        window_seconds=settings.contact_rate_limit_window_seconds,
    )

    # Middleware (last added runs first)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        limiter=RateLimiter(
            limit=settings.rate_limit_requests,
            window_seconds=settings.rate_limit_window_seconds,
        ),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(submissions.router)
    app.include_router(site.router)

    # Mount static files (page assets)
    app.mount("/static", NoCacheStaticFiles(directory=settings.static_dir), name="static")

    @app.get("/health")
    async def health_check():
        """Health check with relay configuration."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": int(time.monotonic() - app.state.started_at),
            "environment": settings.environment,
            "port": settings.port,
            "n8n_configured": bool(settings.n8n_webhook_url),
            "site_type": settings.site_type,
        }

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Malformed request to {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "message": "All required fields must be filled",
                "errors": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception):
        # Unknown paths get the single page so client-side anchors still work
        logger.info(f"404 for path: {request.url.path} - serving main page")
        return site.index_response(settings, status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(Exception)
    async def server_error_handler(request: Request, exc: Exception):
        logger.error(f"Server error: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": "Internal server error"},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
        log_level="info"
    )

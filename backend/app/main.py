"""
FastAPI application entry point.

Uses structured logging from devconnector.logging. The database is
initialized and health-checked in the lifespan handler; an unreachable
database aborts startup.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from devconnector.db import db
from devconnector.logging import RequestLoggingMiddleware, configure_logging, get_logger

from .config import get_settings
from .error_handlers import register_exception_handlers
from .middleware.request_id import RequestIDMiddleware
from .middleware.security import RequestSizeLimitMiddleware, SecurityHeadersMiddleware
from .routers import auth as auth_router
from .routers import posts as posts_router
from .routers import profile as profile_router
from .routers import users as users_router

settings = get_settings()
configure_logging(level="DEBUG" if settings.debug else settings.log_level)
logger = get_logger("api")


def check_database_health(max_retries: int = 3, retry_delay: float = 2.0) -> bool:
    """
    Check database connectivity with retry logic.

    Raises:
        RuntimeError: If database is unreachable after all retries
    """
    for attempt in range(max_retries):
        result = db.health_check()
        if result["healthy"]:
            logger.info("database_health_check_passed", attempt=attempt + 1, latency_ms=result["latency_ms"])
            return True

        logger.warning(
            "database_health_check_failed",
            attempt=attempt + 1,
            max_retries=max_retries,
            error=result["error"],
        )
        if attempt < max_retries - 1:
            time.sleep(retry_delay * (attempt + 1))

    raise RuntimeError(
        f"Database unreachable after {max_retries} attempts. "
        "Check DATABASE_URL configuration and database server status."
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("app_startup", app_name=settings.app_name, env=settings.env)

    config_errors, config_warnings = settings.validate_production_config()
    for warning in config_warnings:
        logger.warning("config_warning", message=warning)
    for error in config_errors:
        logger.error("config_error", message=error)
    if config_errors and settings.is_production:
        raise RuntimeError("Invalid production configuration: " + "; ".join(config_errors))

    db.initialize(settings.database_url)
    logger.info("database_initialized")

    check_database_health(max_retries=3, retry_delay=2.0)

    if settings.auto_create_tables:
        db.create_all_tables()
        logger.info("database_tables_ready")

    yield

    logger.info("app_shutdown")


def create_app() -> FastAPI:
    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestSizeLimitMiddleware, max_size_mb=settings.max_request_size_mb)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Accept-Encoding",
            "Origin",
            "X-Requested-With",
            "x-auth-token",
        ],
        expose_headers=["X-Request-ID"],
    )

    # GZip compression for responses > 500 bytes
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # Added last so they run first: the request ID is bound before the request is logged
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.get("/health", tags=["health"])
    def health_check():
        """Liveness probe."""
        return {"status": "ok"}

    @app.get("/health/ready", tags=["health"])
    def readiness_check():
        """
        Readiness probe.

        Returns 200 if the database answers, 503 otherwise.
        """
        database = db.health_check()
        checks = {"database": database["healthy"]}

        if not database["healthy"]:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "not_ready", "checks": checks},
            )

        return {"status": "ready", "checks": checks}

    app.include_router(users_router.router, prefix=settings.api_prefix)
    app.include_router(auth_router.router, prefix=settings.api_prefix)
    app.include_router(profile_router.router, prefix=settings.api_prefix)
    app.include_router(posts_router.router, prefix=settings.api_prefix)

    return app


app = create_app()

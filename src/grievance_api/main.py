"""Main application entry point for the Grievance API."""

import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from grievance_api.api.escalations import router as escalations_router
from grievance_api.config.settings import get_settings
from grievance_api.database.connection import close_database
from grievance_api.database.connection import db
from grievance_api.database.connection import init_database
from grievance_api.services.exceptions import ConflictError
from grievance_api.services.exceptions import ForbiddenError
from grievance_api.services.exceptions import GrievanceError
from grievance_api.services.exceptions import InvalidOperationError
from grievance_api.services.exceptions import NotFoundError
from grievance_api.services.exceptions import PersistenceError

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[type[GrievanceError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    InvalidOperationError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_409_CONFLICT,
    PersistenceError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    await init_database()
    yield
    # Shutdown
    await close_database()


async def grievance_error_handler(request: Request, exc: GrievanceError) -> JSONResponse:
    """Translate service errors into HTTP responses."""
    status_code = ERROR_STATUS_CODES.get(
        type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Grievance lifecycle and SLA escalation service",
        version=settings.version,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(GrievanceError, grievance_error_handler)

    # Include routers
    app.include_router(escalations_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""

        db_healthy = await db.health_check()
        pool_stats = await db.get_pool_stats()

        return {
            "status": "ok" if db_healthy else "error",
            "database": {
                "healthy": db_healthy,
                "pool": pool_stats,
            },
        }

    return app


app = create_app()


def main():
    """Main entry point - creates and returns the app instance."""
    return create_app()


if __name__ == "__main__":
    # Only run uvicorn when called directly, not when imported
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "grievance_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info",
    )

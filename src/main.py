"""
User Posts API - Main Application
==================================

CRUD HTTP service over users and the posts they own.

Layers:
- Interfaces: FastAPI controllers
- Application: Services and DTOs
- Infrastructure: SQLAlchemy models, repositories, database lifecycle
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.blog.interfaces import posts_router, users_router
from src.config import Settings, get_settings
from src.core import ApplicationException, DatabaseUnavailableException
from src.infrastructure.database import Database, connect_with_retry
from src.shared.api.middleware import (
    CorrelationIDMiddleware,
    LoggingMiddleware,
    application_exception_handler,
    request_validation_exception_handler,
    global_exception_handler,
)
from src.shared.infrastructure.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Connect to the database (bounded retry) and create tables
    3. Expose the Database on app.state

    The server only accepts requests once startup has finished, so no request
    is served before the database is ready.

    SHUTDOWN:
    1. Dispose of database connections
    """
    settings: Settings = app.state.settings

    # === STARTUP ===
    setup_logging(level=settings.log_level, environment=settings.environment)
    logger.info("Starting User Posts API", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    database = Database(
        settings.sqlalchemy_url,
        echo=settings.debug,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )

    try:
        await connect_with_retry(
            database,
            max_attempts=settings.db_connect_retries,
            delay_seconds=settings.db_retry_delay,
        )
    except DatabaseUnavailableException as e:
        logger.critical(
            "Could not connect to the database. Exiting...",
            extra=e.details
        )
        await database.close()
        raise SystemExit(1)

    app.state.database = database
    logger.info("User Posts API started", extra={"port": settings.port})

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down User Posts API")
    await database.close()
    logger.info("User Posts API shutdown complete")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="User Posts API",
        description="""
    ## Users and their posts

    - `GET /users`, `POST /users`, `PUT /users/{id}`, `DELETE /users/{id}`
    - `GET /users/{id}/posts`
    - `POST /posts`, `PUT /posts/{id}`, `DELETE /posts/{id}`

    Deleting a user deletes all of their posts.
    Partial updates ignore empty values.
    """,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings

    # === CORS Middleware ===
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Last added runs first: the correlation ID is set before logging reads it
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(CorrelationIDMiddleware)
    app.add_exception_handler(ApplicationException, application_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(users_router)
    app.include_router(posts_router)

    @app.get("/health", tags=["Health"], responses={
        200: {
            "description": "Service health",
            "content": {
                "application/json": {
                    "example": {
                        "status": "healthy",
                        "version": "1.0.0",
                        "environment": "development",
                        "checks": {"database": "ready"}
                    }
                }
            }
        }
    })
    async def health_check(request: Request):
        """Health check endpoint for load balancers and orchestrators."""
        database = getattr(request.app.state, "database", None)
        ready = database is not None and database.is_ready

        return {
            "status": "healthy" if ready else "degraded",
            "version": settings.app_version,
            "environment": settings.environment,
            "checks": {"database": "ready" if ready else "not_ready"}
        }

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": "User Posts API",
            "version": settings.app_version,
            "docs": "/docs",
            "health": "/health",
            "endpoints": [
                "GET /users - List users",
                "POST /users - Create user",
                "PUT /users/{id} - Update user",
                "DELETE /users/{id} - Delete user and their posts",
                "GET /users/{id}/posts - List a user's posts",
                "POST /posts - Create post",
                "PUT /posts/{id} - Update post",
                "DELETE /posts/{id} - Delete post"
            ]
        }

    return app


app = create_app()


# === Development Entry Point ===

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )

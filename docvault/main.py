"""FastAPI Application Entry Point.

Owner-linked PDF document service built with FastAPI, featuring:
- PDF upload with size and content-type checks
- Page count inspection
- Owner document lists with paginated retrieval
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from docvault.core.config import settings
from docvault.core.logging import configure_logging, get_logger
from docvault.core.exceptions import setup_exception_handlers
from docvault.core.db_client import db
from docvault.core.middleware import setup_all_middleware
from docvault.core.staging import staging_area

# Configure logging first
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    # Startup
    logger.info(
        "Starting application",
        project_name=settings.PROJECT_NAME,
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
        debug=settings.DEBUG,
    )

    startup_tasks = []

    staging_area.ensure_dir()
    startup_tasks.append(f"Staging directory ready ({staging_area.root})")

    # Initialize database connection
    try:
        engine = await db.get_engine_async()
        if engine:
            # Create tables in development mode
            if settings.is_development:
                await db.create_tables()
                startup_tasks.append("Database tables created/verified")

            if await db.test_connection():
                startup_tasks.append(f"Database connected ({engine.dialect.name})")
            else:
                logger.warning("Database connection test failed")
        else:
            logger.warning("Database engine not initialized")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        if settings.is_production:
            raise

    logger.info("Application startup completed", tasks=startup_tasks)

    yield

    # Shutdown
    logger.info("Shutting down application")

    try:
        await db.close_all()
        logger.info("Application shutdown completed", tasks=["Database connections closed"])
    except Exception as e:
        logger.error("Error closing database", error=str(e))


API_DESCRIPTION = """# DocVault API

## Overview
Owners hold ordered lists of PDF documents. Uploads are checked
(PDF only, max 5MB), inspected for their page count, stored, and then
linked to their owner.

## Getting Started
1. **Create an Owner**: `POST /api/v1/owners`
2. **Upload Documents**: `POST /api/v1/documents` (multipart `file` + `owner_id`)
3. **List Owner Documents**: `GET /api/v1/documents/owner/{owner_id}?page=1&limit=10`
"""

# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description=API_DESCRIPTION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json" if settings.DOCS_ENABLED else None,
    docs_url="/api-docs" if settings.DOCS_ENABLED else None,
    redoc_url=None,
    lifespan=lifespan,
)

# Setup middleware (CORS, then request context)
setup_all_middleware(app)

# Setup exception handlers AFTER CORS middleware
setup_exception_handlers(app)

# Include health router (root level endpoints)
from docvault.api.health import router as health_router  # noqa: E402

app.include_router(health_router)

# Include API routers
from docvault.api.v1.owners import router as owners_router  # noqa: E402
from docvault.api.v1.documents_main import router as documents_router  # noqa: E402

app.include_router(owners_router, prefix=settings.API_V1_STR)
app.include_router(documents_router, prefix=settings.API_V1_STR)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "docvault.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=True,
    )

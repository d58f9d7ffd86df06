"""
Async database connection management using SQLAlchemy 2.0.

Supports both:
- PostgreSQL via asyncpg (production)
- SQLite via aiosqlite (local development and tests)

Note: Uses per-event-loop engine management so the same manager works
across several event loops (e.g., one loop per test function).
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.pool import AsyncAdaptedQueuePool

from docvault.core.config import settings

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Manages async database connections.

    Engines and session factories are created lazily, one per running
    event loop, and keyed by the loop's id.
    """

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.DATABASE_URL
        self._shutdown = False

        # Per-loop resources: maps loop_id -> resource
        self._engines: Dict[int, AsyncEngine] = {}
        self._session_factories: Dict[int, async_sessionmaker] = {}

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def _get_loop_id(self) -> int:
        """Get current event loop ID for per-loop resource tracking."""
        try:
            loop = asyncio.get_running_loop()
            return id(loop)
        except RuntimeError:
            return 0

    def _setup_engine_for_loop(self, loop_id: int):
        """Initialize engine and session factory for the current event loop."""
        if self._shutdown:
            logger.debug(
                f"Skipping engine setup for loop {loop_id} - shutdown in progress"
            )
            return

        if loop_id in self._engines:
            return

        engine = self._create_engine()

        self._engines[loop_id] = engine
        self._session_factories[loop_id] = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        logger.info(
            f"Database engine initialized for loop {loop_id}: "
            f"backend={engine.dialect.name}"
        )

    def _create_engine(self) -> AsyncEngine:
        """Create engine for the configured connection URL."""
        # Log the backend only - NEVER log credentials
        logger.info(
            "Creating database connection",
            extra={"backend": self.database_url.split(":", 1)[0]},
        )

        if self.is_sqlite:
            return create_async_engine(self.database_url, echo=settings.DB_ECHO)

        return create_async_engine(
            self.database_url,
            poolclass=AsyncAdaptedQueuePool,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=True,
            echo=settings.DB_ECHO,
        )

    @property
    def engine(self) -> AsyncEngine:
        """Get the async engine for the current event loop."""
        loop_id = self._get_loop_id()
        if loop_id not in self._engines:
            raise RuntimeError(
                "Engine not initialized for this event loop. "
                "Use 'async with db.session()' or 'await db.get_engine_async()' first."
            )
        return self._engines[loop_id]

    async def get_engine_async(self) -> Optional[AsyncEngine]:
        """Get the async engine, initializing for the current event loop if necessary."""
        loop_id = self._get_loop_id()
        if loop_id not in self._engines:
            self._setup_engine_for_loop(loop_id)
        return self._engines.get(loop_id)

    async def test_connection(self, timeout: float = 15.0) -> bool:
        """Test database connectivity with timeout."""
        engine = await self.get_engine_async()
        if not engine:
            logger.warning("No database engine available")
            return False

        try:
            async with asyncio.timeout(timeout):
                async with engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
            logger.info("Database connection test successful")
            return True
        except asyncio.TimeoutError:
            logger.error(f"Database connection test timed out after {timeout}s")
            return False
        except Exception as e:
            logger.error(f"Database connection test failed: {e}")
            return False

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async session with automatic commit/rollback.

        Usage:
            async with db.session() as session:
                result = await session.execute(...)
        """
        loop_id = self._get_loop_id()
        if loop_id not in self._session_factories:
            self._setup_engine_for_loop(loop_id)

        if loop_id not in self._session_factories:
            raise RuntimeError("Failed to initialize database session factory")

        session = self._session_factories[loop_id]()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_tables(self):
        """Create all tables (for development/testing)."""
        from docvault.models.db_models import Base

        engine = await self.get_engine_async()
        if engine:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created")

    async def drop_tables(self):
        """Drop all tables (for testing only)."""
        from docvault.models.db_models import Base

        engine = await self.get_engine_async()
        if engine:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.drop_all)
            logger.info("Database tables dropped")

    async def close(self):
        """Close the engine for the CURRENT event loop only."""
        loop_id = self._get_loop_id()

        if loop_id in self._engines:
            try:
                await self._engines[loop_id].dispose()
            except Exception as e:
                logger.debug(f"Error disposing engine for loop {loop_id}: {e}")
            finally:
                del self._engines[loop_id]

        if loop_id in self._session_factories:
            del self._session_factories[loop_id]

        logger.info("Database connections closed for current loop")

    async def close_all(self):
        """Close ALL engines across ALL event loops."""
        self._shutdown = True

        current_loop_id = self._get_loop_id()
        if current_loop_id in self._engines:
            try:
                await self._engines[current_loop_id].dispose()
            except Exception as e:
                logger.debug(f"Error disposing engine: {e}")

        self._engines.clear()
        self._session_factories.clear()

        logger.info("All database connections closed")


# Global database manager instance
db = DatabaseManager()


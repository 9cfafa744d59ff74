"""
Database session management for the vet-clinic package.

:class:`SessionManager` owns the async session factory. The web layer opens
one transaction per request through :meth:`SessionManager.get_transaction`;
startup uses :meth:`SessionManager.initialize_database` to create the schema.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import MetaData, text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from ..exceptions import VetClinicException

logger = logging.getLogger(__name__)


class SessionManager:
    """Hands out sessions and transactions bound to one async engine."""

    def __init__(
        self, engine: AsyncEngine, session_config: Optional[Dict[str, Any]] = None
    ):
        """
        Args:
            engine: SQLAlchemy async engine
            session_config: Overrides for ``async_sessionmaker`` keyword
                arguments (``expire_on_commit`` defaults to False so loaded
                aggregates stay readable after the request commits)
        """
        self.engine = engine
        self._is_initialized = False

        options: Dict[str, Any] = {"expire_on_commit": False, "autoflush": True}
        options.update(session_config or {})
        self.session_factory = async_sessionmaker(
            bind=engine, class_=AsyncSession, **options
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield a session that is rolled back on error and always closed.

        Example:
            async with session_manager.get_session() as session:
                owner = await OwnerRepository(session).find_by_id(1)
        """
        session = self.session_factory()
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error(f"Session error, rolling back: {e}")
            raise
        finally:
            await session.close()

    @asynccontextmanager
    async def get_transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield a session inside a transaction.

        The transaction commits when the block exits normally and rolls back
        when it raises. Domain errors are logged at INFO since they are an
        expected outcome (a stale save, a missing pet); anything else is
        logged as an error.
        """
        async with self.get_session() as session:
            async with session.begin():
                try:
                    yield session
                except VetClinicException as e:
                    logger.info(f"Transaction aborted, rolling back: {e.message}")
                    raise
                except Exception as e:
                    logger.error(f"Transaction error, rolling back: {e}")
                    raise

    async def health_check(self) -> Dict[str, Any]:
        """
        Run ``SELECT 1`` through a plain session and through a transaction.

        Returns:
            ``{"status": "healthy" | "unhealthy", "timestamp": ..., "checks": {...}}``
        """
        health_status: Dict[str, Any] = {
            "status": "healthy",
            "timestamp": time.time(),
            "checks": {},
        }

        try:
            for name, opener in (
                ("basic_query", self.get_session),
                ("transaction", self.get_transaction),
            ):
                start_time = time.perf_counter()
                async with opener() as session:
                    await session.execute(text("SELECT 1"))
                health_status["checks"][name] = {
                    "status": "pass",
                    "response_time": round((time.perf_counter() - start_time) * 1000, 2),
                }
        except OperationalError as e:
            health_status["status"] = "unhealthy"
            health_status["checks"]["connection"] = {
                "status": "fail",
                "error": str(e),
                "error_type": "OperationalError",
            }
            logger.error(f"Database operational error during health check: {e}")
        except SQLAlchemyError as e:
            health_status["status"] = "unhealthy"
            health_status["checks"]["database"] = {
                "status": "fail",
                "error": str(e),
                "error_type": e.__class__.__name__,
            }
            logger.error(f"Database error during health check: {e}")

        return health_status

    async def initialize_database(self, metadata: Optional[MetaData] = None) -> bool:
        """
        Check connectivity and create any missing tables.

        Args:
            metadata: Table definitions to create (skipped when None)

        Returns:
            True if the database is usable, False otherwise
        """
        logger.info("Starting database initialization...")

        health = await self.health_check()
        if health["status"] != "healthy":
            logger.error("Database health check failed during initialization")
            return False

        try:
            if metadata is not None:
                async with self.engine.begin() as conn:
                    await conn.run_sync(metadata.create_all)
                logger.info("Database tables created successfully")
        except SQLAlchemyError as e:
            logger.error(f"Database initialization failed: {e}")
            return False

        self._is_initialized = True
        logger.info("Database initialization completed successfully")
        return True

    async def cleanup_database(
        self, metadata: Optional[MetaData] = None, drop_all: bool = False
    ) -> None:
        """
        Optionally drop the schema, then dispose of the engine.

        Args:
            metadata: Table definitions to drop
            drop_all: Whether to drop every table in ``metadata``
        """
        if drop_all and metadata is not None:
            async with self.engine.begin() as conn:
                await conn.run_sync(metadata.drop_all)
            logger.warning("All database tables dropped")

        await self.close()

    async def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        await self.engine.dispose()
        logger.info("Database connections closed")

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized

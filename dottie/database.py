"""
Database connection and session management for the Dottie API.

Provides the async engine lifecycle, pooled sessions for request handlers,
and connection health monitoring with exponential backoff.
"""

import asyncio
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional, Tuple

from fastapi import HTTPException, status
from loguru import logger
from sqlalchemy.exc import DisconnectionError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import text

from dottie.config import (
    DEBUG,
    MAX_OVERFLOW,
    POOL_RECYCLE,
    POOL_SIZE,
    POOL_TIMEOUT,
    SQLALCHEMY_DATABASE_URL,
    SSL_MODE,
)
from dottie.models import Base


class DatabaseError(Exception):
    """Raised when the database cannot be brought up"""

    def __init__(self, message: str, status_code: int = status.HTTP_503_SERVICE_UNAVAILABLE):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class DatabaseHealthChecker:
    """
    Database connection health monitoring with exponential backoff.
    """

    def __init__(
        self,
        check_interval: int = 30,
        max_consecutive_failures: int = 3,
        backoff_multiplier: float = 2.0,
        max_backoff: int = 300,
    ):
        self.last_check = 0.0
        self.is_healthy = True
        self.consecutive_failures = 0
        self.check_interval = check_interval
        self.max_consecutive_failures = max_consecutive_failures
        self.backoff_multiplier = backoff_multiplier
        self.max_backoff = max_backoff
        self.last_error: Optional[str] = None
        self.last_successful_check = time.time()

    def _calculate_backoff_interval(self) -> float:
        if self.consecutive_failures <= 1:
            return self.check_interval
        backoff = self.check_interval * (self.backoff_multiplier ** (self.consecutive_failures - 1))
        return min(backoff, self.max_backoff)

    async def check_health(self, engine: AsyncEngine, force: bool = False) -> bool:
        current_time = time.time()
        required_interval = self._calculate_backoff_interval()

        if not force and current_time - self.last_check < required_interval:
            logger.debug("Health check skipped (next check in {:.1f}s)", required_interval - (current_time - self.last_check))
            return self.is_healthy

        try:
            async with engine.connect() as conn:
                result = await conn.execute(text("SELECT 1"))
                if result.scalar() != 1:
                    raise DatabaseError("Health check query returned unexpected value")

            self._reset_failure_tracking(current_time)
            logger.debug("Database health check passed")
            return True
        except Exception as e:
            self._handle_failure(e, current_time)
            return False

    def _reset_failure_tracking(self, current_time: float) -> None:
        if self.consecutive_failures > 0:
            logger.info("Database connection restored after {} failures", self.consecutive_failures)
        self.is_healthy = True
        self.consecutive_failures = 0
        self.last_check = current_time
        self.last_successful_check = current_time
        self.last_error = None

    def _handle_failure(self, error: Exception, current_time: float) -> None:
        self.consecutive_failures += 1
        self.is_healthy = False
        self.last_check = current_time
        self.last_error = str(error)

        logger.warning("Database health check failed (attempt {}): {}", self.consecutive_failures, error)

        if self.consecutive_failures >= self.max_consecutive_failures:
            logger.error(
                "Database connection appears down after {} consecutive failures. "
                "Last success: {:.1f}s ago",
                self.consecutive_failures,
                current_time - self.last_successful_check,
            )


class DatabaseManager:
    """Owns the engine and session factory for the process."""

    def __init__(self, url: str = SQLALCHEMY_DATABASE_URL):
        self._url = url
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None
        self._health_checker = DatabaseHealthChecker()
        self._init_lock = asyncio.Lock()

    def _engine_kwargs(self) -> Dict[str, Any]:
        if self._url.startswith("sqlite"):
            if ":memory:" in self._url:
                return {"poolclass": StaticPool}
            return {}

        ssl_configs = {
            "require": {"ssl": "require"},
            "prefer": {"ssl": True},
            "disable": {"ssl": False},
            "verify-ca": {"ssl": "verify-full"},
            "verify-full": {"ssl": "verify-full"},
        }
        return {
            "pool_size": POOL_SIZE,
            "max_overflow": MAX_OVERFLOW,
            "pool_timeout": POOL_TIMEOUT,
            "pool_recycle": POOL_RECYCLE,
            "pool_pre_ping": True,
            "connect_args": ssl_configs.get(SSL_MODE, {"ssl": True}),
        }

    async def initialize(self) -> None:
        async with self._init_lock:
            if self._engine:
                logger.debug("Database already initialized, skipping")
                return

            logger.info("Initializing database connection")
            try:
                self._engine = create_async_engine(self._url, echo=DEBUG, **self._engine_kwargs())
                self._session_factory = async_sessionmaker(
                    bind=self._engine,
                    class_=AsyncSession,
                    expire_on_commit=False,
                )
                async with self._engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
                if not await self._health_checker.check_health(self._engine, force=True):
                    raise DatabaseError("Initial database health check failed")
            except Exception as e:
                await self.close()
                logger.error("Database initialization failed: {}", e)
                raise DatabaseError(str(e)) from e

    async def close(self) -> None:
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database connection closed")

    async def ensure_initialized(self) -> None:
        if not self._engine:
            await self.initialize()
            return

        if not await self._health_checker.check_health(self._engine):
            logger.warning("Database unhealthy, reinitializing")
            await self.close()
            await self.initialize()

    @asynccontextmanager
    async def session_scope(self) -> AsyncGenerator[AsyncSession, None]:
        await self.ensure_initialized()
        session = self._session_factory()
        try:
            yield session
            await session.commit()
        except HTTPException:
            await session.rollback()
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            if isinstance(e, DisconnectionError):
                self._health_checker.is_healthy = False
            logger.error("Database error: {}", e)
            raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database operation failed") from e
        finally:
            await session.close()

    async def health_check(self) -> Tuple[bool, Optional[str]]:
        """Bring the engine up if needed and run a forced connectivity check."""
        try:
            await self.initialize()
        except DatabaseError as e:
            return False, e.message
        if await self._health_checker.check_health(self._engine, force=True):
            return True, None
        return False, self._health_checker.last_error


# Global instance
_db_manager = DatabaseManager()


# Public interface
async def init_db() -> None:
    await _db_manager.initialize()


async def close_db() -> None:
    await _db_manager.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with _db_manager.session_scope() as session:
        yield session


async def check_database_health() -> Tuple[bool, Optional[str]]:
    return await _db_manager.health_check()


__all__ = [
    "init_db",
    "close_db",
    "get_db",
    "check_database_health",
    "DatabaseError",
    "DatabaseManager",
]

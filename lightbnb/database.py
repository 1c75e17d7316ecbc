"""
Database connection and session management.
Wraps an async SQLAlchemy engine and its connection pool in an explicitly
constructed resource that repositories receive at construction time.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import Integer, text
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional
import logging

from lightbnb.config import DEFAULT_RESULT_LIMIT, Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all database models.
    Every LightBnB table has a serial integer primary key.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    def __repr__(self) -> str:
        """String representation of the model."""
        return f"<{self.__class__.__name__}(id={self.id})>"


class Database:
    """
    Owns the async engine (and therefore the connection pool).

    Create one at startup, hand it to the repositories and call ``close()``
    at shutdown. Each ``session()`` checks a connection out of the pool for
    the duration of the ``async with`` block only.
    ``default_result_limit`` caps list queries that are called without a limit.
    """

    def __init__(
        self,
        url: str,
        echo: bool = False,
        default_result_limit: int = DEFAULT_RESULT_LIMIT,
        **engine_kwargs: Any
    ):
        self.url = url
        self.default_result_limit = default_result_limit
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.debug(f"Database engine created for {self.engine.url.render_as_string(hide_password=True)}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """
        Build a database from application settings.
        Pool sizing only applies to server databases; SQLite uses its default pool.
        """
        engine_kwargs: Dict[str, Any] = {}
        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.pool_size,
                max_overflow=settings.max_overflow,
                pool_pre_ping=True,
                pool_recycle=settings.pool_recycle,
                pool_timeout=settings.pool_timeout,
                connect_args={
                    "server_settings": {
                        "application_name": settings.app_name.lower(),
                    }
                },
            )
        return cls(
            settings.database_url,
            echo=settings.debug,
            default_result_limit=settings.default_result_limit,
            **engine_kwargs
        )

    @property
    def dialect(self):
        return self.engine.dialect

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield an async session and make sure it is closed after use.
        Uncommitted work is rolled back if the block raises.
        """
        async with self._session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def create_tables(self) -> None:
        """Create all tables known to the model metadata."""
        # Models must be imported so that their tables are registered
        import lightbnb.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")

    async def drop_tables(self) -> None:
        """Drop all tables. Only meant for development and tests."""
        import lightbnb.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")

    async def check_connection(self) -> bool:
        """
        Test database connectivity.
        Returns True if connection is successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database connection successful")
            return True
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False

    def pool_status(self) -> Dict[str, Optional[int]]:
        """Connection pool counters for monitoring."""
        pool = self.engine.pool
        return {
            "pool_size": getattr(pool, "size", lambda: None)(),
            "checked_in_connections": getattr(pool, "checkedin", lambda: None)(),
            "checked_out_connections": getattr(pool, "checkedout", lambda: None)(),
            "overflow_connections": getattr(pool, "overflow", lambda: None)(),
        }

    async def close(self) -> None:
        """
        Dispose of the engine and every pooled connection.
        This should be called during application shutdown.
        """
        await self.engine.dispose()
        logger.info("Database connections closed")

    async def __aenter__(self) -> "Database":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

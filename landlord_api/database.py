"""
Database connection and session management.
Owns the async SQLAlchemy engine, its connection pool, and the declarative base.
"""

from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import text, event, DateTime, Integer, func
from sqlalchemy import exc as sa_exc
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Dict, Any
from fastapi import Request
import logging

from landlord_api.utils.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)

# Errors raised when no connection could be handed out: pool exhausted,
# server unreachable, or the connection dropped underneath us.
CONNECTION_ERRORS = (
    sa_exc.TimeoutError,
    sa_exc.DisconnectionError,
    sa_exc.InterfaceError,
    OSError,
)


class Base(DeclarativeBase):
    """
    Base class for all database models.
    Includes common fields: id, created_at.
    """

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"


class UpdatedAtMixin:
    """Adds an updated_at column refreshed on every UPDATE statement."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Connection provider for the application.

    Built once at startup and handed to request handlers through the
    ``get_db`` dependency. Each call to :meth:`session` borrows a connection
    from the pool and returns it on every exit path.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_overflow: int = 20,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        echo: bool = False
    ):
        self.url = url
        engine_kwargs: Dict[str, Any] = {"echo": echo, "pool_pre_ping": True}

        if url.startswith("sqlite"):
            # aiosqlite picks its own pool class; only sizing knobs differ.
            self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        else:
            self.engine = create_async_engine(
                url,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_recycle=pool_recycle,
                connect_args={
                    "server_settings": {
                        "application_name": "landlord_api",
                    }
                },
                **engine_kwargs
            )

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            echo=settings.debug,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Borrow a session for the duration of a unit of work.

        Uncommitted work is rolled back when the block raises. Failures to
        obtain a connection surface as DatabaseConnectionError.
        """
        session = self.session_factory()
        try:
            yield session
        except CONNECTION_ERRORS as e:
            logger.error(f"Database connection unavailable: {e}", exc_info=True)
            await session.rollback()
            raise DatabaseConnectionError() from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def ping(self) -> bool:
        """
        Test database connectivity.
        Returns True if connection is successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.debug("Database connection successful")
            return True
        except (sa_exc.SQLAlchemyError, OSError) as e:
            logger.error(f"Database connection failed: {e}")
            return False

    async def create_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")

    async def drop_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")

    def pool_status(self) -> Dict[str, Any]:
        """Connection pool counters for the health endpoint."""
        pool = self.engine.pool
        return {
            "pool_class": type(pool).__name__,
            "status": pool.status(),
        }

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database connections closed")


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Dependency to get database session.
    Yields a session from the application's Database and releases it after use.
    """
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from starlette.requests import HTTPConnection

from socialnet.logging import logger
from socialnet.settings import Settings, app_settings


class Database:
    """
    Explicitly constructed store handle.

    One instance is created per process (or per test) and passed to
    whatever needs it; the FastAPI application keeps it on
    ``app.state.db``. Nothing in the package creates an engine at import
    time.

    Example:
        ```python
        db = Database("sqlite+aiosqlite:///:memory:")
        await db.create_tables()

        async with db.session() as session:
            repo = PostRepository(session)
            ...
        ```
    """

    def __init__(self, url: str, **engine_kwargs):
        """
        Args:
            url: SQLAlchemy async database URL.
            **engine_kwargs: Extra arguments for ``create_async_engine``.
        """
        self.url = url
        self.engine: AsyncEngine = create_async_engine(
            url, echo=False, **engine_kwargs
        )
        self.session_factory = async_sessionmaker(
            self.engine, expire_on_commit=False, class_=AsyncSession
        )

    @classmethod
    def from_settings(cls, settings: Settings = app_settings) -> "Database":
        """
        Build a handle from application settings.

        Connection pool options are only passed for server databases;
        SQLite shares one connection so in-memory databases survive
        across sessions.
        """
        url = settings.DATABASE_URL
        if url.startswith("sqlite"):
            return cls(
                url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )

        return cls(
            url,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=settings.DB_POOL_PRE_PING,
        )

    async def wait_until_ready(
        self,
        retry_interval: int | None = None,
        max_retries: int | None = None,
    ) -> None:
        """
        Wait until the database accepts connections.

        Args:
            retry_interval: Time in seconds between retries.
                Defaults to app_settings.DB_INIT_RETRY_INTERVAL
            max_retries: Maximum number of retries before giving up.
                Defaults to app_settings.DB_INIT_MAX_RETRIES

        Raises:
            RuntimeError: If the database never became reachable.
        """
        if retry_interval is None:
            retry_interval = app_settings.DB_INIT_RETRY_INTERVAL
        if max_retries is None:
            max_retries = app_settings.DB_INIT_MAX_RETRIES

        for attempt in range(max_retries):
            try:
                async with self.engine.connect() as conn:
                    await conn.exec_driver_sql("SELECT 1")
                logger.info("Database is now ready.")
                return
            except OperationalError:
                logger.warning(
                    f"Database not ready, retrying in {retry_interval} seconds... (Attempt {attempt + 1}/{max_retries})"
                )
                await asyncio.sleep(retry_interval)

        logger.error("Failed to connect to the database after multiple attempts.")
        raise RuntimeError("Database connection could not be established.")

    async def create_tables(self) -> None:
        # Registers every table on SQLModel.metadata
        import socialnet.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session that commits on success and rolls back on error.

        Yields:
            AsyncSession: An asynchronous SQLAlchemy session.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except IntegrityError as ex:
                await session.rollback()
                logger.error(f"Database integrity error: {ex}")
                raise
            except SQLAlchemyError as ex:
                await session.rollback()
                logger.error(f"Database error: {ex}")
                raise


def get_database(conn: HTTPConnection) -> Database:
    """Return the store handle attached to the running application."""
    return conn.app.state.db


async def get_session(conn: HTTPConnection) -> AsyncIterator[AsyncSession]:
    """
    FastAPI dependency yielding one session per request.

    Yields:
        AsyncSession: Session bound to the application's Database.
    """
    async with get_database(conn).session() as session:
        yield session

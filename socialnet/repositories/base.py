"""
Generic data access shared by every repository.

Writes are flushed immediately so constraint violations surface inside
the command that caused them; the transaction itself is committed once
per request by the session dependency.

Example:
    ```python
    class LikeRepository(BaseRepository[Like]):
        def __init__(self, session: AsyncSession):
            super().__init__(session, Like)

    likes = LikeRepository(session)
    created = await likes.create_if_absent(
        Like(user_id=viewer_id, post_id=post_id)
    )
    ```
"""

from contextlib import asynccontextmanager
from typing import Any, Generic, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from socialnet.logging import logger

T = TypeVar("T")

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_INSERTS = {"postgresql": postgresql.insert, "sqlite": sqlite.insert}


class BaseRepository(Generic[T]):
    """
    Keyword filters (``get_all(user_id=..., read=False)``) compare with
    equality; a filter whose value is None is ignored.
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        self.session = session
        self.model = model

    def _filtered(self, stmt, filters: dict[str, Any]):
        for key, value in filters.items():
            if value is not None:
                stmt = stmt.where(getattr(self.model, key) == value)
        return stmt

    @asynccontextmanager
    async def _writing(self, action: str):
        try:
            yield
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error {action} {self.model.__name__}: {e}")
            raise

    async def _read(self, stmt):
        try:
            return await self.session.exec(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Error reading {self.model.__name__}: {e}")
            raise

    async def get_by_id(self, id: str) -> T | None:
        return await self.session.get(self.model, id)

    async def get_one(self, **filters: Any) -> T | None:
        result = await self._read(self._filtered(select(self.model), filters))
        return result.first()

    async def get_all(self, **filters: Any) -> list[T]:
        result = await self._read(self._filtered(select(self.model), filters))
        return list(result.all())

    async def exists(self, **filters: Any) -> bool:
        return await self.get_one(**filters) is not None

    async def count(self, **filters: Any) -> int:
        stmt = select(func.count()).select_from(self.model)
        result = await self._read(self._filtered(stmt, filters))
        return result.one()

    async def create(self, entity: T) -> T:
        """
        Insert ``entity`` and reload it, so generated columns and eagerly
        loaded relationships (e.g. a comment's author) are populated.
        """
        async with self._writing("creating"):
            self.session.add(entity)
        await self.session.refresh(entity)
        return entity

    async def update(self, entity: T) -> T:
        async with self._writing("updating"):
            self.session.add(entity)
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: T) -> None:
        async with self._writing("deleting"):
            await self.session.delete(entity)

    async def create_if_absent(self, entity: T) -> bool:
        """
        Insert ``entity`` unless a row with the same unique key exists.

        The check and the insert are one statement, so two requests
        racing to create the same like (or follow, or bookmark) both
        succeed and exactly one row is written.

        Returns:
            True if this call wrote the row.
        """
        insert = _INSERTS[self.session.get_bind().dialect.name]
        stmt = (
            insert(self.model)
            .values(**entity.model_dump())
            .on_conflict_do_nothing()
        )
        async with self._writing("creating"):
            result = await self.session.exec(stmt)
        return result.rowcount > 0

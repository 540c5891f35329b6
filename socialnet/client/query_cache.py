"""
Client-side query cache.

Holds the last known value per query key (e.g. ``("like-info", post_id)``)
and runs background refetches. A key can be suspended while an
optimistic mutation is in flight so a refetch that started earlier
cannot overwrite the speculative value.

All methods are meant to be called from one event loop.
"""

import asyncio
from typing import Any, Awaitable, Callable, Hashable

from socialnet.logging import logger

QueryKey = Hashable


class QueryCache:
    def __init__(self) -> None:
        self._data: dict[QueryKey, Any] = {}
        self._suspended: set[QueryKey] = set()
        self._inflight: dict[QueryKey, asyncio.Task] = {}

    def get_query_data(self, key: QueryKey) -> Any:
        return self._data.get(key)

    def set_query_data(self, key: QueryKey, value: Any) -> Any:
        """
        Store a value for ``key``.

        Args:
            key: Query key.
            value: The new value, or a callable receiving the current
                value (None if absent) and returning the new one.

        Returns:
            The stored value.
        """
        if callable(value):
            value = value(self._data.get(key))
        self._data[key] = value
        return value

    def is_suspended(self, key: QueryKey) -> bool:
        return key in self._suspended

    async def cancel_queries(self, key: QueryKey) -> None:
        """
        Suspend refetches of ``key`` and cancel the one in flight, if any.

        Refetches stay suspended until ``resume_queries`` is called.
        """
        self._suspended.add(key)

        task = self._inflight.pop(key, None)
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
            logger.debug(f"Cancelled in-flight query {key!r}")

    def resume_queries(self, key: QueryKey) -> None:
        self._suspended.discard(key)

    async def fetch_query(
        self, key: QueryKey, fn: Callable[[], Awaitable[Any]]
    ) -> Any:
        """
        Fetch ``key`` with ``fn`` and store the result.

        While the key is suspended the fetch is skipped. If the fetch is
        cancelled through ``cancel_queries`` the cached value is left
        untouched. In both cases the current cached value is returned.
        """
        if key in self._suspended:
            logger.debug(f"Query {key!r} is suspended, skipping fetch")
            return self._data.get(key)

        task = asyncio.ensure_future(fn())
        self._inflight[key] = task
        try:
            value = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            return self._data.get(key)
        finally:
            if self._inflight.get(key) is task:
                del self._inflight[key]

        if key in self._suspended:
            return self._data.get(key)

        self._data[key] = value
        return value

"""
Optimistic toggles for likes, follows and bookmarks.

A mutation moves through ``IDLE -> PENDING -> COMMITTED | ROLLED_BACK``:

1. refetches of the affected cache key are suspended (and an in-flight
   one is cancelled) so they cannot overwrite the speculative value;
2. the prior value is captured and the optimistic value is written;
3. the request is sent. On success the optimistic value stays; on
   failure the prior value is restored and the notifier shows a
   transient message.

Example:
    ```python
    toggle = LikeToggle(client, cache, post_id, initial=post_like_info)
    await toggle.mutate()          # cache shows the new count immediately
    toggle.is_pending              # disables the button while in flight
    ```
"""

import enum
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

from socialnet.client.api import SocialClient
from socialnet.client.query_cache import QueryCache, QueryKey
from socialnet.exceptions import AppException
from socialnet.logging import logger
from socialnet.schemas.post import BookmarkInfo, LikeInfo
from socialnet.schemas.user import FollowerInfo

T = TypeVar("T")

Notifier = Callable[[str], None]

DEFAULT_ERROR_MESSAGE = "Something went wrong. Please try again."


class MutationState(enum.Enum):
    IDLE = "idle"
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class MutationPendingError(Exception):
    """A mutation was started while the previous one is still pending."""


class OptimisticMutation(ABC, Generic[T]):
    """
    One optimistic update of a single cache key.

    Subclasses decide the speculative value and which request to send,
    both from the value the cache held before the mutation.
    """

    def __init__(
        self,
        cache: QueryCache,
        key: QueryKey,
        initial: T | None = None,
        notifier: Notifier | None = None,
        error_message: str = DEFAULT_ERROR_MESSAGE,
    ) -> None:
        """
        Args:
            cache: Cache holding the value shown to the user.
            key: Cache key of that value.
            initial: Value seeded into the cache when the key is empty
                (typically the state rendered with the page).
            notifier: Called with a user-facing message after a rollback.
            error_message: Message passed to the notifier.
        """
        self.cache = cache
        self.key = key
        self.notifier = notifier
        self.error_message = error_message
        self.state = MutationState.IDLE
        self.prior: T | None = None

        if initial is not None and cache.get_query_data(key) is None:
            cache.set_query_data(key, initial)

    @property
    def is_pending(self) -> bool:
        return self.state is MutationState.PENDING

    @abstractmethod
    def optimistic_value(self, prior: T) -> T: ...

    @abstractmethod
    async def send(self, prior: T) -> Any: ...

    async def mutate(self) -> T:
        """
        Apply the mutation optimistically and confirm it with the server.

        Returns:
            The value left in the cache (the optimistic one).

        Raises:
            MutationPendingError: If called again while PENDING.
            AppException: The request failure, after rollback.
        """
        if self.is_pending:
            raise MutationPendingError(f"Mutation on {self.key!r} is pending")

        self.state = MutationState.PENDING
        try:
            await self.cache.cancel_queries(self.key)

            prior = self.cache.get_query_data(self.key)
            if prior is None:
                raise ValueError(f"No cached value for {self.key!r}")
            self.prior = prior
            optimistic = self.cache.set_query_data(
                self.key, self.optimistic_value(prior)
            )

            try:
                await self.send(prior)
            except AppException as ex:
                self.cache.set_query_data(self.key, prior)
                self.state = MutationState.ROLLED_BACK
                logger.warning(
                    f"Optimistic update of {self.key!r} rolled back: {ex.message}"
                )
                if self.notifier is not None:
                    self.notifier(self.error_message)
                raise

            self.state = MutationState.COMMITTED
            return optimistic
        finally:
            if self.state is MutationState.PENDING:
                self.state = MutationState.IDLE
            self.cache.resume_queries(self.key)


class LikeToggle(OptimisticMutation[LikeInfo]):
    def __init__(
        self,
        client: SocialClient,
        cache: QueryCache,
        post_id: str,
        initial: LikeInfo | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        super().__init__(cache, ("like-info", post_id), initial, notifier)
        self.client = client
        self.post_id = post_id

    def optimistic_value(self, prior: LikeInfo) -> LikeInfo:
        return LikeInfo(
            likes=prior.likes - 1 if prior.is_liked_by_user else prior.likes + 1,
            is_liked_by_user=not prior.is_liked_by_user,
        )

    async def send(self, prior: LikeInfo) -> LikeInfo:
        if prior.is_liked_by_user:
            return await self.client.unlike_post(self.post_id)
        return await self.client.like_post(self.post_id)


class FollowToggle(OptimisticMutation[FollowerInfo]):
    def __init__(
        self,
        client: SocialClient,
        cache: QueryCache,
        user_id: str,
        initial: FollowerInfo | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        super().__init__(cache, ("follower-info", user_id), initial, notifier)
        self.client = client
        self.user_id = user_id

    def optimistic_value(self, prior: FollowerInfo) -> FollowerInfo:
        return FollowerInfo(
            followers=(
                prior.followers - 1
                if prior.is_followed_by_user
                else prior.followers + 1
            ),
            is_followed_by_user=not prior.is_followed_by_user,
        )

    async def send(self, prior: FollowerInfo) -> FollowerInfo:
        if prior.is_followed_by_user:
            return await self.client.unfollow_user(self.user_id)
        return await self.client.follow_user(self.user_id)


class BookmarkToggle(OptimisticMutation[BookmarkInfo]):
    def __init__(
        self,
        client: SocialClient,
        cache: QueryCache,
        post_id: str,
        initial: BookmarkInfo | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        super().__init__(cache, ("bookmark-info", post_id), initial, notifier)
        self.client = client
        self.post_id = post_id

    def optimistic_value(self, prior: BookmarkInfo) -> BookmarkInfo:
        return BookmarkInfo(is_bookmarked_by_user=not prior.is_bookmarked_by_user)

    async def send(self, prior: BookmarkInfo) -> BookmarkInfo:
        if prior.is_bookmarked_by_user:
            return await self.client.remove_bookmark(self.post_id)
        return await self.client.bookmark_post(self.post_id)

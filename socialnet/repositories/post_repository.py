import re
from collections import Counter
from typing import Iterable

from sqlalchemy import delete, func, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from socialnet.constants import HASHTAG_PATTERN
from socialnet.logging import logger
from socialnet.models import (
    Bookmark,
    Comment,
    Follow,
    Like,
    Notification,
    Post,
    User,
)
from socialnet.repositories.base import BaseRepository
from socialnet.schemas.post import PostData
from socialnet.schemas.user import UserSummary
from socialnet.storage.pagination.fetcher import CursorPaginationStrategy
from socialnet.storage.pagination.trimmer import Page

_hashtag_re = re.compile(HASHTAG_PATTERN)

# A post mentioning a tag twice counts once
_TRENDING_SQL = text(
    """
    SELECT tag, COUNT(DISTINCT id) AS posts
    FROM (
        SELECT id, LOWER((regexp_matches(content, :pattern, 'g'))[1]) AS tag
        FROM posts
    ) AS mentions
    GROUP BY tag
    ORDER BY posts DESC, tag COLLATE "C" ASC
    LIMIT :limit
    """
)


def rank_hashtags(contents: Iterable[str], limit: int) -> list[tuple[str, int]]:
    counts: Counter[str] = Counter()
    for content in contents:
        counts.update({tag.lower() for tag in _hashtag_re.findall(content)})
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return ranked[:limit]


class PostRepository(BaseRepository[Post]):
    """
    Repository for Post entities and the post feeds.

    Feed methods return a ``Page`` of ``PostData`` already hydrated with
    like/comment counts and the viewer's like/bookmark flags.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session, Post)

    async def _page(
        self, query, viewer_id: str, cursor: str | None, page_size: int
    ) -> Page[PostData]:
        strategy = CursorPaginationStrategy(self.session, cursor=cursor)
        page = await strategy.paginate(query, Post, page_size)
        return Page(
            items=await self.to_post_data(page.items, viewer_id),
            cursor=page.cursor,
        )

    async def for_you_page(
        self, viewer_id: str, cursor: str | None, page_size: int
    ) -> Page[PostData]:
        return await self._page(select(Post), viewer_id, cursor, page_size)

    async def following_page(
        self, viewer_id: str, cursor: str | None, page_size: int
    ) -> Page[PostData]:
        followed = select(Follow.following_id).where(
            Follow.follower_id == viewer_id
        )
        query = select(Post).where(col(Post.user_id).in_(followed))
        return await self._page(query, viewer_id, cursor, page_size)

    async def user_posts_page(
        self,
        user_id: str,
        viewer_id: str,
        cursor: str | None,
        page_size: int,
    ) -> Page[PostData]:
        query = select(Post).where(Post.user_id == user_id)
        return await self._page(query, viewer_id, cursor, page_size)

    async def search_page(
        self,
        terms: list[str],
        viewer_id: str,
        cursor: str | None,
        page_size: int,
    ) -> Page[PostData]:
        """
        Posts matching every term in content, author display name or
        username (case-insensitive substring match).
        """
        query = select(Post).join(User, col(Post.user_id) == col(User.id))
        for term in terms:
            query = query.where(
                col(Post.content).icontains(term, autoescape=True)
                | col(User.display_name).icontains(term, autoescape=True)
                | col(User.username).icontains(term, autoescape=True)
            )
        return await self._page(query, viewer_id, cursor, page_size)

    async def to_post_data(
        self, posts: list[Post], viewer_id: str
    ) -> list[PostData]:
        """
        Render posts with counters and viewer flags.

        Counts are fetched with one grouped query per relation instead of
        one query per post.
        """
        if not posts:
            return []

        ids = [post.id for post in posts]
        try:
            like_counts = dict(
                (
                    await self.session.exec(
                        select(Like.post_id, func.count())
                        .where(col(Like.post_id).in_(ids))
                        .group_by(Like.post_id)
                    )
                ).all()
            )
            comment_counts = dict(
                (
                    await self.session.exec(
                        select(Comment.post_id, func.count())
                        .where(col(Comment.post_id).in_(ids))
                        .group_by(Comment.post_id)
                    )
                ).all()
            )
            liked = set(
                (
                    await self.session.exec(
                        select(Like.post_id).where(
                            Like.user_id == viewer_id,
                            col(Like.post_id).in_(ids),
                        )
                    )
                ).all()
            )
            bookmarked = set(
                (
                    await self.session.exec(
                        select(Bookmark.post_id).where(
                            Bookmark.user_id == viewer_id,
                            col(Bookmark.post_id).in_(ids),
                        )
                    )
                ).all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error loading post counters: {e}")
            raise

        return [
            PostData(
                id=post.id,
                content=post.content,
                created_at=post.created_at,
                user=UserSummary.model_validate(post.user),
                likes=like_counts.get(post.id, 0),
                comments=comment_counts.get(post.id, 0),
                is_liked_by_user=post.id in liked,
                is_bookmarked_by_user=post.id in bookmarked,
            )
            for post in posts
        ]

    async def delete_with_dependents(self, post: Post) -> None:
        """Delete a post together with its likes, bookmarks, comments and notifications."""
        try:
            for model in (Like, Bookmark, Comment, Notification):
                await self.session.exec(
                    delete(model).where(col(model.post_id) == post.id)
                )
            await self.session.delete(post)
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Error deleting post {post.id}: {e}")
            raise

    async def trending_hashtags(self, limit: int) -> list[tuple[str, int]]:
        """
        Hashtags ranked by the number of posts mentioning them.

        PostgreSQL ranks in the database; other stores (SQLite in tests)
        load post contents and rank them with ``rank_hashtags``.

        Returns:
            Up to ``limit`` ``(hashtag, posts)`` pairs, most used first,
            ties by hashtag.
        """
        try:
            if self.session.get_bind().dialect.name == "postgresql":
                result = await self.session.execute(
                    _TRENDING_SQL, {"pattern": HASHTAG_PATTERN, "limit": limit}
                )
                return [(tag, count) for tag, count in result.all()]

            result = await self.session.exec(select(Post.content))
            return rank_hashtags(result.all(), limit)
        except SQLAlchemyError as e:
            logger.error(f"Error ranking hashtags: {e}")
            raise

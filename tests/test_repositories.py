"""
Repository tests against an in-memory SQLite database.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from socialnet.constants import (
    HASHTAG_PATTERN,
    NOTIFICATION_FOLLOW,
    NOTIFICATION_LIKE,
)
from socialnet.models import (
    Bookmark,
    Comment,
    Follow,
    Like,
    Notification,
    Post,
    Session,
)
from socialnet.repositories.bookmark_repository import BookmarkRepository
from socialnet.repositories.like_repository import LikeRepository
from socialnet.repositories.notification_repository import (
    NotificationRepository,
)
from socialnet.repositories.post_repository import PostRepository
from socialnet.repositories.user_repository import (
    SessionRepository,
    UserRepository,
)
from tests.mocks.data import BASE_TIME, seed_posts


class TestPostRepository:
    @pytest.mark.asyncio
    async def test_post_data_counts_and_viewer_flags(self, db, users):
        alice, bob = users["alice"], users["bob"]
        [post] = await seed_posts(db, bob, 1)
        async with db.session() as session:
            session.add(Like(user_id=alice.id, post_id=post.id))
            session.add(Like(user_id=bob.id, post_id=post.id))
            session.add(Bookmark(user_id=alice.id, post_id=post.id))
            session.add(Comment(content="nice", user_id=alice.id, post_id=post.id))

        async with db.session() as session:
            page = await PostRepository(session).for_you_page(alice.id, None, 10)

        [data] = page.items
        assert data.likes == 2
        assert data.comments == 1
        assert data.is_liked_by_user is True
        assert data.is_bookmarked_by_user is True
        assert data.user.username == "bob"

        async with db.session() as session:
            page = await PostRepository(session).for_you_page(
                users["carol"].id, None, 10
            )
        assert page.items[0].is_liked_by_user is False
        assert page.items[0].is_bookmarked_by_user is False

    @pytest.mark.asyncio
    async def test_following_feed_only_has_followed_authors(self, db, users):
        alice, bob, carol = users["alice"], users["bob"], users["carol"]
        bob_posts = await seed_posts(db, bob, 3)
        await seed_posts(db, carol, 3, content="carol {i}")
        async with db.session() as session:
            session.add(Follow(follower_id=alice.id, following_id=bob.id))

        async with db.session() as session:
            page = await PostRepository(session).following_page(alice.id, None, 10)

        assert [p.id for p in page.items] == [p.id for p in bob_posts]

    @pytest.mark.asyncio
    async def test_user_posts(self, db, users):
        await seed_posts(db, users["bob"], 2)
        carol_posts = await seed_posts(db, users["carol"], 3)

        async with db.session() as session:
            page = await PostRepository(session).user_posts_page(
                users["carol"].id, users["alice"].id, None, 2
            )

        assert [p.id for p in page.items] == [p.id for p in carol_posts[:2]]
        assert page.cursor == carol_posts[2].id

    @pytest.mark.asyncio
    async def test_search_requires_every_term(self, db, users):
        await seed_posts(db, users["bob"], 1, content="Learning Python today")
        await seed_posts(
            db, users["carol"], 1, start=BASE_TIME + timedelta(hours=1),
            content="python and fastapi",
        )

        async with db.session() as session:
            repo = PostRepository(session)
            both = await repo.search_page(["PYTHON"], users["alice"].id, None, 10)
            one = await repo.search_page(
                ["python", "fastapi"], users["alice"].id, None, 10
            )
            by_author = await repo.search_page(["carol"], users["alice"].id, None, 10)
            literal = await repo.search_page(["100%"], users["alice"].id, None, 10)

        assert len(both.items) == 2
        assert [p.content for p in one.items] == ["python and fastapi"]
        assert [p.user.username for p in by_author.items] == ["carol"]
        assert literal.items == []

    @pytest.mark.asyncio
    async def test_delete_with_dependents(self, db, users):
        alice, bob = users["alice"], users["bob"]
        [post] = await seed_posts(db, alice, 1)
        async with db.session() as session:
            session.add(Like(user_id=bob.id, post_id=post.id))
            session.add(Bookmark(user_id=bob.id, post_id=post.id))
            session.add(Comment(content="c", user_id=bob.id, post_id=post.id))
            session.add(
                Notification(
                    recipient_id=alice.id,
                    issuer_id=bob.id,
                    post_id=post.id,
                    type=NOTIFICATION_LIKE,
                )
            )

        async with db.session() as session:
            repo = PostRepository(session)
            await repo.delete_with_dependents(await repo.get_by_id(post.id))

        async with db.session() as session:
            assert await PostRepository(session).get_by_id(post.id) is None
            assert await NotificationRepository(session).count() == 0
            assert await BookmarkRepository(session).count() == 0


class TestTrendingHashtags:
    @pytest.mark.asyncio
    async def test_ranked_by_posts_mentioning(self, db, users):
        bob = users["bob"]
        async with db.session() as session:
            for content in ("#Py #py", "#py #web", "#web", "#api", "plain"):
                session.add(Post(content=content, user_id=bob.id))

        async with db.session() as session:
            ranked = await PostRepository(session).trending_hashtags(2)

        assert ranked == [("#py", 2), ("#web", 2)]

    @pytest.mark.asyncio
    async def test_postgresql_ranks_in_the_database(self):
        session = MagicMock()
        session.get_bind.return_value.dialect.name = "postgresql"
        result = MagicMock()
        result.all.return_value = [("#py", 4), ("#web", 1)]
        session.execute = AsyncMock(return_value=result)
        session.exec = AsyncMock()

        ranked = await PostRepository(session).trending_hashtags(5)

        assert ranked == [("#py", 4), ("#web", 1)]
        session.exec.assert_not_called()
        params = session.execute.call_args.args[1]
        assert params == {"pattern": HASHTAG_PATTERN, "limit": 5}


class TestCreateIfAbsent:
    @pytest.mark.asyncio
    async def test_second_insert_of_same_key_is_skipped(self, db, users):
        alice = users["alice"]
        [post] = await seed_posts(db, users["bob"], 1)

        async with db.session() as session:
            likes = LikeRepository(session)
            first = await likes.create_if_absent(
                Like(user_id=alice.id, post_id=post.id)
            )
            second = await likes.create_if_absent(
                Like(user_id=alice.id, post_id=post.id)
            )

        assert first is True
        assert second is False
        async with db.session() as session:
            assert await LikeRepository(session).count(post_id=post.id) == 1


class TestBookmarkRepository:
    @pytest.mark.asyncio
    async def test_ordered_by_bookmark_time_with_bookmark_cursor(self, db, users):
        alice = users["alice"]
        posts = await seed_posts(db, users["bob"], 3)
        # Bookmark the oldest post last
        bookmarks = [
            Bookmark(
                user_id=alice.id,
                post_id=post.id,
                created_at=BASE_TIME + timedelta(days=1, minutes=i),
            )
            for i, post in enumerate(posts)
        ]
        async with db.session() as session:
            session.add_all(bookmarks)

        async with db.session() as session:
            page = await BookmarkRepository(session).bookmarked_page(
                alice.id, None, 2
            )

        assert [p.id for p in page.items] == [posts[2].id, posts[1].id]
        assert page.cursor == bookmarks[0].id
        assert all(p.is_bookmarked_by_user for p in page.items)


class TestNotificationRepository:
    @pytest.mark.asyncio
    async def test_no_notification_for_own_action(self, users, session):
        alice = users["alice"]

        created = await NotificationRepository(session).notify(
            recipient_id=alice.id, issuer_id=alice.id, type=NOTIFICATION_FOLLOW
        )

        assert created is None
        assert await NotificationRepository(session).count() == 0

    @pytest.mark.asyncio
    async def test_mark_all_read(self, db, users):
        alice, bob = users["alice"], users["bob"]
        async with db.session() as session:
            repo = NotificationRepository(session)
            await repo.notify(alice.id, bob.id, NOTIFICATION_FOLLOW)
            await repo.notify(bob.id, alice.id, NOTIFICATION_FOLLOW)

        async with db.session() as session:
            await NotificationRepository(session).mark_all_read(alice.id)

        async with db.session() as session:
            repo = NotificationRepository(session)
            assert await repo.count(recipient_id=alice.id, read=False) == 0
            assert await repo.count(recipient_id=bob.id, read=False) == 1

    @pytest.mark.asyncio
    async def test_page_includes_issuer_and_post(self, db, users):
        alice, bob = users["alice"], users["bob"]
        [post] = await seed_posts(db, alice, 1)
        async with db.session() as session:
            await NotificationRepository(session).notify(
                alice.id, bob.id, NOTIFICATION_LIKE, post_id=post.id
            )

        async with db.session() as session:
            page = await NotificationRepository(session).notifications_page(
                alice.id, None, 10
            )

        [item] = page.items
        assert item.issuer.username == "bob"
        assert item.post.id == post.id
        assert item.read is False


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_username_lookup_is_case_insensitive(self, users, session):
        found = await UserRepository(session).get_by_username("ALICE")

        assert found is not None
        assert found.id == users["alice"].id

    @pytest.mark.asyncio
    async def test_profile_counters(self, db, users):
        alice, bob = users["alice"], users["bob"]
        await seed_posts(db, bob, 4)
        async with db.session() as session:
            session.add(Follow(follower_id=alice.id, following_id=bob.id))

        async with db.session() as session:
            repo = UserRepository(session)
            profile = await repo.profile(await repo.get_by_id(bob.id), alice.id)

        assert profile.posts == 4
        assert profile.followers == 1
        assert profile.is_followed_by_user is True

    @pytest.mark.asyncio
    async def test_recommendations_exclude_self_and_followed(self, db, users):
        alice, bob = users["alice"], users["bob"]
        async with db.session() as session:
            session.add(Follow(follower_id=alice.id, following_id=bob.id))

        async with db.session() as session:
            recommended = await UserRepository(session).recommendations(alice.id, 5)

        assert [u.username for u in recommended] == ["carol"]


class TestSessionRepository:
    @pytest.mark.asyncio
    async def test_active_session_resolves_user(self, users, session):
        user = await SessionRepository(session).get_user_for_token("token-bob")

        assert user.id == users["bob"].id

    @pytest.mark.asyncio
    async def test_expired_or_unknown_session(self, db, users):
        async with db.session() as session:
            session.add(
                Session(
                    id="expired",
                    user_id=users["alice"].id,
                    expires_at=datetime.now(timezone.utc) - timedelta(minutes=1),
                )
            )

        async with db.session() as session:
            repo = SessionRepository(session)
            assert await repo.get_user_for_token("expired") is None
            assert await repo.get_user_for_token("nope") is None

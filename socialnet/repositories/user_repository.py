from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from socialnet.logging import logger
from socialnet.models import Follow, Session, User
from socialnet.models.base import utcnow
from socialnet.repositories.base import BaseRepository
from socialnet.repositories.follow_repository import FollowRepository
from socialnet.repositories.post_repository import PostRepository
from socialnet.schemas.user import FollowerInfo, UserProfile, UserSummary


class UserRepository(BaseRepository[User]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, User)

    async def get_by_username(self, username: str) -> User | None:
        """Case-insensitive username lookup."""
        try:
            result = await self.session.exec(
                select(User).where(
                    func.lower(User.username) == username.lower()
                )
            )
            return result.first()
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving user {username}: {e}")
            raise

    async def follower_info(self, user_id: str, viewer_id: str) -> FollowerInfo:
        follows = FollowRepository(self.session)
        return FollowerInfo(
            followers=await follows.count(following_id=user_id),
            is_followed_by_user=await follows.exists(
                follower_id=viewer_id, following_id=user_id
            ),
        )

    async def profile(self, user: User, viewer_id: str) -> UserProfile:
        info = await self.follower_info(user.id, viewer_id)
        posts = await PostRepository(self.session).count(user_id=user.id)
        return UserProfile(
            id=user.id,
            username=user.username,
            display_name=user.display_name,
            avatar_url=user.avatar_url,
            bio=user.bio,
            created_at=user.created_at,
            followers=info.followers,
            posts=posts,
            is_followed_by_user=info.is_followed_by_user,
        )

    async def recommendations(
        self, viewer_id: str, limit: int
    ) -> list[UserSummary]:
        """Users the viewer does not follow yet, newest accounts first."""
        followed = select(Follow.following_id).where(
            Follow.follower_id == viewer_id
        )
        try:
            result = await self.session.exec(
                select(User)
                .where(
                    User.id != viewer_id,
                    col(User.id).not_in(followed),
                )
                .order_by(col(User.created_at).desc(), col(User.id).desc())
                .limit(limit)
            )
            return [UserSummary.model_validate(u) for u in result.all()]
        except SQLAlchemyError as e:
            logger.error(f"Error loading recommendations: {e}")
            raise


class SessionRepository(BaseRepository[Session]):
    """Read-only access to sessions issued by the authentication service."""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Session)

    async def get_user_for_token(
        self, token: str, now: datetime | None = None
    ) -> User | None:
        """
        Resolve a session token to its user.

        Returns:
            The user owning an unexpired session, None otherwise.
        """
        now = now or utcnow()
        try:
            result = await self.session.exec(
                select(User)
                .join(Session, col(Session.user_id) == col(User.id))
                .where(Session.id == token, Session.expires_at > now)
            )
            return result.first()
        except SQLAlchemyError as e:
            logger.error(f"Error resolving session: {e}")
            raise

from sqlmodel.ext.asyncio.session import AsyncSession

from socialnet.models import Follow
from socialnet.repositories.base import BaseRepository


class FollowRepository(BaseRepository[Follow]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Follow)

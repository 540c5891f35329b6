from sqlmodel.ext.asyncio.session import AsyncSession

from socialnet.models import Like
from socialnet.repositories.base import BaseRepository


class LikeRepository(BaseRepository[Like]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Like)

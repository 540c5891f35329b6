"""
Business operations as command objects.

A command receives the repositories it needs in ``__init__`` and does
its work in ``execute``. Routers only build inputs and call commands, so
the rules (ownership checks, notifications, page sizes) are testable
with mocked repositories and no HTTP stack.

The acting user is always an explicit ``UserContext`` argument.

Example:
    ```python
    class DeletePostCommand(BaseCommand[PostIdInput, PostData]):
        def __init__(self, repository: PostRepository):
            self.repository = repository

        async def execute(self, user, input_data):
            ...

    deleted = await DeletePostCommand(repo).execute(
        user, PostIdInput(post_id=post_id)
    )
    ```
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from socialnet.schemas.user import UserContext

TInput = TypeVar("TInput")
TOutput = TypeVar("TOutput")


class BaseCommand(ABC, Generic[TInput, TOutput]):
    @abstractmethod
    async def execute(self, user: UserContext, input_data: TInput) -> TOutput:
        """
        Run the operation on behalf of ``user``.

        Raises:
            AppException: A subclass matching the violated rule
                (NotFoundError, ForbiddenError, ValidationError).
        """

from typing import Any

from fastapi.security.utils import get_authorization_scheme_param
from starlette.authentication import AuthCredentials, AuthenticationBackend
from starlette.requests import HTTPConnection

from socialnet.logging import logger
from socialnet.repositories.user_repository import SessionRepository
from socialnet.schemas.user import UserContext
from socialnet.settings import app_settings
from socialnet.storage.db import get_database


class SessionAuthBackend(AuthenticationBackend):  # type: ignore[misc]
    """
    Resolve the caller from a session issued by the authentication service.

    The session token is read from ``Authorization: Bearer <token>`` or,
    for browser requests, from the session cookie. Missing, unknown or
    expired sessions leave the request unauthenticated; endpoints that
    need a user reject it with 401 through ``CurrentUserDep``.

    Attributes:
        excluded_paths: Paths that never touch the session store.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.excluded_paths = app_settings.EXCLUDED_PATHS

    @staticmethod
    def get_token(conn: HTTPConnection) -> str | None:
        scheme, token = get_authorization_scheme_param(
            conn.headers.get("authorization", "")
        )
        if scheme.lower() == "bearer" and token:
            return token
        return conn.cookies.get(app_settings.SESSION_COOKIE_NAME) or None

    async def authenticate(self, conn: HTTPConnection):  # type: ignore[no-untyped-def]
        """
        Authenticate a request from its session token.

        Returns:
            Tuple of (AuthCredentials, UserContext) for a valid session,
            None otherwise.
        """
        if self.excluded_paths.match(conn.url.path):
            return None

        token = self.get_token(conn)
        if token is None:
            return None

        async with get_database(conn).session() as session:
            user = await SessionRepository(session).get_user_for_token(token)

        if user is None:
            logger.debug("Session token is unknown or expired")
            return None

        return AuthCredentials(["authenticated"]), UserContext(
            id=user.id,
            username=user.username,
            display_name=user.display_name,
        )

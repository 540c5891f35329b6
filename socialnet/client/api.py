"""HTTP client for the socialnet API."""

from typing import Any

import httpx

from socialnet.exceptions import (
    AppException,
    ForbiddenError,
    InfrastructureError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from socialnet.logging import logger
from socialnet.schemas.comment import CommentData
from socialnet.schemas.notification import (
    NotificationCountInfo,
    NotificationData,
)
from socialnet.schemas.post import BookmarkInfo, LikeInfo, PostData
from socialnet.schemas.response import (
    BackwardCursorPage,
    CursorPage,
    TrendingHashtag,
)
from socialnet.schemas.user import FollowerInfo, UserProfile, UserSummary

_STATUS_ERRORS: dict[int, type[AppException]] = {
    400: ValidationError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    422: ValidationError,
}


def error_for_response(response: httpx.Response) -> AppException:
    """
    Map an error response onto the application exception taxonomy.

    Statuses without a dedicated exception become InfrastructureError.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("error"):
        message = body["error"]
    else:
        message = response.text or response.reason_phrase

    error_class = _STATUS_ERRORS.get(response.status_code, InfrastructureError)
    return error_class(message)


class SocialClient:
    """
    Async client for every socialnet endpoint.

    The session token issued by the authentication service is passed
    explicitly and sent as a bearer token.

    Example:
        ```python
        async with SocialClient("http://localhost:8000", token) as client:
            page = await client.get_for_you()
            while page.next_cursor:
                page = await client.get_for_you(cursor=page.next_cursor)
        ```
    """

    def __init__(
        self,
        base_url: str,
        session_token: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: Server root, e.g. ``http://localhost:8000``.
            session_token: Token of an active session.
            timeout_seconds: Per-request timeout.
            transport: Custom transport (``httpx.MockTransport`` in tests).
        """
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {session_token}"},
            timeout=timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "SocialClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            response = await self._client.request(
                method, path, params=params, json=json
            )
        except httpx.HTTPError as ex:
            logger.error(f"{method} {path} failed: {ex}")
            raise InfrastructureError(f"Request failed: {ex}") from ex

        if response.is_error:
            error = error_for_response(response)
            logger.warning(
                f"{method} {path} returned {response.status_code}: {error.message}"
            )
            raise error

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ========================================================================
    # Feeds
    # ========================================================================

    async def _post_page(
        self, path: str, cursor: str | None, page_size: int | None, **params
    ) -> CursorPage[PostData]:
        data = await self._request(
            "GET",
            path,
            params={"cursor": cursor, "page_size": page_size, **params},
        )
        return CursorPage[PostData].model_validate(data)

    async def get_for_you(
        self, cursor: str | None = None, page_size: int | None = None
    ) -> CursorPage[PostData]:
        return await self._post_page("/api/posts/for-you", cursor, page_size)

    async def get_following(
        self, cursor: str | None = None, page_size: int | None = None
    ) -> CursorPage[PostData]:
        return await self._post_page("/api/posts/following", cursor, page_size)

    async def get_user_posts(
        self,
        user_id: str,
        cursor: str | None = None,
        page_size: int | None = None,
    ) -> CursorPage[PostData]:
        return await self._post_page(
            f"/api/users/{user_id}/posts", cursor, page_size
        )

    async def get_bookmarked(
        self, cursor: str | None = None, page_size: int | None = None
    ) -> CursorPage[PostData]:
        return await self._post_page("/api/posts/bookmarked", cursor, page_size)

    async def search(
        self,
        q: str,
        cursor: str | None = None,
        page_size: int | None = None,
    ) -> CursorPage[PostData]:
        return await self._post_page("/api/search", cursor, page_size, q=q)

    async def get_comments(
        self,
        post_id: str,
        cursor: str | None = None,
        page_size: int | None = None,
    ) -> BackwardCursorPage[CommentData]:
        data = await self._request(
            "GET",
            f"/api/posts/{post_id}/comments",
            params={"cursor": cursor, "page_size": page_size},
        )
        return BackwardCursorPage[CommentData].model_validate(data)

    async def get_notifications(
        self, cursor: str | None = None, page_size: int | None = None
    ) -> CursorPage[NotificationData]:
        data = await self._request(
            "GET",
            "/api/notifications",
            params={"cursor": cursor, "page_size": page_size},
        )
        return CursorPage[NotificationData].model_validate(data)

    # ========================================================================
    # Posts & Comments
    # ========================================================================

    async def get_post(self, post_id: str) -> PostData:
        data = await self._request("GET", f"/api/posts/{post_id}")
        return PostData.model_validate(data)

    async def create_post(self, content: str) -> PostData:
        data = await self._request("POST", "/api/posts", json={"content": content})
        return PostData.model_validate(data)

    async def delete_post(self, post_id: str) -> PostData:
        data = await self._request("DELETE", f"/api/posts/{post_id}")
        return PostData.model_validate(data)

    async def create_comment(self, post_id: str, content: str) -> CommentData:
        data = await self._request(
            "POST",
            f"/api/posts/{post_id}/comments",
            json={"content": content},
        )
        return CommentData.model_validate(data)

    async def delete_comment(self, comment_id: str) -> CommentData:
        data = await self._request("DELETE", f"/api/comments/{comment_id}")
        return CommentData.model_validate(data)

    # ========================================================================
    # Toggles
    # ========================================================================

    async def get_like_info(self, post_id: str) -> LikeInfo:
        data = await self._request("GET", f"/api/posts/{post_id}/likes")
        return LikeInfo.model_validate(data)

    async def like_post(self, post_id: str) -> LikeInfo:
        data = await self._request("POST", f"/api/posts/{post_id}/likes")
        return LikeInfo.model_validate(data)

    async def unlike_post(self, post_id: str) -> LikeInfo:
        data = await self._request("DELETE", f"/api/posts/{post_id}/likes")
        return LikeInfo.model_validate(data)

    async def get_bookmark_info(self, post_id: str) -> BookmarkInfo:
        data = await self._request("GET", f"/api/posts/{post_id}/bookmark")
        return BookmarkInfo.model_validate(data)

    async def bookmark_post(self, post_id: str) -> BookmarkInfo:
        data = await self._request("POST", f"/api/posts/{post_id}/bookmark")
        return BookmarkInfo.model_validate(data)

    async def remove_bookmark(self, post_id: str) -> BookmarkInfo:
        data = await self._request("DELETE", f"/api/posts/{post_id}/bookmark")
        return BookmarkInfo.model_validate(data)

    async def get_follower_info(self, user_id: str) -> FollowerInfo:
        data = await self._request("GET", f"/api/users/{user_id}/followers")
        return FollowerInfo.model_validate(data)

    async def follow_user(self, user_id: str) -> FollowerInfo:
        data = await self._request("POST", f"/api/users/{user_id}/followers")
        return FollowerInfo.model_validate(data)

    async def unfollow_user(self, user_id: str) -> FollowerInfo:
        data = await self._request("DELETE", f"/api/users/{user_id}/followers")
        return FollowerInfo.model_validate(data)

    # ========================================================================
    # Notifications, Users & Widgets
    # ========================================================================

    async def get_unread_count(self) -> NotificationCountInfo:
        data = await self._request("GET", "/api/notifications/unread-count")
        return NotificationCountInfo.model_validate(data)

    async def mark_notifications_read(self) -> None:
        await self._request("PATCH", "/api/notifications/mark-as-read")

    async def get_user_by_username(self, username: str) -> UserProfile:
        data = await self._request("GET", f"/api/users/username/{username}")
        return UserProfile.model_validate(data)

    async def update_profile(self, display_name: str, bio: str = "") -> UserProfile:
        data = await self._request(
            "PATCH",
            "/api/users/me",
            json={"displayName": display_name, "bio": bio},
        )
        return UserProfile.model_validate(data)

    async def get_recommendations(self) -> list[UserSummary]:
        data = await self._request("GET", "/api/users/recommendations")
        return [UserSummary.model_validate(u) for u in data]

    async def get_trending(self) -> list[TrendingHashtag]:
        data = await self._request("GET", "/api/trending")
        return [TrendingHashtag.model_validate(h) for h in data]

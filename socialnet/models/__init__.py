from socialnet.models.follow import Follow
from socialnet.models.notification import Notification
from socialnet.models.post import Bookmark, Comment, Like, Post
from socialnet.models.user import Session, User

__all__ = [
    "Bookmark",
    "Comment",
    "Follow",
    "Like",
    "Notification",
    "Post",
    "Session",
    "User",
]

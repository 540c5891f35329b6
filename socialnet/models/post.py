from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship

from socialnet.models.base import BaseModel
from socialnet.models.user import User


class Post(BaseModel, table=True):
    """
    SQLModel representing a post.

    The author is loaded eagerly (selectin) so async sessions never
    trigger lazy loads while a page is being serialized.
    """

    __tablename__ = "posts"

    content: str
    user_id: str = Field(foreign_key="users.id", index=True)

    user: User = Relationship(sa_relationship_kwargs={"lazy": "selectin"})


class Like(BaseModel, table=True):
    __tablename__ = "likes"
    __table_args__ = (UniqueConstraint("user_id", "post_id"),)

    user_id: str = Field(foreign_key="users.id", index=True)
    post_id: str = Field(foreign_key="posts.id", index=True)


class Bookmark(BaseModel, table=True):
    """A post saved by a user. Its id is the cursor of the bookmarks feed."""

    __tablename__ = "bookmarks"
    __table_args__ = (UniqueConstraint("user_id", "post_id"),)

    user_id: str = Field(foreign_key="users.id", index=True)
    post_id: str = Field(foreign_key="posts.id", index=True)

    post: Post = Relationship(sa_relationship_kwargs={"lazy": "selectin"})


class Comment(BaseModel, table=True):
    __tablename__ = "comments"

    content: str
    user_id: str = Field(foreign_key="users.id", index=True)
    post_id: str = Field(foreign_key="posts.id", index=True)

    user: User = Relationship(sa_relationship_kwargs={"lazy": "selectin"})

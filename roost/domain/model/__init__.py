"""Domain model entities for Roost."""

from roost.domain.model.comment import Comment
from roost.domain.model.media import Media
from roost.domain.model.nest import Nest
from roost.domain.model.post import Post
from roost.domain.model.user import User
from roost.domain.model.view import (
    CommentView,
    MediaView,
    NestView,
    PostView,
    UserView,
)
from roost.domain.model.vote import Vote

__all__ = [
    "User",
    "Nest",
    "Post",
    "Comment",
    "Media",
    "Vote",
    "UserView",
    "NestView",
    "PostView",
    "CommentView",
    "MediaView",
]

"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's imperative mapping.
"""

from typing import Any, Dict

from roost.domain.model import Comment, Media, Nest, Post, User, Vote
from roost.domain.value import (
    CommentId,
    Handle,
    MediaId,
    NestId,
    NestTitle,
    PostId,
    UserId,
    VoteId,
    VoteValue,
)


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    return User(
        id=UserId(row["id"]),
        handle=Handle(row["handle"]),
        display_name=row["display_name"],
        email=row["email"],
        icon=row["icon"],
        is_admin=row["is_admin"],
        is_banned=row["is_banned"],
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return {
        "id": user.id,
        "handle": user.handle.root,
        "display_name": user.display_name,
        "email": user.email,
        "icon": user.icon,
        "is_admin": user.is_admin,
        "is_banned": user.is_banned,
        "created_at": user.created_at,
    }


def row_to_nest(row: Dict[str, Any]) -> Nest:
    """Convert database row to Nest domain model."""
    return Nest(
        id=NestId(row["id"]),
        title=NestTitle(row["title"]),
        display_name=row["display_name"],
        description=row["description"],
        icon=row["icon"],
        moderator_id=UserId(row["moderator_id"]) if row["moderator_id"] else None,
        created_at=row["created_at"],
    )


def nest_to_dict(nest: Nest) -> Dict[str, Any]:
    """Convert Nest domain model to database dict."""
    return {
        "id": nest.id,
        "title": nest.title.root,
        "display_name": nest.display_name,
        "description": nest.description,
        "icon": nest.icon,
        "moderator_id": nest.moderator_id,
        "created_at": nest.created_at,
    }


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model."""
    return Post(
        id=PostId(row["id"]),
        title=row["title"],
        content=row["content"],
        author_id=UserId(row["author_id"]) if row["author_id"] else None,
        nest_id=NestId(row["nest_id"]) if row["nest_id"] else None,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        is_deleted=row["is_deleted"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict."""
    return post.model_dump()


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    return Comment(
        id=CommentId(row["id"]),
        post_id=PostId(row["post_id"]),
        author_id=UserId(row["author_id"]) if row["author_id"] else None,
        content=row["content"],
        created_at=row["created_at"],
        is_deleted=row["is_deleted"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_media(row: Dict[str, Any]) -> Media:
    """Convert database row to Media domain model."""
    return Media(
        id=MediaId(row["id"]),
        post_id=PostId(row["post_id"]),
        content_url=row["content_url"],
        alt_text=row["alt_text"],
    )


def media_to_dict(media: Media) -> Dict[str, Any]:
    """Convert Media domain model to database dict."""
    return media.model_dump()


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(row["id"]),
        post_id=PostId(row["post_id"]),
        user_id=UserId(row["user_id"]),
        value=VoteValue(row["value"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return {
        "id": vote.id,
        "post_id": vote.post_id,
        "user_id": vote.user_id,
        "value": int(vote.value),
        "created_at": vote.created_at,
        "updated_at": vote.updated_at,
    }

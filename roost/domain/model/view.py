"""Response view models.

These are the only shapes that leave the service. They are built by the
``VisibilityComposer`` and serialize with camelCase keys.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from roost.domain.value import CommentRole


class View(BaseModel):
    """Base class for response views."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )


class UserView(View):
    """A user as seen by a particular viewer.

    ``id`` and ``is_banned`` are always present. The profile fields are None
    when the target is banned and the viewer is not an admin.
    """

    id: UUID
    handle: Optional[str]
    display_name: Optional[str]
    icon: Optional[str]
    created_at: Optional[datetime]
    is_admin: bool
    is_banned: bool
    email: Optional[str] = None


class NestView(View):
    """A nest with its composed moderator."""

    id: UUID
    title: str
    display_name: str
    description: str
    icon: str
    created_at: datetime
    moderator: Optional[UserView]


class MediaView(View):
    """A post image."""

    url: str
    alt: str


class PostView(View):
    """A post with score and per-viewer flags."""

    id: UUID
    title: str
    content: str
    author: Optional[UserView]
    nest: Optional[NestView]
    created_at: datetime
    updated_at: datetime
    photos: list[MediaView]
    votes: int
    comments: int
    has_voted: bool
    viewer_vote: int
    is_moderator: bool
    by_moderator: bool


class CommentView(View):
    """A comment with its author's role badge."""

    id: UUID
    post_id: UUID
    content: str
    created_at: datetime
    author: Optional[UserView]
    role: CommentRole

"""Comment entity."""

from datetime import datetime
from typing import ClassVar, Optional

from pydantic import Field

from roost.domain.model.common import DomainModel, utcnow
from roost.domain.value import CommentId, DeletionPolicy, PostId, UserId


class Comment(DomainModel):
    """A flat comment on a post. Comments are only ever soft-deleted."""

    deletion_policy: ClassVar[DeletionPolicy] = DeletionPolicy.SOFT

    id: CommentId
    post_id: PostId
    author_id: Optional[UserId] = None
    content: str = Field(min_length=1, max_length=5000)
    created_at: datetime = Field(default_factory=utcnow)
    is_deleted: bool = False

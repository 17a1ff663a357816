"""Post aggregate root."""

from datetime import datetime
from typing import ClassVar, Optional

from pydantic import Field

from roost.domain.model.common import DomainModel, utcnow
from roost.domain.value import DeletionPolicy, NestId, PostId, UserId


class Post(DomainModel):
    """A post inside a nest.

    Posts are soft-deleted: ``is_deleted`` hides them from every read path
    while votes, comments and media rows stay in place.
    """

    deletion_policy: ClassVar[DeletionPolicy] = DeletionPolicy.SOFT

    id: PostId
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(default="", max_length=10000)
    author_id: Optional[UserId] = None
    nest_id: Optional[NestId] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    is_deleted: bool = False

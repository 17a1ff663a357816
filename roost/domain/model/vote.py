"""Vote entity.

One row per (post, user) pair. A user who has not voted has no row; a
stored vote is always an up or a down vote.
"""

from datetime import datetime
from typing import ClassVar

from pydantic import Field, field_validator

from roost.domain.model.common import DomainModel, utcnow
from roost.domain.value import DeletionPolicy, PostId, UserId, VoteId, VoteValue


class Vote(DomainModel):
    """Vote entity.

    Business rules:
    - One vote per user per post (enforced by database unique constraint)
    - ``VoteValue.NONE`` is never stored
    """

    deletion_policy: ClassVar[DeletionPolicy] = DeletionPolicy.HARD

    id: VoteId
    post_id: PostId
    user_id: UserId
    value: VoteValue
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("value")
    @classmethod
    def validate_stored_value(cls, v: VoteValue) -> VoteValue:
        """Reject zero-value votes."""
        if v == VoteValue.NONE:
            raise ValueError("A stored vote must be an up or down vote")
        return v

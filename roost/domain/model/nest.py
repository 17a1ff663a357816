"""Nest entity (a community)."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from roost.domain.model.common import DomainModel, utcnow
from roost.domain.value import NestId, NestTitle, UserId


class Nest(DomainModel):
    """A named community with a single moderator.

    ``moderator_id`` becomes None when the moderator account is deleted.
    """

    id: NestId
    title: NestTitle
    display_name: str = Field(min_length=1, max_length=50)
    description: str = Field(default="", max_length=500)
    icon: str
    moderator_id: Optional[UserId] = None
    created_at: datetime = Field(default_factory=utcnow)

    def is_moderated_by(self, user_id: Optional[UserId]) -> bool:
        """Check whether the given user moderates this nest."""
        return user_id is not None and self.moderator_id == user_id

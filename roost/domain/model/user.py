"""User aggregate root.

Credentials live with the external identity provider; this is the profile
and moderation state the forum itself owns.
"""

from datetime import datetime

from pydantic import Field

from roost.domain.model.common import DomainModel, utcnow
from roost.domain.value import Handle, UserId


class User(DomainModel):
    """User aggregate root.

    The handle is immutable after creation. ``is_admin`` grants platform-wide
    moderation; ``is_banned`` hides the profile from non-admins and blocks
    the account from writing.
    """

    id: UserId
    handle: Handle
    display_name: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=3, max_length=255)
    icon: str
    is_admin: bool = False
    is_banned: bool = False
    created_at: datetime = Field(default_factory=utcnow)

"""Domain value objects for Roost.

Value objects are immutable and defined by their values, not identity.
"""

import re
from enum import Enum, IntEnum

from pydantic import field_validator

from roost.domain.value.common import RootValueObject

_HANDLE_PATTERN = re.compile(r"^[a-z0-9_.-]{3,32}$")
_NEST_TITLE_PATTERN = re.compile(r"^[a-z0-9_-]{3,50}$")


class Handle(RootValueObject[str]):
    """Unique username, stored lowercase.

    3-32 characters of letters, digits, underscore, dot or hyphen.
    """

    @field_validator("root", mode="before")
    @classmethod
    def normalize(cls, v: str) -> str:
        """Trim and lowercase before validation."""
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle characters and length."""
        if not _HANDLE_PATTERN.match(v):
            raise ValueError(
                "Handle must be 3-32 characters: letters, digits, '_', '.' or '-'"
            )
        return v


class NestTitle(RootValueObject[str]):
    """Unique, slug-like nest title, stored lowercase."""

    @field_validator("root", mode="before")
    @classmethod
    def normalize(cls, v: str) -> str:
        """Trim and lowercase before validation."""
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("root")
    @classmethod
    def validate_title_format(cls, v: str) -> str:
        """Validate title characters and length."""
        if not _NEST_TITLE_PATTERN.match(v):
            raise ValueError(
                "Nest title must be 3-50 characters: letters, digits, '_' or '-'"
            )
        return v


class VoteValue(IntEnum):
    """Requested or stored vote value.

    ``NONE`` only ever appears in requests; it is represented in storage by
    the absence of a row.
    """

    DOWN = -1
    NONE = 0
    UP = 1


class VoteOutcome(str, Enum):
    """What a cast vote did to the ledger."""

    ADDED = "added"
    UPDATED = "updated"
    REMOVED = "removed"


class CommentRole(str, Enum):
    """Role badge shown next to a comment author."""

    ADMIN = "Admin"
    MODERATOR = "Moderator"
    USER = "User"


class DeletionPolicy(str, Enum):
    """How an entity type is removed."""

    SOFT = "soft"  # is_deleted flag, row kept
    HARD = "hard"  # row removed


"""Domain value objects for Roost."""

from roost.domain.value.identifiers import (
    CommentId,
    MediaId,
    NestId,
    PostId,
    UserId,
    VoteId,
)
from roost.domain.value.types import (
    CommentRole,
    DeletionPolicy,
    Handle,
    NestTitle,
    VoteOutcome,
    VoteValue,
)

__all__ = [
    # Identifiers
    "UserId",
    "NestId",
    "PostId",
    "CommentId",
    "MediaId",
    "VoteId",
    # Types
    "Handle",
    "NestTitle",
    "VoteValue",
    "VoteOutcome",
    "CommentRole",
    "DeletionPolicy",
]

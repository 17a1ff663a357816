"""Strongly typed identifiers for Roost domain entities.

Using NewType keeps user, nest and post ids from being mixed up.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
NestId = NewType("NestId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
MediaId = NewType("MediaId", UUID)
VoteId = NewType("VoteId", UUID)

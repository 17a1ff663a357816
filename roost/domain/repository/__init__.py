"""Repository interfaces for the Roost domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from roost.domain.repository.comment import CommentRepository
from roost.domain.repository.media import MediaRepository
from roost.domain.repository.nest import NestRepository
from roost.domain.repository.post import PostRepository, PostSortOrder
from roost.domain.repository.user import UserRepository
from roost.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "NestRepository",
    "PostRepository",
    "PostSortOrder",
    "CommentRepository",
    "MediaRepository",
    "VoteRepository",
]

"""PostgreSQL repository implementations."""

from roost.persistence.repository.comment import PostgresCommentRepository
from roost.persistence.repository.media import PostgresMediaRepository
from roost.persistence.repository.nest import PostgresNestRepository
from roost.persistence.repository.post import PostgresPostRepository
from roost.persistence.repository.user import PostgresUserRepository
from roost.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresNestRepository",
    "PostgresPostRepository",
    "PostgresCommentRepository",
    "PostgresMediaRepository",
    "PostgresVoteRepository",
]

"""Shared in-memory store backing the in-memory repositories.

One instance holds every table so repositories created for different
requests see the same rows. Unique constraints raise ``IntegrityError``
with the constraint name, like PostgreSQL does.
"""

from dataclasses import dataclass, field

from sqlalchemy.exc import IntegrityError

from roost.domain.model import Comment, Media, Nest, Post, User, Vote
from roost.domain.value import CommentId, NestId, PostId, UserId


def _unique_violation(table: str, constraint: str) -> IntegrityError:
    return IntegrityError(
        f"INSERT INTO {table}",
        None,
        Exception(f'duplicate key value violates unique constraint "{constraint}"'),
    )


@dataclass
class InMemoryDatabase:
    """Rows of every table, keyed by primary key."""

    users: dict[UserId, User] = field(default_factory=dict)
    nests: dict[NestId, Nest] = field(default_factory=dict)
    posts: dict[PostId, Post] = field(default_factory=dict)
    comments: dict[CommentId, Comment] = field(default_factory=dict)
    media: list[Media] = field(default_factory=list)
    votes: dict[tuple[PostId, UserId], Vote] = field(default_factory=dict)

    def insert_user(self, user: User) -> None:
        """Insert a user, enforcing unique handle and email."""
        for existing in self.users.values():
            if existing.handle == user.handle:
                raise _unique_violation("users", "uq_users_handle")
            if existing.email.lower() == user.email.lower():
                raise _unique_violation("users", "uq_users_email")
        self.users[user.id] = user

    def insert_nest(self, nest: Nest) -> None:
        """Insert a nest, enforcing a unique title."""
        if any(existing.title == nest.title for existing in self.nests.values()):
            raise _unique_violation("nests", "uq_nests_title")
        self.nests[nest.id] = nest

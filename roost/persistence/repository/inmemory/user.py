"""In-memory user repository for testing."""

from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from roost.domain.model.user import User
from roost.domain.repository.user import UserRepository
from roost.domain.value import Handle, UserId
from roost.persistence.integrity import USER_CONSTRAINTS, conflict_from

from .database import InMemoryDatabase


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    def _newest_first(self, users) -> list[User]:
        return sorted(users, key=lambda user: user.created_at, reverse=True)

    def _matching(self, query: str) -> list[User]:
        return [
            user
            for user in self.database.users.values()
            if query in user.handle.root or query in user.display_name.lower()
        ]

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self.database.users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users."""
        return [
            self.database.users[user_id]
            for user_id in user_ids
            if user_id in self.database.users
        ]

    async def find_by_handle(self, handle: Handle) -> Optional[User]:
        """Find a user by their handle."""
        for user in self.database.users.values():
            if user.handle == handle:
                return user
        return None

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        for user in self.database.users.values():
            if user.email.lower() == email.lower():
                return user
        return None

    async def find_all(self, limit: int, offset: int) -> list[User]:
        """List users, newest first."""
        users = self._newest_first(self.database.users.values())
        return users[offset : offset + limit]

    async def count(self) -> int:
        """Count all users."""
        return len(self.database.users)

    async def search(self, query: str, limit: int, offset: int) -> list[User]:
        """Find users whose handle or display name contains the query."""
        return self._newest_first(self._matching(query))[offset : offset + limit]

    async def count_search(self, query: str) -> int:
        """Count users matching a search query."""
        return len(self._matching(query))

    async def add(self, user: User) -> User:
        """Insert a new user."""
        try:
            self.database.insert_user(user)
        except IntegrityError as e:
            raise conflict_from(e, USER_CONSTRAINTS) from e
        return user

    async def save(self, user: User) -> User:
        """Update an existing user."""
        self.database.users[user.id] = user
        return user

"""User repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from roost.domain.model.user import User
from roost.domain.value import Handle, UserId


class UserRepository(ABC):
    """Repository for User aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> List[User]:
        """Find several users in one query.

        Args:
            user_ids: User IDs to load (duplicates allowed)

        Returns:
            The users that exist, in no particular order
        """
        pass

    @abstractmethod
    async def find_by_handle(self, handle: Handle) -> Optional[User]:
        """Find a user by their handle."""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email (case-insensitive)."""
        pass

    @abstractmethod
    async def find_all(self, limit: int, offset: int) -> List[User]:
        """List users, newest first."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all users."""
        pass

    @abstractmethod
    async def search(self, query: str, limit: int, offset: int) -> List[User]:
        """Find users whose handle or display name contains the query.

        Args:
            query: Lowercase search string
            limit: Maximum number of users to return
            offset: Number of users to skip

        Returns:
            Matching users, newest first
        """
        pass

    @abstractmethod
    async def count_search(self, query: str) -> int:
        """Count users matching a search query."""
        pass

    @abstractmethod
    async def add(self, user: User) -> User:
        """Insert a new user.

        Uniqueness is enforced by the store, not by a prior lookup.

        Args:
            user: The user to insert

        Returns:
            The saved user

        Raises:
            ConflictError: USER_HANDLE_CONFLICT or USER_EMAIL_CONFLICT
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Update an existing user's mutable fields.

        Args:
            user: The user to update

        Returns:
            The saved user
        """
        pass

"""Nest repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from roost.domain.model.nest import Nest
from roost.domain.value import NestId, NestTitle, UserId


class NestRepository(ABC):
    """Repository for Nest entity."""

    @abstractmethod
    async def find_by_id(self, nest_id: NestId) -> Optional[Nest]:
        """Find a nest by ID."""
        pass

    @abstractmethod
    async def find_by_ids(self, nest_ids: Sequence[NestId]) -> List[Nest]:
        """Find several nests in one query."""
        pass

    @abstractmethod
    async def find_by_title(self, title: NestTitle) -> Optional[Nest]:
        """Find a nest by its unique title."""
        pass

    @abstractmethod
    async def find_all(self, limit: int, offset: int) -> List[Nest]:
        """List nests, newest first."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all nests."""
        pass

    @abstractmethod
    async def search(self, query: str, limit: int, offset: int) -> List[Nest]:
        """Find nests whose title or description contains the query.

        Args:
            query: Lowercase search string
            limit: Maximum number of nests to return
            offset: Number of nests to skip

        Returns:
            Matching nests, newest first
        """
        pass

    @abstractmethod
    async def count_search(self, query: str) -> int:
        """Count nests matching a search query."""
        pass

    @abstractmethod
    async def find_by_moderator(self, moderator_id: UserId) -> List[Nest]:
        """List the nests a user moderates, newest first."""
        pass

    @abstractmethod
    async def add(self, nest: Nest) -> Nest:
        """Insert a new nest.

        Raises:
            ConflictError: NEST_TITLE_CONFLICT if the title is taken
        """
        pass

    @abstractmethod
    async def save(self, nest: Nest) -> Nest:
        """Update an existing nest."""
        pass

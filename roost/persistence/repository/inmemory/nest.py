"""In-memory nest repository for testing."""

from typing import Optional, Sequence

from sqlalchemy.exc import IntegrityError

from roost.domain.model.nest import Nest
from roost.domain.repository.nest import NestRepository
from roost.domain.value import NestId, NestTitle, UserId
from roost.persistence.integrity import NEST_CONSTRAINTS, conflict_from

from .database import InMemoryDatabase


class InMemoryNestRepository(NestRepository):
    """In-memory implementation of NestRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    def _newest_first(self, nests) -> list[Nest]:
        return sorted(nests, key=lambda nest: nest.created_at, reverse=True)

    def _matching(self, query: str) -> list[Nest]:
        return [
            nest
            for nest in self.database.nests.values()
            if query in nest.title.root or query in nest.description.lower()
        ]

    async def find_by_id(self, nest_id: NestId) -> Optional[Nest]:
        """Find a nest by ID."""
        return self.database.nests.get(nest_id)

    async def find_by_ids(self, nest_ids: Sequence[NestId]) -> list[Nest]:
        """Find several nests."""
        return [
            self.database.nests[nest_id]
            for nest_id in nest_ids
            if nest_id in self.database.nests
        ]

    async def find_by_title(self, title: NestTitle) -> Optional[Nest]:
        """Find a nest by title."""
        for nest in self.database.nests.values():
            if nest.title == title:
                return nest
        return None

    async def find_all(self, limit: int, offset: int) -> list[Nest]:
        """List nests, newest first."""
        return self._newest_first(self.database.nests.values())[offset : offset + limit]

    async def count(self) -> int:
        """Count all nests."""
        return len(self.database.nests)

    async def search(self, query: str, limit: int, offset: int) -> list[Nest]:
        """Find nests whose title or description contains the query."""
        return self._newest_first(self._matching(query))[offset : offset + limit]

    async def count_search(self, query: str) -> int:
        """Count nests matching a search query."""
        return len(self._matching(query))

    async def find_by_moderator(self, moderator_id: UserId) -> list[Nest]:
        """List the nests a user moderates."""
        return self._newest_first(
            nest
            for nest in self.database.nests.values()
            if nest.moderator_id == moderator_id
        )

    async def add(self, nest: Nest) -> Nest:
        """Insert a new nest."""
        try:
            self.database.insert_nest(nest)
        except IntegrityError as e:
            raise conflict_from(e, NEST_CONSTRAINTS) from e
        return nest

    async def save(self, nest: Nest) -> Nest:
        """Update an existing nest."""
        self.database.nests[nest.id] = nest
        return nest

"""PostgreSQL implementation of Nest repository."""

from typing import List, Optional, Sequence

import logfire
from sqlalchemy import desc, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roost.domain.model import Nest
from roost.domain.repository import NestRepository
from roost.domain.value import NestId, NestTitle, UserId
from roost.persistence.integrity import NEST_CONSTRAINTS, conflict_from
from roost.persistence.mappers import nest_to_dict, row_to_nest
from roost.persistence.tables import nests_table


class PostgresNestRepository(NestRepository):
    """PostgreSQL implementation of NestRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, nest_id: NestId) -> Optional[Nest]:
        """Find a nest by ID."""
        stmt = select(nests_table).where(nests_table.c.id == nest_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_nest(row._asdict()) if row else None

    async def find_by_ids(self, nest_ids: Sequence[NestId]) -> List[Nest]:
        """Find several nests in one query."""
        if not nest_ids:
            return []
        stmt = select(nests_table).where(nests_table.c.id.in_(nest_ids))
        result = await self.session.execute(stmt)
        return [row_to_nest(row._asdict()) for row in result.fetchall()]

    async def find_by_title(self, title: NestTitle) -> Optional[Nest]:
        """Find a nest by its unique title."""
        stmt = select(nests_table).where(nests_table.c.title == title.root)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_nest(row._asdict()) if row else None

    async def find_all(self, limit: int, offset: int) -> List[Nest]:
        """List nests, newest first."""
        stmt = (
            select(nests_table)
            .order_by(desc(nests_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_nest(row._asdict()) for row in result.fetchall()]

    async def count(self) -> int:
        """Count all nests."""
        stmt = select(func.count()).select_from(nests_table)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def search(self, query: str, limit: int, offset: int) -> List[Nest]:
        """Find nests whose title or description contains the query."""
        with logfire.span("nest_repository.search", query=query):
            stmt = (
                select(nests_table)
                .where(_matches(query))
                .order_by(desc(nests_table.c.created_at))
                .limit(limit)
                .offset(offset)
            )
            result = await self.session.execute(stmt)
            return [row_to_nest(row._asdict()) for row in result.fetchall()]

    async def count_search(self, query: str) -> int:
        """Count nests matching a search query."""
        stmt = select(func.count()).select_from(nests_table).where(_matches(query))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_by_moderator(self, moderator_id: UserId) -> List[Nest]:
        """List the nests a user moderates, newest first."""
        stmt = (
            select(nests_table)
            .where(nests_table.c.moderator_id == moderator_id)
            .order_by(desc(nests_table.c.created_at))
        )
        result = await self.session.execute(stmt)
        return [row_to_nest(row._asdict()) for row in result.fetchall()]

    async def add(self, nest: Nest) -> Nest:
        """Insert a new nest inside a savepoint."""
        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    insert(nests_table).values(**nest_to_dict(nest))
                )
        except IntegrityError as e:
            raise conflict_from(e, NEST_CONSTRAINTS) from e
        return nest

    async def save(self, nest: Nest) -> Nest:
        """Update a nest's display fields and moderator."""
        stmt = (
            update(nests_table)
            .where(nests_table.c.id == nest.id)
            .values(
                display_name=nest.display_name,
                description=nest.description,
                icon=nest.icon,
                moderator_id=nest.moderator_id,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return nest


def _matches(query: str):
    return or_(
        func.lower(nests_table.c.title).contains(query, autoescape=True),
        func.lower(nests_table.c.description).contains(query, autoescape=True),
    )

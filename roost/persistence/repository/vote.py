"""PostgreSQL implementation of Vote repository."""

from datetime import datetime
from typing import Dict, List, Optional, Sequence

import logfire
from sqlalchemy import and_, delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from roost.domain.model import Vote
from roost.domain.repository import VoteRepository
from roost.domain.value import PostId, UserId, VoteValue
from roost.persistence.mappers import row_to_vote, vote_to_dict
from roost.persistence.tables import post_votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _pair(self, post_id: PostId, user_id: UserId):
        return and_(
            post_votes_table.c.post_id == post_id,
            post_votes_table.c.user_id == user_id,
        )

    async def find(self, post_id: PostId, user_id: UserId) -> Optional[Vote]:
        """Find a user's vote on a post."""
        stmt = select(post_votes_table).where(self._pair(post_id, user_id))
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user_and_posts(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> List[Vote]:
        """Find a user's votes on multiple posts (batch query)."""
        if not post_ids:
            return []

        stmt = select(post_votes_table).where(
            post_votes_table.c.user_id == user_id,
            post_votes_table.c.post_id.in_(post_ids),
        )
        result = await self.session.execute(stmt)
        return [row_to_vote(row._asdict()) for row in result.fetchall()]

    async def insert(self, vote: Vote) -> bool:
        """Insert a vote with ``ON CONFLICT DO NOTHING`` on the unique pair."""
        stmt = (
            pg_insert(post_votes_table)
            .values(**vote_to_dict(vote))
            .on_conflict_do_nothing(
                index_elements=[post_votes_table.c.post_id, post_votes_table.c.user_id]
            )
            .returning(post_votes_table.c.id)
        )
        result = await self.session.execute(stmt)
        inserted = result.first() is not None
        logfire.debug("Vote insert", post_id=str(vote.post_id), inserted=inserted)
        return inserted

    async def update_value(
        self,
        post_id: PostId,
        user_id: UserId,
        expected: VoteValue,
        value: VoteValue,
        updated_at: datetime,
    ) -> bool:
        """Flip a vote in one conditional UPDATE."""
        stmt = (
            update(post_votes_table)
            .where(
                self._pair(post_id, user_id),
                post_votes_table.c.value == int(expected),
            )
            .values(value=int(value), updated_at=updated_at)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def delete(self, post_id: PostId, user_id: UserId) -> bool:
        """Delete a user's vote on a post."""
        stmt = delete(post_votes_table).where(self._pair(post_id, user_id))
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def score(self, post_id: PostId) -> int:
        """Net score of a post."""
        stmt = select(func.coalesce(func.sum(post_votes_table.c.value), 0)).where(
            post_votes_table.c.post_id == post_id
        )
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)

    async def scores(self, post_ids: Sequence[PostId]) -> Dict[PostId, int]:
        """Net scores of several posts in one grouped query."""
        if not post_ids:
            return {}

        stmt = (
            select(
                post_votes_table.c.post_id,
                func.sum(post_votes_table.c.value).label("score"),
            )
            .where(post_votes_table.c.post_id.in_(post_ids))
            .group_by(post_votes_table.c.post_id)
        )
        result = await self.session.execute(stmt)
        return {PostId(row.post_id): int(row.score) for row in result.fetchall()}

"""PostgreSQL implementation of Comment repository."""

from typing import Dict, List, Optional, Sequence

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from roost.domain.model import Comment
from roost.domain.repository import CommentRepository
from roost.domain.value import CommentId, PostId
from roost.persistence.mappers import comment_to_dict, row_to_comment
from roost.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, including soft-deleted comments."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(
        self, post_id: PostId, limit: int, offset: int
    ) -> List[Comment]:
        """List a post's visible comments, oldest first."""
        stmt = (
            select(comments_table)
            .where(
                comments_table.c.post_id == post_id,
                comments_table.c.is_deleted.is_(False),
            )
            .order_by(comments_table.c.created_at, comments_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_by_post(self, post_id: PostId) -> int:
        """Count a post's visible comments."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(
                comments_table.c.post_id == post_id,
                comments_table.c.is_deleted.is_(False),
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def count_by_posts(self, post_ids: Sequence[PostId]) -> Dict[PostId, int]:
        """Count visible comments for several posts in one grouped query."""
        if not post_ids:
            return {}

        stmt = (
            select(comments_table.c.post_id, func.count().label("total"))
            .where(
                comments_table.c.post_id.in_(post_ids),
                comments_table.c.is_deleted.is_(False),
            )
            .group_by(comments_table.c.post_id)
        )
        result = await self.session.execute(stmt)
        return {PostId(row.post_id): row.total for row in result.fetchall()}

    async def add(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        await self.session.execute(
            insert(comments_table).values(**comment_to_dict(comment))
        )
        await self.session.flush()
        return comment

    async def save(self, comment: Comment) -> Comment:
        """Update a comment's content and deletion flag."""
        stmt = (
            update(comments_table)
            .where(comments_table.c.id == comment.id)
            .values(content=comment.content, is_deleted=comment.is_deleted)
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

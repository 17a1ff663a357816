"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

import logfire
from sqlalchemy import desc, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from roost.domain.model import Post
from roost.domain.model.common import utcnow
from roost.domain.repository.post import PostRepository, PostSortOrder
from roost.domain.value import NestId, PostId, UserId
from roost.persistence.mappers import post_to_dict, row_to_post
from roost.persistence.tables import post_votes_table, posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID, including soft-deleted posts."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def find_all(
        self,
        sort: PostSortOrder = PostSortOrder.NEW,
        nest_id: Optional[NestId] = None,
        author_id: Optional[UserId] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Post]:
        """Find visible posts with filtering, ordering and pagination."""
        with logfire.span(
            "post_repository.find_all",
            sort=sort.value,
            nest_id=str(nest_id) if nest_id else None,
            author_id=str(author_id) if author_id else None,
            limit=limit,
            offset=offset,
        ):
            stmt = select(posts_table).where(posts_table.c.is_deleted.is_(False))

            if nest_id is not None:
                stmt = stmt.where(posts_table.c.nest_id == nest_id)
            if author_id is not None:
                stmt = stmt.where(posts_table.c.author_id == author_id)

            if sort == PostSortOrder.POPULAR:
                # Net score per post, grouped once for the whole listing
                scores = (
                    select(
                        post_votes_table.c.post_id,
                        func.sum(post_votes_table.c.value).label("score"),
                    )
                    .group_by(post_votes_table.c.post_id)
                    .subquery()
                )
                stmt = stmt.outerjoin(
                    scores, scores.c.post_id == posts_table.c.id
                ).order_by(
                    desc(func.coalesce(scores.c.score, 0)),
                    desc(posts_table.c.created_at),
                )
            else:
                stmt = stmt.order_by(desc(posts_table.c.created_at))

            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            posts = [row_to_post(row._asdict()) for row in result.fetchall()]
            logfire.info("Found posts", count=len(posts))
            return posts

    async def count(
        self,
        nest_id: Optional[NestId] = None,
        author_id: Optional[UserId] = None,
    ) -> int:
        """Count visible posts matching the filters."""
        stmt = (
            select(func.count())
            .select_from(posts_table)
            .where(posts_table.c.is_deleted.is_(False))
        )
        if nest_id is not None:
            stmt = stmt.where(posts_table.c.nest_id == nest_id)
        if author_id is not None:
            stmt = stmt.where(posts_table.c.author_id == author_id)

        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def add(self, post: Post) -> Post:
        """Insert a new post."""
        await self.session.execute(insert(posts_table).values(**post_to_dict(post)))
        await self.session.flush()
        return post

    async def save(self, post: Post) -> Post:
        """Update a post and touch ``updated_at``."""
        saved = post.model_copy(update={"updated_at": utcnow()})
        stmt = (
            update(posts_table)
            .where(posts_table.c.id == post.id)
            .values(
                title=saved.title,
                content=saved.content,
                is_deleted=saved.is_deleted,
                updated_at=saved.updated_at,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return saved

"""PostgreSQL implementation of Media repository."""

from collections import defaultdict
from typing import Dict, List, Sequence

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from roost.domain.model import Media
from roost.domain.repository import MediaRepository
from roost.domain.value import PostId
from roost.persistence.mappers import media_to_dict, row_to_media
from roost.persistence.tables import media_table


class PostgresMediaRepository(MediaRepository):
    """PostgreSQL implementation of MediaRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add_many(self, media: Sequence[Media]) -> List[Media]:
        """Insert several media rows in one statement."""
        if not media:
            return []
        await self.session.execute(
            insert(media_table), [media_to_dict(item) for item in media]
        )
        await self.session.flush()
        return list(media)

    async def find_by_posts(
        self, post_ids: Sequence[PostId]
    ) -> Dict[PostId, List[Media]]:
        """Load media for several posts in one query."""
        if not post_ids:
            return {}

        stmt = select(media_table).where(media_table.c.post_id.in_(post_ids))
        result = await self.session.execute(stmt)

        by_post: Dict[PostId, List[Media]] = defaultdict(list)
        for row in result.fetchall():
            item = row_to_media(row._asdict())
            by_post[item.post_id].append(item)
        return dict(by_post)

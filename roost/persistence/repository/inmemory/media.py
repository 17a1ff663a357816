"""In-memory media repository for testing."""

from typing import Sequence

from roost.domain.model.media import Media
from roost.domain.repository.media import MediaRepository
from roost.domain.value import PostId

from .database import InMemoryDatabase


class InMemoryMediaRepository(MediaRepository):
    """In-memory implementation of MediaRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def add_many(self, media: Sequence[Media]) -> list[Media]:
        """Insert several media rows."""
        self.database.media.extend(media)
        return list(media)

    async def find_by_posts(self, post_ids: Sequence[PostId]) -> dict[PostId, list[Media]]:
        """Load media for several posts."""
        by_post: dict[PostId, list[Media]] = {}
        for item in self.database.media:
            if item.post_id in post_ids:
                by_post.setdefault(item.post_id, []).append(item)
        return by_post

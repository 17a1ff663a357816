"""Media repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence

from roost.domain.model.media import Media
from roost.domain.value import PostId


class MediaRepository(ABC):
    """Repository for post images."""

    @abstractmethod
    async def add_many(self, media: Sequence[Media]) -> List[Media]:
        """Insert several media rows."""
        pass

    @abstractmethod
    async def find_by_posts(
        self, post_ids: Sequence[PostId]
    ) -> Dict[PostId, List[Media]]:
        """Load the media of several posts in one query.

        Returns:
            Mapping of post ID to its media; posts without media may be absent
        """
        pass

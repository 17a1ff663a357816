"""Post repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

from roost.domain.model.post import Post
from roost.domain.value import NestId, PostId, UserId


class PostSortOrder(str, Enum):
    """Sort order for post listings."""

    NEW = "new"  # created_at DESC
    POPULAR = "popular"  # net score DESC, then created_at DESC


class PostRepository(ABC):
    """Repository for Post aggregate.

    Listing and counting never return soft-deleted posts.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID, including soft-deleted posts.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        sort: PostSortOrder = PostSortOrder.NEW,
        nest_id: Optional[NestId] = None,
        author_id: Optional[UserId] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts with filtering, ordering and pagination.

        Popular ordering ranks by the aggregated vote score in the same
        query, so no per-post score lookups are needed.

        Args:
            sort: Sort order
            nest_id: Only posts in this nest
            author_id: Only posts by this author
            limit: Maximum number of posts to return
            offset: Number of posts to skip

        Returns:
            List of posts matching the criteria
        """
        pass

    @abstractmethod
    async def count(
        self,
        nest_id: Optional[NestId] = None,
        author_id: Optional[UserId] = None,
    ) -> int:
        """Count posts matching the given filters."""
        pass

    @abstractmethod
    async def add(self, post: Post) -> Post:
        """Insert a new post."""
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Update an existing post and touch ``updated_at``.

        Returns:
            The saved post with its new ``updated_at``
        """
        pass

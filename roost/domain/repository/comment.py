"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

from roost.domain.model.comment import Comment
from roost.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Listing and counting never include soft-deleted comments.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, including soft-deleted comments."""
        pass

    @abstractmethod
    async def find_by_post(
        self, post_id: PostId, limit: int, offset: int
    ) -> List[Comment]:
        """List a post's comments, oldest first."""
        pass

    @abstractmethod
    async def count_by_post(self, post_id: PostId) -> int:
        """Count a post's comments."""
        pass

    @abstractmethod
    async def count_by_posts(self, post_ids: Sequence[PostId]) -> Dict[PostId, int]:
        """Count comments for several posts in one grouped query.

        Args:
            post_ids: Posts to count comments for

        Returns:
            Mapping of post ID to comment count; posts without comments
            may be absent
        """
        pass

    @abstractmethod
    async def add(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Update an existing comment."""
        pass

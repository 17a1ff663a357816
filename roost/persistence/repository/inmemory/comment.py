"""In-memory comment repository for testing."""

from typing import Optional, Sequence

from roost.domain.model.comment import Comment
from roost.domain.repository.comment import CommentRepository
from roost.domain.value import CommentId, PostId

from .database import InMemoryDatabase


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    def _visible(self, post_id: PostId) -> list[Comment]:
        return sorted(
            (
                comment
                for comment in self.database.comments.values()
                if comment.post_id == post_id and not comment.is_deleted
            ),
            key=lambda comment: comment.created_at,
        )

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID, including soft-deleted comments."""
        return self.database.comments.get(comment_id)

    async def find_by_post(
        self, post_id: PostId, limit: int, offset: int
    ) -> list[Comment]:
        """List a post's visible comments, oldest first."""
        return self._visible(post_id)[offset : offset + limit]

    async def count_by_post(self, post_id: PostId) -> int:
        """Count a post's visible comments."""
        return len(self._visible(post_id))

    async def count_by_posts(self, post_ids: Sequence[PostId]) -> dict[PostId, int]:
        """Count visible comments for several posts."""
        counts: dict[PostId, int] = {}
        for comment in self.database.comments.values():
            if comment.post_id in post_ids and not comment.is_deleted:
                counts[comment.post_id] = counts.get(comment.post_id, 0) + 1
        return counts

    async def add(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        self.database.comments[comment.id] = comment
        return comment

    async def save(self, comment: Comment) -> Comment:
        """Update an existing comment."""
        self.database.comments[comment.id] = comment
        return comment

"""In-memory post repository for testing."""

from typing import Optional

from roost.domain.model.common import utcnow
from roost.domain.model.post import Post
from roost.domain.repository.post import PostRepository, PostSortOrder
from roost.domain.value import NestId, PostId, UserId

from .database import InMemoryDatabase


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    def _visible(
        self, nest_id: Optional[NestId], author_id: Optional[UserId]
    ) -> list[Post]:
        return [
            post
            for post in self.database.posts.values()
            if not post.is_deleted
            and (nest_id is None or post.nest_id == nest_id)
            and (author_id is None or post.author_id == author_id)
        ]

    def _score(self, post_id: PostId) -> int:
        return sum(
            int(vote.value)
            for (voted_post_id, _), vote in self.database.votes.items()
            if voted_post_id == post_id
        )

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID, including soft-deleted posts."""
        return self.database.posts.get(post_id)

    async def find_all(
        self,
        sort: PostSortOrder = PostSortOrder.NEW,
        nest_id: Optional[NestId] = None,
        author_id: Optional[UserId] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Post]:
        """Find visible posts with filtering, ordering and pagination."""
        posts = self._visible(nest_id, author_id)
        if sort == PostSortOrder.POPULAR:
            posts.sort(
                key=lambda post: (self._score(post.id), post.created_at), reverse=True
            )
        else:
            posts.sort(key=lambda post: post.created_at, reverse=True)
        return posts[offset : offset + limit]

    async def count(
        self,
        nest_id: Optional[NestId] = None,
        author_id: Optional[UserId] = None,
    ) -> int:
        """Count visible posts."""
        return len(self._visible(nest_id, author_id))

    async def add(self, post: Post) -> Post:
        """Insert a new post."""
        self.database.posts[post.id] = post
        return post

    async def save(self, post: Post) -> Post:
        """Update a post and touch ``updated_at``."""
        saved = post.model_copy(update={"updated_at": utcnow()})
        self.database.posts[post.id] = saved
        return saved

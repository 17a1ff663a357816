"""Post domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from roost.domain.error import ForbiddenError, NotFoundError
from roost.domain.message import MessageKey
from roost.domain.model import Nest, Post, User
from roost.domain.model.common import utcnow
from roost.domain.repository import NestRepository, PostRepository, PostSortOrder
from roost.domain.value import NestId, PostId, UserId

from .base import Service
from .pagination import Page
from .policy import require_active


class PostService(Service):
    """Domain service for post operations."""

    def __init__(
        self,
        post_repository: PostRepository,
        nest_repository: NestRepository,
    ) -> None:
        """Initialize post service.

        Args:
            post_repository: Post repository
            nest_repository: Nest repository (moderation checks)
        """
        self.post_repository = post_repository
        self.nest_repository = nest_repository

    async def get_post(self, post_id: PostId) -> Post:
        """Get a visible post by ID.

        Raises:
            NotFoundError: If the post is missing or deleted
        """
        with logfire.span("post_service.get_post", post_id=str(post_id)):
            post = await self.post_repository.find_by_id(post_id)
            if post is None or post.is_deleted:
                logfire.warn("Post not found", post_id=str(post_id))
                raise NotFoundError(MessageKey.POST_NOT_FOUND, str(post_id))
            return post

    async def count(
        self,
        nest_id: Optional[NestId] = None,
        author_id: Optional[UserId] = None,
    ) -> int:
        """Count visible posts."""
        return await self.post_repository.count(nest_id=nest_id, author_id=author_id)

    async def list_posts(
        self,
        page: Page,
        sort: PostSortOrder = PostSortOrder.NEW,
        nest_id: Optional[NestId] = None,
        author_id: Optional[UserId] = None,
    ) -> list[Post]:
        """List visible posts for a page window."""
        with logfire.span(
            "post_service.list_posts",
            sort=sort.value,
            nest_id=str(nest_id) if nest_id else None,
            author_id=str(author_id) if author_id else None,
            limit=page.limit,
            offset=page.skip,
        ):
            return await self.post_repository.find_all(
                sort=sort,
                nest_id=nest_id,
                author_id=author_id,
                limit=page.limit,
                offset=page.skip,
            )

    async def create(
        self,
        viewer: Optional[User],
        nest: Nest,
        title: str,
        content: str,
        post_id: Optional[PostId] = None,
    ) -> Post:
        """Create a post in a nest.

        Args:
            viewer: Current viewer, becomes the author
            nest: Target nest
            title: Post title
            content: Post body (may be empty)
            post_id: Pre-allocated ID (used to name uploaded media folders)

        Returns:
            Created post

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If the viewer is banned
        """
        author = require_active(viewer)
        with logfire.span(
            "post_service.create", nest_id=str(nest.id), author_id=str(author.id)
        ):
            now = utcnow()
            post = Post(
                id=post_id or PostId(uuid4()),
                title=title.strip(),
                content=content,
                author_id=author.id,
                nest_id=nest.id,
                created_at=now,
                updated_at=now,
            )
            saved = await self.post_repository.add(post)
            logfire.info("Post created", post_id=str(saved.id), nest_id=str(nest.id))
            return saved

    async def update_content(
        self, viewer: Optional[User], post_id: PostId, content: str
    ) -> Post:
        """Replace a post's content. Author only.

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If banned or not the author
            NotFoundError: If the post is missing or deleted
        """
        actor = require_active(viewer)
        with logfire.span("post_service.update_content", post_id=str(post_id)):
            post = await self.get_post(post_id)
            if post.author_id != actor.id:
                logfire.warn(
                    "Unauthorized post update",
                    post_id=str(post_id),
                    actor_id=str(actor.id),
                )
                raise ForbiddenError()

            updated = await self.post_repository.save(
                post.evolve(content=content)
            )
            logfire.info("Post updated", post_id=str(post_id))
            return updated

    async def delete(self, viewer: Optional[User], post_id: PostId) -> Post:
        """Soft-delete a post.

        Allowed for the author, the nest moderator and admins. Votes,
        comments and media rows are kept.

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If banned or not permitted
            NotFoundError: If the post is missing or already deleted
        """
        actor = require_active(viewer)
        with logfire.span("post_service.delete", post_id=str(post_id)):
            post = await self.get_post(post_id)
            if not await self._can_remove(actor, post):
                logfire.warn(
                    "Unauthorized post delete",
                    post_id=str(post_id),
                    actor_id=str(actor.id),
                )
                raise ForbiddenError()

            deleted = await self.post_repository.save(
                post.evolve(is_deleted=True)
            )
            logfire.info("Post soft-deleted", post_id=str(post_id))
            return deleted

    async def _can_remove(self, actor: User, post: Post) -> bool:
        if actor.is_admin or post.author_id == actor.id:
            return True
        if post.nest_id is None:
            return False
        nest = await self.nest_repository.find_by_id(post.nest_id)
        return nest is not None and nest.is_moderated_by(actor.id)

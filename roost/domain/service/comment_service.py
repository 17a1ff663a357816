"""Comment domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from roost.domain.error import ForbiddenError, NotFoundError, ValidationError
from roost.domain.message import MessageKey
from roost.domain.model import Comment, Post, User
from roost.domain.model.common import utcnow
from roost.domain.repository import CommentRepository, NestRepository, PostRepository
from roost.domain.value import CommentId, PostId

from .base import Service
from .pagination import Page
from .policy import require_active


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        nest_repository: NestRepository,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            post_repository: Post repository
            nest_repository: Nest repository (moderation checks)
        """
        self.comment_repository = comment_repository
        self.post_repository = post_repository
        self.nest_repository = nest_repository

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a visible comment.

        Raises:
            NotFoundError: If the comment is missing or deleted
        """
        with logfire.span("comment_service.get_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None or comment.is_deleted:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError(MessageKey.COMMENT_NOT_FOUND, str(comment_id))
            return comment

    async def count_for_post(self, post_id: PostId) -> int:
        """Count a post's visible comments."""
        return await self.comment_repository.count_by_post(post_id)

    async def counts_for_posts(self, post_ids: list[PostId]) -> dict[PostId, int]:
        """Visible comment counts for several posts, 0 where none."""
        if not post_ids:
            return {}
        found = await self.comment_repository.count_by_posts(post_ids)
        return {post_id: found.get(post_id, 0) for post_id in post_ids}

    async def list_for_post(self, post_id: PostId, page: Page) -> list[Comment]:
        """List a post's visible comments, oldest first."""
        return await self.comment_repository.find_by_post(
            post_id, limit=page.limit, offset=page.skip
        )

    async def create(
        self, viewer: Optional[User], post: Post, content: str
    ) -> Comment:
        """Add a comment to a post.

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If the viewer is banned
            ValidationError: COMMENT_EMPTY if the content is blank
        """
        author = require_active(viewer)
        text = _clean(content)
        with logfire.span(
            "comment_service.create", post_id=str(post.id), author_id=str(author.id)
        ):
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post.id,
                author_id=author.id,
                content=text,
                created_at=utcnow(),
            )
            saved = await self.comment_repository.add(comment)
            logfire.info(
                "Comment created", comment_id=str(saved.id), post_id=str(post.id)
            )
            return saved

    async def update(
        self, viewer: Optional[User], comment_id: CommentId, content: str
    ) -> Comment:
        """Edit a comment. Author only.

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If banned or not the author
            NotFoundError: If the comment is missing or deleted
            ValidationError: COMMENT_EMPTY if the content is blank
        """
        actor = require_active(viewer)
        text = _clean(content)
        with logfire.span("comment_service.update", comment_id=str(comment_id)):
            comment = await self.get_comment(comment_id)
            if comment.author_id != actor.id:
                logfire.warn(
                    "Unauthorized comment update",
                    comment_id=str(comment_id),
                    actor_id=str(actor.id),
                )
                raise ForbiddenError()

            updated = await self.comment_repository.save(
                comment.evolve(content=text)
            )
            logfire.info("Comment updated", comment_id=str(comment_id))
            return updated

    async def delete(self, viewer: Optional[User], comment_id: CommentId) -> Comment:
        """Soft-delete a comment.

        Allowed for the author, the moderator of the post's nest and admins.

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If banned or not permitted
            NotFoundError: If the comment is missing or already deleted
        """
        actor = require_active(viewer)
        with logfire.span("comment_service.delete", comment_id=str(comment_id)):
            comment = await self.get_comment(comment_id)
            if not await self._can_remove(actor, comment):
                logfire.warn(
                    "Unauthorized comment delete",
                    comment_id=str(comment_id),
                    actor_id=str(actor.id),
                )
                raise ForbiddenError()

            deleted = await self.comment_repository.save(
                comment.evolve(is_deleted=True)
            )
            logfire.info("Comment soft-deleted", comment_id=str(comment_id))
            return deleted

    async def _can_remove(self, actor: User, comment: Comment) -> bool:
        if actor.is_admin or comment.author_id == actor.id:
            return True
        post = await self.post_repository.find_by_id(comment.post_id)
        if post is None or post.nest_id is None:
            return False
        nest = await self.nest_repository.find_by_id(post.nest_id)
        return nest is not None and nest.is_moderated_by(actor.id)


def _clean(content: str) -> str:
    text = (content or "").strip()
    if not text:
        raise ValidationError(MessageKey.COMMENT_EMPTY)
    return text

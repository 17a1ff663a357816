"""Visibility composition: what a given viewer may see of an entity.

Every response the API produces is built here, so redaction rules apply
the same way regardless of which endpoint returns the row.
"""

from dataclasses import dataclass, field
from typing import Optional

from roost.domain.model import (
    Comment,
    CommentView,
    Media,
    MediaView,
    Nest,
    NestView,
    Post,
    PostView,
    User,
    UserView,
)
from roost.domain.value import CommentRole, VoteValue

from .base import Service
from .policy import is_admin


@dataclass(frozen=True)
class PostContext:
    """Everything needed to compose a post, loaded ahead of time.

    Attributes:
        author: Post author (None once the account is gone)
        nest: Nest the post belongs to (None once the nest is gone)
        moderator: Moderator of that nest
        media: Attached images
        score: Net vote score
        comments: Number of visible comments
        viewer_vote: The viewer's stored vote, None when they have not voted
    """

    author: Optional[User] = None
    nest: Optional[Nest] = None
    moderator: Optional[User] = None
    media: list[Media] = field(default_factory=list)
    score: int = 0
    comments: int = 0
    viewer_vote: Optional[VoteValue] = None


class VisibilityComposer(Service):
    """Builds redacted views for a viewer (None for anonymous callers)."""

    def can_see_profile(self, target: User, viewer: Optional[User]) -> bool:
        """A banned user's profile is only visible to admins."""
        return not target.is_banned or is_admin(viewer)

    def compose_user(
        self, target: Optional[User], viewer: Optional[User]
    ) -> Optional[UserView]:
        """Compose a user view.

        Banned users keep only their id and ban flag for non-admin viewers.
        Email is shown to admins only.
        """
        if target is None:
            return None

        expose = self.can_see_profile(target, viewer)
        return UserView(
            id=target.id,
            handle=target.handle.root if expose else None,
            display_name=target.display_name if expose else None,
            icon=target.icon if expose else None,
            created_at=target.created_at if expose else None,
            is_admin=target.is_admin if expose else False,
            is_banned=target.is_banned,
            email=target.email if is_admin(viewer) else None,
        )

    def compose_nest(
        self, nest: Nest, moderator: Optional[User], viewer: Optional[User]
    ) -> NestView:
        """Compose a nest view with its moderator."""
        return NestView(
            id=nest.id,
            title=nest.title.root,
            display_name=nest.display_name,
            description=nest.description,
            icon=nest.icon,
            created_at=nest.created_at,
            moderator=self.compose_user(moderator, viewer),
        )

    def compose_post(
        self, post: Post, context: PostContext, viewer: Optional[User]
    ) -> PostView:
        """Compose a post view with per-viewer flags.

        ``has_voted``, ``is_moderator`` and ``by_moderator`` are evaluated
        independently; all are False when the inputs they need are missing.
        """
        nest = context.nest
        moderator_id = nest.moderator_id if nest is not None else None

        has_voted = viewer is not None and context.viewer_vote is not None
        is_moderator = viewer is not None and nest is not None and nest.is_moderated_by(
            viewer.id
        )
        by_moderator = (
            nest is not None
            and post.author_id is not None
            and post.author_id == moderator_id
        )

        return PostView(
            id=post.id,
            title=post.title,
            content=post.content,
            author=self.compose_user(context.author, viewer),
            nest=(
                self.compose_nest(nest, context.moderator, viewer)
                if nest is not None
                else None
            ),
            created_at=post.created_at,
            updated_at=post.updated_at,
            photos=[
                MediaView(url=item.content_url, alt=item.alt_text)
                for item in context.media
            ],
            votes=context.score,
            comments=context.comments,
            has_voted=has_voted,
            viewer_vote=int(context.viewer_vote) if has_voted else 0,
            is_moderator=is_moderator,
            by_moderator=by_moderator,
        )

    def comment_role(
        self, author: Optional[User], nest: Optional[Nest], viewer: Optional[User]
    ) -> CommentRole:
        """Role badge for a comment author.

        Admin wins over Moderator. Without the nest, the badge is User.

        A hidden author (banned, seen by a non-admin) is always User even if
        ``is_admin`` or the moderator id would say otherwise, so the badge
        does not reveal the redacted ``isAdmin`` flag.
        """
        if author is None or not self.can_see_profile(author, viewer):
            return CommentRole.USER
        if author.is_admin:
            return CommentRole.ADMIN
        if nest is not None and nest.is_moderated_by(author.id):
            return CommentRole.MODERATOR
        return CommentRole.USER

    def compose_comment(
        self,
        comment: Comment,
        author: Optional[User],
        nest: Optional[Nest],
        viewer: Optional[User],
    ) -> CommentView:
        """Compose a comment view with its author's role."""
        return CommentView(
            id=comment.id,
            post_id=comment.post_id,
            content=comment.content,
            created_at=comment.created_at,
            author=self.compose_user(author, viewer),
            role=self.comment_role(author, nest, viewer),
        )

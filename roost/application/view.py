"""Batch loading of the data behind composed views.

Each assembler loads everything a list of entities needs with a fixed
number of queries and hands it to the ``VisibilityComposer``.
"""

from typing import Optional

import logfire

from roost.domain.model import (
    Comment,
    CommentView,
    Nest,
    NestView,
    Post,
    PostView,
    User,
)
from roost.domain.repository import MediaRepository
from roost.domain.service import (
    CommentService,
    NestService,
    PostContext,
    ScoreService,
    UserService,
    VisibilityComposer,
    VoteService,
)
from roost.domain.value import NestId, UserId


class NestViewAssembler:
    """Builds nest views with their moderators."""

    def __init__(self, user_service: UserService, composer: VisibilityComposer) -> None:
        self.user_service = user_service
        self.composer = composer

    async def assemble(self, nests: list[Nest], viewer: Optional[User]) -> list[NestView]:
        """Compose nests, loading all moderators in one query."""
        moderator_ids = [nest.moderator_id for nest in nests if nest.moderator_id]
        moderators = await self.user_service.find_by_ids(moderator_ids)
        return [
            self.composer.compose_nest(
                nest,
                moderators.get(nest.moderator_id) if nest.moderator_id else None,
                viewer,
            )
            for nest in nests
        ]

    async def assemble_one(self, nest: Nest, viewer: Optional[User]) -> NestView:
        """Compose a single nest."""
        return (await self.assemble([nest], viewer))[0]


class PostViewAssembler:
    """Builds post views with scores, counts and per-viewer flags.

    Query count is constant in the number of posts: users, nests, media,
    scores, comment counts and the viewer's votes are each loaded once.
    """

    def __init__(
        self,
        user_service: UserService,
        nest_service: NestService,
        comment_service: CommentService,
        score_service: ScoreService,
        vote_service: VoteService,
        media_repository: MediaRepository,
        composer: VisibilityComposer,
    ) -> None:
        self.user_service = user_service
        self.nest_service = nest_service
        self.comment_service = comment_service
        self.score_service = score_service
        self.vote_service = vote_service
        self.media_repository = media_repository
        self.composer = composer

    async def assemble(self, posts: list[Post], viewer: Optional[User]) -> list[PostView]:
        """Compose posts for a viewer.

        Args:
            posts: Posts to compose, in display order
            viewer: Current viewer (None for anonymous)

        Returns:
            Post views in the same order
        """
        if not posts:
            return []

        with logfire.span("post_view_assembler.assemble", count=len(posts)):
            post_ids = [post.id for post in posts]

            nest_ids: list[NestId] = list(
                dict.fromkeys(post.nest_id for post in posts if post.nest_id)
            )
            nests = await self.nest_service.find_by_ids(nest_ids)

            user_ids: list[UserId] = [post.author_id for post in posts if post.author_id]
            user_ids += [nest.moderator_id for nest in nests.values() if nest.moderator_id]
            users = await self.user_service.find_by_ids(user_ids)

            media = await self.media_repository.find_by_posts(post_ids)
            scores = await self.score_service.scores(post_ids)
            comments = await self.comment_service.counts_for_posts(post_ids)
            viewer_votes = (
                await self.vote_service.find_viewer_votes(viewer.id, post_ids)
                if viewer is not None
                else {}
            )

            views = []
            for post in posts:
                nest = nests.get(post.nest_id) if post.nest_id else None
                moderator_id = nest.moderator_id if nest is not None else None
                context = PostContext(
                    author=users.get(post.author_id) if post.author_id else None,
                    nest=nest,
                    moderator=users.get(moderator_id) if moderator_id else None,
                    media=media.get(post.id, []),
                    score=scores.get(post.id, 0),
                    comments=comments.get(post.id, 0),
                    viewer_vote=viewer_votes.get(post.id),
                )
                views.append(self.composer.compose_post(post, context, viewer))
            return views

    async def assemble_one(self, post: Post, viewer: Optional[User]) -> PostView:
        """Compose a single post."""
        return (await self.assemble([post], viewer))[0]


class CommentViewAssembler:
    """Builds comment views with author role badges."""

    def __init__(
        self,
        user_service: UserService,
        nest_service: NestService,
        composer: VisibilityComposer,
    ) -> None:
        self.user_service = user_service
        self.nest_service = nest_service
        self.composer = composer

    async def assemble(
        self, comments: list[Comment], post: Post, viewer: Optional[User]
    ) -> list[CommentView]:
        """Compose comments of one post.

        Args:
            comments: Comments of ``post``
            post: The post they belong to (its nest decides moderator badges)
            viewer: Current viewer (None for anonymous)
        """
        nest = None
        if post.nest_id is not None:
            nest = (await self.nest_service.find_by_ids([post.nest_id])).get(post.nest_id)

        authors = await self.user_service.find_by_ids(
            [comment.author_id for comment in comments if comment.author_id]
        )
        return [
            self.composer.compose_comment(
                comment,
                authors.get(comment.author_id) if comment.author_id else None,
                nest,
                viewer,
            )
            for comment in comments
        ]

    async def assemble_one(
        self, comment: Comment, post: Post, viewer: Optional[User]
    ) -> CommentView:
        """Compose a single comment."""
        return (await self.assemble([comment], post, viewer))[0]

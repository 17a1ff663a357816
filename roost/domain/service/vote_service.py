"""Vote ledger domain service."""

from uuid import uuid4

import logfire

from roost.domain.error import ConflictError, NotFoundError, ValidationError
from roost.domain.message import MessageKey
from roost.domain.model import Vote
from roost.domain.model.common import utcnow
from roost.domain.repository import PostRepository, VoteRepository
from roost.domain.value import PostId, UserId, VoteId, VoteOutcome, VoteValue

from .base import Service


class VoteService(Service):
    """Domain service for the per-(post, user) vote state machine.

    States are NoVote, Upvoted and Downvoted. Legal transitions:

    - NoVote + 0 -> rejected (nothing to remove)
    - NoVote + 1/-1 -> insert
    - Voted + same value -> rejected (duplicate)
    - Voted + 0 -> delete
    - Voted + opposite value -> update in place

    Each write is a single conditional statement; when it affects no row,
    another request changed the pair in between and the caller gets a
    ConflictError it can retry.
    """

    def __init__(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
    ) -> None:
        """Initialize vote service.

        Args:
            vote_repository: Vote repository
            post_repository: Post repository
        """
        self.vote_repository = vote_repository
        self.post_repository = post_repository

    async def cast(
        self, post_id: PostId, user_id: UserId, value: VoteValue
    ) -> VoteOutcome:
        """Apply a requested vote value for a user on a post.

        Args:
            post_id: Post ID
            user_id: Voting user's ID
            value: Requested value (-1, 0 or 1)

        Returns:
            What happened to the ledger

        Raises:
            NotFoundError: If the post is missing or deleted
            ValidationError: If there is no vote to remove
            ConflictError: If the same vote already exists or the pair
                changed concurrently
        """
        with logfire.span(
            "vote_service.cast",
            post_id=str(post_id),
            user_id=str(user_id),
            value=int(value),
        ):
            post = await self.post_repository.find_by_id(post_id)
            if post is None or post.is_deleted:
                logfire.warn("Vote on missing post", post_id=str(post_id))
                raise NotFoundError(MessageKey.POST_NOT_FOUND, str(post_id))

            existing = await self.vote_repository.find(post_id, user_id)

            if existing is None:
                return await self._insert(post_id, user_id, value)

            if existing.value == value:
                logfire.warn(
                    "Duplicate vote attempt",
                    post_id=str(post_id),
                    user_id=str(user_id),
                )
                raise ConflictError(MessageKey.VOTE_ALREADY_EXISTS)

            if value == VoteValue.NONE:
                return await self._remove(post_id, user_id)

            return await self._flip(post_id, user_id, existing.value, value)

    async def get_vote(self, post_id: PostId, user_id: UserId) -> Vote | None:
        """Get a user's current vote on a post, if any."""
        return await self.vote_repository.find(post_id, user_id)

    async def find_viewer_votes(
        self, user_id: UserId, post_ids: list[PostId]
    ) -> dict[PostId, VoteValue]:
        """A user's stored votes on several posts, keyed by post ID."""
        if not post_ids:
            return {}
        votes = await self.vote_repository.find_by_user_and_posts(user_id, post_ids)
        return {vote.post_id: vote.value for vote in votes}

    async def _insert(
        self, post_id: PostId, user_id: UserId, value: VoteValue
    ) -> VoteOutcome:
        if value == VoteValue.NONE:
            raise ValidationError(MessageKey.VOTE_NOT_CAST)

        now = utcnow()
        vote = Vote(
            id=VoteId(uuid4()),
            post_id=post_id,
            user_id=user_id,
            value=value,
            created_at=now,
            updated_at=now,
        )
        if not await self.vote_repository.insert(vote):
            # A concurrent request inserted the first vote for this pair
            logfire.warn(
                "Concurrent first vote rejected",
                post_id=str(post_id),
                user_id=str(user_id),
            )
            raise ConflictError(MessageKey.VOTE_CONFLICT)

        logfire.info("Vote added", post_id=str(post_id), user_id=str(user_id))
        return VoteOutcome.ADDED

    async def _remove(self, post_id: PostId, user_id: UserId) -> VoteOutcome:
        if not await self.vote_repository.delete(post_id, user_id):
            logfire.warn(
                "Vote vanished before removal",
                post_id=str(post_id),
                user_id=str(user_id),
            )
            raise ConflictError(MessageKey.VOTE_CONFLICT)

        logfire.info("Vote removed", post_id=str(post_id), user_id=str(user_id))
        return VoteOutcome.REMOVED

    async def _flip(
        self,
        post_id: PostId,
        user_id: UserId,
        expected: VoteValue,
        value: VoteValue,
    ) -> VoteOutcome:
        updated = await self.vote_repository.update_value(
            post_id, user_id, expected=expected, value=value, updated_at=utcnow()
        )
        if not updated:
            logfire.warn(
                "Vote changed before flip",
                post_id=str(post_id),
                user_id=str(user_id),
            )
            raise ConflictError(MessageKey.VOTE_CONFLICT)

        logfire.info(
            "Vote updated",
            post_id=str(post_id),
            user_id=str(user_id),
            value=int(value),
        )
        return VoteOutcome.UPDATED

"""Score aggregation domain service."""

from typing import Sequence

import logfire

from roost.domain.repository import VoteRepository
from roost.domain.value import PostId

from .base import Service


class ScoreService(Service):
    """Computes net post scores from the vote ledger.

    Scores are always computed from the vote rows; there is no stored
    counter to drift out of sync.
    """

    def __init__(self, vote_repository: VoteRepository) -> None:
        self.vote_repository = vote_repository

    async def score(self, post_id: PostId) -> int:
        """Net score of one post (upvotes minus downvotes)."""
        with logfire.span("score_service.score", post_id=str(post_id)):
            return await self.vote_repository.score(post_id)

    async def scores(self, post_ids: Sequence[PostId]) -> dict[PostId, int]:
        """Net scores of several posts using one grouped query.

        Args:
            post_ids: Posts to score

        Returns:
            Score for every requested post, 0 for posts without votes
        """
        if not post_ids:
            return {}

        with logfire.span("score_service.scores", count=len(post_ids)):
            found = await self.vote_repository.scores(post_ids)
            return {post_id: found.get(post_id, 0) for post_id in post_ids}

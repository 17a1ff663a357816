"""In-memory vote repository for testing.

Each write inspects and mutates the shared table without awaiting in
between, so it is atomic with respect to other coroutines, like the single
statements of the PostgreSQL repository.
"""

from datetime import datetime
from typing import Optional, Sequence

from roost.domain.model.vote import Vote
from roost.domain.repository.vote import VoteRepository
from roost.domain.value import PostId, UserId, VoteValue

from .database import InMemoryDatabase


class InMemoryVoteRepository(VoteRepository):
    """In-memory implementation of VoteRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find(self, post_id: PostId, user_id: UserId) -> Optional[Vote]:
        """Find a user's vote on a post."""
        return self.database.votes.get((post_id, user_id))

    async def find_by_user_and_posts(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> list[Vote]:
        """Find a user's votes on multiple posts."""
        return [
            vote
            for (post_id, voter_id), vote in self.database.votes.items()
            if voter_id == user_id and post_id in post_ids
        ]

    async def insert(self, vote: Vote) -> bool:
        """Insert a vote unless the pair already has one."""
        key = (vote.post_id, vote.user_id)
        if key in self.database.votes:
            return False
        self.database.votes[key] = vote
        return True

    async def update_value(
        self,
        post_id: PostId,
        user_id: UserId,
        expected: VoteValue,
        value: VoteValue,
        updated_at: datetime,
    ) -> bool:
        """Flip a vote if it still holds the expected value."""
        key = (post_id, user_id)
        current = self.database.votes.get(key)
        if current is None or current.value != expected:
            return False
        self.database.votes[key] = current.model_copy(
            update={"value": value, "updated_at": updated_at}
        )
        return True

    async def delete(self, post_id: PostId, user_id: UserId) -> bool:
        """Delete a user's vote on a post."""
        return self.database.votes.pop((post_id, user_id), None) is not None

    async def score(self, post_id: PostId) -> int:
        """Net score of a post."""
        return sum(
            int(vote.value)
            for (voted_post_id, _), vote in self.database.votes.items()
            if voted_post_id == post_id
        )

    async def scores(self, post_ids: Sequence[PostId]) -> dict[PostId, int]:
        """Net scores of several posts."""
        totals: dict[PostId, int] = {}
        for (post_id, _), vote in self.database.votes.items():
            if post_id in post_ids:
                totals[post_id] = totals.get(post_id, 0) + int(vote.value)
        return totals

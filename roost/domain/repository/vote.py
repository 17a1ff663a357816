"""Vote repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from roost.domain.model.vote import Vote
from roost.domain.value import PostId, UserId, VoteValue


class VoteRepository(ABC):
    """Repository for the vote ledger.

    Every write is a single atomic statement against the unique
    (post_id, user_id) pair, so concurrent requests cannot produce two rows
    or a half-applied flip.
    """

    @abstractmethod
    async def find(self, post_id: PostId, user_id: UserId) -> Optional[Vote]:
        """Find a user's vote on a post.

        Args:
            post_id: ID of the post
            user_id: The user's ID

        Returns:
            The vote if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_posts(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> List[Vote]:
        """Find a user's votes on multiple posts (batch query).

        Args:
            user_id: The user's ID
            post_ids: Posts to check

        Returns:
            The user's votes on the specified posts
        """
        pass

    @abstractmethod
    async def insert(self, vote: Vote) -> bool:
        """Insert a vote unless the pair already has one.

        Args:
            vote: The vote to insert

        Returns:
            True if the row was inserted, False if a vote for the same
            (post, user) pair already exists
        """
        pass

    @abstractmethod
    async def update_value(
        self,
        post_id: PostId,
        user_id: UserId,
        expected: VoteValue,
        value: VoteValue,
        updated_at: datetime,
    ) -> bool:
        """Flip a vote in place if it still holds the expected value.

        Args:
            post_id: ID of the post
            user_id: The user's ID
            expected: Value the row must currently hold
            value: New value
            updated_at: Modification timestamp

        Returns:
            True if exactly one row was updated
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId, user_id: UserId) -> bool:
        """Delete a user's vote on a post.

        Returns:
            True if a vote was deleted, False if no vote existed
        """
        pass

    @abstractmethod
    async def score(self, post_id: PostId) -> int:
        """Net score of a post: upvotes minus downvotes."""
        pass

    @abstractmethod
    async def scores(self, post_ids: Sequence[PostId]) -> Dict[PostId, int]:
        """Net scores of several posts in one grouped query.

        Returns:
            Mapping of post ID to score; posts without votes may be absent
        """
        pass

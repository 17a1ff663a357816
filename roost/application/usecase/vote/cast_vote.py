"""Cast vote use case."""

import logfire

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer, parse_id
from roost.domain.error import ValidationError
from roost.domain.message import MessageKey
from roost.domain.model.view import View
from roost.domain.service import ScoreService, UserService, VoteService
from roost.domain.service.policy import require_active
from roost.domain.value import PostId, VoteOutcome, VoteValue


class CastVoteRequest(ViewerRequest):
    """Cast vote request. ``value`` is -1, 0 (remove) or 1."""

    post_id: str
    value: int


class CastVoteResponse(View):
    """Cast vote response."""

    outcome: VoteOutcome
    score: int


class CastVoteUseCase(BaseUseCase):
    """Use case for adding, flipping or removing a vote."""

    def __init__(
        self,
        vote_service: VoteService,
        score_service: ScoreService,
        user_service: UserService,
    ) -> None:
        self.vote_service = vote_service
        self.score_service = score_service
        self.user_service = user_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If the viewer is banned
            NotFoundError: If the post is missing or deleted
            ValidationError: For values outside -1..1, or removing a
                missing vote
            ConflictError: For duplicate or concurrent votes
        """
        viewer = require_active(
            await load_viewer(self.user_service, request.viewer_id)
        )
        post_id = PostId(parse_id(request.post_id, MessageKey.POST_NOT_FOUND))

        try:
            value = VoteValue(request.value)
        except ValueError:
            raise ValidationError(MessageKey.INVALID_REQUEST, "Vote must be -1, 0 or 1")

        outcome = await self.vote_service.cast(post_id, viewer.id, value)
        score = await self.score_service.score(post_id)

        logfire.info(
            "Vote cast",
            post_id=str(post_id),
            outcome=outcome.value,
            score=score,
        )
        return CastVoteResponse(outcome=outcome, score=score)

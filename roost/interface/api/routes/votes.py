"""Vote routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from roost.application.usecase.vote import (
    CastVoteRequest,
    CastVoteResponse,
    CastVoteUseCase,
    GetScoreRequest,
    GetScoreResponse,
    GetScoreUseCase,
)
from roost.domain.message import MessageBundle, MessageKey
from roost.domain.value import VoteOutcome
from roost.interface.api.response import Envelope, envelope
from roost.util.di import Session

router = APIRouter(prefix="/votes", tags=["votes"], route_class=DishkaRoute)

OUTCOME_MESSAGES: dict[VoteOutcome, MessageKey] = {
    VoteOutcome.ADDED: MessageKey.VOTE_ADDED,
    VoteOutcome.UPDATED: MessageKey.VOTE_UPDATED,
    VoteOutcome.REMOVED: MessageKey.VOTE_REMOVED,
}


class CastVoteAPIRequest(BaseModel):
    """API request for casting a vote: 1 up, -1 down, 0 to remove."""

    value: int


@router.post("/{post_id}", response_model=Envelope[CastVoteResponse])
async def cast_vote(
    post_id: str,
    request: CastVoteAPIRequest,
    cast_vote_use_case: FromDishka[CastVoteUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[CastVoteResponse]:
    """Add, flip or remove the signed-in user's vote on a post.

    Raises 400 for a repeated removal, 409 for a repeated vote or a
    concurrent change.
    """
    result = await cast_vote_use_case.execute(
        CastVoteRequest(
            viewer_id=session.user_id, post_id=post_id, value=request.value
        )
    )
    return envelope(bundle, OUTCOME_MESSAGES[result.outcome], result)


@router.get("/{post_id}/score", response_model=Envelope[GetScoreResponse])
async def get_score(
    post_id: str,
    get_score_use_case: FromDishka[GetScoreUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[GetScoreResponse]:
    """Get a post's net score."""
    result = await get_score_use_case.execute(
        GetScoreRequest(viewer_id=session.user_id, post_id=post_id)
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, result)

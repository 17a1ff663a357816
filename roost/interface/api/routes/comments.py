"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, status
from pydantic import BaseModel

from roost.application.usecase.comment import (
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentUseCase,
    ListCommentsRequest,
    ListCommentsUseCase,
    UpdateCommentRequest,
    UpdateCommentUseCase,
)
from roost.application.usecase.common import PagedResponse
from roost.domain.message import MessageBundle, MessageKey
from roost.domain.model import CommentView
from roost.interface.api.response import Envelope, envelope
from roost.util.di import Session

router = APIRouter(prefix="/comments", tags=["comments"], route_class=DishkaRoute)


class CommentAPIRequest(BaseModel):
    """API request for writing a comment."""

    content: str


@router.get("/post/{post_id}", response_model=Envelope[PagedResponse[CommentView]])
async def list_comments(
    post_id: str,
    list_comments_use_case: FromDishka[ListCommentsUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
    page: int = Query(default=1),
    limit: int = Query(default=20),
) -> Envelope[PagedResponse[CommentView]]:
    """List a post's comments, oldest first."""
    result = await list_comments_use_case.execute(
        ListCommentsRequest(
            viewer_id=session.user_id, post_id=post_id, page=page, limit=limit
        )
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, result)


@router.post(
    "/post/{post_id}",
    response_model=Envelope[CommentView],
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[CommentView]:
    """Comment on a post."""
    comment = await create_comment_use_case.execute(
        CreateCommentRequest(
            viewer_id=session.user_id, post_id=post_id, content=request.content
        )
    )
    return envelope(bundle, MessageKey.COMMENT_CREATED, comment)


@router.put("/{comment_id}", response_model=Envelope[CommentView])
async def update_comment(
    comment_id: str,
    request: CommentAPIRequest,
    update_comment_use_case: FromDishka[UpdateCommentUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[CommentView]:
    """Edit a comment. Author only."""
    comment = await update_comment_use_case.execute(
        UpdateCommentRequest(
            viewer_id=session.user_id, comment_id=comment_id, content=request.content
        )
    )
    return envelope(bundle, MessageKey.COMMENT_UPDATED, comment)


@router.delete("/{comment_id}", response_model=Envelope[None])
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[None]:
    """Delete a comment. Author, nest moderator or admin."""
    await delete_comment_use_case.execute(
        DeleteCommentRequest(viewer_id=session.user_id, comment_id=comment_id)
    )
    return envelope(bundle, MessageKey.COMMENT_DELETED)

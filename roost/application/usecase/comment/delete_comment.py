"""Delete comment use case."""

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer, parse_id
from roost.domain.message import MessageKey
from roost.domain.service import CommentService, UserService
from roost.domain.value import CommentId


class DeleteCommentRequest(ViewerRequest):
    """Delete comment request."""

    comment_id: str


class DeleteCommentUseCase(BaseUseCase):
    """Use case for soft-deleting a comment."""

    def __init__(self, comment_service: CommentService, user_service: UserService) -> None:
        self.comment_service = comment_service
        self.user_service = user_service

    async def execute(self, request: DeleteCommentRequest) -> None:
        """Soft-delete a comment (author, nest moderator or admin)."""
        viewer = await load_viewer(self.user_service, request.viewer_id)
        await self.comment_service.delete(
            viewer,
            CommentId(parse_id(request.comment_id, MessageKey.COMMENT_NOT_FOUND)),
        )

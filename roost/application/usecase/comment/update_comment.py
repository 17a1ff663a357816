"""Update comment use case."""

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer, parse_id
from roost.application.view import CommentViewAssembler
from roost.domain.message import MessageKey
from roost.domain.model import CommentView
from roost.domain.service import CommentService, PostService, UserService
from roost.domain.value import CommentId


class UpdateCommentRequest(ViewerRequest):
    """Update comment request."""

    comment_id: str
    content: str


class UpdateCommentUseCase(BaseUseCase):
    """Use case for editing a comment. Author only."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
        assembler: CommentViewAssembler,
    ) -> None:
        self.comment_service = comment_service
        self.post_service = post_service
        self.user_service = user_service
        self.assembler = assembler

    async def execute(self, request: UpdateCommentRequest) -> CommentView:
        viewer = await load_viewer(self.user_service, request.viewer_id)
        comment = await self.comment_service.update(
            viewer,
            CommentId(parse_id(request.comment_id, MessageKey.COMMENT_NOT_FOUND)),
            request.content,
        )
        post = await self.post_service.get_post(comment.post_id)
        return await self.assembler.assemble_one(comment, post, viewer)

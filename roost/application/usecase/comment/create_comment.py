"""Create comment use case."""

import logfire

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer, parse_id
from roost.application.view import CommentViewAssembler
from roost.domain.message import MessageKey
from roost.domain.model import CommentView
from roost.domain.service import CommentService, PostService, UserService
from roost.domain.value import PostId


class CreateCommentRequest(ViewerRequest):
    """Create comment request."""

    post_id: str
    content: str


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on a post."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
        assembler: CommentViewAssembler,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            post_service: Post domain service
            user_service: User domain service
            assembler: Comment view assembler
        """
        self.comment_service = comment_service
        self.post_service = post_service
        self.user_service = user_service
        self.assembler = assembler

    async def execute(self, request: CreateCommentRequest) -> CommentView:
        """Execute create comment flow.

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If the viewer is banned
            NotFoundError: If the post is missing or deleted
            ValidationError: COMMENT_EMPTY for blank content
        """
        viewer = await load_viewer(self.user_service, request.viewer_id)
        post = await self.post_service.get_post(
            PostId(parse_id(request.post_id, MessageKey.POST_NOT_FOUND))
        )

        with logfire.span("create_comment.execute", post_id=str(post.id)):
            comment = await self.comment_service.create(viewer, post, request.content)
            return await self.assembler.assemble_one(comment, post, viewer)

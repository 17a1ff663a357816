"""List comments use case."""

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import (
    PageRequest,
    PagedResponse,
    PaginationInfo,
    load_viewer,
    page_for,
    parse_id,
)
from roost.application.view import CommentViewAssembler
from roost.config import PaginationSettings
from roost.domain.message import MessageKey
from roost.domain.model import CommentView
from roost.domain.service import CommentService, PostService, UserService
from roost.domain.value import PostId


class ListCommentsRequest(PageRequest):
    """List comments request."""

    post_id: str


class ListCommentsUseCase(BaseUseCase):
    """Use case for listing a post's comments, oldest first."""

    def __init__(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
        assembler: CommentViewAssembler,
        pagination: PaginationSettings,
    ) -> None:
        self.comment_service = comment_service
        self.post_service = post_service
        self.user_service = user_service
        self.assembler = assembler
        self.pagination = pagination

    async def execute(self, request: ListCommentsRequest) -> PagedResponse[CommentView]:
        """Raises NotFoundError if the post is missing or deleted."""
        viewer = await load_viewer(self.user_service, request.viewer_id)
        post = await self.post_service.get_post(
            PostId(parse_id(request.post_id, MessageKey.POST_NOT_FOUND))
        )

        total = await self.comment_service.count_for_post(post.id)
        page = page_for(request, total, self.pagination)
        comments = await self.comment_service.list_for_post(post.id, page)

        return PagedResponse[CommentView](
            pagination=PaginationInfo.from_page(page),
            items=await self.assembler.assemble(comments, post, viewer),
        )

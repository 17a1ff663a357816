"""Get post use case."""

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer, parse_id
from roost.application.view import PostViewAssembler
from roost.domain.message import MessageKey
from roost.domain.model import PostView
from roost.domain.service import PostService, UserService
from roost.domain.value import PostId


class GetPostRequest(ViewerRequest):
    """Get post request."""

    post_id: str


class GetPostUseCase(BaseUseCase):
    """Use case for reading a single post."""

    def __init__(
        self,
        post_service: PostService,
        user_service: UserService,
        assembler: PostViewAssembler,
    ) -> None:
        self.post_service = post_service
        self.user_service = user_service
        self.assembler = assembler

    async def execute(self, request: GetPostRequest) -> PostView:
        """Raises NotFoundError for missing or deleted posts."""
        viewer = await load_viewer(self.user_service, request.viewer_id)
        post = await self.post_service.get_post(
            PostId(parse_id(request.post_id, MessageKey.POST_NOT_FOUND))
        )
        return await self.assembler.assemble_one(post, viewer)

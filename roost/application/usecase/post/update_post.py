"""Update post use case."""

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer, parse_id
from roost.application.view import PostViewAssembler
from roost.domain.message import MessageKey
from roost.domain.model import PostView
from roost.domain.service import PostService, UserService
from roost.domain.value import PostId


class UpdatePostRequest(ViewerRequest):
    """Update post request."""

    post_id: str
    content: str


class UpdatePostUseCase(BaseUseCase):
    """Use case for editing a post's content. Author only."""

    def __init__(
        self,
        post_service: PostService,
        user_service: UserService,
        assembler: PostViewAssembler,
    ) -> None:
        self.post_service = post_service
        self.user_service = user_service
        self.assembler = assembler

    async def execute(self, request: UpdatePostRequest) -> PostView:
        viewer = await load_viewer(self.user_service, request.viewer_id)
        post = await self.post_service.update_content(
            viewer,
            PostId(parse_id(request.post_id, MessageKey.POST_NOT_FOUND)),
            request.content,
        )
        return await self.assembler.assemble_one(post, viewer)

"""Delete post use case."""

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer, parse_id
from roost.domain.message import MessageKey
from roost.domain.service import PostService, UserService
from roost.domain.value import PostId


class DeletePostRequest(ViewerRequest):
    """Delete post request."""

    post_id: str


class DeletePostUseCase(BaseUseCase):
    """Use case for soft-deleting a post."""

    def __init__(self, post_service: PostService, user_service: UserService) -> None:
        self.post_service = post_service
        self.user_service = user_service

    async def execute(self, request: DeletePostRequest) -> None:
        """Soft-delete a post (author, nest moderator or admin)."""
        viewer = await load_viewer(self.user_service, request.viewer_id)
        await self.post_service.delete(
            viewer, PostId(parse_id(request.post_id, MessageKey.POST_NOT_FOUND))
        )

"""Get current user use case."""

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer
from roost.domain.model import UserView
from roost.domain.service import UserService, VisibilityComposer
from roost.domain.service.policy import require_viewer


class GetCurrentUserRequest(ViewerRequest):
    """Get current user request."""


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for getting the signed-in user."""

    def __init__(self, user_service: UserService, composer: VisibilityComposer) -> None:
        self.user_service = user_service
        self.composer = composer

    async def execute(self, request: GetCurrentUserRequest) -> UserView:
        """Return the viewer's own profile.

        Raises:
            UnauthorizedError: If there is no valid session
        """
        viewer = require_viewer(
            await load_viewer(self.user_service, request.viewer_id)
        )
        return self.composer.compose_user(viewer, viewer)

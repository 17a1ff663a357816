"""Get user use case."""

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer, parse_id
from roost.domain.error import ValidationError
from roost.domain.message import MessageKey
from roost.domain.model import UserView
from roost.domain.service import UserService, VisibilityComposer
from roost.domain.value import UserId


class GetUserRequest(ViewerRequest):
    """Get user request. Exactly one lookup field is set."""

    user_id: str | None = None
    handle: str | None = None
    email: str | None = None


class GetUserUseCase(BaseUseCase):
    """Use case for looking up one user by ID, handle or email."""

    def __init__(self, user_service: UserService, composer: VisibilityComposer) -> None:
        self.user_service = user_service
        self.composer = composer

    async def execute(self, request: GetUserRequest) -> UserView:
        """Look up a user and compose it for the viewer.

        Email lookups are admin only.

        Raises:
            NotFoundError: If no user matches
            ForbiddenError: If a non-admin looks up by email
        """
        viewer = await load_viewer(self.user_service, request.viewer_id)

        if request.user_id is not None:
            user = await self.user_service.get_by_id(
                UserId(parse_id(request.user_id, MessageKey.USER_NOT_FOUND))
            )
        elif request.handle is not None:
            user = await self.user_service.get_by_handle(request.handle)
        elif request.email is not None:
            user = await self.user_service.get_by_email(viewer, request.email)
        else:
            raise ValidationError(MessageKey.INVALID_REQUEST)

        return self.composer.compose_user(user, viewer)

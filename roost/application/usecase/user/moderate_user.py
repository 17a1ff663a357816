"""Ban, unban and promote use case."""

from enum import Enum

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer, parse_id
from roost.domain.message import MessageKey
from roost.domain.model import UserView
from roost.domain.service import UserService, VisibilityComposer
from roost.domain.value import UserId


class ModerationAction(str, Enum):
    """Account moderation actions available to admins."""

    BAN = "ban"
    UNBAN = "unban"
    PROMOTE = "promote"


class ModerateUserRequest(ViewerRequest):
    """Moderate user request."""

    user_id: str
    action: ModerationAction


class ModerateUserUseCase(BaseUseCase):
    """Use case for admin moderation of another account."""

    def __init__(self, user_service: UserService, composer: VisibilityComposer) -> None:
        self.user_service = user_service
        self.composer = composer

    async def execute(self, request: ModerateUserRequest) -> UserView:
        """Apply a moderation action.

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If not an admin, or acting on self
            NotFoundError: If the user does not exist
            ValidationError: If the account is already in the target state
        """
        viewer = await load_viewer(self.user_service, request.viewer_id)
        user_id = UserId(parse_id(request.user_id, MessageKey.USER_NOT_FOUND))

        if request.action == ModerationAction.BAN:
            user = await self.user_service.ban(viewer, user_id)
        elif request.action == ModerationAction.UNBAN:
            user = await self.user_service.unban(viewer, user_id)
        else:
            user = await self.user_service.promote(viewer, user_id)

        return self.composer.compose_user(user, viewer)

"""Update user use case."""

import logfire

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer, parse_id
from roost.domain.message import MessageKey
from roost.domain.model import UserView
from roost.domain.service import StorageService, Upload, UserService, VisibilityComposer
from roost.domain.value import UserId


class UpdateUserRequest(ViewerRequest):
    """Update user request. Absent fields stay unchanged."""

    user_id: str
    display_name: str | None = None
    handle: str | None = None
    icon: Upload | None = None


class UpdateUserUseCase(BaseUseCase):
    """Use case for editing a profile (self or admin)."""

    def __init__(
        self,
        user_service: UserService,
        storage_service: StorageService,
        composer: VisibilityComposer,
    ) -> None:
        self.user_service = user_service
        self.storage_service = storage_service
        self.composer = composer

    async def execute(self, request: UpdateUserRequest) -> UserView:
        """Execute update user flow.

        A new icon is stored before the update and removed again if the
        update fails. The replaced icon is removed once the transaction
        commits.

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If editing someone else without being admin
            NotFoundError: If the user does not exist
            ValidationError: USER_HANDLE_CHANGE if the handle differs
        """
        viewer = await load_viewer(self.user_service, request.viewer_id)
        user_id = UserId(parse_id(request.user_id, MessageKey.USER_NOT_FOUND))
        target = await self.user_service.check_can_update(viewer, user_id)

        with logfire.span("update_user.execute", user_id=str(user_id)):
            new_icon = None
            if request.icon is not None:
                new_icon = await self.storage_service.save(
                    request.icon, "users", target.handle.root
                )

            try:
                updated = await self.user_service.update_profile(
                    target,
                    display_name=request.display_name,
                    icon=new_icon,
                    handle=request.handle,
                )
            except Exception:
                if new_icon is not None:
                    await self.storage_service.discard([new_icon])
                raise

            if new_icon is not None and target.icon != new_icon:
                self.storage_service.discard_after_commit([target.icon])

            return self.composer.compose_user(updated, viewer)

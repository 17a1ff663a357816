"""Register use case."""

import logfire
from pydantic import BaseModel

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer, parse_field
from roost.config import StorageSettings
from roost.domain.error import ForbiddenError, ValidationError
from roost.domain.message import MessageKey
from roost.domain.model import UserView
from roost.domain.service import (
    JWTService,
    StorageService,
    Upload,
    UserService,
    VisibilityComposer,
)
from roost.domain.value import Handle


class RegisterRequest(ViewerRequest):
    """Register request."""

    handle: str
    email: str
    display_name: str | None = None
    icon: Upload | None = None


class RegisterResponse(BaseModel):
    """Register response.

    ``token`` is only issued when the caller was anonymous; an admin
    creating an account keeps their own session.
    """

    user: UserView
    token: str | None = None


class RegisterUseCase(BaseUseCase):
    """Use case for creating a new account."""

    def __init__(
        self,
        user_service: UserService,
        jwt_service: JWTService,
        storage_service: StorageService,
        storage_settings: StorageSettings,
        composer: VisibilityComposer,
    ) -> None:
        """Initialize register use case.

        Args:
            user_service: User domain service
            jwt_service: Session token service
            storage_service: Upload storage service
            storage_settings: Storage settings (default icon)
            composer: Visibility composer
        """
        self.user_service = user_service
        self.jwt_service = jwt_service
        self.storage_service = storage_service
        self.storage_settings = storage_settings
        self.composer = composer

    async def execute(self, request: RegisterRequest) -> RegisterResponse:
        """Execute register flow.

        Steps:
        1. Only anonymous callers and admins may register accounts
        2. Validate handle and email
        3. Store the icon, if any
        4. Insert the user; a taken handle or email is a conflict and the
           stored icon is removed again
        5. Issue a session token for anonymous callers

        Raises:
            ForbiddenError: If a signed-in non-admin registers
            ValidationError: If the handle or email is malformed
            ConflictError: If the handle or email is taken
        """
        viewer = await load_viewer(self.user_service, request.viewer_id)
        if viewer is not None and not viewer.is_admin:
            logfire.warn("Signed-in user tried to register", viewer_id=str(viewer.id))
            raise ForbiddenError()

        handle = parse_field(request.handle, Handle, "handle")
        email = request.email.strip()
        if "@" not in email or email.startswith("@") or email.endswith("@"):
            raise ValidationError(MessageKey.INVALID_REQUEST, "Invalid email")

        with logfire.span("register.execute", handle=handle.root):
            icon = self.storage_settings.default_user_icon
            if request.icon is not None:
                icon = await self.storage_service.save(
                    request.icon, "users", handle.root
                )

            try:
                user = await self.user_service.register(
                    handle=handle,
                    email=email,
                    display_name=request.display_name,
                    icon=icon,
                )
            except Exception:
                await self.storage_service.discard([icon])
                raise

            token = None
            if viewer is None:
                token = self.jwt_service.create_token(user.id, user.handle.root)

            return RegisterResponse(
                user=self.composer.compose_user(user, viewer or user),
                token=token,
            )

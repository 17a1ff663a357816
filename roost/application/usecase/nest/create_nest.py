"""Create nest use case."""

import logfire

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer, parse_field
from roost.application.view import NestViewAssembler
from roost.config import StorageSettings
from roost.domain.model import NestView
from roost.domain.service import NestService, StorageService, Upload, UserService
from roost.domain.service.policy import require_active
from roost.domain.value import NestTitle


class CreateNestRequest(ViewerRequest):
    """Create nest request."""

    title: str
    display_name: str | None = None
    description: str | None = None
    icon: Upload | None = None


class CreateNestUseCase(BaseUseCase):
    """Use case for creating a nest moderated by the viewer."""

    def __init__(
        self,
        nest_service: NestService,
        user_service: UserService,
        storage_service: StorageService,
        storage_settings: StorageSettings,
        assembler: NestViewAssembler,
    ) -> None:
        self.nest_service = nest_service
        self.user_service = user_service
        self.storage_service = storage_service
        self.storage_settings = storage_settings
        self.assembler = assembler

    async def execute(self, request: CreateNestRequest) -> NestView:
        """Execute create nest flow.

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If the viewer is banned
            ValidationError: If the title is malformed or the icon rejected
            ConflictError: NEST_TITLE_CONFLICT if the title is taken
        """
        viewer = require_active(
            await load_viewer(self.user_service, request.viewer_id)
        )
        title = parse_field(request.title, NestTitle, "nest title")

        with logfire.span("create_nest.execute", title=title.root):
            icon = self.storage_settings.default_nest_icon
            if request.icon is not None:
                icon = await self.storage_service.save(request.icon, "nests", title.root)

            try:
                nest = await self.nest_service.create(
                    viewer,
                    title=title,
                    display_name=request.display_name,
                    description=request.description,
                    icon=icon,
                )
            except Exception:
                await self.storage_service.discard([icon])
                raise

            return await self.assembler.assemble_one(nest, viewer)

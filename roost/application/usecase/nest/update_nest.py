"""Update nest use case."""

import logfire

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer, parse_id
from roost.application.view import NestViewAssembler
from roost.domain.message import MessageKey
from roost.domain.model import NestView
from roost.domain.service import NestService, StorageService, Upload, UserService
from roost.domain.value import NestId


class UpdateNestRequest(ViewerRequest):
    """Update nest request. Absent fields stay unchanged."""

    nest_id: str
    display_name: str | None = None
    description: str | None = None
    icon: Upload | None = None


class UpdateNestUseCase(BaseUseCase):
    """Use case for editing a nest (moderator or admin)."""

    def __init__(
        self,
        nest_service: NestService,
        user_service: UserService,
        storage_service: StorageService,
        assembler: NestViewAssembler,
    ) -> None:
        self.nest_service = nest_service
        self.user_service = user_service
        self.storage_service = storage_service
        self.assembler = assembler

    async def execute(self, request: UpdateNestRequest) -> NestView:
        """Execute update nest flow.

        A new icon is removed again if the update fails. The replaced icon
        is removed once the transaction commits.

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If neither moderator nor admin, or banned
            NotFoundError: If the nest does not exist
        """
        viewer = await load_viewer(self.user_service, request.viewer_id)
        nest_id = NestId(parse_id(request.nest_id, MessageKey.NEST_NOT_FOUND))
        nest = await self.nest_service.check_can_update(viewer, nest_id)

        with logfire.span("update_nest.execute", nest_id=str(nest_id)):
            new_icon = None
            if request.icon is not None:
                new_icon = await self.storage_service.save(
                    request.icon, "nests", nest.title.root
                )

            try:
                updated = await self.nest_service.update(
                    nest,
                    display_name=request.display_name,
                    description=request.description,
                    icon=new_icon,
                )
            except Exception:
                if new_icon is not None:
                    await self.storage_service.discard([new_icon])
                raise

            if new_icon is not None and nest.icon != new_icon:
                self.storage_service.discard_after_commit([nest.icon])

            return await self.assembler.assemble_one(updated, viewer)

"""Get nest use case."""

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer, parse_id
from roost.application.view import NestViewAssembler
from roost.domain.error import ValidationError
from roost.domain.message import MessageKey
from roost.domain.model import NestView
from roost.domain.service import NestService, UserService
from roost.domain.value import NestId


class GetNestRequest(ViewerRequest):
    """Get nest request, by ID or by title."""

    nest_id: str | None = None
    title: str | None = None


class GetNestUseCase(BaseUseCase):
    """Use case for looking up one nest."""

    def __init__(
        self,
        nest_service: NestService,
        user_service: UserService,
        assembler: NestViewAssembler,
    ) -> None:
        self.nest_service = nest_service
        self.user_service = user_service
        self.assembler = assembler

    async def execute(self, request: GetNestRequest) -> NestView:
        """Raises NotFoundError (NEST_NOT_FOUND) when nothing matches."""
        viewer = await load_viewer(self.user_service, request.viewer_id)

        if request.nest_id is not None:
            nest = await self.nest_service.get_by_id(
                NestId(parse_id(request.nest_id, MessageKey.NEST_NOT_FOUND))
            )
        elif request.title is not None:
            nest = await self.nest_service.get_by_title(request.title)
        else:
            raise ValidationError(MessageKey.INVALID_REQUEST)

        return await self.assembler.assemble_one(nest, viewer)

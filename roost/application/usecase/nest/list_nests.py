"""List, search and "my nests" use cases."""

import logfire

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import (
    PageRequest,
    PagedResponse,
    PaginationInfo,
    ViewerRequest,
    load_viewer,
    page_for,
)
from roost.application.view import NestViewAssembler
from roost.config import PaginationSettings
from roost.domain.model import NestView
from roost.domain.service import NestService, UserService, normalize_search_query
from roost.domain.service.policy import require_viewer


class ListNestsRequest(PageRequest):
    """List nests request."""


class SearchNestsRequest(PageRequest):
    """Search nests request."""

    query: str | None = None


class ListMyNestsRequest(ViewerRequest):
    """List the viewer's moderated nests."""


class ListNestsUseCase(BaseUseCase):
    """Use case for listing nests, newest first."""

    def __init__(
        self,
        nest_service: NestService,
        user_service: UserService,
        assembler: NestViewAssembler,
        pagination: PaginationSettings,
    ) -> None:
        self.nest_service = nest_service
        self.user_service = user_service
        self.assembler = assembler
        self.pagination = pagination

    async def execute(self, request: ListNestsRequest) -> PagedResponse[NestView]:
        viewer = await load_viewer(self.user_service, request.viewer_id)
        page = page_for(request, await self.nest_service.count(), self.pagination)
        nests = await self.nest_service.list_nests(page)
        return PagedResponse[NestView](
            pagination=PaginationInfo.from_page(page),
            items=await self.assembler.assemble(nests, viewer),
        )


class SearchNestsUseCase(BaseUseCase):
    """Use case for searching nests by title or description."""

    def __init__(
        self,
        nest_service: NestService,
        user_service: UserService,
        assembler: NestViewAssembler,
        pagination: PaginationSettings,
    ) -> None:
        self.nest_service = nest_service
        self.user_service = user_service
        self.assembler = assembler
        self.pagination = pagination

    async def execute(self, request: SearchNestsRequest) -> PagedResponse[NestView]:
        """Search nests.

        Raises:
            ValidationError: SEARCH_NO_QUERY or QUERY_TOO_SMALL
        """
        query = normalize_search_query(request.query)
        viewer = await load_viewer(self.user_service, request.viewer_id)

        with logfire.span("search_nests.execute", query=query):
            total = await self.nest_service.count_search(query)
            page = page_for(request, total, self.pagination)
            nests = await self.nest_service.search(query, page)

            logfire.info("Nests searched", query=query, total=total)
            return PagedResponse[NestView](
                pagination=PaginationInfo.from_page(page),
                items=await self.assembler.assemble(nests, viewer),
            )


class ListMyNestsUseCase(BaseUseCase):
    """Use case for listing the nests the viewer moderates."""

    def __init__(
        self,
        nest_service: NestService,
        user_service: UserService,
        assembler: NestViewAssembler,
    ) -> None:
        self.nest_service = nest_service
        self.user_service = user_service
        self.assembler = assembler

    async def execute(self, request: ListMyNestsRequest) -> list[NestView]:
        """Raises UnauthorizedError when anonymous."""
        viewer = require_viewer(
            await load_viewer(self.user_service, request.viewer_id)
        )
        nests = await self.nest_service.list_moderated_by(viewer)
        return await self.assembler.assemble(nests, viewer)

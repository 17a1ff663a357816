"""List posts use case."""

from typing import Optional

import logfire

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import (
    PageRequest,
    PagedResponse,
    PaginationInfo,
    load_viewer,
    page_for,
    parse_id,
)
from roost.application.view import PostViewAssembler
from roost.config import PaginationSettings
from roost.domain.message import MessageKey
from roost.domain.model import PostView
from roost.domain.repository import PostSortOrder
from roost.domain.service import (
    NestService,
    PostService,
    UserService,
    normalize_search_query,
)
from roost.domain.value import NestId, UserId


class ListPostsRequest(PageRequest):
    """List posts request.

    At most one of ``nest_title``, ``author_id`` and ``author_handle`` is
    expected; without any the whole feed is listed.
    """

    sort: PostSortOrder = PostSortOrder.NEW
    nest_title: str | None = None
    author_id: str | None = None
    author_handle: str | None = None


class ListPostsUseCase(BaseUseCase):
    """Use case for listing posts with filtering and pagination."""

    def __init__(
        self,
        post_service: PostService,
        nest_service: NestService,
        user_service: UserService,
        assembler: PostViewAssembler,
        pagination: PaginationSettings,
    ) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            nest_service: Nest domain service (nest filter)
            user_service: User domain service (viewer and author filter)
            assembler: Post view assembler
            pagination: Page size rules
        """
        self.post_service = post_service
        self.nest_service = nest_service
        self.user_service = user_service
        self.assembler = assembler
        self.pagination = pagination

    async def execute(self, request: ListPostsRequest) -> PagedResponse[PostView]:
        """Execute list posts flow.

        Raises:
            ValidationError: QUERY_TOO_SMALL for nest titles under 3 characters
            NotFoundError: If the nest or author filter matches nothing
        """
        viewer = await load_viewer(self.user_service, request.viewer_id)

        nest_id: Optional[NestId] = None
        if request.nest_title is not None:
            title = normalize_search_query(request.nest_title)
            nest_id = (await self.nest_service.get_by_title(title)).id

        author_id: Optional[UserId] = None
        if request.author_id is not None:
            author_id = UserId(parse_id(request.author_id, MessageKey.USER_NOT_FOUND))
            await self.user_service.get_by_id(author_id)
        elif request.author_handle is not None:
            author_id = (await self.user_service.get_by_handle(request.author_handle)).id

        with logfire.span(
            "list_posts.execute",
            sort=request.sort.value,
            nest_id=str(nest_id) if nest_id else None,
            author_id=str(author_id) if author_id else None,
        ):
            total = await self.post_service.count(nest_id=nest_id, author_id=author_id)
            page = page_for(request, total, self.pagination)
            posts = await self.post_service.list_posts(
                page, sort=request.sort, nest_id=nest_id, author_id=author_id
            )

            logfire.info("Posts listed", count=len(posts), total=total)
            return PagedResponse[PostView](
                pagination=PaginationInfo.from_page(page),
                items=await self.assembler.assemble(posts, viewer),
            )

"""List and search users use cases."""

import logfire

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import (
    PageRequest,
    PagedResponse,
    PaginationInfo,
    load_viewer,
    page_for,
)
from roost.config import PaginationSettings
from roost.domain.model import UserView
from roost.domain.service import UserService, VisibilityComposer, normalize_search_query
from roost.domain.service.policy import require_admin


class ListUsersRequest(PageRequest):
    """List users request."""


class SearchUsersRequest(PageRequest):
    """Search users request."""

    query: str | None = None


class ListUsersUseCase(BaseUseCase):
    """Use case for listing every account. Admin only."""

    def __init__(
        self,
        user_service: UserService,
        composer: VisibilityComposer,
        pagination: PaginationSettings,
    ) -> None:
        self.user_service = user_service
        self.composer = composer
        self.pagination = pagination

    async def execute(self, request: ListUsersRequest) -> PagedResponse[UserView]:
        """List users, newest first.

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If the viewer is not an admin
        """
        viewer = require_admin(await load_viewer(self.user_service, request.viewer_id))

        page = page_for(request, await self.user_service.count(), self.pagination)
        users = await self.user_service.list_users(viewer, page)

        return PagedResponse[UserView](
            pagination=PaginationInfo.from_page(page),
            items=[self.composer.compose_user(user, viewer) for user in users],
        )


class SearchUsersUseCase(BaseUseCase):
    """Use case for searching users by handle or display name."""

    def __init__(
        self,
        user_service: UserService,
        composer: VisibilityComposer,
        pagination: PaginationSettings,
    ) -> None:
        self.user_service = user_service
        self.composer = composer
        self.pagination = pagination

    async def execute(self, request: SearchUsersRequest) -> PagedResponse[UserView]:
        """Search users.

        Raises:
            ValidationError: SEARCH_NO_QUERY or QUERY_TOO_SMALL
        """
        query = normalize_search_query(request.query)
        viewer = await load_viewer(self.user_service, request.viewer_id)

        with logfire.span("search_users.execute", query=query):
            total = await self.user_service.count_search(query)
            page = page_for(request, total, self.pagination)
            users = await self.user_service.search(query, page)

            logfire.info("Users searched", query=query, total=total)
            return PagedResponse[UserView](
                pagination=PaginationInfo.from_page(page),
                items=[self.composer.compose_user(user, viewer) for user in users],
            )

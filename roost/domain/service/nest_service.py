"""Nest domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from roost.domain.error import ForbiddenError, NotFoundError
from roost.domain.message import MessageKey
from roost.domain.model import Nest, User
from roost.domain.model.common import utcnow
from roost.domain.repository import NestRepository
from roost.domain.value import NestId, NestTitle

from .base import Service
from .pagination import Page
from .policy import require_active


class NestService(Service):
    """Domain service for nest operations."""

    def __init__(self, nest_repository: NestRepository) -> None:
        """Initialize nest service.

        Args:
            nest_repository: Nest repository
        """
        self.nest_repository = nest_repository

    async def get_by_id(self, nest_id: NestId) -> Nest:
        """Get a nest by ID.

        Raises:
            NotFoundError: If nest not found
        """
        with logfire.span("nest_service.get_by_id", nest_id=str(nest_id)):
            nest = await self.nest_repository.find_by_id(nest_id)
            if nest is None:
                logfire.warn("Nest not found", nest_id=str(nest_id))
                raise NotFoundError(MessageKey.NEST_NOT_FOUND, str(nest_id))
            return nest

    async def get_by_title(self, title: str) -> Nest:
        """Get a nest by title (case-insensitive).

        Raises:
            NotFoundError: If no nest has the title (or it is malformed)
        """
        with logfire.span("nest_service.get_by_title", title=title):
            try:
                parsed = NestTitle(title)
            except ValueError:
                raise NotFoundError(MessageKey.NEST_NOT_FOUND, title)

            nest = await self.nest_repository.find_by_title(parsed)
            if nest is None:
                logfire.warn("Nest not found", title=parsed.root)
                raise NotFoundError(MessageKey.NEST_NOT_FOUND, parsed.root)
            return nest

    async def find_by_ids(self, nest_ids: list[NestId]) -> dict[NestId, Nest]:
        """Load several nests keyed by ID."""
        if not nest_ids:
            return {}
        nests = await self.nest_repository.find_by_ids(nest_ids)
        return {nest.id: nest for nest in nests}

    async def count(self) -> int:
        """Count all nests."""
        return await self.nest_repository.count()

    async def list_nests(self, page: Page) -> list[Nest]:
        """List nests, newest first."""
        return await self.nest_repository.find_all(limit=page.limit, offset=page.skip)

    async def count_search(self, query: str) -> int:
        """Count nests matching a normalized search query."""
        return await self.nest_repository.count_search(query)

    async def search(self, query: str, page: Page) -> list[Nest]:
        """Search nests by title or description."""
        with logfire.span("nest_service.search", query=query):
            return await self.nest_repository.search(
                query, limit=page.limit, offset=page.skip
            )

    async def list_moderated_by(self, user: User) -> list[Nest]:
        """List the nests a user moderates."""
        return await self.nest_repository.find_by_moderator(user.id)

    async def create(
        self,
        viewer: Optional[User],
        title: NestTitle,
        display_name: Optional[str],
        description: Optional[str],
        icon: str,
    ) -> Nest:
        """Create a nest moderated by the viewer.

        Args:
            viewer: Current viewer, becomes the moderator
            title: Unique title
            display_name: Display name, defaults to the title
            description: Description text
            icon: Icon URL

        Returns:
            Created nest

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If the viewer is banned
            ConflictError: If the title is taken
        """
        moderator = require_active(viewer)
        with logfire.span(
            "nest_service.create", title=title.root, moderator_id=str(moderator.id)
        ):
            nest = Nest(
                id=NestId(uuid4()),
                title=title,
                display_name=(display_name or "").strip() or title.root,
                description=(description or "").strip(),
                icon=icon,
                moderator_id=moderator.id,
                created_at=utcnow(),
            )
            saved = await self.nest_repository.add(nest)
            logfire.info("Nest created", nest_id=str(saved.id), title=title.root)
            return saved

    async def check_can_update(self, viewer: Optional[User], nest_id: NestId) -> Nest:
        """Load a nest the viewer may edit (its moderator or an admin).

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If banned, or neither moderator nor admin
            NotFoundError: If the nest does not exist
        """
        actor = require_active(viewer)
        nest = await self.get_by_id(nest_id)
        if not nest.is_moderated_by(actor.id) and not actor.is_admin:
            logfire.warn(
                "Unauthorized nest update",
                nest_id=str(nest_id),
                actor_id=str(actor.id),
            )
            raise ForbiddenError()
        return nest

    async def update(
        self,
        nest: Nest,
        display_name: Optional[str] = None,
        description: Optional[str] = None,
        icon: Optional[str] = None,
    ) -> Nest:
        """Update a nest's display fields. Absent fields stay unchanged."""
        with logfire.span("nest_service.update", nest_id=str(nest.id)):
            changes: dict[str, str] = {}
            if display_name is not None and display_name.strip():
                changes["display_name"] = display_name.strip()
            if description is not None:
                changes["description"] = description.strip()
            if icon is not None:
                changes["icon"] = icon

            if not changes:
                return nest

            updated = await self.nest_repository.save(nest.evolve(**changes))
            logfire.info("Nest updated", nest_id=str(nest.id), fields=sorted(changes))
            return updated

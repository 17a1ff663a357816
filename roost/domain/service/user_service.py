"""User domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from roost.domain.error import ForbiddenError, NotFoundError, ValidationError
from roost.domain.message import MessageKey
from roost.domain.model import User
from roost.domain.model.common import utcnow
from roost.domain.repository import UserRepository
from roost.domain.value import Handle, UserId

from .base import Service
from .pagination import Page
from .policy import require_admin, require_viewer


class UserService(Service):
    """Domain service for user accounts and moderation."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError(MessageKey.USER_NOT_FOUND, str(user_id))
            return user

    async def find_viewer(self, user_id: Optional[UserId]) -> Optional[User]:
        """Resolve the current viewer from a session user ID.

        A session pointing at a deleted account is treated as anonymous.
        """
        if user_id is None:
            return None
        with logfire.span("user_service.find_viewer", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                logfire.warn("Session for unknown user", user_id=str(user_id))
            return user

    async def find_by_ids(self, user_ids: list[UserId]) -> dict[UserId, User]:
        """Load several users at once, keyed by ID. Unknown IDs are skipped."""
        if not user_ids:
            return {}
        users = await self.user_repository.find_by_ids(list(dict.fromkeys(user_ids)))
        return {user.id: user for user in users}

    async def get_by_handle(self, handle: str) -> User:
        """Get user by handle.

        Raises:
            NotFoundError: If no user has the handle (or it is malformed)
        """
        with logfire.span("user_service.get_by_handle", handle=handle):
            try:
                parsed = Handle(handle)
            except ValueError:
                raise NotFoundError(MessageKey.USER_NOT_FOUND, handle)

            user = await self.user_repository.find_by_handle(parsed)
            if not user:
                logfire.warn("User not found", handle=parsed.root)
                raise NotFoundError(MessageKey.USER_NOT_FOUND, parsed.root)
            return user

    async def get_by_email(self, viewer: Optional[User], email: str) -> User:
        """Get user by email. Admin only.

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If the viewer is not an admin
            NotFoundError: If no user has the email
        """
        require_admin(viewer)
        with logfire.span("user_service.get_by_email"):
            user = await self.user_repository.find_by_email(email.strip())
            if not user:
                raise NotFoundError(MessageKey.USER_NOT_FOUND, email)
            return user

    async def count(self) -> int:
        """Count all users."""
        return await self.user_repository.count()

    async def list_users(self, viewer: Optional[User], page: Page) -> list[User]:
        """List users for an admin."""
        require_admin(viewer)
        return await self.user_repository.find_all(limit=page.limit, offset=page.skip)

    async def count_search(self, query: str) -> int:
        """Count users matching a normalized search query."""
        return await self.user_repository.count_search(query)

    async def search(self, query: str, page: Page) -> list[User]:
        """Search users by handle or display name."""
        with logfire.span("user_service.search", query=query):
            return await self.user_repository.search(
                query, limit=page.limit, offset=page.skip
            )

    async def register(
        self,
        handle: Handle,
        email: str,
        display_name: Optional[str],
        icon: str,
    ) -> User:
        """Create a new account.

        Duplicate handles and emails are reported by the repository from the
        unique constraints, so two simultaneous registrations cannot both
        succeed.

        Args:
            handle: Requested handle (already lowercased)
            email: Email address
            display_name: Display name, defaults to the handle
            icon: Icon URL

        Returns:
            Created user

        Raises:
            ConflictError: If the handle or email is taken
        """
        with logfire.span("user_service.register", handle=handle.root):
            user = User(
                id=UserId(uuid4()),
                handle=handle,
                display_name=(display_name or "").strip() or handle.root,
                email=email.strip().lower(),
                icon=icon,
                created_at=utcnow(),
            )
            saved = await self.user_repository.add(user)
            logfire.info("User registered", user_id=str(saved.id), handle=handle.root)
            return saved

    async def check_can_update(self, viewer: Optional[User], user_id: UserId) -> User:
        """Load a user the viewer is allowed to edit (self or admin).

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If editing someone else without being admin
            NotFoundError: If the user does not exist
        """
        actor = require_viewer(viewer)
        if actor.id != user_id and not actor.is_admin:
            logfire.warn(
                "Unauthorized profile update",
                actor_id=str(actor.id),
                user_id=str(user_id),
            )
            raise ForbiddenError()
        if actor.id == user_id and actor.is_banned:
            raise ForbiddenError(MessageKey.USER_BANNED)
        return await self.get_by_id(user_id)

    async def update_profile(
        self,
        user: User,
        display_name: Optional[str] = None,
        icon: Optional[str] = None,
        handle: Optional[str] = None,
    ) -> User:
        """Update a user's display name and icon.

        Handles are immutable; sending a different one is rejected.

        Raises:
            ValidationError: USER_HANDLE_CHANGE if the handle differs
        """
        with logfire.span("user_service.update_profile", user_id=str(user.id)):
            if handle is not None and handle.strip().lower() != user.handle.root:
                raise ValidationError(MessageKey.USER_HANDLE_CHANGE)

            changes: dict[str, str] = {}
            if display_name is not None and display_name.strip():
                changes["display_name"] = display_name.strip()
            if icon is not None:
                changes["icon"] = icon

            if not changes:
                return user

            updated = await self.user_repository.save(user.evolve(**changes))
            logfire.info("User updated", user_id=str(user.id), fields=sorted(changes))
            return updated

    async def ban(self, viewer: Optional[User], user_id: UserId) -> User:
        """Ban a user. Admin only, never on self."""
        target = await self._moderation_target(viewer, user_id)
        if target.is_banned:
            raise ValidationError(MessageKey.USER_ALREADY_BANNED)
        return await self._apply(target, is_banned=True)

    async def unban(self, viewer: Optional[User], user_id: UserId) -> User:
        """Lift a ban. Admin only, never on self."""
        target = await self._moderation_target(viewer, user_id)
        if not target.is_banned:
            raise ValidationError(MessageKey.USER_ALREADY_UNBANNED)
        return await self._apply(target, is_banned=False)

    async def promote(self, viewer: Optional[User], user_id: UserId) -> User:
        """Make a user an admin. Admin only, never on self."""
        target = await self._moderation_target(viewer, user_id)
        if target.is_admin:
            raise ValidationError(MessageKey.USER_ALREADY_ADMIN)
        return await self._apply(target, is_admin=True)

    async def _moderation_target(self, viewer: Optional[User], user_id: UserId) -> User:
        admin = require_admin(viewer)
        if admin.id == user_id:
            raise ForbiddenError(MessageKey.USER_SELF_MODERATION)
        return await self.get_by_id(user_id)

    async def _apply(self, target: User, **changes: bool) -> User:
        with logfire.span(
            "user_service.moderate", user_id=str(target.id), changes=changes
        ):
            updated = await self.user_repository.save(target.evolve(**changes))
            logfire.info("User moderated", user_id=str(target.id), changes=changes)
            return updated

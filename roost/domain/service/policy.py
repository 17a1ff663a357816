"""Viewer permission checks used by the domain services."""

from typing import Optional

from roost.domain.error import ForbiddenError, UnauthorizedError
from roost.domain.message import MessageKey
from roost.domain.model import User


def require_viewer(viewer: Optional[User]) -> User:
    """Return the viewer or raise UnauthorizedError for anonymous callers."""
    if viewer is None:
        raise UnauthorizedError()
    return viewer


def require_active(viewer: Optional[User]) -> User:
    """Return a signed-in, non-banned viewer.

    Raises:
        UnauthorizedError: If there is no viewer
        ForbiddenError: USER_BANNED if the viewer is banned
    """
    user = require_viewer(viewer)
    if user.is_banned:
        raise ForbiddenError(MessageKey.USER_BANNED)
    return user


def require_admin(viewer: Optional[User]) -> User:
    """Return a signed-in admin viewer.

    Raises:
        UnauthorizedError: If there is no viewer
        ForbiddenError: If the viewer is not an admin
    """
    user = require_viewer(viewer)
    if not user.is_admin:
        raise ForbiddenError()
    return user


def is_admin(viewer: Optional[User]) -> bool:
    """Check whether the viewer is a signed-in admin."""
    return viewer is not None and viewer.is_admin

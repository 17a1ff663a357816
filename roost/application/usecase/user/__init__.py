"""User use cases."""

from .get_user import GetUserRequest, GetUserUseCase
from .list_users import (
    ListUsersRequest,
    ListUsersUseCase,
    SearchUsersRequest,
    SearchUsersUseCase,
)
from .moderate_user import ModerateUserRequest, ModerateUserUseCase, ModerationAction
from .update_user import UpdateUserRequest, UpdateUserUseCase

__all__ = [
    "GetUserRequest",
    "GetUserUseCase",
    "ListUsersRequest",
    "ListUsersUseCase",
    "ModerateUserRequest",
    "ModerateUserUseCase",
    "ModerationAction",
    "SearchUsersRequest",
    "SearchUsersUseCase",
    "UpdateUserRequest",
    "UpdateUserUseCase",
]

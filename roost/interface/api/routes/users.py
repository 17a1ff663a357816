"""User routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, File, Form, Query, UploadFile

from roost.application.usecase.auth import GetCurrentUserRequest, GetCurrentUserUseCase
from roost.application.usecase.common import PagedResponse
from roost.application.usecase.user import (
    GetUserRequest,
    GetUserUseCase,
    ListUsersRequest,
    ListUsersUseCase,
    ModerateUserRequest,
    ModerateUserUseCase,
    ModerationAction,
    SearchUsersRequest,
    SearchUsersUseCase,
    UpdateUserRequest,
    UpdateUserUseCase,
)
from roost.domain.message import MessageBundle, MessageKey
from roost.domain.model import UserView
from roost.interface.api.response import Envelope, envelope, read_upload
from roost.util.di import Session

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)

MODERATION_MESSAGES: dict[ModerationAction, MessageKey] = {
    ModerationAction.BAN: MessageKey.USER_BAN_APPLIED,
    ModerationAction.UNBAN: MessageKey.USER_BAN_LIFTED,
    ModerationAction.PROMOTE: MessageKey.USER_PROMOTED,
}


@router.get("", response_model=Envelope[PagedResponse[UserView]])
async def list_users(
    list_users_use_case: FromDishka[ListUsersUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
    page: int = Query(default=1),
    limit: int = Query(default=20),
) -> Envelope[PagedResponse[UserView]]:
    """List all users, newest first. Admin only."""
    result = await list_users_use_case.execute(
        ListUsersRequest(viewer_id=session.user_id, page=page, limit=limit)
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, result)


@router.get("/me", response_model=Envelope[UserView])
async def get_me(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[UserView]:
    """Get the signed-in user."""
    user = await get_current_user_use_case.execute(
        GetCurrentUserRequest(viewer_id=session.user_id)
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, user)


@router.get("/search", response_model=Envelope[PagedResponse[UserView]])
async def search_users(
    search_users_use_case: FromDishka[SearchUsersUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
    q: str | None = Query(default=None),
    page: int = Query(default=1),
    limit: int = Query(default=20),
) -> Envelope[PagedResponse[UserView]]:
    """Search users by handle or display name (at least 3 characters)."""
    result = await search_users_use_case.execute(
        SearchUsersRequest(
            viewer_id=session.user_id, query=q, page=page, limit=limit
        )
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, result)


@router.get("/id/{user_id}", response_model=Envelope[UserView])
async def get_user_by_id(
    user_id: str,
    get_user_use_case: FromDishka[GetUserUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[UserView]:
    """Get a user by ID."""
    user = await get_user_use_case.execute(
        GetUserRequest(viewer_id=session.user_id, user_id=user_id)
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, user)


@router.get("/handle/{handle}", response_model=Envelope[UserView])
async def get_user_by_handle(
    handle: str,
    get_user_use_case: FromDishka[GetUserUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[UserView]:
    """Get a user by handle."""
    user = await get_user_use_case.execute(
        GetUserRequest(viewer_id=session.user_id, handle=handle)
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, user)


@router.get("/email/{email}", response_model=Envelope[UserView])
async def get_user_by_email(
    email: str,
    get_user_use_case: FromDishka[GetUserUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[UserView]:
    """Get a user by email. Admin only."""
    user = await get_user_use_case.execute(
        GetUserRequest(viewer_id=session.user_id, email=email)
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, user)


@router.patch("/{user_id}", response_model=Envelope[UserView])
async def update_user(
    user_id: str,
    update_user_use_case: FromDishka[UpdateUserUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
    display_name: str | None = Form(default=None),
    handle: str | None = Form(default=None),
    icon: UploadFile | None = File(default=None),
) -> Envelope[UserView]:
    """Update a profile. Self or admin; the handle cannot change."""
    user = await update_user_use_case.execute(
        UpdateUserRequest(
            viewer_id=session.user_id,
            user_id=user_id,
            display_name=display_name,
            handle=handle,
            icon=await read_upload(icon),
        )
    )
    return envelope(bundle, MessageKey.USER_UPDATED, user)


@router.patch("/{user_id}/{action}", response_model=Envelope[UserView])
async def moderate_user(
    user_id: str,
    action: ModerationAction,
    moderate_user_use_case: FromDishka[ModerateUserUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[UserView]:
    """Ban, unban or promote a user. Admin only, never on self."""
    user = await moderate_user_use_case.execute(
        ModerateUserRequest(viewer_id=session.user_id, user_id=user_id, action=action)
    )
    return envelope(bundle, MODERATION_MESSAGES[action], user)

"""Authentication routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, File, Form, Response, UploadFile, status
import logfire

from roost.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    RegisterRequest,
    RegisterUseCase,
)
from roost.config import AuthSettings
from roost.domain.message import MessageBundle, MessageKey
from roost.domain.model import UserView
from roost.interface.api.response import Envelope, envelope, read_upload
from roost.util.di import Session

router = APIRouter(prefix="/auth", tags=["auth"], route_class=DishkaRoute)


@router.post(
    "/register",
    response_model=Envelope[UserView],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    response: Response,
    register_use_case: FromDishka[RegisterUseCase],
    auth_settings: FromDishka[AuthSettings],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
    handle: str = Form(),
    email: str = Form(),
    display_name: str | None = Form(default=None),
    icon: UploadFile | None = File(default=None),
) -> Envelope[UserView]:
    """Register a new account.

    Anonymous callers are signed in as the new user. Admins may register
    accounts for others and keep their own session.

    Sets cookie: auth_token (anonymous callers only)
    """
    result = await register_use_case.execute(
        RegisterRequest(
            viewer_id=session.user_id,
            handle=handle,
            email=email,
            display_name=display_name,
            icon=await read_upload(icon),
        )
    )

    if result.token is not None:
        response.set_cookie(
            key=auth_settings.cookie_name,
            value=result.token,
            httponly=True,
            secure=auth_settings.cookie_secure,
            samesite="lax",
            path="/",
            max_age=auth_settings.jwt_expiry_days * 24 * 60 * 60,
        )
        logfire.info("Auth cookie set", user_id=str(result.user.id))

    return envelope(bundle, MessageKey.USER_CREATED, result.user)


@router.post("/logout", response_model=Envelope[None])
async def logout(
    response: Response,
    auth_settings: FromDishka[AuthSettings],
    bundle: FromDishka[MessageBundle],
) -> Envelope[None]:
    """Logout by clearing the authentication cookie."""
    response.delete_cookie(key=auth_settings.cookie_name, path="/")
    return envelope(bundle, MessageKey.USER_SIGNED_OUT)


@router.get("/me", response_model=Envelope[UserView])
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[UserView]:
    """Get the signed-in user. 401 when anonymous."""
    user = await get_current_user_use_case.execute(
        GetCurrentUserRequest(viewer_id=session.user_id)
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, user)

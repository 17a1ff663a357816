"""Nest routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, File, Form, Query, UploadFile, status

from roost.application.usecase.common import PagedResponse
from roost.application.usecase.nest import (
    CreateNestRequest,
    CreateNestUseCase,
    GetNestRequest,
    GetNestUseCase,
    ListMyNestsRequest,
    ListMyNestsUseCase,
    ListNestsRequest,
    ListNestsUseCase,
    SearchNestsRequest,
    SearchNestsUseCase,
    UpdateNestRequest,
    UpdateNestUseCase,
)
from roost.domain.message import MessageBundle, MessageKey
from roost.domain.model import NestView
from roost.interface.api.response import Envelope, envelope, read_upload
from roost.util.di import Session

router = APIRouter(prefix="/nests", tags=["nests"], route_class=DishkaRoute)


@router.get("", response_model=Envelope[PagedResponse[NestView]])
async def list_nests(
    list_nests_use_case: FromDishka[ListNestsUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
    page: int = Query(default=1),
    limit: int = Query(default=20),
) -> Envelope[PagedResponse[NestView]]:
    """List nests, newest first."""
    result = await list_nests_use_case.execute(
        ListNestsRequest(viewer_id=session.user_id, page=page, limit=limit)
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, result)


@router.get("/search", response_model=Envelope[PagedResponse[NestView]])
async def search_nests(
    search_nests_use_case: FromDishka[SearchNestsUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
    q: str | None = Query(default=None),
    page: int = Query(default=1),
    limit: int = Query(default=20),
) -> Envelope[PagedResponse[NestView]]:
    """Search nests by title or description."""
    result = await search_nests_use_case.execute(
        SearchNestsRequest(
            viewer_id=session.user_id, query=q, page=page, limit=limit
        )
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, result)


@router.get("/me", response_model=Envelope[list[NestView]])
async def list_my_nests(
    list_my_nests_use_case: FromDishka[ListMyNestsUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[list[NestView]]:
    """List the nests the signed-in user moderates."""
    result = await list_my_nests_use_case.execute(
        ListMyNestsRequest(viewer_id=session.user_id)
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, result)


@router.get("/title/{title}", response_model=Envelope[NestView])
async def get_nest_by_title(
    title: str,
    get_nest_use_case: FromDishka[GetNestUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[NestView]:
    """Get a nest by its title."""
    nest = await get_nest_use_case.execute(
        GetNestRequest(viewer_id=session.user_id, title=title)
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, nest)


@router.get("/{nest_id}", response_model=Envelope[NestView])
async def get_nest(
    nest_id: str,
    get_nest_use_case: FromDishka[GetNestUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[NestView]:
    """Get a nest by ID."""
    nest = await get_nest_use_case.execute(
        GetNestRequest(viewer_id=session.user_id, nest_id=nest_id)
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, nest)


@router.post(
    "", response_model=Envelope[NestView], status_code=status.HTTP_201_CREATED
)
async def create_nest(
    create_nest_use_case: FromDishka[CreateNestUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
    title: str = Form(),
    display_name: str | None = Form(default=None),
    description: str | None = Form(default=None),
    icon: UploadFile | None = File(default=None),
) -> Envelope[NestView]:
    """Create a nest moderated by the signed-in user."""
    nest = await create_nest_use_case.execute(
        CreateNestRequest(
            viewer_id=session.user_id,
            title=title,
            display_name=display_name,
            description=description,
            icon=await read_upload(icon),
        )
    )
    return envelope(bundle, MessageKey.NEST_CREATED, nest)


@router.put("/{nest_id}", response_model=Envelope[NestView])
async def update_nest(
    nest_id: str,
    update_nest_use_case: FromDishka[UpdateNestUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
    display_name: str | None = Form(default=None),
    description: str | None = Form(default=None),
    icon: UploadFile | None = File(default=None),
) -> Envelope[NestView]:
    """Update a nest. Moderator or admin only."""
    nest = await update_nest_use_case.execute(
        UpdateNestRequest(
            viewer_id=session.user_id,
            nest_id=nest_id,
            display_name=display_name,
            description=description,
            icon=await read_upload(icon),
        )
    )
    return envelope(bundle, MessageKey.NEST_UPDATED, nest)

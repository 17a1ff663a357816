"""Post routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, File, Form, Query, UploadFile, status
from pydantic import BaseModel

from roost.application.usecase.common import PagedResponse
from roost.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
    UpdatePostRequest,
    UpdatePostUseCase,
)
from roost.domain.message import MessageBundle, MessageKey
from roost.domain.model import PostView
from roost.domain.repository import PostSortOrder
from roost.interface.api.response import Envelope, envelope, read_upload
from roost.util.di import Session

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class UpdatePostAPIRequest(BaseModel):
    """API request for editing a post."""

    content: str


@router.get("", response_model=Envelope[PagedResponse[PostView]])
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
    sort: PostSortOrder = Query(default=PostSortOrder.NEW),
    page: int = Query(default=1),
    limit: int = Query(default=20),
) -> Envelope[PagedResponse[PostView]]:
    """List posts across all nests."""
    result = await list_posts_use_case.execute(
        ListPostsRequest(
            viewer_id=session.user_id, sort=sort, page=page, limit=limit
        )
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, result)


@router.get("/nest/{title}", response_model=Envelope[PagedResponse[PostView]])
async def list_nest_posts(
    title: str,
    list_posts_use_case: FromDishka[ListPostsUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
    sort: PostSortOrder = Query(default=PostSortOrder.NEW),
    page: int = Query(default=1),
    limit: int = Query(default=20),
) -> Envelope[PagedResponse[PostView]]:
    """List posts in one nest."""
    result = await list_posts_use_case.execute(
        ListPostsRequest(
            viewer_id=session.user_id,
            nest_title=title,
            sort=sort,
            page=page,
            limit=limit,
        )
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, result)


@router.get("/user/id/{user_id}", response_model=Envelope[PagedResponse[PostView]])
async def list_user_posts_by_id(
    user_id: str,
    list_posts_use_case: FromDishka[ListPostsUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
    page: int = Query(default=1),
    limit: int = Query(default=20),
) -> Envelope[PagedResponse[PostView]]:
    """List a user's posts, newest first."""
    result = await list_posts_use_case.execute(
        ListPostsRequest(
            viewer_id=session.user_id, author_id=user_id, page=page, limit=limit
        )
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, result)


@router.get(
    "/user/handle/{handle}", response_model=Envelope[PagedResponse[PostView]]
)
async def list_user_posts_by_handle(
    handle: str,
    list_posts_use_case: FromDishka[ListPostsUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
    page: int = Query(default=1),
    limit: int = Query(default=20),
) -> Envelope[PagedResponse[PostView]]:
    """List a user's posts by handle, newest first."""
    result = await list_posts_use_case.execute(
        ListPostsRequest(
            viewer_id=session.user_id, author_handle=handle, page=page, limit=limit
        )
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, result)


@router.get("/{post_id}", response_model=Envelope[PostView])
async def get_post(
    post_id: str,
    get_post_use_case: FromDishka[GetPostUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[PostView]:
    """Get a post by ID."""
    post = await get_post_use_case.execute(
        GetPostRequest(viewer_id=session.user_id, post_id=post_id)
    )
    return envelope(bundle, MessageKey.OPERATION_COMPLETED, post)


@router.post(
    "", response_model=Envelope[PostView], status_code=status.HTTP_201_CREATED
)
async def create_post(
    create_post_use_case: FromDishka[CreatePostUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
    nest_title: str = Form(),
    title: str = Form(),
    content: str = Form(default=""),
    images: list[UploadFile] = File(default=[]),
    alts: list[str] = Form(default=[]),
) -> Envelope[PostView]:
    """Create a post in a nest, with optional images.

    ``alts`` are matched to ``images`` by position.
    """
    uploads = []
    for image in images:
        upload = await read_upload(image)
        if upload is not None:
            uploads.append(upload)

    post = await create_post_use_case.execute(
        CreatePostRequest(
            viewer_id=session.user_id,
            nest_title=nest_title,
            title=title,
            content=content,
            images=uploads,
            alts=alts,
        )
    )
    return envelope(bundle, MessageKey.POST_CREATED, post)


@router.patch("/{post_id}", response_model=Envelope[PostView])
async def update_post(
    post_id: str,
    request: UpdatePostAPIRequest,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[PostView]:
    """Edit a post's content. Author only."""
    post = await update_post_use_case.execute(
        UpdatePostRequest(
            viewer_id=session.user_id, post_id=post_id, content=request.content
        )
    )
    return envelope(bundle, MessageKey.POST_UPDATED, post)


@router.delete("/{post_id}", response_model=Envelope[None])
async def delete_post(
    post_id: str,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    bundle: FromDishka[MessageBundle],
    session: FromDishka[Session],
) -> Envelope[None]:
    """Delete a post. Author, nest moderator or admin."""
    await delete_post_use_case.execute(
        DeletePostRequest(viewer_id=session.user_id, post_id=post_id)
    )
    return envelope(bundle, MessageKey.POST_DELETED)

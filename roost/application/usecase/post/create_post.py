"""Create post use case."""

from uuid import uuid4

import logfire

from roost.application.usecase.base import BaseUseCase
from roost.application.usecase.common import ViewerRequest, load_viewer
from roost.application.view import PostViewAssembler
from roost.domain.model import Media, PostView
from roost.domain.repository import MediaRepository
from roost.domain.service import (
    NestService,
    PostService,
    StorageService,
    Upload,
    UserService,
)
from roost.domain.service.policy import require_active
from roost.domain.value import MediaId, PostId


class CreatePostRequest(ViewerRequest):
    """Create post request.

    ``alts`` holds alt texts matched to ``images`` by position.
    """

    nest_title: str
    title: str
    content: str = ""
    images: list[Upload] = []
    alts: list[str] = []


class CreatePostUseCase(BaseUseCase):
    """Use case for creating a post with optional images."""

    def __init__(
        self,
        post_service: PostService,
        nest_service: NestService,
        user_service: UserService,
        storage_service: StorageService,
        media_repository: MediaRepository,
        assembler: PostViewAssembler,
    ) -> None:
        self.post_service = post_service
        self.nest_service = nest_service
        self.user_service = user_service
        self.storage_service = storage_service
        self.media_repository = media_repository
        self.assembler = assembler

    async def execute(self, request: CreatePostRequest) -> PostView:
        """Execute create post flow.

        Steps:
        1. Check the viewer may post and the nest exists
        2. Store every image under ``posts/<post_id>``
        3. Insert the post and its media rows
        4. If inserting fails, remove the stored images again

        Raises:
            UnauthorizedError: If anonymous
            ForbiddenError: If the viewer is banned
            NotFoundError: If the nest does not exist
            ValidationError: If an image is rejected
        """
        viewer = require_active(
            await load_viewer(self.user_service, request.viewer_id)
        )
        nest = await self.nest_service.get_by_title(request.nest_title)

        post_id = PostId(uuid4())
        with logfire.span(
            "create_post.execute",
            post_id=str(post_id),
            nest=nest.title.root,
            images=len(request.images),
        ):
            urls = await self.storage_service.save_many(
                request.images, f"posts/{post_id}", "img"
            )

            try:
                post = await self.post_service.create(
                    viewer,
                    nest,
                    title=request.title,
                    content=request.content,
                    post_id=post_id,
                )
                await self.media_repository.add_many(
                    [
                        Media(
                            id=MediaId(uuid4()),
                            post_id=post.id,
                            content_url=url,
                            alt_text=(
                                request.alts[index] if index < len(request.alts) else ""
                            ),
                        )
                        for index, url in enumerate(urls)
                    ]
                )
            except Exception:
                logfire.warn("Post creation failed, removing images", count=len(urls))
                await self.storage_service.discard(urls)
                raise

            return await self.assembler.assemble_one(post, viewer)

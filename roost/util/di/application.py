"""Application layer DI providers."""

from dishka import Scope, provide

from roost.application.usecase.auth import GetCurrentUserUseCase, RegisterUseCase
from roost.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    ListCommentsUseCase,
    UpdateCommentUseCase,
)
from roost.application.usecase.nest import (
    CreateNestUseCase,
    GetNestUseCase,
    ListMyNestsUseCase,
    ListNestsUseCase,
    SearchNestsUseCase,
    UpdateNestUseCase,
)
from roost.application.usecase.post import (
    CreatePostUseCase,
    DeletePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    UpdatePostUseCase,
)
from roost.application.usecase.user import (
    GetUserUseCase,
    ListUsersUseCase,
    ModerateUserUseCase,
    SearchUsersUseCase,
    UpdateUserUseCase,
)
from roost.application.usecase.vote import CastVoteUseCase, GetScoreUseCase
from roost.application.view import (
    CommentViewAssembler,
    NestViewAssembler,
    PostViewAssembler,
)
from roost.config import PaginationSettings, StorageSettings
from roost.domain.repository import MediaRepository
from roost.domain.service import (
    CommentService,
    JWTService,
    NestService,
    PostService,
    ScoreService,
    StorageService,
    UserService,
    VisibilityComposer,
    VoteService,
)
from roost.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # View assemblers
    @provide(scope=Scope.REQUEST)
    def get_nest_view_assembler(
        self, user_service: UserService, composer: VisibilityComposer
    ) -> NestViewAssembler:
        """Provide nest view assembler."""
        return NestViewAssembler(user_service=user_service, composer=composer)

    @provide(scope=Scope.REQUEST)
    def get_post_view_assembler(
        self,
        user_service: UserService,
        nest_service: NestService,
        comment_service: CommentService,
        score_service: ScoreService,
        vote_service: VoteService,
        media_repository: MediaRepository,
        composer: VisibilityComposer,
    ) -> PostViewAssembler:
        """Provide post view assembler."""
        return PostViewAssembler(
            user_service=user_service,
            nest_service=nest_service,
            comment_service=comment_service,
            score_service=score_service,
            vote_service=vote_service,
            media_repository=media_repository,
            composer=composer,
        )

    @provide(scope=Scope.REQUEST)
    def get_comment_view_assembler(
        self,
        user_service: UserService,
        nest_service: NestService,
        composer: VisibilityComposer,
    ) -> CommentViewAssembler:
        """Provide comment view assembler."""
        return CommentViewAssembler(
            user_service=user_service, nest_service=nest_service, composer=composer
        )

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_register_use_case(
        self,
        user_service: UserService,
        jwt_service: JWTService,
        storage_service: StorageService,
        storage_settings: StorageSettings,
        composer: VisibilityComposer,
    ) -> RegisterUseCase:
        """Provide register use case."""
        return RegisterUseCase(
            user_service=user_service,
            jwt_service=jwt_service,
            storage_service=storage_service,
            storage_settings=storage_settings,
            composer=composer,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self, user_service: UserService, composer: VisibilityComposer
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(user_service=user_service, composer=composer)

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_list_users_use_case(
        self,
        user_service: UserService,
        composer: VisibilityComposer,
        pagination: PaginationSettings,
    ) -> ListUsersUseCase:
        """Provide list users use case."""
        return ListUsersUseCase(
            user_service=user_service, composer=composer, pagination=pagination
        )

    @provide(scope=Scope.REQUEST)
    def get_search_users_use_case(
        self,
        user_service: UserService,
        composer: VisibilityComposer,
        pagination: PaginationSettings,
    ) -> SearchUsersUseCase:
        """Provide search users use case."""
        return SearchUsersUseCase(
            user_service=user_service, composer=composer, pagination=pagination
        )

    @provide(scope=Scope.REQUEST)
    def get_get_user_use_case(
        self, user_service: UserService, composer: VisibilityComposer
    ) -> GetUserUseCase:
        """Provide get user use case."""
        return GetUserUseCase(user_service=user_service, composer=composer)

    @provide(scope=Scope.REQUEST)
    def get_update_user_use_case(
        self,
        user_service: UserService,
        storage_service: StorageService,
        composer: VisibilityComposer,
    ) -> UpdateUserUseCase:
        """Provide update user use case."""
        return UpdateUserUseCase(
            user_service=user_service,
            storage_service=storage_service,
            composer=composer,
        )

    @provide(scope=Scope.REQUEST)
    def get_moderate_user_use_case(
        self, user_service: UserService, composer: VisibilityComposer
    ) -> ModerateUserUseCase:
        """Provide moderate user use case."""
        return ModerateUserUseCase(user_service=user_service, composer=composer)

    # Nest use cases
    @provide(scope=Scope.REQUEST)
    def get_list_nests_use_case(
        self,
        nest_service: NestService,
        user_service: UserService,
        assembler: NestViewAssembler,
        pagination: PaginationSettings,
    ) -> ListNestsUseCase:
        """Provide list nests use case."""
        return ListNestsUseCase(
            nest_service=nest_service,
            user_service=user_service,
            assembler=assembler,
            pagination=pagination,
        )

    @provide(scope=Scope.REQUEST)
    def get_search_nests_use_case(
        self,
        nest_service: NestService,
        user_service: UserService,
        assembler: NestViewAssembler,
        pagination: PaginationSettings,
    ) -> SearchNestsUseCase:
        """Provide search nests use case."""
        return SearchNestsUseCase(
            nest_service=nest_service,
            user_service=user_service,
            assembler=assembler,
            pagination=pagination,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_my_nests_use_case(
        self,
        nest_service: NestService,
        user_service: UserService,
        assembler: NestViewAssembler,
    ) -> ListMyNestsUseCase:
        """Provide list moderated nests use case."""
        return ListMyNestsUseCase(
            nest_service=nest_service, user_service=user_service, assembler=assembler
        )

    @provide(scope=Scope.REQUEST)
    def get_get_nest_use_case(
        self,
        nest_service: NestService,
        user_service: UserService,
        assembler: NestViewAssembler,
    ) -> GetNestUseCase:
        """Provide get nest use case."""
        return GetNestUseCase(
            nest_service=nest_service, user_service=user_service, assembler=assembler
        )

    @provide(scope=Scope.REQUEST)
    def get_create_nest_use_case(
        self,
        nest_service: NestService,
        user_service: UserService,
        storage_service: StorageService,
        storage_settings: StorageSettings,
        assembler: NestViewAssembler,
    ) -> CreateNestUseCase:
        """Provide create nest use case."""
        return CreateNestUseCase(
            nest_service=nest_service,
            user_service=user_service,
            storage_service=storage_service,
            storage_settings=storage_settings,
            assembler=assembler,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_nest_use_case(
        self,
        nest_service: NestService,
        user_service: UserService,
        storage_service: StorageService,
        assembler: NestViewAssembler,
    ) -> UpdateNestUseCase:
        """Provide update nest use case."""
        return UpdateNestUseCase(
            nest_service=nest_service,
            user_service=user_service,
            storage_service=storage_service,
            assembler=assembler,
        )

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self,
        post_service: PostService,
        nest_service: NestService,
        user_service: UserService,
        assembler: PostViewAssembler,
        pagination: PaginationSettings,
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(
            post_service=post_service,
            nest_service=nest_service,
            user_service=user_service,
            assembler=assembler,
            pagination=pagination,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self,
        post_service: PostService,
        user_service: UserService,
        assembler: PostViewAssembler,
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(
            post_service=post_service, user_service=user_service, assembler=assembler
        )

    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(
        self,
        post_service: PostService,
        nest_service: NestService,
        user_service: UserService,
        storage_service: StorageService,
        media_repository: MediaRepository,
        assembler: PostViewAssembler,
    ) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(
            post_service=post_service,
            nest_service=nest_service,
            user_service=user_service,
            storage_service=storage_service,
            media_repository=media_repository,
            assembler=assembler,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_post_use_case(
        self,
        post_service: PostService,
        user_service: UserService,
        assembler: PostViewAssembler,
    ) -> UpdatePostUseCase:
        """Provide update post use case."""
        return UpdatePostUseCase(
            post_service=post_service, user_service=user_service, assembler=assembler
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_post_use_case(
        self, post_service: PostService, user_service: UserService
    ) -> DeletePostUseCase:
        """Provide delete post use case."""
        return DeletePostUseCase(post_service=post_service, user_service=user_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_list_comments_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
        assembler: CommentViewAssembler,
        pagination: PaginationSettings,
    ) -> ListCommentsUseCase:
        """Provide list comments use case."""
        return ListCommentsUseCase(
            comment_service=comment_service,
            post_service=post_service,
            user_service=user_service,
            assembler=assembler,
            pagination=pagination,
        )

    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
        assembler: CommentViewAssembler,
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(
            comment_service=comment_service,
            post_service=post_service,
            user_service=user_service,
            assembler=assembler,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_comment_use_case(
        self,
        comment_service: CommentService,
        post_service: PostService,
        user_service: UserService,
        assembler: CommentViewAssembler,
    ) -> UpdateCommentUseCase:
        """Provide update comment use case."""
        return UpdateCommentUseCase(
            comment_service=comment_service,
            post_service=post_service,
            user_service=user_service,
            assembler=assembler,
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService, user_service: UserService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(
            comment_service=comment_service, user_service=user_service
        )

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self,
        vote_service: VoteService,
        score_service: ScoreService,
        user_service: UserService,
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(
            vote_service=vote_service,
            score_service=score_service,
            user_service=user_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_score_use_case(
        self,
        post_service: PostService,
        user_service: UserService,
        assembler: PostViewAssembler,
    ) -> GetScoreUseCase:
        """Provide get score use case."""
        return GetScoreUseCase(
            post_service=post_service, user_service=user_service, assembler=assembler
        )

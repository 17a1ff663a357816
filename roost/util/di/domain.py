"""Domain layer DI providers."""

from dishka import Scope, provide

from roost.config import AuthSettings, StorageSettings
from roost.domain.repository import (
    CommentRepository,
    NestRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from roost.domain.service import (
    CommentService,
    FileStore,
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


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide session token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_visibility_composer(self) -> VisibilityComposer:
        """Provide the view composer."""
        return VisibilityComposer()

    @provide
    def get_storage_service(
        self, file_store: FileStore, storage_settings: StorageSettings
    ) -> StorageService:
        """Provide upload storage domain service."""
        return StorageService(file_store=file_store, settings=storage_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_nest_service(self, nest_repository: NestRepository) -> NestService:
        """Provide nest domain service."""
        return NestService(nest_repository=nest_repository)

    @provide
    def get_post_service(
        self, post_repository: PostRepository, nest_repository: NestRepository
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository, nest_repository=nest_repository
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        nest_repository: NestRepository,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_repository=post_repository,
            nest_repository=nest_repository,
        )

    @provide
    def get_vote_service(
        self, vote_repository: VoteRepository, post_repository: PostRepository
    ) -> VoteService:
        """Provide vote ledger domain service."""
        return VoteService(
            vote_repository=vote_repository, post_repository=post_repository
        )

    @provide
    def get_score_service(self, vote_repository: VoteRepository) -> ScoreService:
        """Provide score aggregation domain service."""
        return ScoreService(vote_repository=vote_repository)

"""Mock persistence providers for testing."""

from dishka import Scope, provide

from roost.domain.repository import (
    CommentRepository,
    MediaRepository,
    NestRepository,
    PostRepository,
    UserRepository,
    VoteRepository,
)
from roost.persistence.repository.inmemory import (
    InMemoryCommentRepository,
    InMemoryDatabase,
    InMemoryMediaRepository,
    InMemoryNestRepository,
    InMemoryPostRepository,
    InMemoryUserRepository,
    InMemoryVoteRepository,
)
from roost.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The database is APP-scoped so that every request against one container
    sees the same rows; each test builds its own container, which keeps
    tests isolated. There is no commit, so files scheduled with
    ``StorageService.discard_after_commit`` stay pending.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_database(self) -> InMemoryDatabase:
        """Provide the shared in-memory database."""
        return InMemoryDatabase()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, database: InMemoryDatabase) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_nest_repository(self, database: InMemoryDatabase) -> NestRepository:
        """Provide in-memory nest repository."""
        return InMemoryNestRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, database: InMemoryDatabase) -> PostRepository:
        """Provide in-memory post repository."""
        return InMemoryPostRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, database: InMemoryDatabase) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_media_repository(self, database: InMemoryDatabase) -> MediaRepository:
        """Provide in-memory media repository."""
        return InMemoryMediaRepository(database)

    @provide(scope=Scope.REQUEST)
    def get_vote_repository(self, database: InMemoryDatabase) -> VoteRepository:
        """Provide in-memory vote repository."""
        return InMemoryVoteRepository(database)

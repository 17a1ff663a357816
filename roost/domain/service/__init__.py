"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .jwt_service import JWTService
from .nest_service import NestService
from .pagination import Page, paginate
from .post_service import PostService
from .score_service import ScoreService
from .search import normalize_search_query
from .storage_service import FileStore, StorageService, Upload
from .user_service import UserService
from .visibility_service import PostContext, VisibilityComposer
from .vote_service import VoteService

__all__ = [
    "CommentService",
    "FileStore",
    "JWTService",
    "NestService",
    "Page",
    "PostContext",
    "PostService",
    "ScoreService",
    "Service",
    "StorageService",
    "Upload",
    "UserService",
    "VisibilityComposer",
    "VoteService",
    "normalize_search_query",
    "paginate",
]

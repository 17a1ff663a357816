"""Vote use cases."""

from .cast_vote import CastVoteRequest, CastVoteResponse, CastVoteUseCase
from .get_score import GetScoreRequest, GetScoreResponse, GetScoreUseCase

__all__ = [
    "CastVoteRequest",
    "CastVoteResponse",
    "CastVoteUseCase",
    "GetScoreRequest",
    "GetScoreResponse",
    "GetScoreUseCase",
]

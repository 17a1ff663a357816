"""Nest use cases."""

from .create_nest import CreateNestRequest, CreateNestUseCase
from .get_nest import GetNestRequest, GetNestUseCase
from .list_nests import (
    ListMyNestsRequest,
    ListMyNestsUseCase,
    ListNestsRequest,
    ListNestsUseCase,
    SearchNestsRequest,
    SearchNestsUseCase,
)
from .update_nest import UpdateNestRequest, UpdateNestUseCase

__all__ = [
    "CreateNestRequest",
    "CreateNestUseCase",
    "GetNestRequest",
    "GetNestUseCase",
    "ListMyNestsRequest",
    "ListMyNestsUseCase",
    "ListNestsRequest",
    "ListNestsUseCase",
    "SearchNestsRequest",
    "SearchNestsUseCase",
    "UpdateNestRequest",
    "UpdateNestUseCase",
]

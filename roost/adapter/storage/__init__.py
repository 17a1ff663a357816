"""File store implementations."""

from .local import LocalFileStore
from .memory import InMemoryFileStore

__all__ = ["InMemoryFileStore", "LocalFileStore"]

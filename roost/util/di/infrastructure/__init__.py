"""Infrastructure providers."""

# Import bases
from .persistence import PersistenceProvider
from .storage import StorageProvider

# Import implementations (needed for __subclasses__())
from .persistence import ProdPersistenceProvider  # noqa: F401
from .storage import MockStorageProvider, ProdStorageProvider  # noqa: F401

__all__ = [
    "MockStorageProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "ProdStorageProvider",
    "StorageProvider",
]

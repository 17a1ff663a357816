"""Dependency injection module."""

from typing import Type

from roost.util.di.application import ProdApplicationProvider
from roost.util.di.base import Component, ProviderBase
from roost.util.di.core import ProdConfigProvider
from roost.util.di.domain import ProdDomainProvider
from roost.util.di.infrastructure import (
    MockStorageProvider,
    PersistenceProvider,
    ProdPersistenceProvider,
    ProdStorageProvider,
    StorageProvider,
)
from roost.util.di.session import ProdSessionProvider, Session
from roost.util.error import ConfigurationError

# Single list - all providers treated uniformly
PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    ProdSessionProvider,
    # Infrastructure components (mockable)
    PersistenceProvider,
    StorageProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to register for a PROVIDERS entry.

    Entries without subclasses are concrete and used as-is. Entries with
    subclasses are components (persistence, storage) and the subclass whose
    ``__is_mock__`` matches ``use_mock`` is chosen.

    Args:
        base: Provider base class
        use_mock: Whether to use mock implementation

    Returns:
        Provider class (not instantiated)

    Raises:
        ConfigurationError: If requested implementation not found
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", base.__name__)
        raise ConfigurationError(f"No {kind} implementation for {component_name}")

    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    # Core providers
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "ProdSessionProvider",
    "Session",
    # Infrastructure base classes
    "PersistenceProvider",
    "StorageProvider",
    # Infrastructure implementations
    "MockStorageProvider",
    "ProdPersistenceProvider",
    "ProdStorageProvider",
]

"""Dependency injection module.

Every provider class in ``PROVIDERS`` is either concrete (used as-is) or a
component base whose subclasses are the production and mock variants,
told apart by ``__is_mock__``.
"""

from typing import Type

from forum.util.di.application import ProdApplicationProvider
from forum.util.di.base import Component, ProviderBase
from forum.util.di.core import ProdConfigProvider
from forum.util.di.domain import ProdDomainProvider
from forum.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider entry to the class to instantiate.

    Args:
        base: Entry from PROVIDERS
        use_mock: Pick the mock variant of a mockable component

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If the component has no variant of the requested kind
    """
    variants = base.__subclasses__()
    if not variants:
        return base

    for variant in variants:
        if getattr(variant, "__is_mock__", False) == use_mock:
            return variant

    kind = "mock" if use_mock else "production"
    component = getattr(base, "__mock_component__", base.__name__)
    raise ValueError(f"No {kind} implementation for {component}")


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]

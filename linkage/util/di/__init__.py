"""Dependency injection wiring."""

from collections.abc import Collection
from typing import Type

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from linkage.util.di.application import ProdApplicationProvider
from linkage.util.di.base import COMPONENTS, Component, ProviderBase
from linkage.util.di.core import ProdConfigProvider
from linkage.util.di.domain import ProdDomainProvider
from linkage.util.di.infrastructure import (
    DirectoryProvider,
    ProdDirectoryProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    ProdPersistenceProvider,
    # Swappable
    DirectoryProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to register for ``base``.

    Raises:
        ValueError: If ``base`` is swappable but has no implementation of the
            requested kind loaded
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(
        f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
    )


def create_container(mocked: Collection[Component] = ()) -> AsyncContainer:
    """Build the application container.

    Settings are read from the environment when first resolved.

    Args:
        mocked: Components to serve from their mock providers; the mock
            provider classes must have been imported

    Raises:
        ValueError: If a component name is unknown
    """
    unknown = set(mocked) - COMPONENTS
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    providers = [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]
    return make_async_container(*providers, FastapiProvider())


__all__ = [
    "COMPONENTS",
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "create_container",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "ProdPersistenceProvider",
    "DirectoryProvider",
    "ProdDirectoryProvider",
]

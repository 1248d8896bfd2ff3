"""Persistence infrastructure providers."""

from dishka import Scope, provide

from linkage.domain.repository import SessionIdentityStore
from linkage.persistence.repository.inmemory import InMemorySessionIdentityStore
from linkage.util.di.base import ProviderBase


class ProdPersistenceProvider(ProviderBase):
    """Session store provider - concrete, no mocks needed.

    APP-scoped so session views outlive a single request.
    """

    @provide(scope=Scope.APP)
    def get_session_identity_store(self) -> SessionIdentityStore:
        """Provide in-memory session identity store."""
        return InMemorySessionIdentityStore()

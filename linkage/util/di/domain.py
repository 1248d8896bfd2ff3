"""Domain layer DI providers."""

from dishka import Scope, provide

from linkage.config import AuthSettings
from linkage.domain.repository import SessionIdentityStore
from linkage.domain.service import (
    AccountLinkingService,
    IdentityDirectory,
    JWTService,
    SessionProjector,
)
from linkage.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped; the directory client and session
    store they depend on are APP-scoped.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide session token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_session_projector(
        self, session_store: SessionIdentityStore
    ) -> SessionProjector:
        """Provide session projector domain service."""
        return SessionProjector(session_store=session_store)

    @provide
    def get_account_linking_service(
        self, directory: IdentityDirectory, session_projector: SessionProjector
    ) -> AccountLinkingService:
        """Provide account linking domain service."""
        return AccountLinkingService(
            directory=directory, session_projector=session_projector
        )

"""Application layer DI providers."""

from dishka import Scope, provide

from linkage.application.usecase.identity import (
    GetSessionIdentitiesUseCase,
    InitiateLinkUseCase,
    SuggestLinkCandidatesUseCase,
    UnlinkIdentityUseCase,
)
from linkage.domain.service import (
    AccountLinkingService,
    IdentityDirectory,
    SessionProjector,
)
from linkage.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_initiate_link_use_case(
        self, linking_service: AccountLinkingService
    ) -> InitiateLinkUseCase:
        """Provide initiate link use case."""
        return InitiateLinkUseCase(linking_service=linking_service)

    @provide(scope=Scope.REQUEST)
    def get_unlink_identity_use_case(
        self, linking_service: AccountLinkingService
    ) -> UnlinkIdentityUseCase:
        """Provide unlink identity use case."""
        return UnlinkIdentityUseCase(linking_service=linking_service)

    @provide(scope=Scope.REQUEST)
    def get_suggest_link_candidates_use_case(
        self, linking_service: AccountLinkingService, directory: IdentityDirectory
    ) -> SuggestLinkCandidatesUseCase:
        """Provide suggest link candidates use case."""
        return SuggestLinkCandidatesUseCase(
            linking_service=linking_service, directory=directory
        )

    @provide(scope=Scope.REQUEST)
    def get_session_identities_use_case(
        self, session_projector: SessionProjector
    ) -> GetSessionIdentitiesUseCase:
        """Provide get session identities use case."""
        return GetSessionIdentitiesUseCase(session_projector=session_projector)

"""Suggest link candidates use case."""

from pydantic import BaseModel

from linkage.domain.error import CandidateLookupError, DomainError
from linkage.domain.service import AccountLinkingService, IdentityDirectory
from linkage.domain.value import UserId

from .common import CandidateInfo


class SuggestLinkCandidatesRequest(BaseModel):
    """Suggest link candidates request."""

    user_id: str  # From authenticated caller


class SuggestLinkCandidatesResponse(BaseModel):
    """Suggest link candidates response."""

    candidates: list[CandidateInfo]


class SuggestLinkCandidatesUseCase:
    """Use case for listing accounts that share the caller's verified email."""

    def __init__(
        self,
        linking_service: AccountLinkingService,
        directory: IdentityDirectory,
    ) -> None:
        """Initialize suggest link candidates use case.

        Args:
            linking_service: Account linking domain service
            directory: Identity directory client
        """
        self.linking_service = linking_service
        self.directory = directory

    async def execute(
        self, request: SuggestLinkCandidatesRequest
    ) -> SuggestLinkCandidatesResponse:
        """Execute candidate lookup.

        Steps:
        1. Fetch the caller's user record
        2. Search for other users with the same verified email

        Raises:
            ValueError: If the user id is malformed
            CandidateLookupError: If the caller cannot be fetched, their email
                is unverified, or the search fails
        """
        user_id = UserId(request.user_id)

        try:
            primary_user = await self.directory.get_user(user_id)
        except DomainError as e:
            raise CandidateLookupError(e) from e

        candidates = await self.linking_service.suggest_link_candidates(primary_user)

        return SuggestLinkCandidatesResponse(
            candidates=[CandidateInfo.from_record(c) for c in candidates]
        )

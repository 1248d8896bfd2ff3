"""Initiate link use case."""

from pydantic import BaseModel

from linkage.domain.model import LinkRequest
from linkage.domain.service import AccountLinkingService
from linkage.domain.value import SessionId, UserId

from .common import IdentityInfo


class InitiateLinkRequest(BaseModel):
    """Initiate link request."""

    primary_user_id: str  # From authenticated caller
    target_user_id: str  # Supplied by the caller, untrusted
    session_id: str  # From authenticated caller


class InitiateLinkResponse(BaseModel):
    """Initiate link response."""

    primary_user_id: str
    identities: list[IdentityInfo]


class InitiateLinkUseCase:
    """Use case for linking another account into the caller's account.

    The target account's metadata is merged into the caller's, the target
    identity is attached, and the caller's session is refreshed.
    """

    def __init__(self, linking_service: AccountLinkingService) -> None:
        """Initialize initiate link use case.

        Args:
            linking_service: Account linking domain service
        """
        self.linking_service = linking_service

    async def execute(self, request: InitiateLinkRequest) -> InitiateLinkResponse:
        """Execute initiate link flow.

        Args:
            request: Caller and target user ids

        Returns:
            Caller's identity list after linking

        Raises:
            ValueError: If a user id is malformed
            LinkError: If the link flow fails
        """
        operation = await self.linking_service.initiate_link(
            LinkRequest(
                primary_user_id=UserId(request.primary_user_id),
                target_user_id=UserId(request.target_user_id),
            ),
            SessionId(request.session_id),
        )

        return InitiateLinkResponse(
            primary_user_id=request.primary_user_id,
            identities=[IdentityInfo.from_ref(i) for i in operation.identities],
        )

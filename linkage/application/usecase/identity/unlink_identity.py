"""Unlink identity use case."""

from pydantic import BaseModel

from linkage.domain.model import UnlinkRequest
from linkage.domain.service import AccountLinkingService
from linkage.domain.value import SessionId, UserId

from .common import IdentityInfo


class UnlinkIdentityRequest(BaseModel):
    """Unlink identity request."""

    root_user_id: str  # From authenticated caller
    provider: str
    identity_id: str
    session_id: str  # From authenticated caller


class UnlinkIdentityResponse(BaseModel):
    """Unlink identity response."""

    root_user_id: str
    identities: list[IdentityInfo]


class UnlinkIdentityUseCase:
    """Use case for detaching a linked identity from the caller's account."""

    def __init__(self, linking_service: AccountLinkingService) -> None:
        """Initialize unlink identity use case.

        Args:
            linking_service: Account linking domain service
        """
        self.linking_service = linking_service

    async def execute(self, request: UnlinkIdentityRequest) -> UnlinkIdentityResponse:
        """Execute unlink flow.

        Raises:
            ValueError: If the root user id is malformed
            UnlinkError: If the unlink fails
        """
        operation = await self.linking_service.unlink(
            UnlinkRequest(
                root_user_id=UserId(request.root_user_id),
                provider=request.provider,
                identity_id=request.identity_id,
            ),
            SessionId(request.session_id),
        )

        return UnlinkIdentityResponse(
            root_user_id=request.root_user_id,
            identities=[IdentityInfo.from_ref(i) for i in operation.identities],
        )

"""Get session identities use case."""

from datetime import datetime

from pydantic import BaseModel

from linkage.domain.service import SessionProjector
from linkage.domain.value import SessionId

from .common import IdentityInfo


class GetSessionIdentitiesRequest(BaseModel):
    """Get session identities request."""

    session_id: str  # From authenticated caller


class GetSessionIdentitiesResponse(BaseModel):
    """Get session identities response."""

    user_id: str
    identities: list[IdentityInfo]
    updated_at: datetime


class GetSessionIdentitiesUseCase:
    """Use case for reading the session's cached identity list."""

    def __init__(self, session_projector: SessionProjector) -> None:
        """Initialize get session identities use case.

        Args:
            session_projector: Session projector domain service
        """
        self.session_projector = session_projector

    async def execute(
        self, request: GetSessionIdentitiesRequest
    ) -> GetSessionIdentitiesResponse | None:
        """Return the cached view, or None if the session has none yet."""
        view = await self.session_projector.current(SessionId(request.session_id))
        if view is None:
            return None

        return GetSessionIdentitiesResponse(
            user_id=str(view.user_id),
            identities=[IdentityInfo.from_ref(i) for i in view.identities],
            updated_at=view.updated_at,
        )

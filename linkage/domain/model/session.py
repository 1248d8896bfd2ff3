"""Session identity view."""

from datetime import datetime, timezone

from pydantic import Field

from linkage.domain.base import DomainModel
from linkage.domain.value import IdentityRef, SessionId, UserId


class SessionIdentities(DomainModel):
    """The caller session's cached copy of a user's identity list.

    Replaced wholesale after every successful link or unlink, never merged.
    """

    session_id: SessionId
    user_id: UserId
    identities: tuple[IdentityRef, ...] = ()
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
